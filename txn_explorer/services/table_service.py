"""Transaction table service: query pipeline, stats and the analyst's table session."""

import logging
import math
from dataclasses import dataclass, field

from txn_explorer.core.config import TableConfig
from txn_explorer.core.errors import DataNotLoadedError, ServiceError
from txn_explorer.domain.filtering import (
    FilterState,
    active_filters,
    apply_filters,
    quick_filter,
    update_filter,
)
from txn_explorer.domain.operators import (
    available_operators,
    format_header_name,
    infer_column_type,
)
from txn_explorer.domain.pagination import Page, clamp_page, paginate
from txn_explorer.domain.records import Record, RecordStore
from txn_explorer.domain.sorting import SortConfig, sort_records, toggle_sort
from txn_explorer.domain.stats import Stats, compute_stats, format_stats
from txn_explorer.services.ingestion_service import CsvIngestionService

logger = logging.getLogger(__name__)


@dataclass
class TableSession:
    """Current filter state, sort config and page of the table."""

    filters: FilterState = field(default_factory=FilterState)
    sort: SortConfig = field(default_factory=SortConfig)
    page: int = 1


@dataclass(frozen=True)
class TableView:
    page: int
    page_size: int
    result: Page
    filters: FilterState
    sort: SortConfig
    columns: tuple[str, ...]


class TableService:
    """Derives table pages from the record store.

    Nothing is cached: every view is recomputed from the current records,
    filters, sort config and page.
    """

    def __init__(
        self,
        store: RecordStore,
        config: TableConfig,
        ingestion: CsvIngestionService | None = None,
    ):
        self.store = store
        self.config = config
        self.ingestion = ingestion
        self.session = TableSession()
        self.load_error: str | None = None

    def _records(self) -> tuple[Record, ...]:
        if not self.store.is_loaded:
            details = {"error": self.load_error} if self.load_error else None
            raise DataNotLoadedError("Transaction data is not loaded", details=details)
        return self.store.all()

    async def reload(self) -> int:
        """Re-run ingestion and replace the dataset. The session is reset to page 1."""
        if self.ingestion is None:
            raise DataNotLoadedError("No data source configured")
        try:
            records = await self.ingestion.load_records()
        except ServiceError as e:
            self.load_error = e.message
            raise
        self.store.load(records)
        self.load_error = None
        self.session.page = 1
        logger.info(
            "Transaction data reloaded",
            extra={"records": len(self.store), "columns": len(self.store.columns)},
        )
        return len(self.store)

    def query(
        self,
        filters: FilterState,
        sort: SortConfig,
        page: int = 1,
        page_size: int | None = None,
    ) -> TableView:
        """Filter, sort and paginate the full dataset.

        ``page`` is clamped to the pages the filtered result actually has.
        """
        size = page_size or self.config.page_size
        filtered = apply_filters(
            self._records(),
            filters,
            status_column=self.config.status_column,
            fraud_column=self.config.fraud_column,
        )
        ordered = sort_records(filtered, sort)
        total_pages = math.ceil(len(ordered) / size)
        current = clamp_page(page, total_pages)
        return TableView(
            page=current,
            page_size=size,
            result=paginate(ordered, current, size),
            filters=filters,
            sort=sort,
            columns=self.store.columns,
        )

    def view(self) -> TableView:
        view = self.query(self.session.filters, self.session.sort, self.session.page)
        self.session.page = view.page
        return view

    def change_filter(self, kind: str, value: str) -> TableView:
        self.session.filters = update_filter(self.session.filters, kind, value)
        self.session.page = 1
        return self.view()

    def apply_quick_filter(self, kind: str, value: str = "") -> TableView:
        self.session.filters = quick_filter(kind, value)
        self.session.page = 1
        return self.view()

    def clear_filters(self) -> TableView:
        self.session.filters = FilterState()
        self.session.page = 1
        return self.view()

    def sort_by(self, column: str) -> TableView:
        self.session.sort = toggle_sort(self.session.sort, column)
        self.session.page = 1
        return self.view()

    def go_to_page(self, page: int) -> TableView:
        self.session.page = page
        return self.view()

    def active_filters(self) -> dict[str, str]:
        return active_filters(self.session.filters)

    def stats(self) -> Stats:
        """Counts over the whole dataset, independent of any table query."""
        return compute_stats(
            self._records(),
            status_column=self.config.status_column,
            fraud_column=self.config.fraud_column,
            fraud_value=self.config.fraud_value,
            declined_value=self.config.declined_value,
        )

    def formatted_stats(self) -> dict[str, str]:
        return format_stats(self.stats())

    def columns(self) -> list[dict]:
        self._records()
        return [
            {
                "name": column,
                "label": format_header_name(column),
                "column_type": infer_column_type(column).value,
                "operators": [operator.value for operator in available_operators(column)],
            }
            for column in self.store.columns
        ]
