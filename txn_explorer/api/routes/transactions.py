"""API routes for querying the transaction dataset."""

from fastapi import APIRouter, Depends, Query

from txn_explorer.core.dependencies import TableServiceDep, require_authenticated
from txn_explorer.domain.filtering import FilterState, active_filters
from txn_explorer.domain.sorting import SortConfig, SortDirection
from txn_explorer.domain.stats import format_stats
from txn_explorer.schemas.transactions import (
    ColumnListResponse,
    ReloadResponse,
    StatsDetailResponse,
    TransactionPageResponse,
)
from txn_explorer.services.table_service import TableView

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    dependencies=[Depends(require_authenticated)],
)


def build_page_response(view: TableView) -> dict:
    """Flatten a table view into the page response shape."""
    return {
        "items": [dict(record) for record in view.result.items],
        "page": view.page,
        "page_size": view.page_size,
        "total_pages": view.result.total_pages,
        "total_items": view.result.total_items,
        "start_index": view.result.start_index,
        "end_index": view.result.end_index,
        "sort": {"column": view.sort.column, "direction": view.sort.direction},
        "filters": active_filters(view.filters),
        "columns": list(view.columns),
    }


@router.get("", response_model=TransactionPageResponse)
async def list_transactions(
    table_service: TableServiceDep,
    search: str = Query("", description="Case-insensitive substring matched against every column"),
    status: str = Query("", description="Exact match on the status column"),
    fraud: str = Query("", description="Exact match on the fraud flag column"),
    sort: str | None = Query(None, description="Column to sort by"),
    direction: SortDirection = SortDirection.ASC,
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
) -> dict:
    """Filter, sort and paginate transactions without touching the table session.

    Pages past the end are clamped to the last page of the filtered result.
    """
    if page_size is not None:
        page_size = min(page_size, table_service.config.max_page_size)
    view = table_service.query(
        FilterState(search_term=search, status_filter=status, fraud_filter=fraud),
        SortConfig(column=sort or None, direction=direction),
        page=page,
        page_size=page_size,
    )
    return build_page_response(view)


@router.get("/columns", response_model=ColumnListResponse)
async def list_columns(table_service: TableServiceDep) -> dict:
    """Columns of the loaded dataset with their inferred type and operators."""
    return {"columns": table_service.columns()}


@router.get("/stats", response_model=StatsDetailResponse)
async def get_stats(table_service: TableServiceDep) -> dict:
    """Summary cards over the whole dataset, ignoring any filters."""
    stats = table_service.stats()
    return {
        **format_stats(stats),
        "raw_total": stats.total,
        "raw_fraud_count": stats.fraud_count,
        "raw_declined_count": stats.declined_count,
        "raw_fraud_rate": stats.fraud_rate,
    }


@router.post("/reload", response_model=ReloadResponse)
async def reload_transactions(table_service: TableServiceDep) -> dict:
    """Load the dataset again from the configured source."""
    total = await table_service.reload()
    return {"total_items": total, "columns": list(table_service.store.columns)}
