"""Transaction table schemas: pages, stats, columns and table session requests."""

from typing import Literal

from pydantic import BaseModel, Field

from txn_explorer.domain.sorting import SortDirection


class SortInfo(BaseModel):
    column: str | None = None
    direction: SortDirection = SortDirection.ASC


class ActiveFilters(BaseModel):
    search: str = ""
    status: str = ""
    fraud: str = ""


class TransactionPageResponse(BaseModel):
    """One page of the filtered, sorted transaction table."""

    items: list[dict[str, str]]
    page: int
    page_size: int
    total_pages: int
    total_items: int
    start_index: int = Field(..., description="1-based index of the first row shown")
    end_index: int = Field(..., description="1-based index of the last row shown")
    sort: SortInfo
    filters: ActiveFilters
    columns: list[str]


class StatsResponse(BaseModel):
    """Summary cards computed over the whole dataset."""

    total: str
    fraud_count: str
    declined_count: str
    fraud_rate: str


class StatsDetailResponse(StatsResponse):
    raw_total: int
    raw_fraud_count: int
    raw_declined_count: int
    raw_fraud_rate: float


class ColumnInfo(BaseModel):
    name: str
    label: str
    column_type: str
    operators: list[str]


class ColumnListResponse(BaseModel):
    columns: list[ColumnInfo]


class ReloadResponse(BaseModel):
    total_items: int
    columns: list[str]


class FilterUpdateRequest(BaseModel):
    """Change one filter field and keep the others."""

    kind: Literal["search", "status", "fraud"]
    value: str = ""


class QuickFilterRequest(BaseModel):
    """Reset every filter field, then set exactly one."""

    kind: Literal["status", "fraud", "clear"]
    value: str = ""


class SortRequest(BaseModel):
    column: str = Field(..., min_length=1)


class PageRequest(BaseModel):
    page: int = Field(..., ge=1)
