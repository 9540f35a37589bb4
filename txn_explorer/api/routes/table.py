"""API routes for the analyst's table session.

The session remembers filters, sort and page between requests, the way the
review screen does: editing a filter or the sort goes back to page 1, and
sorting the same column twice flips the direction.
"""

from fastapi import APIRouter, Depends

from txn_explorer.api.routes.transactions import build_page_response
from txn_explorer.core.dependencies import TableServiceDep, require_authenticated
from txn_explorer.schemas.transactions import (
    FilterUpdateRequest,
    PageRequest,
    QuickFilterRequest,
    SortRequest,
    TransactionPageResponse,
)

router = APIRouter(
    prefix="/table",
    tags=["table"],
    dependencies=[Depends(require_authenticated)],
)


@router.get("", response_model=TransactionPageResponse)
async def get_table(table_service: TableServiceDep) -> dict:
    """Current page of the table session."""
    return build_page_response(table_service.view())


@router.patch("/filters", response_model=TransactionPageResponse)
async def update_filter(request: FilterUpdateRequest, table_service: TableServiceDep) -> dict:
    """Change one filter field, keeping the others."""
    return build_page_response(table_service.change_filter(request.kind, request.value))


@router.post("/quick-filter", response_model=TransactionPageResponse)
async def apply_quick_filter(request: QuickFilterRequest, table_service: TableServiceDep) -> dict:
    """Stat card shortcut: clear every filter, then set exactly one."""
    return build_page_response(table_service.apply_quick_filter(request.kind, request.value))


@router.delete("/filters", response_model=TransactionPageResponse)
async def clear_filters(table_service: TableServiceDep) -> dict:
    return build_page_response(table_service.clear_filters())


@router.post("/sort", response_model=TransactionPageResponse)
async def sort_table(request: SortRequest, table_service: TableServiceDep) -> dict:
    """Sort by a column; the same column again flips the direction."""
    return build_page_response(table_service.sort_by(request.column))


@router.put("/page", response_model=TransactionPageResponse)
async def go_to_page(request: PageRequest, table_service: TableServiceDep) -> dict:
    """Move to a page. Pages past the end land on the last page."""
    return build_page_response(table_service.go_to_page(request.page))
