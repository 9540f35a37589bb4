"""Pagination engine: page slicing and display metadata."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from txn_explorer.domain.records import Record


@dataclass(frozen=True)
class Page:
    items: list[Record]
    total_pages: int
    start_index: int
    end_index: int
    total_items: int


def paginate(records: Sequence[Record], page: int, page_size: int) -> Page:
    """Slice one page out of ``records``.

    Pages past the end are not clamped here: they come back empty, and the
    1-based display indices are still computed from the requested page.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    total_items = len(records)
    start = (page - 1) * page_size
    return Page(
        items=list(records[start : start + page_size]),
        total_pages=math.ceil(total_items / page_size),
        start_index=start + 1,
        end_index=min(page * page_size, total_items),
        total_items=total_items,
    )


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp into ``[1, total_pages]``; an empty result set has one (empty) page."""
    return max(1, min(page, max(total_pages, 1)))
