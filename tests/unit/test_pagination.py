"""Unit tests for the pagination engine."""

import pytest

from txn_explorer.domain.pagination import clamp_page, paginate

RECORDS = [{"n": str(i)} for i in range(1, 8)]


class TestPaginate:
    """Test page slicing and display indices."""

    def test_first_page(self):
        """Test the first page of seven records at size three."""
        page = paginate(RECORDS, 1, 3)
        assert [r["n"] for r in page.items] == ["1", "2", "3"]
        assert page.total_pages == 3
        assert page.start_index == 1
        assert page.end_index == 3
        assert page.total_items == 7

    def test_partial_last_page(self):
        """Test the last page holds the remainder."""
        page = paginate(RECORDS, 3, 3)
        assert [r["n"] for r in page.items] == ["7"]
        assert page.start_index == 7
        assert page.end_index == 7

    def test_exact_multiple(self):
        """Test page counts when the size divides the total."""
        page = paginate(RECORDS[:6], 2, 3)
        assert page.total_pages == 2
        assert page.end_index == 6

    def test_empty_input(self):
        """Test an empty input has zero pages and no items."""
        page = paginate([], 1, 50)
        assert page.items == []
        assert page.total_pages == 0
        assert page.start_index == 1
        assert page.end_index == 0
        assert page.total_items == 0

    def test_page_past_the_end_is_empty(self):
        """Test an out-of-range page is not clamped here."""
        page = paginate(RECORDS, 5, 3)
        assert page.items == []
        assert page.total_pages == 3
        assert page.start_index == 13
        assert page.end_index == 7

    def test_pages_concatenate_to_input(self):
        """Test joining every page gives back the input."""
        pages = [paginate(RECORDS, n, 3).items for n in range(1, 4)]
        assert [r for items in pages for r in items] == RECORDS

    @pytest.mark.parametrize(("page", "size"), [(0, 10), (-1, 10), (1, 0)])
    def test_invalid_arguments(self, page, size):
        """Test pages and sizes below one are rejected."""
        with pytest.raises(ValueError):
            paginate(RECORDS, page, size)


class TestClampPage:
    """Test clamp_page."""

    def test_within_range(self):
        """Test a valid page is unchanged."""
        assert clamp_page(2, 3) == 2

    def test_past_the_end(self):
        """Test a page past the end lands on the last page."""
        assert clamp_page(9, 3) == 3

    def test_no_pages(self):
        """Test an empty result set still has page one."""
        assert clamp_page(4, 0) == 1
