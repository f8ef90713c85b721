"""
Tests for page arithmetic, the navigation window and page token parsing.
"""

import pytest

from dataset_browser.services.pagination import (
    INVALID_PAGE,
    PageWindow,
    build_pagination,
    compute_last_page,
    page_window,
    parse_page_token,
    resolve_page
)
from dataset_browser.utils.exceptions import InvalidConfigurationError


class TestComputeLastPage:
    """Test last page arithmetic."""

    @pytest.mark.parametrize("total_items,items_per_page,expected", [
        (0, 20, 0),
        (1, 20, 1),
        (20, 20, 1),
        (21, 20, 2),
        (40, 20, 2),
        (45, 20, 3),
        (7, 1, 7),
    ])
    def test_last_page_values(self, total_items, items_per_page, expected):
        assert compute_last_page(total_items, items_per_page) == expected

    def test_last_page_bounds_hold_for_small_inputs(self):
        """Last page always covers every item and never has an empty tail page."""
        for items_per_page in range(1, 12):
            for total_items in range(0, 100):
                last_page = compute_last_page(total_items, items_per_page)
                assert last_page * items_per_page >= total_items
                if total_items == 0:
                    assert last_page == 0
                else:
                    assert (last_page - 1) * items_per_page < total_items

    @pytest.mark.parametrize("items_per_page", [0, -1, -20])
    def test_non_positive_page_size_fails_fast(self, items_per_page):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            compute_last_page(10, items_per_page)

        assert exc_info.value.details["setting"] == "items_per_page"


class TestPageWindow:
    """Test the page links rendered around the current page."""

    def test_window_in_the_middle(self):
        window = page_window(page=10, total_items=400, items_per_page=20, window_size=3)

        assert window == PageWindow(before=[7, 8, 9], after=[11, 12, 13])

    def test_window_near_first_page_excludes_page_one(self):
        window = page_window(page=3, total_items=400, items_per_page=20, window_size=3)

        assert window.before == [2]
        assert window.after == [4, 5, 6]

    def test_window_near_last_page_excludes_last_page(self):
        window = page_window(page=18, total_items=400, items_per_page=20, window_size=3)

        assert window.before == [15, 16, 17]
        assert window.after == [19]

    def test_window_on_boundaries(self):
        first = page_window(page=1, total_items=100, items_per_page=20, window_size=3)
        last = page_window(page=5, total_items=100, items_per_page=20, window_size=3)

        assert first.before == []
        assert first.after == [2, 3, 4]
        assert last.before == [2, 3, 4]
        assert last.after == []

    def test_window_with_single_page(self):
        assert page_window(page=1, total_items=5, items_per_page=20, window_size=3) == PageWindow()

    def test_zero_window_size(self):
        assert page_window(page=10, total_items=400, items_per_page=20, window_size=0) == PageWindow()

    def test_window_never_contains_current_or_boundary_pages(self):
        for page in range(1, 11):
            window = page_window(page=page, total_items=200, items_per_page=20, window_size=4)
            shown = window.before + window.after

            assert page not in shown
            assert 1 not in shown
            assert 10 not in shown
            assert window.before == sorted(window.before)
            assert window.after == sorted(window.after)
            assert len(window.before) <= 4
            assert len(window.after) <= 4

    def test_window_rejects_zero_page_size(self):
        with pytest.raises(InvalidConfigurationError):
            page_window(page=1, total_items=10, items_per_page=0, window_size=3)


class TestPageTokens:
    """Test page token parsing and redirect targets."""

    @pytest.mark.parametrize("token,expected", [
        ("1", 1),
        ("3", 3),
        ("0042", 42),
        ("+2", 2),
    ])
    def test_valid_tokens(self, token, expected):
        assert parse_page_token(token) == expected

    @pytest.mark.parametrize("token", [
        None, "", "abc", "0", "-1", "+", "++2", "2.5", "1e3", "٣", " 7 ", "7 ", "9" * 5000
    ])
    def test_invalid_tokens_become_sentinel(self, token):
        assert parse_page_token(token) == INVALID_PAGE

    def test_sentinel_is_not_a_page(self):
        assert INVALID_PAGE < 1

    def test_resolve_valid_pages(self):
        assert resolve_page(1, 3) is None
        assert resolve_page(3, 3) is None

    def test_resolve_out_of_range_pages(self):
        assert resolve_page(INVALID_PAGE, 3) == 1
        assert resolve_page(0, 3) == 1
        assert resolve_page(4, 3) == 3
        assert resolve_page(99, 3) == 3

    def test_empty_folder_keeps_page_one(self):
        assert resolve_page(1, 0) is None
        assert resolve_page(2, 0) == 1


class TestBuildPagination:
    """Test the pagination model handed to the rendering layer."""

    def test_pagination_for_last_page(self):
        info = build_pagination(page=3, total_items=45, items_per_page=20,
                                url="/dataset/cats/uploaded/", window_size=3)

        assert info.page == 3
        assert info.last_page == 3
        assert info.total_items == 45
        assert info.pages_before == [2]
        assert info.pages_after == []
        assert info.has_prev is True
        assert info.has_next is False
        assert info.url == "/dataset/cats/uploaded/"

    def test_pagination_for_empty_folder(self):
        info = build_pagination(page=1, total_items=0, items_per_page=20,
                                url="/dataset/cats/uploaded/", window_size=3)

        assert info.last_page == 0
        assert info.has_next is False
        assert info.has_prev is False
