"""
Page arithmetic for folder listings.
Computes the last page, the navigation window around the current page,
and normalizes page tokens taken from request paths.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from dataset_browser.models.api import PaginationInfo
from dataset_browser.utils.exceptions import InvalidConfigurationError

# Returned for page tokens that are missing or not a positive integer
INVALID_PAGE = -1


@dataclass(frozen=True)
class PageWindow:
    """Page links rendered around the current page."""
    before: List[int] = field(default_factory=list)
    after: List[int] = field(default_factory=list)


def _require_page_size(items_per_page: int) -> None:
    if items_per_page <= 0:
        raise InvalidConfigurationError(
            f"Items per page must be positive, got {items_per_page}",
            setting="items_per_page",
            value=items_per_page
        )


def compute_last_page(total_items: int, items_per_page: int) -> int:
    """Number of pages needed to show ``total_items``, zero for an empty folder."""
    _require_page_size(items_per_page)

    last_page = total_items // items_per_page
    if total_items % items_per_page != 0:
        last_page += 1
    return last_page


def page_window(page: int, total_items: int, items_per_page: int, window_size: int) -> PageWindow:
    """
    Pages linked before and after ``page``.

    Both lists are ascending and hold up to ``window_size`` pages nearest to
    ``page``. Page 1, ``page`` itself and the last page are never included;
    the caller renders those separately.
    """
    last_page = compute_last_page(total_items, items_per_page)
    window_size = max(window_size, 0)

    before = list(range(max(2, page - window_size), page))
    after = list(range(page + 1, min(page + window_size + 1, last_page)))
    return PageWindow(before=before, after=after)


def parse_page_token(token: Optional[str]) -> int:
    """Positive page number from a path segment, or ``INVALID_PAGE``."""
    if token is None:
        return INVALID_PAGE

    digits = token[1:] if token.startswith("+") else token
    if not digits.isdigit() or not digits.isascii():
        return INVALID_PAGE

    try:
        page = int(digits)
    except ValueError:
        # More digits than int() will convert
        return INVALID_PAGE
    return page if page >= 1 else INVALID_PAGE


def resolve_page(page: int, last_page: int) -> Optional[int]:
    """
    Canonical page to redirect to, or ``None`` when ``page`` is valid.

    An empty folder still has one (empty) page.
    """
    highest = max(last_page, 1)
    if page < 1:
        return 1
    if page > highest:
        return highest
    return None


def build_pagination(page: int, total_items: int, items_per_page: int,
                     url: str, window_size: int) -> PaginationInfo:
    """Assemble the pagination model handed to the rendering layer."""
    last_page = compute_last_page(total_items, items_per_page)
    window = page_window(page, total_items, items_per_page, window_size)

    return PaginationInfo(
        page=page,
        items_per_page=items_per_page,
        total_items=total_items,
        last_page=last_page,
        url=url,
        pages_before=window.before,
        pages_after=window.after,
        has_next=page < last_page,
        has_prev=page > 1
    )
