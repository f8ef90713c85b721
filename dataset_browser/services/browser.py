"""
Paginated folder browsing.
Turns a page token from a request path into either a page of file names
with pagination data, or the canonical page the client should be sent to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dataset_browser.models.api import PaginationInfo
from dataset_browser.services.pager import DirectoryPager
from dataset_browser.services.pagination import (
    INVALID_PAGE,
    build_pagination,
    compute_last_page,
    parse_page_token,
    resolve_page
)
from dataset_browser.utils.logging import logger


@dataclass
class BrowseResult:
    """Outcome of a browse request: a redirect target or a rendered page."""
    redirect_page: Optional[int] = None
    files: List[str] = field(default_factory=list)
    pagination: Optional[PaginationInfo] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect_page is not None


def browse_folder(pager: DirectoryPager, folder: Union[str, Path], page_token: Optional[str],
                  items_per_page: int, window_size: int, url: str) -> BrowseResult:
    """
    Page through ``folder`` for the page named by ``page_token``.

    Invalid tokens redirect to page 1, pages past the end redirect to the
    last page. The folder is listed once; the bounds check and the slice come
    from that same listing.
    """
    page = parse_page_token(page_token)
    if page == INVALID_PAGE:
        logger.info(f"Redirect to page 1 as result of page token '{page_token}'")
        return BrowseResult(redirect_page=1)

    page_slice = pager.list_page(folder, page, items_per_page)
    last_page = compute_last_page(page_slice.total_items, items_per_page)

    target = resolve_page(page, last_page)
    if target is not None:
        logger.info(f"Redirect to page {target}, page {page} is out of range 1..{max(last_page, 1)}")
        return BrowseResult(redirect_page=target)

    pagination = build_pagination(page, page_slice.total_items, items_per_page, url, window_size)
    return BrowseResult(files=page_slice.entries, pagination=pagination)
