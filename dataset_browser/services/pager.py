"""
Directory pager.
Lists an asset folder and cuts out the entries belonging to one page.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dataset_browser.utils.logging import logger, log_filesystem_operation, EventTimer
from dataset_browser.utils.exceptions import (
    NotFoundError,
    IOFailureError,
    InvalidPageError,
    InvalidConfigurationError
)


@dataclass(frozen=True)
class PageSlice:
    """Entries on the requested page plus the folder's total entry count."""
    entries: List[str] = field(default_factory=list)
    total_items: int = 0


class DirectoryPager(ABC):
    """Abstract base class for paged folder listings."""

    @abstractmethod
    def list_entries(self, folder_path: Union[str, Path]) -> List[str]:
        """Every entry name in the folder, in listing order."""
        pass

    def count_entries(self, folder_path: Union[str, Path]) -> int:
        return len(self.list_entries(folder_path))

    def list_page(self, folder_path: Union[str, Path], page: int, items_per_page: int) -> PageSlice:
        """
        Entries with index in ``[(page - 1) * items_per_page, page * items_per_page)``.

        The whole folder is enumerated on every call since the total count is
        reported whatever page is asked for. A page past the end yields no
        entries and the real total, so the caller can redirect.
        """
        if items_per_page < 1:
            raise InvalidConfigurationError(
                f"Items per page must be positive, got {items_per_page}",
                setting="items_per_page",
                value=items_per_page
            )
        if page < 1:
            raise InvalidPageError(f"Page must be 1 or greater, got {page}", page=page)

        timer = EventTimer()
        entries = self.list_entries(folder_path)

        start = (page - 1) * items_per_page
        end = start + items_per_page
        selected = entries[start:end]

        log_filesystem_operation(
            "list_page", str(folder_path),
            count=len(selected),
            duration_ms=timer.elapsed_ms,
            page=page,
            total_items=len(entries)
        )
        logger.info(
            f"Found [{len(selected)}] files between index [{start}] and [{end}] "
            f"from total [{len(entries)}] in {folder_path}"
        )
        return PageSlice(entries=selected, total_items=len(entries))


class LocalDirectoryPager(DirectoryPager):
    """Paged listings straight from the local filesystem."""

    def list_entries(self, folder_path: Union[str, Path]) -> List[str]:
        """Entry names sorted by name, so a static folder always pages the same way."""
        path = Path(folder_path)
        if not path.is_dir():
            logger.error(f"Folder '{path}' does not exist")
            raise NotFoundError(f"Folder '{path}' does not exist", path=str(path))

        try:
            with os.scandir(path) as it:
                names = [entry.name for entry in it]
        except FileNotFoundError as e:
            raise NotFoundError(f"Folder '{path}' does not exist", path=str(path)) from e
        except OSError as e:
            logger.error(f"Failed to list folder {path}: {e}")
            raise IOFailureError(f"Listing failed: {e}", operation="list", path=str(path)) from e

        names.sort()
        return names


# Global pager instance
_pager: Optional[DirectoryPager] = None


def get_pager() -> DirectoryPager:
    """Get the pager used by the API routes."""
    global _pager

    if _pager is None:
        _pager = LocalDirectoryPager()

    return _pager
