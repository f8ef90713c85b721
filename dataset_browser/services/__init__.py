"""
Service layer for the YOLO Dataset Browser.
Contains the workspace, listing and storage logic behind the API.
"""

from .workspace import get_workspace, DatasetWorkspace, create_dataset
from .pager import get_pager, DirectoryPager, LocalDirectoryPager, PageSlice
from .pagination import compute_last_page, page_window, parse_page_token, resolve_page, INVALID_PAGE
from .browser import browse_folder, BrowseResult
from .storage import get_asset_storage, AssetStorage

__all__ = [
    "get_workspace",
    "DatasetWorkspace",
    "create_dataset",
    "get_pager",
    "DirectoryPager",
    "LocalDirectoryPager",
    "PageSlice",
    "compute_last_page",
    "page_window",
    "parse_page_token",
    "resolve_page",
    "INVALID_PAGE",
    "browse_folder",
    "BrowseResult",
    "get_asset_storage",
    "AssetStorage"
]
