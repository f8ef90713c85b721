"""
Dataset page endpoints.
Handles the dashboard, paginated image listings, uploads and downloads.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, RedirectResponse
from typing import Dict, Any

from dataset_browser.config import Settings, get_settings
from dataset_browser.models.api import DashboardResponse, ImagesResponse, UploadResponse
from dataset_browser.services.browser import browse_folder
from dataset_browser.services.pager import DirectoryPager, get_pager
from dataset_browser.services.storage import AssetStorage, get_asset_storage
from dataset_browser.services.workspace import (
    DatasetWorkspace,
    UPLOADED_IMAGES,
    UPLOADED_LABELS,
    get_workspace
)
from dataset_browser.utils.logging import logger, EventTimer


router = APIRouter()


def _page_url(dataset_name: str, listing: str) -> str:
    return f"/dataset/{quote(dataset_name)}/{listing}/"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


async def _browse(dataset_name: str, page: str, relative: str, tag: str, listing: str,
                  workspace: DatasetWorkspace, pager: DirectoryPager, config: Settings):
    """Shared handler for every paginated listing of a dataset folder."""
    timer = EventTimer()
    folder = await run_in_threadpool(workspace.asset_folder, dataset_name, relative)
    url = _page_url(dataset_name, listing)

    result = await run_in_threadpool(
        browse_folder, pager, folder, page,
        config.items_per_page, config.pagination_window, url
    )
    if result.is_redirect:
        return _redirect(f"{url}{result.redirect_page}")

    logger.info(
        f"{tag.capitalize()} page {result.pagination.page} rendered for dataset "
        f"'{dataset_name}' in {timer}"
    )
    return ImagesResponse(
        title=f"{dataset_name} Images",
        tag=tag,
        dataset_name=dataset_name,
        files=result.files,
        pagination=result.pagination
    )


@router.get("/dataset/{dataset_name}/", response_model=DashboardResponse)
@router.get("/dataset/{dataset_name}/dashboard", response_model=DashboardResponse)
async def dashboard(
    dataset_name: str,
    workspace: DatasetWorkspace = Depends(get_workspace),
    pager: DirectoryPager = Depends(get_pager)
) -> Dict[str, Any]:
    """
    Dataset dashboard.

    Returns the class list from data.yaml and the number of files staged in
    the uploaded folders.
    """
    timer = EventTimer()
    logger.info(f"Render dashboard for dataset '{dataset_name}'")

    data_config = await run_in_threadpool(workspace.read_data_config, dataset_name)
    root = workspace.dataset_path(dataset_name)
    stats = {
        "uploaded_images": await run_in_threadpool(pager.count_entries, root / UPLOADED_IMAGES),
        "uploaded_labels": await run_in_threadpool(pager.count_entries, root / UPLOADED_LABELS)
    }

    logger.info(f"Finish render '{dataset_name}' dashboard page in {timer}")
    return {
        "title": f"{dataset_name} Dashboard",
        "menu": "dashboard",
        "dataset_name": dataset_name,
        "classes": data_config.class_names,
        "stats": stats
    }


@router.get("/dataset/{dataset_name}/images", response_model=ImagesResponse)
async def images_page(
    dataset_name: str,
    workspace: DatasetWorkspace = Depends(get_workspace)
) -> Dict[str, Any]:
    """Images page with the upload tab active."""
    await run_in_threadpool(workspace.validate_dataset, dataset_name)
    return {
        "title": f"{dataset_name} Images",
        "tag": "upload",
        "dataset_name": dataset_name
    }


@router.get("/dataset/{dataset_name}/uploaded")
async def uploaded_first_page(
    dataset_name: str,
    workspace: DatasetWorkspace = Depends(get_workspace)
) -> RedirectResponse:
    """Listing without a page number starts at page 1."""
    await run_in_threadpool(workspace.validate_dataset, dataset_name)
    return _redirect(f"{_page_url(dataset_name, 'uploaded')}1")


@router.get("/dataset/{dataset_name}/uploaded/{page}", response_model=ImagesResponse)
async def uploaded_page(
    dataset_name: str,
    page: str,
    workspace: DatasetWorkspace = Depends(get_workspace),
    pager: DirectoryPager = Depends(get_pager),
    config: Settings = Depends(get_settings)
):
    """
    One page of the images waiting in uploaded/images.

    A page token that is not a positive integer redirects to page 1; a page
    past the end redirects to the last page.
    """
    return await _browse(dataset_name, page, UPLOADED_IMAGES, "uploaded", "uploaded",
                         workspace, pager, config)


@router.get("/dataset/{dataset_name}/images/annotated")
async def annotated_first_page(
    dataset_name: str,
    workspace: DatasetWorkspace = Depends(get_workspace)
) -> RedirectResponse:
    await run_in_threadpool(workspace.validate_dataset, dataset_name)
    return _redirect(f"{_page_url(dataset_name, 'images/annotated')}1")


@router.get("/dataset/{dataset_name}/images/annotated/{page}", response_model=ImagesResponse)
async def annotated_page(
    dataset_name: str,
    page: str,
    workspace: DatasetWorkspace = Depends(get_workspace),
    pager: DirectoryPager = Depends(get_pager),
    config: Settings = Depends(get_settings)
):
    """One page of the label files in uploaded/labels."""
    return await _browse(dataset_name, page, UPLOADED_LABELS, "annotated", "images/annotated",
                         workspace, pager, config)


@router.post("/dataset/{dataset_name}/upload", response_model=UploadResponse,
             status_code=status.HTTP_201_CREATED)
async def upload_image(
    dataset_name: str,
    dataset_image: UploadFile = File(..., description="Image to stage in uploaded/images"),
    storage: AssetStorage = Depends(get_asset_storage)
) -> Dict[str, Any]:
    """Store one uploaded image in the dataset's staging folder."""
    timer = EventTimer()
    logger.info(f"Upload image '{dataset_image.filename}' to dataset '{dataset_name}'")

    try:
        # One byte over the limit is enough to reject the file
        data = await dataset_image.read(storage.max_upload_size_bytes + 1)
    finally:
        await dataset_image.close()

    result = await storage.save_upload(dataset_name, dataset_image.filename, data)

    logger.info(f"Successfully finished upload request in {timer}")
    return result


@router.get("/dataset/{dataset_name}/download/{filename}")
async def download_image(
    dataset_name: str,
    filename: str,
    storage: AssetStorage = Depends(get_asset_storage)
) -> FileResponse:
    """Serve one file from uploaded/images."""
    file_path = await run_in_threadpool(storage.resolve_download, dataset_name, filename)
    return FileResponse(file_path, filename=file_path.name)
