"""
Asset storage for dataset uploads.
Writes uploaded images into a dataset's staging folder and resolves files for download.
"""

import io
from pathlib import Path, PurePath
from typing import Optional, Tuple

import aiofiles
from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from PIL import Image, UnidentifiedImageError

from dataset_browser.config import Settings, get_settings
from dataset_browser.services.workspace import DatasetWorkspace, UPLOADED_IMAGES, get_workspace
from dataset_browser.utils.logging import logger, log_filesystem_operation, EventTimer
from dataset_browser.utils.exceptions import IOFailureError, NotFoundError, ValidationError


def format_file_size(size_bytes: int) -> str:
    """Print file size in the largest whole unit."""
    for unit, factor in (("TB", 1024 ** 4), ("GB", 1024 ** 3), ("MB", 1024 ** 2), ("KB", 1024)):
        if size_bytes // factor > 0:
            return f"{size_bytes // factor}{unit}"
    return f"{size_bytes}Bytes"


def clean_filename(filename: Optional[str]) -> str:
    """Base name of a client supplied file name."""
    name = PurePath((filename or "").replace("\\", "/")).name
    if name in ("", ".", ".."):
        raise ValidationError("Uploaded file has no usable name", field="dataset_image", value=filename)
    return name


def inspect_image(data: bytes) -> Tuple[int, int]:
    """Width and height of an encoded image, rejecting anything Pillow cannot read."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
        # verify() leaves the image unusable, reopen for the size
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(f"Uploaded file is not a valid image: {e}", field="dataset_image") from e
    return width, height


class AssetStorage:
    """Uploads and downloads against a dataset's uploaded/images folder."""

    def __init__(self, workspace: DatasetWorkspace, max_upload_size_bytes: int):
        self.workspace = workspace
        self.max_upload_size_bytes = max_upload_size_bytes

    async def save_upload(self, dataset: str, filename: Optional[str], data: bytes) -> dict:
        """Store an uploaded image and return its name, size and dimensions."""
        timer = EventTimer()
        folder = await run_in_threadpool(self.workspace.asset_folder, dataset, UPLOADED_IMAGES)
        name = clean_filename(filename)

        if len(data) > self.max_upload_size_bytes:
            raise ValidationError(
                f"File '{name}' is {format_file_size(len(data))}, "
                f"limit is {format_file_size(self.max_upload_size_bytes)}",
                field="dataset_image"
            )

        width, height = await run_in_threadpool(inspect_image, data)
        file_path = folder / name

        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.error(f"Error when creating file '{file_path}', error: {e}")
            raise IOFailureError(f"Upload failed: {e}", operation="write", path=str(file_path)) from e

        log_filesystem_operation("upload", str(file_path), size_bytes=len(data), duration_ms=timer.elapsed_ms)
        logger.info(f"File '{name}' with size '{format_file_size(len(data))}' stored in {timer}")

        return {
            "filename": name,
            "size_bytes": len(data),
            "size": format_file_size(len(data)),
            "width": width,
            "height": height
        }

    def resolve_download(self, dataset: str, filename: str) -> Path:
        """Path of an uploaded image, refusing names that leave the folder."""
        folder = self.workspace.asset_folder(dataset, UPLOADED_IMAGES).resolve()
        file_path = (folder / filename).resolve()

        if file_path.parent != folder or not file_path.is_file():
            logger.warning(f"Download of '{filename}' from dataset '{dataset}' refused")
            raise NotFoundError(f"File '{filename}' not found", path=filename)
        return file_path


def get_asset_storage(workspace: DatasetWorkspace = Depends(get_workspace),
                      config: Settings = Depends(get_settings)) -> AssetStorage:
    """Get the asset storage bound to the configured workspace."""
    return AssetStorage(workspace, config.max_upload_size_bytes)
