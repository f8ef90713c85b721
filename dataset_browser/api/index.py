"""
Landing page endpoints.
Lists the datasets in the workspace and creates new ones.
"""

from typing import Optional, Dict, Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from dataset_browser.models.api import IndexResponse
from dataset_browser.services.workspace import DatasetWorkspace, get_workspace
from dataset_browser.utils.logging import logger, EventTimer


router = APIRouter()

INDEX_TITLE = "Yolov8 Vision"


@router.get("/", response_model=IndexResponse)
async def index(
    error_message: Optional[str] = Query(None, alias="errorMessage", description="Error to display"),
    workspace: DatasetWorkspace = Depends(get_workspace)
) -> Dict[str, Any]:
    """Landing page: every dataset in the workspace."""
    logger.info("Get dataset list")
    directories = await run_in_threadpool(workspace.list_datasets)

    return {
        "title": INDEX_TITLE,
        "directories": directories,
        "error_message": error_message
    }


@router.post("/create/dataset")
async def create_dataset(
    dataset: str = Form("", description="Name of the new dataset"),
    workspace: DatasetWorkspace = Depends(get_workspace)
) -> RedirectResponse:
    """
    Create a dataset with the standard folder layout.

    Redirects to the new dataset's dashboard. An empty or unusable name is
    rejected with 400, an existing folder with 409.
    """
    timer = EventTimer()
    name = await run_in_threadpool(workspace.new_dataset, dataset)

    logger.info(f"Dataset '{name}' ready in {timer}")
    return RedirectResponse(f"/dataset/{quote(name)}/dashboard", status_code=status.HTTP_303_SEE_OTHER)
