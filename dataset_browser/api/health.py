"""
Health check API endpoints.
Provides service health monitoring and workspace status.
"""

import os
from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Depends

from dataset_browser.config import settings
from dataset_browser.models.api import HealthResponse
from dataset_browser.services.workspace import DatasetWorkspace, get_workspace
from dataset_browser.utils.logging import logger


router = APIRouter()


def check_datasets_root(workspace: DatasetWorkspace) -> Dict[str, Any]:
    """Check the datasets root folder is present and writable."""
    root = workspace.base_path
    if not root.is_dir():
        return {"status": "unhealthy", "error": f"Folder '{root}' does not exist"}
    if not os.access(root, os.R_OK | os.W_OK | os.X_OK):
        return {"status": "unhealthy", "error": f"Folder '{root}' is not writable"}
    return {"status": "healthy"}


@router.get("/health", response_model=HealthResponse)
async def health_check(workspace: DatasetWorkspace = Depends(get_workspace)) -> Dict[str, Any]:
    """
    Health check for the service and the datasets root folder.

    Returns overall health status and the status of the workspace folder.
    """
    logger.debug("Performing health check")

    root_health = check_datasets_root(workspace)
    dependencies = {"datasets_root": root_health["status"]}

    response = {
        "status": root_health["status"],
        "timestamp": datetime.now(timezone.utc),
        "version": settings.api_version,
        "dependencies": dependencies
    }

    if root_health.get("error"):
        response["errors"] = [f"Datasets root: {root_health['error']}"]
        logger.warning(f"Health check failed: {response['errors']}")
    else:
        logger.debug("Health check passed")

    return response
