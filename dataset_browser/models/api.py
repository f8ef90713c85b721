"""
API response models for the YOLO Dataset Browser.
Defines the structure handed to the rendering layer and returned over HTTP.
"""

from datetime import datetime
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


class PaginationInfo(BaseModel):
    """Pagination state for a single listing request."""
    page: int = Field(..., ge=1, description="Current page number")
    items_per_page: int = Field(..., ge=1, description="Items per page")
    total_items: int = Field(..., ge=0, description="Total number of items in the folder")
    last_page: int = Field(..., ge=0, description="Last page number")
    url: str = Field(..., description="Base URL, page number is appended")
    pages_before: List[int] = Field(default_factory=list, description="Page links shown before the current page")
    pages_after: List[int] = Field(default_factory=list, description="Page links shown after the current page")
    has_next: bool = Field(..., description="Whether there is a next page")
    has_prev: bool = Field(..., description="Whether there is a previous page")

    model_config = {
        "json_schema_extra": {
            "example": {
                "page": 4,
                "items_per_page": 20,
                "total_items": 190,
                "last_page": 10,
                "url": "/dataset/cats/uploaded/",
                "pages_before": [2, 3],
                "pages_after": [5, 6, 7],
                "has_next": True,
                "has_prev": True
            }
        }
    }


class IndexResponse(BaseModel):
    """Landing page model."""
    title: str = Field(..., description="Page title")
    directories: List[str] = Field(default_factory=list, description="Dataset names")
    error_message: Optional[str] = Field(None, description="Error to show on the landing page")


class DashboardResponse(BaseModel):
    """Dataset dashboard model."""
    title: str = Field(..., description="Page title")
    menu: str = Field("dashboard", description="Active menu entry")
    dataset_name: str = Field(..., description="Dataset name")
    classes: List[str] = Field(default_factory=list, description="Class names from data.yaml")
    stats: Dict[str, int] = Field(default_factory=dict, description="File counts per asset folder")


class ImagesResponse(BaseModel):
    """Images page model, with a paginated listing when one was requested."""
    title: str = Field(..., description="Page title")
    menu: str = Field("images", description="Active menu entry")
    tag: str = Field(..., description="Active tab: upload, uploaded or annotated")
    dataset_name: str = Field(..., description="Dataset name")
    files: List[str] = Field(default_factory=list, description="File names on the current page")
    pagination: Optional[PaginationInfo] = Field(None, description="Pagination information")


class UploadResponse(BaseModel):
    """Response model for a stored upload."""
    filename: str = Field(..., description="Stored file name")
    size_bytes: int = Field(..., ge=0, description="File size in bytes")
    size: str = Field(..., description="Human readable size")
    width: int = Field(..., gt=0, description="Image width in pixels")
    height: int = Field(..., gt=0, description="Image height in pixels")


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="API version")
    dependencies: Dict[str, str] = Field(..., description="Dependency health status")
    errors: Optional[List[str]] = Field(None, description="Error messages (if unhealthy)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "timestamp": "2025-07-03T10:00:00Z",
                "version": "1.0.0",
                "dependencies": {
                    "datasets_root": "healthy"
                }
            }
        }
    }


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
