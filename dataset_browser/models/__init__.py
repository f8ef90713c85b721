"""
Data models for the YOLO Dataset Browser.
Includes API response models and YOLO format models.
"""

from .api import *
from .yolo import *

__all__ = [
    # API Models
    "PaginationInfo",
    "IndexResponse",
    "DashboardResponse",
    "ImagesResponse",
    "UploadResponse",
    "HealthResponse",
    "ErrorResponse",

    # YOLO Models
    "DataConfig"
]
