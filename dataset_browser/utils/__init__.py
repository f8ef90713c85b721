"""
Utility modules for the YOLO Dataset Browser.
Provides logging, exception handling, and common utilities.
"""

from .logging import logger, setup_logging, EventTimer
from .exceptions import (
    DatasetBrowserError,
    NotFoundError,
    InvalidConfigurationError,
    IOFailureError,
    InvalidPageError,
    ValidationError,
    DatasetExistsError,
    InvalidDatasetError
)

__all__ = [
    "logger",
    "setup_logging",
    "EventTimer",
    "DatasetBrowserError",
    "NotFoundError",
    "InvalidConfigurationError",
    "IOFailureError",
    "InvalidPageError",
    "ValidationError",
    "DatasetExistsError",
    "InvalidDatasetError"
]
