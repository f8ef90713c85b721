"""
Custom exception classes for the YOLO Dataset Browser.
Provides structured error handling across the application.
"""

from typing import Optional, Dict, Any


class DatasetBrowserError(Exception):
    """Base exception class for dataset browser errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize exception with message and optional details."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of the exception."""
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__.lower().replace("error", "_error"),
            "message": self.message,
            "details": self.details
        }


class NotFoundError(DatasetBrowserError):
    """Raised when a dataset or one of its folders does not exist."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.path = path

        if path:
            self.details["missing_path"] = path


class InvalidConfigurationError(DatasetBrowserError):
    """Raised when paging is configured with a non-positive page size."""

    def __init__(self, message: str, setting: Optional[str] = None,
                 value: Optional[Any] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.setting = setting
        self.value = value

        if setting:
            self.details["setting"] = setting
        if value is not None:
            self.details["invalid_value"] = str(value)


class IOFailureError(DatasetBrowserError):
    """Raised when a create, write or read on the filesystem fails."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 path: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize IO error with optional operation details."""
        super().__init__(message, details)
        self.operation = operation
        self.path = path

        if operation:
            self.details["fs_operation"] = operation
        if path:
            self.details["fs_path"] = path


class InvalidPageError(DatasetBrowserError):
    """Raised when a page number below 1 reaches the pager."""

    def __init__(self, message: str, page: Optional[Any] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.page = page

        if page is not None:
            self.details["requested_page"] = str(page)


class ValidationError(DatasetBrowserError):
    """Raised when request data validation fails."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize validation error with optional field information."""
        super().__init__(message, details)
        self.field = field
        self.value = value

        if field:
            self.details["invalid_field"] = field
        if value is not None:
            self.details["invalid_value"] = str(value)


class DatasetExistsError(DatasetBrowserError):
    """Raised when creating a dataset whose folder already exists."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Folder '{name}' already exists", details)
        self.name = name
        self.details["dataset"] = name


class InvalidDatasetError(DatasetBrowserError):
    """Raised when a dataset folder exists but its layout is incomplete."""

    def __init__(self, name: str, missing: Optional[list] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Dataset '{name}' is missing required paths", details)
        self.name = name
        self.missing = missing or []
        self.details["dataset"] = name
        self.details["missing_paths"] = self.missing


# Exception mapping for HTTP status codes
EXCEPTION_STATUS_MAP = {
    NotFoundError: 404,
    ValidationError: 400,
    InvalidPageError: 400,
    DatasetExistsError: 409,
    InvalidDatasetError: 409,
    InvalidConfigurationError: 500,
    IOFailureError: 500,
    DatasetBrowserError: 500
}


def get_http_status_code(exception: Exception) -> int:
    """Get appropriate HTTP status code for exception."""
    for exc_type, status_code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exception, exc_type):
            return status_code
    return 500  # Default to internal server error


def format_exception_response(exception: DatasetBrowserError, request_id: Optional[str] = None) -> Dict[str, Any]:
    """Format exception as standardized API error response."""
    from datetime import datetime, timezone

    response = exception.to_dict()
    response["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    if request_id:
        response["request_id"] = request_id

    return response
