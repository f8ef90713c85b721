"""
Structured logging configuration for the YOLO Dataset Browser.
Provides consistent, production-ready logging across the application.
"""

import logging
import sys
import json
import time
from datetime import datetime, timezone
from typing import Optional

from dataset_browser.config import settings, is_local_environment


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""

        # Base log entry
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Add extra fields from record
        for key, value in record.__dict__.items():
            if key not in ["name", "msg", "args", "levelname", "levelno", "pathname",
                           "filename", "module", "lineno", "funcName", "created", "msecs",
                           "relativeCreated", "thread", "threadName", "processName",
                           "process", "exc_info", "exc_text", "stack_info", "getMessage",
                           "taskName"]:
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class LocalFormatter(logging.Formatter):
    """Colorized formatter for local development."""

    # Color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for local development."""

        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        message = f"{color}[{timestamp}] {record.levelname:8s}{reset} "
        message += f"{record.name:20s} {record.getMessage()}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging() -> None:
    """Configure logging for the application."""

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    # Set formatter based on environment
    if is_local_environment():
        formatter = LocalFormatter()
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers in production
    if not is_local_environment():
        logging.getLogger("uvicorn").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("PIL").setLevel(logging.WARNING)

    app_logger = logging.getLogger("dataset_browser")
    app_logger.info(f"Logging configured - Level: {settings.log_level}, Environment: {settings.environment}")


# Application logger instance
logger = logging.getLogger("dataset_browser")


class EventTimer:
    """Measures the time spent handling a single event."""

    def __init__(self):
        self.started = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000

    def __str__(self) -> str:
        elapsed = self.elapsed_ms
        if elapsed >= 1000:
            return f"{elapsed / 1000:.3f}s"
        return f"{elapsed:.3f}ms"


def log_request(method: str, path: str, status_code: int, duration_ms: float, **kwargs) -> None:
    """Log HTTP request with structured data."""

    log_data = {
        "request_method": method,
        "request_path": path,
        "response_status": status_code,
        "response_time_ms": duration_ms,
        **kwargs
    }

    if status_code >= 500:
        logger.error("HTTP request failed", extra=log_data)
    elif status_code >= 400:
        logger.warning("HTTP client error", extra=log_data)
    else:
        logger.info("HTTP request completed", extra=log_data)


def log_filesystem_operation(operation: str, path: str, count: Optional[int] = None,
                             size_bytes: Optional[int] = None,
                             duration_ms: Optional[float] = None, **kwargs) -> None:
    """Log filesystem operation with structured data."""

    log_data = {
        "fs_operation": operation,
        "fs_path": path,
        **kwargs
    }

    if count is not None:
        log_data["result_count"] = count

    if size_bytes is not None:
        log_data["file_size_bytes"] = size_bytes

    if duration_ms is not None:
        log_data["operation_time_ms"] = duration_ms

    logger.debug("Filesystem operation", extra=log_data)
