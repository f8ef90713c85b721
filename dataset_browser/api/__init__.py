"""
API route handlers for the YOLO Dataset Browser.
Implements the landing page, dataset pages and health endpoints.
"""

from .index import router as index_router
from .datasets import router as datasets_router
from .health import router as health_router

__all__ = [
    "index_router",
    "datasets_router",
    "health_router"
]
