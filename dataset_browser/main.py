"""
FastAPI main application for the YOLO Dataset Browser.
Serves dataset pages over the on-disk workspace.
"""

import uvicorn
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dataset_browser.config import settings, is_local_environment
from dataset_browser.api.index import router as index_router
from dataset_browser.api.datasets import router as datasets_router
from dataset_browser.api.health import router as health_router
from dataset_browser.models.api import ErrorResponse
from dataset_browser.utils.logging import setup_logging, logger, log_request, EventTimer
from dataset_browser.utils.exceptions import (
    DatasetBrowserError,
    get_http_status_code,
    format_exception_response
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    # Startup
    setup_logging()
    logger.info("Starting YOLO Dataset Browser")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Datasets path: {settings.datasets_path}")

    if not Path(settings.datasets_path).is_dir():
        logger.warning(f"Datasets folder '{settings.datasets_path}' does not exist yet")

    yield

    # Shutdown
    logger.info("Shutting down YOLO Dataset Browser")


# Error bodies produced by the DatasetBrowserError handler
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid name, page size or upload"},
    404: {"model": ErrorResponse, "description": "Dataset or file not found"},
    409: {"model": ErrorResponse, "description": "Dataset exists or is incomplete"},
    500: {"model": ErrorResponse, "description": "Filesystem failure"}
}


# Create FastAPI application
app = FastAPI(
    title="YOLO Dataset Browser",
    description="Create YOLOv8 datasets on disk and page through their images",
    version=settings.api_version,
    docs_url="/docs" if is_local_environment() else None,
    redoc_url="/redoc" if is_local_environment() else None,
    lifespan=lifespan
)

# Add CORS middleware for local development
if is_local_environment():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every request with its status and duration."""
    timer = EventTimer()
    response = await call_next(request)
    log_request(request.method, request.url.path, response.status_code, timer.elapsed_ms)
    return response


# Global exception handler
@app.exception_handler(DatasetBrowserError)
async def dataset_browser_exception_handler(request: Request, exc: DatasetBrowserError):
    """Handle custom dataset browser exceptions."""
    status_code = get_http_status_code(exc)
    if status_code >= 500:
        logger.error(f"Dataset Browser Error: {exc}")
    else:
        logger.warning(f"Dataset Browser Error: {exc}")

    return JSONResponse(
        status_code=status_code,
        content=format_exception_response(exc, request.headers.get("x-request-id"))
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred"
        }
    )


# Include API routers
app.include_router(health_router, tags=["Health"])
app.include_router(index_router, tags=["Datasets"], responses=ERROR_RESPONSES)
app.include_router(datasets_router, tags=["Dataset Pages"], responses=ERROR_RESPONSES)


if __name__ == "__main__":
    uvicorn.run(
        "dataset_browser.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=is_local_environment()
    )
