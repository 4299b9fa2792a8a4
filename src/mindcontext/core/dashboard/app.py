"""
FastAPI application for the mindcontext dashboard.

Serves the update records of the local dashboard repository clone.
"""

import logging
import traceback
from enum import Enum
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from mindcontext import __version__
from mindcontext.core.config.models import MindContextConfig
from mindcontext.core.dashboard import routes
from mindcontext.core.updates.store import UpdateStore

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_REQUEST = "INVALID_REQUEST"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def create_app(config: MindContextConfig, repo_dir: Path) -> FastAPI:
    """
    Create the dashboard app.

    Args:
        config: Loaded configuration (project registry)
        repo_dir: Local dashboard repository clone

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="MindContext Dashboard API",
        description="Progress updates across projects and machines",
        version=__version__,
    )
    app.state.config = config
    app.state.store = UpdateStore(repo_dir)

    app.include_router(routes.router, prefix="/api", tags=["projects"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint - API health check."""
        return {"status": "ok", "message": "MindContext Dashboard API"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Convert HTTPException to the standard error response format."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            error_code = ErrorCode.NOT_FOUND
        elif exc.status_code < 500:
            error_code = ErrorCode.INVALID_REQUEST
        else:
            error_code = ErrorCode.INTERNAL_ERROR

        logger.info(
            "HTTP %d on %s %s: %s",
            exc.status_code,
            request.method,
            request.url.path,
            exc.detail,
        )

        detail_msg = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error_code": error_code, "message": detail_msg, "detail": detail_msg},
        )

    @app.exception_handler(OSError)
    async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
        """Handle failures reading the dashboard repository."""
        logger.error(
            "File error on %s %s: %s\n%s",
            request.method,
            request.url.path,
            exc,
            traceback.format_exc(),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error_code": ErrorCode.FILE_READ_ERROR,
                "message": "File operation failed",
                "detail": str(exc),
            },
        )

    return app
