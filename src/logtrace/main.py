"""
Main FastAPI application entry point.

Sets up logging from settings, the exception handlers that log errors through
the attribute replacer, and the routes.
"""

from typing import Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .api import healthz_router
from .config import Settings, get_settings
from .core.exceptions import LogTraceException
from .core.pipeline import configure_logging


async def logtrace_exception_handler(request: Request, exc: LogTraceException) -> JSONResponse:
    """Handle custom logtrace exceptions."""
    logger = structlog.get_logger(__name__)
    # The exception itself is logged so its message and trace get rendered
    logger.error(
        "LogTrace exception occurred",
        error=exc,
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger = structlog.get_logger(__name__)
    logger.error(
        "Unexpected exception occurred",
        error=exc,
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function ensures all configuration is applied
    whether running via FastAPI CLI or direct execution.
    """
    settings = settings or get_settings()

    configure_logging(settings)

    app = FastAPI(
        title="logtrace",
        description="Structured log attribute replacer",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.add_exception_handler(LogTraceException, logtrace_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(healthz_router, tags=["health"])

    @app.get("/", include_in_schema=False)
    async def root() -> Dict[str, str]:
        """Root endpoint with service information."""
        return {
            "service": "logtrace",
            "version": app.version,
            "docs": "/docs",
        }

    structlog.get_logger(__name__).info(
        "Application created",
        version=__version__,
        pretty_mode=settings.logging.pretty_mode,
    )

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
