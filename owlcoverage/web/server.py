"""FastAPI server for the OWL Coverage dashboard.

This module provides the main FastAPI application and server configuration.
"""

import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from owlcoverage import __version__
from owlcoverage.config import Settings, load_settings
from owlcoverage.web.models import ErrorCode, ErrorResponse
from owlcoverage.web.routes import analyze_router, dashboard_router, health_router

logger = logging.getLogger("owlcoverage.web")


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info(f"Starting OWL Coverage dashboard v{__version__}")
    yield
    logger.info("OWL Coverage dashboard stopped")


def create_app(
    settings: Settings | None = None,
    cors_origins: list[str] | None = None,
    debug: bool = False,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Loaded settings (default: built-in defaults)
        cors_origins: Allowed CORS origins (default: localhost only)
        debug: Enable debug mode

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings()

    app = FastAPI(
        title="OWL Coverage API",
        description="Definition coverage analysis for OWL/XML ontologies",
        version=__version__,
        lifespan=lifespan,
        debug=debug,
    )
    app.state.settings = settings

    if cors_origins is None:
        cors_origins = [
            f"http://localhost:{settings.web.port}",
            f"http://127.0.0.1:{settings.web.port}",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Log all requests with timing."""
        start_time = time.time()
        response: Response = await call_next(request)
        duration = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} "
            f"status={response.status_code} "
            f"duration={duration:.3f}s"
        )
        return response

    app.include_router(health_router, prefix="/api")
    app.include_router(analyze_router, prefix="/api")
    app.include_router(dashboard_router)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                code=ErrorCode.INTERNAL_ERROR,
                message="An unexpected error occurred",
            ).model_dump(mode="json"),
        )

    return app


def create_configured_app() -> FastAPI:
    """App factory using settings from config files and environment."""
    return create_app(load_settings())


def run_server(
    host: str = "127.0.0.1",
    port: int = 8765,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Run the dashboard server.

    Args:
        host: Host to bind to
        port: Port to listen on
        reload: Enable auto-reload for development
        log_level: Logging level
    """
    import uvicorn

    uvicorn.run(
        "owlcoverage.web.server:create_configured_app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        factory=True,
    )


if __name__ == "__main__":
    run_server(reload=True)
