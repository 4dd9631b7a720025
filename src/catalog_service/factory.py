"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application from settings
- Sets up the middleware stack
- Registers exception handlers
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_service.api.v1.router import router as v1_router
from catalog_service.core.config import Settings, get_settings
from catalog_service.core.events import lifespan
from catalog_service.core.exceptions import setup_exception_handlers
from catalog_service.core.middleware import LoggingMiddleware, RequestIDMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Cached, rate-limited gateway to the upstream product catalog",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_non_production else None,
        redoc_url="/redoc" if settings.is_non_production else None,
        openapi_url="/openapi.json" if settings.is_non_production else None,
        debug=settings.app.debug,
    )

    # Read by the lifespan and by request-scoped dependencies
    app.state.settings = settings

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition, so the request ID
    is bound before the logging middleware runs.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "Retry-After"],
        )

    app.add_middleware(LoggingMiddleware, exclude_paths={"/health", "/favicon.ico"})
    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": "/docs" if settings.is_non_production else "disabled",
        }
