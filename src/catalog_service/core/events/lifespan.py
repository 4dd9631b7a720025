"""Application lifespan event handlers.

Startup builds the process-wide components exactly once and hangs them on
``app.state``: the rate limiter and read-through cache are shared by every
request through the single ``CatalogClient``. Shutdown releases the HTTP
connection pool.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from catalog_service.cache.rate_limit import RateLimiter
from catalog_service.cache.read_through import ReadThroughCache
from catalog_service.clients.catalog.client import CatalogClient
from catalog_service.clients.catalog.http import RetryingHttpClient
from catalog_service.core.config import get_settings
from catalog_service.observability.logging import get_logger, setup_logging
from catalog_service.services.favorites.guard import FavoriteConsistencyGuard
from catalog_service.services.favorites.repository import InMemoryFavoriteRepository


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    import httpx
    from fastapi import FastAPI

    from catalog_service.core.config import CatalogSettings, Settings


logger = get_logger(__name__)


def build_catalog_client(
    catalog_settings: CatalogSettings,
    *,
    http_client: httpx.AsyncClient | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> CatalogClient:
    """Assemble limiter, cache and HTTP client into a ``CatalogClient``.

    Args:
        catalog_settings: The ``catalog`` configuration section.
        http_client: Optional pre-built httpx client.
        sleep: Backoff delay function.
        clock: Monotonic clock shared by the limiter and the cache.
    """
    rate_limit = catalog_settings.rate_limit
    http = RetryingHttpClient(
        catalog_settings.base_url,
        RateLimiter(clock=clock),
        timeout=catalog_settings.timeout_seconds,
        max_retries=catalog_settings.max_retries,
        backoff_base=catalog_settings.backoff_base,
        rate_limit_key=rate_limit.key,
        rate_limit_max=rate_limit.max_attempts,
        rate_limit_window=rate_limit.window_seconds,
        http_client=http_client,
        sleep=sleep,
    )
    cache = ReadThroughCache(
        max_entries=catalog_settings.cache_max_entries,
        clock=clock,
    )
    return CatalogClient(
        http,
        cache,
        cache_ttl_seconds=catalog_settings.cache_ttl_seconds,
    )


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
    )

    catalog = build_catalog_client(settings.catalog)
    await catalog.http.initialize()
    repository = InMemoryFavoriteRepository()

    app.state.catalog_client = catalog
    app.state.favorite_repository = repository
    app.state.favorite_guard = FavoriteConsistencyGuard(catalog, repository)

    logger.info("Application startup complete", **catalog.stats().as_dict())


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    catalog: CatalogClient | None = getattr(app.state, "catalog_client", None)
    if catalog is not None:
        await catalog.http.shutdown()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build shared components on startup and release them on shutdown."""
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
