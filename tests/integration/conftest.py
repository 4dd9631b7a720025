"""Integration test fixtures.

Runs the real application lifespan against a respx-mocked upstream catalog.
Backoff is configured to zero so retries do not slow the suite down.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from catalog_service.core.config import CatalogSettings, Settings
from catalog_service.core.config.settings import (
    CatalogRateLimitSettings,
    LoggingSettings,
)
from catalog_service.factory import create_app
from tests.fixtures.catalog import CATALOG_BASE_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


pytestmark = pytest.mark.integration


@pytest.fixture
def rate_limit_max() -> int:
    """Upstream attempts allowed per window; override per test."""
    return 100


@pytest.fixture
def integration_settings(rate_limit_max: int) -> Settings:
    """Settings for a full application run."""
    return Settings(
        APP_ENV="test",
        logging=LoggingSettings(level="WARNING", format="text"),
        catalog=CatalogSettings(
            base_url=CATALOG_BASE_URL,
            timeout_seconds=2,
            max_retries=3,
            backoff_base=0.0,
            cache_ttl_seconds=3600,
            rate_limit=CatalogRateLimitSettings(
                max_attempts=rate_limit_max, window_seconds=60
            ),
        ),
    )


@pytest.fixture
async def running_app(integration_settings: Settings) -> AsyncGenerator[FastAPI]:
    """Create the application and run its startup and shutdown."""
    app = create_app(integration_settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def client(running_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP client bound to the running application."""
    async with AsyncClient(
        transport=ASGITransport(app=running_app),
        base_url="http://test",
    ) as ac:
        yield ac
