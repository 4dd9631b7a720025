"""Shared test fixtures and configuration for the catalog gateway tests.

Provides a controllable clock, sample upstream payloads, test settings and
fully wired catalog components that talk to a respx-mocked upstream.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest
import respx

from catalog_service.core.config import CatalogSettings, Settings
from catalog_service.core.config.settings import (
    CatalogRateLimitSettings,
    LoggingSettings,
)
from catalog_service.core.events.lifespan import build_catalog_client
from tests.fixtures.catalog import CATALOG_BASE_URL
from tests.fixtures.clock import FakeClock


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator

    from catalog_service.clients.catalog.client import CatalogClient


# Ensure YAML overlays resolve to the test environment
os.environ.setdefault("APP_ENV", "test")


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable monotonic clock."""
    return FakeClock()


@pytest.fixture
def sleep() -> AsyncMock:
    """Backoff sleep that returns immediately and records its delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def sample_product() -> dict[str, Any]:
    """A single upstream product payload."""
    return {
        "id": 1,
        "title": "Fjallraven - Foldsack No. 1 Backpack, Fits 15 Laptops",
        "price": 109.95,
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "category": "men's clothing",
        "image": "https://catalog.test/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "rating": {"rate": 3.9, "count": 120},
    }


@pytest.fixture
def sample_products(sample_product: dict[str, Any]) -> list[dict[str, Any]]:
    """The upstream product listing."""
    return [
        sample_product,
        {
            "id": 2,
            "title": "Mens Casual Premium Slim Fit T-Shirts",
            "price": 22.3,
            "description": "Slim-fitting style, contrast raglan long sleeve.",
            "category": "men's clothing",
            "image": "https://catalog.test/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
            "rating": {"rate": 4.1, "count": 259},
        },
    ]


@pytest.fixture
def catalog_settings() -> CatalogSettings:
    """Catalog settings pointing at the mocked upstream."""
    return CatalogSettings(
        base_url=CATALOG_BASE_URL,
        timeout_seconds=2,
        max_retries=3,
        backoff_base=2.0,
        cache_ttl_seconds=3600,
        cache_max_entries=100,
        rate_limit=CatalogRateLimitSettings(max_attempts=100, window_seconds=60),
    )


@pytest.fixture
def test_settings(catalog_settings: CatalogSettings) -> Settings:
    """Application settings for tests."""
    return Settings(
        APP_ENV="test",
        logging=LoggingSettings(level="WARNING", format="text"),
        catalog=catalog_settings,
    )


@pytest.fixture
async def catalog_client(
    catalog_settings: CatalogSettings,
    clock: FakeClock,
    sleep: AsyncMock,
) -> AsyncGenerator[CatalogClient]:
    """Catalog client wired to the fake clock and an instant sleep."""
    client = build_catalog_client(catalog_settings, sleep=sleep, clock=clock)
    yield client
    await client.http.shutdown()


@pytest.fixture
def upstream() -> Iterator[respx.MockRouter]:
    """Mock the upstream catalog; unmatched requests fail the test."""
    with respx.mock(base_url=CATALOG_BASE_URL, assert_all_called=False) as router:
        yield router
