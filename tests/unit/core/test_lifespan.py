"""Unit tests for lifespan events.

Tests cover:
- Component assembly from settings
- Startup wiring on app.state
- Shutdown releasing the HTTP client
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from catalog_service.clients.catalog.client import CatalogClient
from catalog_service.core.events.lifespan import build_catalog_client, lifespan
from catalog_service.services.favorites.guard import FavoriteConsistencyGuard
from catalog_service.services.favorites.repository import InMemoryFavoriteRepository


if TYPE_CHECKING:
    from catalog_service.core.config import CatalogSettings, Settings
    from tests.fixtures.clock import FakeClock


pytestmark = pytest.mark.unit


class TestBuildCatalogClient:
    """Tests for build_catalog_client."""

    def test_applies_settings(self, catalog_settings: CatalogSettings) -> None:
        """Should carry every catalog option into the components."""
        catalog = build_catalog_client(catalog_settings)

        assert catalog.cache_ttl_seconds == catalog_settings.cache_ttl_seconds
        assert catalog.cache.max_entries == catalog_settings.cache_max_entries
        assert catalog.http.base_url == catalog_settings.base_url
        assert catalog.http.timeout == catalog_settings.timeout_seconds
        assert catalog.http.max_retries == catalog_settings.max_retries
        assert catalog.http.rate_limit_key == "catalog_api_requests"
        assert catalog.http.rate_limit_max == 100
        assert catalog.http.rate_limit_window == 60

    def test_shares_clock(
        self, catalog_settings: CatalogSettings, clock: FakeClock
    ) -> None:
        """Should drive limiter and cache from the same clock."""
        catalog = build_catalog_client(catalog_settings, clock=clock)

        assert catalog.http.rate_limiter.clock is clock
        assert catalog.cache._clock is clock


class TestLifespan:
    """Tests for the lifespan context manager."""

    async def test_wires_components(self, test_settings: Settings) -> None:
        """Should expose one catalog client, repository and guard on app.state."""
        app = FastAPI()
        app.state.settings = test_settings

        with patch("catalog_service.core.events.lifespan.setup_logging") as setup:
            async with lifespan(app):
                catalog = app.state.catalog_client
                assert isinstance(catalog, CatalogClient)
                assert isinstance(app.state.favorite_repository, InMemoryFavoriteRepository)
                guard = app.state.favorite_guard
                assert isinstance(guard, FavoriteConsistencyGuard)
                assert guard.catalog is catalog
                assert guard.repository is app.state.favorite_repository
                assert catalog.http._http is not None

        setup.assert_called_once_with(
            log_level="WARNING",
            log_format="text",
            is_development=False,
        )
        assert catalog.http._http is None

    async def test_shutdown_on_error(self, test_settings: Settings) -> None:
        """Should release the HTTP client even if the app body fails."""
        app = FastAPI()
        app.state.settings = test_settings

        with (
            patch("catalog_service.core.events.lifespan.setup_logging"),
            patch(
                "catalog_service.clients.catalog.http.RetryingHttpClient.shutdown",
                new_callable=AsyncMock,
            ) as shutdown,
            pytest.raises(RuntimeError),
        ):
            async with lifespan(app):
                msg = "app crashed"
                raise RuntimeError(msg)

        shutdown.assert_awaited_once()
