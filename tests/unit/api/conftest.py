"""API test fixtures.

The application is created without running its lifespan; the components it
would build are placed on ``app.state`` directly so the tests control the
clock, the backoff sleep and the favorite store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from catalog_service.factory import create_app
from catalog_service.services.favorites.guard import FavoriteConsistencyGuard
from catalog_service.services.favorites.repository import InMemoryFavoriteRepository


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from catalog_service.clients.catalog.client import CatalogClient
    from catalog_service.core.config import Settings


@pytest.fixture
def favorite_repository() -> InMemoryFavoriteRepository:
    """Create an empty favorite store."""
    return InMemoryFavoriteRepository()


@pytest.fixture
def app(
    test_settings: Settings,
    catalog_client: CatalogClient,
    favorite_repository: InMemoryFavoriteRepository,
) -> FastAPI:
    """Create the application with test components on app.state."""
    application = create_app(test_settings)
    application.state.catalog_client = catalog_client
    application.state.favorite_repository = favorite_repository
    application.state.favorite_guard = FavoriteConsistencyGuard(
        catalog_client, favorite_repository
    )
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP client bound to the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
