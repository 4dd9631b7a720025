"""FastAPI dependencies for component access.

Components are built once during application startup and stored in
``app.state``; these dependencies hand them to route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from catalog_service.core.config import Settings, get_settings


if TYPE_CHECKING:
    from catalog_service.clients.catalog.client import CatalogClient
    from catalog_service.services.favorites.guard import FavoriteConsistencyGuard
    from catalog_service.services.favorites.repository import FavoriteRepository


async def get_catalog_client(request: Request) -> CatalogClient:
    """Get the catalog client from app state.

    Raises:
        HTTPException: 503 if the client is not initialized.
    """
    client: CatalogClient | None = getattr(request.app.state, "catalog_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog client not available",
        )
    return client


async def get_favorite_repository(request: Request) -> FavoriteRepository:
    """Get the favorite repository from app state.

    Raises:
        HTTPException: 503 if the repository is not initialized.
    """
    repository: FavoriteRepository | None = getattr(
        request.app.state, "favorite_repository", None
    )
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Favorite store not available",
        )
    return repository


async def get_favorite_guard(request: Request) -> FavoriteConsistencyGuard:
    """Get the favorite consistency guard from app state.

    Raises:
        HTTPException: 503 if the guard is not initialized.
    """
    guard: FavoriteConsistencyGuard | None = getattr(
        request.app.state, "favorite_guard", None
    )
    if guard is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Favorites service not available",
        )
    return guard


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()
