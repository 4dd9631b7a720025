"""Favorite products: records, storage port and catalog consistency."""

from catalog_service.services.favorites.guard import FavoriteConsistencyGuard
from catalog_service.services.favorites.models import EnrichedFavorite, FavoriteRecord
from catalog_service.services.favorites.repository import (
    FavoriteRepository,
    InMemoryFavoriteRepository,
)


__all__ = [
    "EnrichedFavorite",
    "FavoriteConsistencyGuard",
    "FavoriteRecord",
    "FavoriteRepository",
    "InMemoryFavoriteRepository",
]
