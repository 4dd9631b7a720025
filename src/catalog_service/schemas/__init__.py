"""Pydantic request and response schemas."""

from catalog_service.schemas.catalog import (
    AddFavoriteRequest,
    CacheClearedResponse,
    CatalogItemResponse,
    CatalogRating,
    CatalogStatsResponse,
    FavoriteCheckResponse,
    FavoriteCountResponse,
    FavoriteResponse,
)


__all__ = [
    "AddFavoriteRequest",
    "CacheClearedResponse",
    "CatalogItemResponse",
    "CatalogRating",
    "CatalogStatsResponse",
    "FavoriteCheckResponse",
    "FavoriteCountResponse",
    "FavoriteResponse",
]
