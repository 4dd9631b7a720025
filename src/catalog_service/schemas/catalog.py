"""Response schemas for catalog and favorite endpoints.

Catalog items are validated leniently: upstream fields beyond the known ones
are passed through, and every known field except ``id`` is optional.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CatalogRating(BaseModel):
    """Aggregate customer rating."""

    model_config = ConfigDict(extra="allow")

    rate: float | None = Field(default=None, ge=0, le=5)
    count: int | None = Field(default=None, ge=0)


class CatalogItemResponse(BaseModel):
    """Snapshot of an upstream product."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: str | None = None
    price: float | None = None
    category: str | None = None
    description: str | None = None
    image: str | None = None
    rating: CatalogRating | None = None


class FavoriteResponse(BaseModel):
    """A favorite with its catalog snapshot."""

    user_id: str
    product_id: int
    created_at: datetime
    product: CatalogItemResponse | None = None


class AddFavoriteRequest(BaseModel):
    """Body of a favorite creation request."""

    product_id: int = Field(gt=0)


class CatalogStatsResponse(BaseModel):
    """Catalog client configuration and remaining budget."""

    base_url: str
    rate_limit_remaining: int
    rate_limit_max: int
    cache_ttl_seconds: int
    timeout_seconds: float
    max_retries: int


class CacheClearedResponse(BaseModel):
    """Result of a cache invalidation."""

    removed: int


class FavoriteCheckResponse(BaseModel):
    """Whether a product is among a user's favorites."""

    product_id: int
    is_favorite: bool


class FavoriteCountResponse(BaseModel):
    """Number of favorites a user holds."""

    user_id: str
    count: int
