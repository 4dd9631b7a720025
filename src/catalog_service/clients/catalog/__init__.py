"""Upstream product catalog client package."""

from catalog_service.clients.catalog.client import (
    ALL_ITEMS_KEY,
    CatalogClient,
    CatalogItem,
    CatalogStats,
    item_key,
)
from catalog_service.clients.catalog.exceptions import (
    CatalogError,
    RateLimitExceededError,
    UpstreamUnavailableError,
)
from catalog_service.clients.catalog.http import RetryingHttpClient
from catalog_service.clients.catalog.results import (
    Failure,
    FailureKind,
    FetchResult,
    Found,
    NotFound,
)


__all__ = [
    "ALL_ITEMS_KEY",
    "CatalogClient",
    "CatalogError",
    "CatalogItem",
    "CatalogStats",
    "Failure",
    "FailureKind",
    "FetchResult",
    "Found",
    "NotFound",
    "RateLimitExceededError",
    "RetryingHttpClient",
    "UpstreamUnavailableError",
    "item_key",
]
