"""Configuration module with YAML and environment variable support."""

from .settings import (
    CatalogRateLimitSettings,
    CatalogSettings,
    Settings,
    get_settings,
)


__all__ = [
    "CatalogRateLimitSettings",
    "CatalogSettings",
    "Settings",
    "get_settings",
]
