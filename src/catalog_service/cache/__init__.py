"""In-process caching layer.

This module provides:
- The fixed-window rate limiter guarding upstream calls
- The read-through cache for catalog fetch results
"""

from catalog_service.cache.rate_limit import RateLimiter, RateWindow
from catalog_service.cache.read_through import CacheEntry, ReadThroughCache


__all__ = [
    "CacheEntry",
    "RateLimiter",
    "RateWindow",
    "ReadThroughCache",
]
