"""Catalog Gateway Service.

Resilient, cached, rate-limited access to an upstream product catalog, plus
the favorite-product consistency checks that depend on it.
"""

__version__ = "0.1.0"
