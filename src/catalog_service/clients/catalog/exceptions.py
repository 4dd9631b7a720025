"""Catalog client exceptions.

Raised only at the ``CatalogClient`` boundary. Below it, the HTTP client and
the cache pass failures around as ``Failure`` results. The API layer turns
these into 429 and 503 responses.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for upstream catalog failures."""


class RateLimitExceededError(CatalogError):
    """Raised when the local upstream call budget is exhausted.

    Recoverable by waiting ``retry_after`` seconds.
    """

    def __init__(self, retry_after: int, message: str | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(
            message or f"Catalog rate limit exceeded, retry in {retry_after} seconds"
        )


class UpstreamUnavailableError(CatalogError):
    """Raised when every attempt failed without a definitive answer."""

    def __init__(self, attempts: int, detail: str | None = None) -> None:
        self.attempts = attempts
        self.detail = detail
        message = f"Catalog unavailable after {attempts} attempt(s)"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
