"""Outcomes of a single logical catalog request.

A fetch ends in exactly one of three ways:

- ``Found``: the upstream answered with a body.
- ``NotFound``: the upstream definitively said the resource does not exist.
- ``Failure``: no definitive answer (budget exhausted, or every attempt failed).

Keeping "absent" and "failed" as separate types means a caller cannot mistake
one for the other, and lets the cache store the first two and skip the third.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from catalog_service.clients.catalog.exceptions import (
    CatalogError,
    RateLimitExceededError,
    UpstreamUnavailableError,
)


class FailureKind(StrEnum):
    """Why a fetch produced no definitive answer."""

    RATE_LIMITED = "rate_limited"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


@dataclass(frozen=True, slots=True)
class Found:
    """Upstream returned a decoded JSON body."""

    body: Any


@dataclass(frozen=True, slots=True)
class NotFound:
    """Upstream reported the resource as absent."""


@dataclass(frozen=True, slots=True)
class Failure:
    """No definitive answer was obtained."""

    kind: FailureKind
    detail: str
    attempts: int = 0
    retry_after: int | None = None

    def to_exception(self) -> CatalogError:
        """Build the exception surfaced to callers of the catalog client."""
        if self.kind is FailureKind.RATE_LIMITED:
            return RateLimitExceededError(self.retry_after or 0, self.detail)
        return UpstreamUnavailableError(self.attempts, self.detail)


FetchResult = Found | NotFound | Failure


def is_cacheable(result: FetchResult) -> bool:
    """Only definitive answers may be cached."""
    return not isinstance(result, Failure)
