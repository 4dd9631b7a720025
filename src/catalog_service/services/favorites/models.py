"""Favorite record models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class FavoriteRecord:
    """A user's reference to a catalog product."""

    user_id: str
    product_id: int
    created_at: datetime = field(default_factory=_utcnow, compare=False)

    @property
    def key(self) -> tuple[str, int]:
        return (self.user_id, self.product_id)


@dataclass(frozen=True, slots=True)
class EnrichedFavorite:
    """A favorite record paired with the catalog snapshot it points to."""

    record: FavoriteRecord
    product: dict[str, Any]

    @property
    def user_id(self) -> str:
        return self.record.user_id

    @property
    def product_id(self) -> int:
        return self.record.product_id
