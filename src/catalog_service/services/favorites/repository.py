"""Persistence port for favorite records.

The real store is an external collaborator; the service only needs key
lookups, inserts and deletes by ``(user_id, product_id)``. The in-memory
implementation backs local runs and tests.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

from catalog_service.observability.logging import get_logger
from catalog_service.services.favorites.models import FavoriteRecord


logger = get_logger(__name__)


@runtime_checkable
class FavoriteRepository(Protocol):
    """Storage operations the favorites flow relies on."""

    async def list_for_user(self, user_id: str) -> list[FavoriteRecord]:
        """All favorites for a user, oldest first."""
        ...

    async def get(self, user_id: str, product_id: int) -> FavoriteRecord | None:
        """One favorite, or None."""
        ...

    async def add(self, user_id: str, product_id: int) -> FavoriteRecord | None:
        """Insert a favorite. Returns None if it already exists."""
        ...

    async def delete(self, user_id: str, product_id: int) -> bool:
        """Remove a favorite. Returns True if a row was deleted."""
        ...

    async def count_for_user(self, user_id: str) -> int:
        """Number of favorites held by a user."""
        ...


class InMemoryFavoriteRepository:
    """Process-local favorite store keyed by ``(user_id, product_id)``."""

    def __init__(self, records: list[FavoriteRecord] | None = None) -> None:
        self._records: dict[tuple[str, int], FavoriteRecord] = {
            record.key: record for record in records or []
        }
        self._lock = asyncio.Lock()

    async def list_for_user(self, user_id: str) -> list[FavoriteRecord]:
        async with self._lock:
            records = [r for r in self._records.values() if r.user_id == user_id]
        return sorted(records, key=lambda r: r.created_at)

    async def get(self, user_id: str, product_id: int) -> FavoriteRecord | None:
        async with self._lock:
            return self._records.get((user_id, product_id))

    async def add(self, user_id: str, product_id: int) -> FavoriteRecord | None:
        async with self._lock:
            if (user_id, product_id) in self._records:
                return None
            record = FavoriteRecord(user_id=user_id, product_id=product_id)
            self._records[record.key] = record
        logger.info("Favorite added", user_id=user_id, product_id=product_id)
        return record

    async def delete(self, user_id: str, product_id: int) -> bool:
        async with self._lock:
            removed = self._records.pop((user_id, product_id), None) is not None
        if removed:
            logger.info("Favorite removed", user_id=user_id, product_id=product_id)
        return removed

    async def count_for_user(self, user_id: str) -> int:
        async with self._lock:
            return sum(1 for r in self._records.values() if r.user_id == user_id)
