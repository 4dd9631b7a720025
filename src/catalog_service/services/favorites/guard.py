"""Keeps favorite records consistent with the upstream catalog.

Two outcomes of a catalog lookup are never conflated here:

- confirmed absent (``get_by_id`` returns None): the favorite is stale, so it
  is deleted from the store and left out of the result;
- could not confirm (``CatalogError``): the favorite stays in the store and is
  only left out of this one result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_service.clients.catalog.exceptions import CatalogError
from catalog_service.observability.logging import get_logger
from catalog_service.services.favorites.models import EnrichedFavorite


if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalog_service.clients.catalog.client import CatalogClient
    from catalog_service.services.favorites.models import FavoriteRecord
    from catalog_service.services.favorites.repository import FavoriteRepository


logger = get_logger(__name__)


class FavoriteConsistencyGuard:
    """Validates and prunes favorite records against the catalog."""

    def __init__(
        self,
        catalog: CatalogClient,
        repository: FavoriteRepository,
    ) -> None:
        self.catalog = catalog
        self.repository = repository

    async def filter_and_enrich(
        self,
        records: Iterable[FavoriteRecord],
    ) -> list[EnrichedFavorite]:
        """Attach catalog snapshots to favorites, pruning stale ones.

        Args:
            records: The caller's favorite records.

        Returns:
            Records whose product was found upstream, in input order.
        """
        enriched: list[EnrichedFavorite] = []
        skipped = 0
        pruned = 0

        for record in records:
            try:
                product = await self.catalog.get_by_id(record.product_id)
            except CatalogError as e:
                skipped += 1
                logger.warning(
                    "Favorite product could not be confirmed, keeping record",
                    user_id=record.user_id,
                    product_id=record.product_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            if product is None:
                pruned += 1
                logger.warning(
                    "Favorite product no longer in catalog, removing favorite",
                    user_id=record.user_id,
                    product_id=record.product_id,
                )
                await self.repository.delete(record.user_id, record.product_id)
                continue

            enriched.append(EnrichedFavorite(record=record, product=product))

        logger.info(
            "Favorites enriched",
            returned=len(enriched),
            pruned=pruned,
            skipped=skipped,
        )
        return enriched

    async def validate_before_add(self, product_id: int) -> bool:
        """Whether a new favorite may reference ``product_id``.

        False covers both "confirmed absent" and "could not confirm".
        """
        allowed = await self.catalog.exists(product_id)
        if not allowed:
            logger.info("Favorite rejected, product not confirmed", product_id=product_id)
        return allowed
