"""Public facade over the upstream product catalog.

Combines the retrying HTTP client, the shared rate-limit budget and the
read-through cache behind four operations: ``list_all``, ``get_by_id``,
``exists`` and ``stats``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from catalog_service.clients.catalog.exceptions import CatalogError
from catalog_service.clients.catalog.results import Failure, Found, NotFound
from catalog_service.observability.logging import get_logger


if TYPE_CHECKING:
    from catalog_service.cache.read_through import ReadThroughCache
    from catalog_service.clients.catalog.http import RetryingHttpClient
    from catalog_service.clients.catalog.results import FetchResult


logger = get_logger(__name__)

CatalogItem = dict[str, Any]

ALL_ITEMS_KEY = "catalog:all"
PRODUCTS_ENDPOINT = "/products"


def item_key(product_id: int) -> str:
    """Cache key for a single catalog item."""
    return f"catalog:item:{product_id}"


@dataclass(frozen=True, slots=True)
class CatalogStats:
    """Point-in-time view of the client's configuration and budget."""

    base_url: str
    rate_limit_remaining: int
    rate_limit_max: int
    cache_ttl_seconds: int
    timeout_seconds: float
    max_retries: int

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class CatalogClient:
    """Cached, rate-limited, retrying access to the product catalog.

    ``list_all`` and ``get_by_id`` raise ``RateLimitExceededError`` or
    ``UpstreamUnavailableError`` when no definitive answer is available.
    ``exists`` never raises for those and answers False instead.

    Example:
        ```python
        limiter = RateLimiter()
        http = RetryingHttpClient(settings.base_url, limiter)
        catalog = CatalogClient(http, ReadThroughCache(), cache_ttl_seconds=3600)

        product = await catalog.get_by_id(1)
        ```
    """

    def __init__(
        self,
        http: RetryingHttpClient,
        cache: ReadThroughCache,
        *,
        cache_ttl_seconds: int = 3600,
    ) -> None:
        self.http = http
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    async def _load(
        self, key: str, endpoint: str, expect: type[dict[str, Any]] | type[list[Any]]
    ) -> FetchResult:
        return await self.cache.get_or_fetch(
            key,
            self.cache_ttl_seconds,
            lambda: self.http.fetch(endpoint, expect=expect),
        )

    async def list_all(self) -> list[CatalogItem]:
        """Return every catalog item.

        Raises:
            RateLimitExceededError: If the upstream budget is exhausted.
            UpstreamUnavailableError: If every attempt failed.
        """
        result = await self._load(ALL_ITEMS_KEY, PRODUCTS_ENDPOINT, list)
        if isinstance(result, Failure):
            raise result.to_exception()
        if isinstance(result, NotFound):
            return []

        items: list[CatalogItem] = result.body
        logger.info("Catalog items listed", count=len(items))
        return items

    async def get_by_id(self, product_id: int) -> CatalogItem | None:
        """Return one catalog item, or None if the upstream says it is absent.

        Absence is cached like any other definitive answer.

        Raises:
            RateLimitExceededError: If the upstream budget is exhausted.
            UpstreamUnavailableError: If every attempt failed.
        """
        result = await self._load(
            item_key(product_id), f"{PRODUCTS_ENDPOINT}/{product_id}", dict
        )
        if isinstance(result, Failure):
            raise result.to_exception()
        if isinstance(result, NotFound):
            logger.info("Catalog item not found", product_id=product_id)
            return None

        assert isinstance(result, Found)
        item: CatalogItem = result.body
        logger.debug(
            "Catalog item resolved",
            product_id=product_id,
            title=item.get("title", "N/A"),
        )
        return item

    async def exists(self, product_id: int) -> bool:
        """Whether the item is confirmed to exist upstream.

        An upstream failure answers False: not being able to confirm
        existence is not existence.
        """
        try:
            return await self.get_by_id(product_id) is not None
        except CatalogError as e:
            logger.warning(
                "Could not confirm catalog item existence",
                product_id=product_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    def clear_cache(self, product_id: int | None = None) -> int:
        """Drop cached catalog data.

        Args:
            product_id: Only drop this item's entry. Drops everything if None.

        Returns:
            Number of entries removed.
        """
        if product_id is not None:
            return int(self.cache.invalidate(item_key(product_id)))
        return self.cache.invalidate_all()

    def reset_rate_limit(self) -> None:
        """Forget the current upstream budget window."""
        self.http.rate_limiter.clear(self.http.rate_limit_key)
        logger.info("Catalog rate limit reset", key=self.http.rate_limit_key)

    def stats(self) -> CatalogStats:
        """Current configuration and remaining upstream budget."""
        limiter = self.http.rate_limiter
        return CatalogStats(
            base_url=self.http.base_url,
            rate_limit_remaining=limiter.remaining(
                self.http.rate_limit_key, self.http.rate_limit_max
            ),
            rate_limit_max=self.http.rate_limit_max,
            cache_ttl_seconds=self.cache_ttl_seconds,
            timeout_seconds=self.http.timeout,
            max_retries=self.http.max_retries,
        )
