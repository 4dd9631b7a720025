"""HTTP client for the upstream product catalog.

Performs one logical GET with a bounded number of attempts, exponential
backoff between them, and a shared rate-limit budget. Every outcome is
returned as a ``FetchResult``; nothing here raises for upstream trouble.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import orjson

from catalog_service.clients.catalog.results import (
    Failure,
    FailureKind,
    FetchResult,
    Found,
    NotFound,
)
from catalog_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from catalog_service.cache.rate_limit import RateLimiter


logger = get_logger(__name__)


class RetryingHttpClient:
    """Async HTTP client with retries, backoff and a shared attempt budget.

    Each attempt consumes one unit of the budget whatever its outcome. The
    budget is only checked before the first attempt, so a call that starts
    just under the ceiling may overshoot it by up to ``max_retries - 1``.

    Example:
        ```python
        client = RetryingHttpClient("https://fakestoreapi.com", RateLimiter())
        await client.initialize()
        result = await client.fetch("/products/1")
        await client.shutdown()
        ```
    """

    def __init__(
        self,
        base_url: str,
        rate_limiter: RateLimiter,
        *,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_base: float = 2.0,
        rate_limit_key: str = "catalog_api_requests",
        rate_limit_max: int = 100,
        rate_limit_window: int = 60,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Catalog API root, without trailing slash.
            rate_limiter: Limiter holding the shared attempt budget.
            timeout: Per-attempt timeout in seconds.
            max_retries: Total attempts per fetch (not retries after the first).
            backoff_base: Delay after the n-th failed attempt is ``backoff_base ** n``.
            rate_limit_key: Budget key shared by all catalog calls.
            rate_limit_max: Attempts allowed per window.
            rate_limit_window: Window length in seconds.
            http_client: Optional pre-built client; not closed on shutdown.
            sleep: Awaitable delay used between attempts.
        """
        self.base_url = base_url.rstrip("/")
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.rate_limit_key = rate_limit_key
        self.rate_limit_max = rate_limit_max
        self.rate_limit_window = rate_limit_window
        self._http = http_client
        self._owns_http_client = http_client is None
        self._sleep = sleep

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"Accept": "application/json"},
        )
        logger.info(
            "Catalog HTTP client initialized",
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.debug("Catalog HTTP client shutdown")

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after the ``attempt``-th failure (1-based)."""
        return self.backoff_base**attempt

    async def fetch(
        self,
        endpoint: str,
        *,
        expect: type[dict[str, Any]] | type[list[Any]] | None = None,
    ) -> FetchResult:
        """GET ``endpoint`` from the catalog.

        Args:
            endpoint: Path below ``base_url``, e.g. ``/products/1``.
            expect: JSON container type a non-empty body must decode to.
                Any other shape counts as a failed attempt.

        Returns:
            ``Found`` with the decoded body, ``NotFound`` on a definitive
            absence, or ``Failure`` when the budget is exhausted or every
            attempt failed.
        """
        if self.rate_limiter.too_many_attempts(
            self.rate_limit_key, self.rate_limit_max
        ):
            retry_after = self.rate_limiter.available_in(self.rate_limit_key)
            logger.warning(
                "Catalog rate limit exceeded",
                endpoint=endpoint,
                retry_after=retry_after,
            )
            return Failure(
                kind=FailureKind.RATE_LIMITED,
                detail=f"Rate limit exceeded, try again in {retry_after} seconds",
                retry_after=retry_after,
            )

        if self._http is None:
            await self.initialize()
        assert self._http is not None

        url = f"{self.base_url}{endpoint}"
        last_error = "no attempt made"

        for attempt in range(1, self.max_retries + 1):
            self.rate_limiter.hit(self.rate_limit_key, self.rate_limit_window)

            try:
                response = await self._http.get(url, timeout=self.timeout)
                result = self._classify(response, expect)
            except (httpx.HTTPError, orjson.JSONDecodeError) as e:
                last_error = f"{type(e).__name__}: {e}"
            else:
                if isinstance(result, Found | NotFound):
                    logger.info(
                        "Catalog request succeeded",
                        endpoint=endpoint,
                        attempt=attempt,
                        found=isinstance(result, Found),
                    )
                    return result
                last_error = result

            logger.warning(
                "Catalog request attempt failed",
                endpoint=endpoint,
                attempt=attempt,
                max_retries=self.max_retries,
                error=last_error,
            )
            if attempt < self.max_retries:
                await self._sleep(self.backoff_delay(attempt))

        logger.error(
            "All catalog request attempts failed",
            endpoint=endpoint,
            attempts=self.max_retries,
            error=last_error,
        )
        return Failure(
            kind=FailureKind.UPSTREAM_UNAVAILABLE,
            detail=last_error,
            attempts=self.max_retries,
        )

    @staticmethod
    def _classify(
        response: httpx.Response,
        expect: type[dict[str, Any]] | type[list[Any]] | None = None,
    ) -> Found | NotFound | str:
        """Map a response to a definitive result, or an error description.

        Raises:
            orjson.JSONDecodeError: If a 2xx body is not valid JSON.
        """
        if response.status_code == 404:
            return NotFound()
        if not response.is_success:
            return f"HTTP {response.status_code}"
        # Unknown ids come back as 200 with an empty body, null, {} or []
        if not response.content.strip():
            return NotFound()
        body = orjson.loads(response.content)
        if body is None or body == {} or body == []:
            return NotFound()
        if expect is not None and not isinstance(body, expect):
            return f"Unexpected body type {type(body).__name__}"
        return Found(body)
