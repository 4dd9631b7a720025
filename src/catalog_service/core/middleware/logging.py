"""Request logging middleware."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from catalog_service.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp


logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured request/response logging with elapsed time."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path.endswith(tuple(self.exclude_paths)):
            return await call_next(request)

        bind_context(method=request.method, path=request.url.path)
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(elapsed_ms, 2),
        )
        return response
