"""Unit tests for application exceptions and handlers.

Tests cover:
- Exception attributes
- Uniform error response bodies
- Catalog failure mapping to 429 and 503
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from catalog_service.clients.catalog.exceptions import (
    RateLimitExceededError,
    UpstreamUnavailableError,
)
from catalog_service.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ProductNotAvailableException,
    UnauthorizedException,
    setup_exception_handlers,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


pytestmark = pytest.mark.unit


class _Body(BaseModel):
    quantity: int


def _create_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    async def not_found() -> None:
        raise NotFoundException("Product", 42)

    @app.get("/unavailable-product")
    async def unavailable_product() -> None:
        raise ProductNotAvailableException(42)

    @app.get("/rate-limited")
    async def rate_limited() -> None:
        raise RateLimitExceededError(17)

    @app.get("/upstream-down")
    async def upstream_down() -> None:
        raise UpstreamUnavailableError(3, "HTTP 502")

    @app.post("/validate")
    async def validate(body: _Body) -> dict[str, int]:
        return {"quantity": body.quantity}

    @app.get("/boom")
    async def boom() -> None:
        msg = "connection string postgres://internal-secret-detail"
        raise RuntimeError(msg)

    return app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create a client for the handler test app."""
    transport = ASGITransport(app=_create_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestAppExceptions:
    """Tests for exception classes."""

    def test_not_found(self) -> None:
        """Should format resource and identifier."""
        exc = NotFoundException("Favorite", 3)
        assert exc.status_code == 404
        assert exc.message == "Favorite with identifier '3' not found"

    def test_defaults(self) -> None:
        """Should provide default messages."""
        assert UnauthorizedException().status_code == 401
        assert ForbiddenException().message == "Insufficient permissions"
        assert ConflictException("dup").status_code == 409

    def test_product_not_available_detail(self) -> None:
        """Should point at the product_id field."""
        exc = ProductNotAvailableException(9)
        assert exc.status_code == 422
        assert exc.error == "PRODUCT_NOT_FOUND"
        assert exc.details is not None
        assert exc.details[0].field == "product_id"


class TestExceptionHandlers:
    """Tests for registered handlers."""

    async def test_app_exception(self, client: AsyncClient) -> None:
        """Should render AppException as ErrorResponse."""
        response = await client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {
            "error": "NOT_FOUND",
            "message": "Product with identifier '42' not found",
            "details": None,
            "request_id": None,
        }

    async def test_product_not_available(self, client: AsyncClient) -> None:
        """Should return 422 with a field detail."""
        response = await client.get("/unavailable-product")

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "PRODUCT_NOT_FOUND"
        assert body["details"][0]["field"] == "product_id"

    async def test_rate_limit(self, client: AsyncClient) -> None:
        """Should return 429 with Retry-After."""
        response = await client.get("/rate-limited")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "17"
        assert response.json()["error"] == "RATE_LIMIT_EXCEEDED"

    async def test_upstream_unavailable(self, client: AsyncClient) -> None:
        """Should return 503 without leaking upstream detail."""
        response = await client.get("/upstream-down")

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "SERVICE_UNAVAILABLE"
        assert body["message"] == "Product service temporarily unavailable"
        assert "HTTP 502" not in response.text

    async def test_validation_error(self, client: AsyncClient) -> None:
        """Should list invalid fields."""
        response = await client.post("/validate", json={"quantity": "many"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.quantity"

    async def test_http_exception(self, client: AsyncClient) -> None:
        """Should wrap framework HTTP errors."""
        response = await client.get("/missing-route")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_ERROR"

    async def test_unhandled_exception(self, client: AsyncClient) -> None:
        """Should hide internals behind a 500."""
        response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_SERVER_ERROR"
        assert "internal-secret-detail" not in response.text
