"""Application exceptions and FastAPI exception handlers.

Every error leaving the API uses the same ``ErrorResponse`` body. Catalog
failures map to 429 (budget exhausted) and 503 (upstream unavailable); a
confirmed-absent product is an ordinary 404, never an error from upstream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_service.clients.catalog.exceptions import (
    RateLimitExceededError,
    UpstreamUnavailableError,
)
from catalog_service.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception carrying its HTTP mapping."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str, identifier: Any) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="NOT_FOUND",
            message=f"{resource} with identifier '{identifier}' not found",
        )


class UnauthorizedException(AppException):
    """Missing caller identity."""

    def __init__(self, message: str = "Could not identify caller") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="UNAUTHORIZED",
            message=message,
        )


class ForbiddenException(AppException):
    """Forbidden access exception."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error="FORBIDDEN",
            message=message,
        )


class ConflictException(AppException):
    """Resource conflict exception."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error="CONFLICT",
            message=message,
        )


class ProductNotAvailableException(AppException):
    """A favorite was refused because the product could not be confirmed."""

    def __init__(self, product_id: int) -> None:
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error="PRODUCT_NOT_FOUND",
            message="Product not found in catalog",
            details=[
                ErrorDetail(
                    code="PRODUCT_NOT_FOUND",
                    message=f"Product {product_id} does not exist or could not be confirmed",
                    field="product_id",
                )
            ],
        )


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            message=message,
            details=details,
            request_id=_get_request_id(request),
        ).model_dump(),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        return _error(
            request, exc.status_code, exc.error, exc.message, exc.details, exc.headers
        )

    @app.exception_handler(RateLimitExceededError)
    async def catalog_rate_limit_handler(
        request: Request,
        exc: RateLimitExceededError,
    ) -> ORJSONResponse:
        logger.warning(
            "Catalog budget exhausted",
            path=request.url.path,
            retry_after=exc.retry_after,
        )
        return _error(
            request,
            status.HTTP_429_TOO_MANY_REQUESTS,
            "RATE_LIMIT_EXCEEDED",
            str(exc),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(UpstreamUnavailableError)
    async def catalog_unavailable_handler(
        request: Request,
        exc: UpstreamUnavailableError,
    ) -> ORJSONResponse:
        logger.error(
            "Catalog unavailable",
            path=request.url.path,
            attempts=exc.attempts,
            detail=exc.detail,
        )
        return _error(
            request,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "SERVICE_UNAVAILABLE",
            "Product service temporarily unavailable",
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        return _error(request, exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _error(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            details,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)
        return _error(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
        )
