"""Custom middleware components."""

from catalog_service.core.middleware.logging import LoggingMiddleware
from catalog_service.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
