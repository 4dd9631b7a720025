"""Admin endpoints for catalog client operations.

Provides:
- GET /admin/catalog/stats for the client configuration and remaining budget
- DELETE /admin/catalog/cache for dropping cached catalog data
- DELETE /admin/catalog/rate-limit for resetting the upstream budget window
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from catalog_service.api.dependencies import get_catalog_client
from catalog_service.auth.dependencies import CurrentUser, require_admin
from catalog_service.clients.catalog.client import CatalogClient
from catalog_service.core.exceptions import ErrorResponse
from catalog_service.observability.logging import get_logger
from catalog_service.schemas.catalog import CacheClearedResponse, CatalogStatsResponse


logger = get_logger(__name__)

router = APIRouter(prefix="/admin/catalog", tags=["Admin"])

AdminDep = Annotated[CurrentUser, Depends(require_admin)]
CatalogDep = Annotated[CatalogClient, Depends(get_catalog_client)]

_ADMIN_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"model": ErrorResponse, "description": "Caller not identified"},
    403: {"model": ErrorResponse, "description": "Admin role required"},
}


@router.get(
    "/stats",
    response_model=CatalogStatsResponse,
    summary="Catalog client statistics",
    responses=_ADMIN_RESPONSES,
)
async def catalog_stats(user: AdminDep, catalog: CatalogDep) -> CatalogStatsResponse:
    """Report configuration and the remaining upstream budget.

    Reading stats never calls the upstream and never consumes budget.
    """
    return CatalogStatsResponse(**catalog.stats().as_dict())


@router.delete(
    "/cache",
    response_model=CacheClearedResponse,
    summary="Clear cached catalog data",
    description=(
        "Drops every cached catalog entry, or only one product's entry when "
        "product_id is given. The next reads go to the upstream catalog."
    ),
    responses=_ADMIN_RESPONSES,
)
async def clear_catalog_cache(
    user: AdminDep,
    catalog: CatalogDep,
    product_id: Annotated[int | None, Query(gt=0)] = None,
) -> CacheClearedResponse:
    logger.info("Catalog cache clear requested", user_id=user.id, product_id=product_id)
    removed = catalog.clear_cache(product_id)
    logger.info("Catalog cache cleared", user_id=user.id, removed=removed)
    return CacheClearedResponse(removed=removed)


@router.delete(
    "/rate-limit",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset the upstream budget window",
    responses=_ADMIN_RESPONSES,
)
async def reset_catalog_rate_limit(user: AdminDep, catalog: CatalogDep) -> None:
    logger.warning("Catalog rate limit reset requested", user_id=user.id)
    catalog.reset_rate_limit()
