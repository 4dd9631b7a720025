"""Catalog product endpoints.

Thin transport over ``CatalogClient``: budget exhaustion and upstream
outages propagate as catalog exceptions and are mapped to 429 / 503 by the
application exception handlers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from catalog_service.api.dependencies import get_catalog_client
from catalog_service.clients.catalog.client import CatalogClient
from catalog_service.core.exceptions import ErrorResponse, NotFoundException
from catalog_service.schemas.catalog import CatalogItemResponse


router = APIRouter(prefix="/products", tags=["Products"])

_UPSTREAM_ERRORS: dict[int | str, dict[str, object]] = {
    429: {"model": ErrorResponse, "description": "Upstream call budget exhausted"},
    503: {"model": ErrorResponse, "description": "Catalog temporarily unavailable"},
}


@router.get(
    "",
    response_model=list[CatalogItemResponse],
    summary="List catalog products",
    responses=_UPSTREAM_ERRORS,
)
async def list_products(
    catalog: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> list[CatalogItemResponse]:
    items = await catalog.list_all()
    return [CatalogItemResponse.model_validate(item) for item in items]


@router.get(
    "/{product_id}",
    response_model=CatalogItemResponse,
    summary="Get a catalog product",
    responses={
        404: {"model": ErrorResponse, "description": "Product not in catalog"},
        **_UPSTREAM_ERRORS,
    },
)
async def get_product(
    product_id: Annotated[int, Path(gt=0)],
    catalog: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> CatalogItemResponse:
    """Return one product.

    Raises:
        NotFoundException: If the upstream confirms the product is absent.
    """
    item = await catalog.get_by_id(product_id)
    if item is None:
        raise NotFoundException("Product", product_id)
    return CatalogItemResponse.model_validate(item)
