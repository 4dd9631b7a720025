"""Favorite product endpoints.

Callers manage their own favorites under ``/favorites``; the
``/users/{user_id}/favorites`` routes let an admin act for another user.
Listing prunes favorites whose product has left the catalog, and adding
requires the product to be confirmed upstream.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status

from catalog_service.api.dependencies import (
    get_favorite_guard,
    get_favorite_repository,
)
from catalog_service.auth.dependencies import (
    CurrentUser,
    ensure_can_act_for,
    get_current_user,
)
from catalog_service.core.exceptions import (
    ConflictException,
    ErrorResponse,
    NotFoundException,
    ProductNotAvailableException,
)
from catalog_service.observability.logging import get_logger
from catalog_service.schemas.catalog import (
    AddFavoriteRequest,
    CatalogItemResponse,
    FavoriteCheckResponse,
    FavoriteCountResponse,
    FavoriteResponse,
)
from catalog_service.services.favorites.guard import FavoriteConsistencyGuard
from catalog_service.services.favorites.repository import FavoriteRepository


logger = get_logger(__name__)

router = APIRouter(tags=["Favorites"])

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
GuardDep = Annotated[FavoriteConsistencyGuard, Depends(get_favorite_guard)]
RepositoryDep = Annotated[FavoriteRepository, Depends(get_favorite_repository)]
ProductIdPath = Annotated[int, Path(gt=0)]


async def _list_favorites(
    user_id: str,
    repository: FavoriteRepository,
    guard: FavoriteConsistencyGuard,
) -> list[FavoriteResponse]:
    records = await repository.list_for_user(user_id)
    enriched = await guard.filter_and_enrich(records)
    return [
        FavoriteResponse(
            user_id=favorite.user_id,
            product_id=favorite.product_id,
            created_at=favorite.record.created_at,
            product=CatalogItemResponse.model_validate(favorite.product),
        )
        for favorite in enriched
    ]


async def _add_favorite(
    user_id: str,
    product_id: int,
    repository: FavoriteRepository,
    guard: FavoriteConsistencyGuard,
) -> FavoriteResponse:
    if not await guard.validate_before_add(product_id):
        raise ProductNotAvailableException(product_id)

    record = await repository.add(user_id, product_id)
    if record is None:
        msg = f"Product {product_id} is already a favorite"
        raise ConflictException(msg)

    return FavoriteResponse(
        user_id=record.user_id,
        product_id=record.product_id,
        created_at=record.created_at,
    )


async def _remove_favorite(
    user_id: str,
    product_id: int,
    repository: FavoriteRepository,
) -> None:
    if not await repository.delete(user_id, product_id):
        raise NotFoundException("Favorite", product_id)


async def _check_favorite(
    user_id: str,
    product_id: int,
    repository: FavoriteRepository,
) -> FavoriteCheckResponse:
    record = await repository.get(user_id, product_id)
    return FavoriteCheckResponse(product_id=product_id, is_favorite=record is not None)


async def _count_favorites(
    user_id: str,
    repository: FavoriteRepository,
) -> FavoriteCountResponse:
    count = await repository.count_for_user(user_id)
    return FavoriteCountResponse(user_id=user_id, count=count)


_ADD_RESPONSES: dict[int | str, dict[str, object]] = {
    409: {"model": ErrorResponse, "description": "Already a favorite"},
    422: {"model": ErrorResponse, "description": "Product not confirmed in catalog"},
}


@router.get(
    "/favorites",
    response_model=list[FavoriteResponse],
    summary="List the caller's favorites",
)
async def list_my_favorites(
    user: CurrentUserDep,
    repository: RepositoryDep,
    guard: GuardDep,
) -> list[FavoriteResponse]:
    return await _list_favorites(user.id, repository, guard)


@router.post(
    "/favorites",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite for the caller",
    responses=_ADD_RESPONSES,
)
async def add_my_favorite(
    body: AddFavoriteRequest,
    user: CurrentUserDep,
    repository: RepositoryDep,
    guard: GuardDep,
) -> FavoriteResponse:
    return await _add_favorite(user.id, body.product_id, repository, guard)


@router.delete(
    "/favorites/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove one of the caller's favorites",
    responses={404: {"model": ErrorResponse, "description": "Not a favorite"}},
)
async def remove_my_favorite(
    product_id: ProductIdPath,
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> None:
    await _remove_favorite(user.id, product_id, repository)


@router.get(
    "/favorites/count",
    response_model=FavoriteCountResponse,
    summary="Count the caller's favorites",
)
async def count_my_favorites(
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> FavoriteCountResponse:
    return await _count_favorites(user.id, repository)


@router.get(
    "/favorites/{product_id}/check",
    response_model=FavoriteCheckResponse,
    summary="Check whether a product is one of the caller's favorites",
)
async def check_my_favorite(
    product_id: ProductIdPath,
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> FavoriteCheckResponse:
    return await _check_favorite(user.id, product_id, repository)


@router.get(
    "/users/{user_id}/favorites",
    response_model=list[FavoriteResponse],
    summary="List a user's favorites",
    responses={403: {"model": ErrorResponse, "description": "Not owner or admin"}},
)
async def list_user_favorites(
    request: Request,
    user_id: str,
    user: CurrentUserDep,
    repository: RepositoryDep,
    guard: GuardDep,
) -> list[FavoriteResponse]:
    ensure_can_act_for(request, user, user_id)
    return await _list_favorites(user_id, repository, guard)


@router.post(
    "/users/{user_id}/favorites",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite for a user",
    responses={
        403: {"model": ErrorResponse, "description": "Not owner or admin"},
        **_ADD_RESPONSES,
    },
)
async def add_user_favorite(
    request: Request,
    user_id: str,
    body: AddFavoriteRequest,
    user: CurrentUserDep,
    repository: RepositoryDep,
    guard: GuardDep,
) -> FavoriteResponse:
    ensure_can_act_for(request, user, user_id)
    logger.info("Adding favorite on behalf of user", actor=user.id, user_id=user_id)
    return await _add_favorite(user_id, body.product_id, repository, guard)


@router.get(
    "/users/{user_id}/favorites/count",
    response_model=FavoriteCountResponse,
    summary="Count a user's favorites",
    responses={403: {"model": ErrorResponse, "description": "Not owner or admin"}},
)
async def count_user_favorites(
    request: Request,
    user_id: str,
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> FavoriteCountResponse:
    ensure_can_act_for(request, user, user_id)
    return await _count_favorites(user_id, repository)


@router.get(
    "/users/{user_id}/favorites/{product_id}/check",
    response_model=FavoriteCheckResponse,
    summary="Check whether a product is one of a user's favorites",
    responses={403: {"model": ErrorResponse, "description": "Not owner or admin"}},
)
async def check_user_favorite(
    request: Request,
    user_id: str,
    product_id: ProductIdPath,
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> FavoriteCheckResponse:
    ensure_can_act_for(request, user, user_id)
    return await _check_favorite(user_id, product_id, repository)
