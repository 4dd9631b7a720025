"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under ``settings.api.v1_prefix`` (``/api/v1``).
"""

from __future__ import annotations

from fastapi import APIRouter

from catalog_service.api.v1.endpoints import admin, favorites, health, products


router = APIRouter()

router.include_router(health.router)
router.include_router(products.router)
router.include_router(favorites.router)
router.include_router(admin.router)
