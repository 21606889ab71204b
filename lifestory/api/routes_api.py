"""JSON API router aggregating all resource routes."""

from fastapi import APIRouter

from lifestory.api.routes_profiles import router as profiles_router
from lifestory.api.routes_series import router as series_router
from lifestory.api.routes_uploads import router as uploads_router

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "lifestory"}


router.include_router(profiles_router)
router.include_router(uploads_router)
router.include_router(series_router)
