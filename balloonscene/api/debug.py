"""Debug endpoints for checking the balloon feed without fires or caching."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from balloonscene.config import settings
from balloonscene.models.scene import BalloonsResponse
from balloonscene.services.scene_builder import SceneBuilder

router = APIRouter(prefix="/api", tags=["debug"])

logger = logging.getLogger("balloonscene.debug")


@router.get("/balloons", response_model=BalloonsResponse, summary="Reconstructed flights only")
async def get_balloons() -> BalloonsResponse:
    """Rebuild balloon flights straight from the feed, bypassing the cache."""

    if not settings.debug_endpoints:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    try:
        flights = await SceneBuilder().load_flights()
    except Exception as exc:
        logger.exception("Failed to load balloons")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "balloons_failed", "message": "Failed to load balloons"},
        ) from exc
    return BalloonsResponse(flights=flights)
