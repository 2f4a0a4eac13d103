"""Scene endpoint consumed by the map client."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from balloonscene.models.scene import Scene
from balloonscene.services.scene_cache import SceneCache, get_scene_cache

router = APIRouter(prefix="/api", tags=["scene"])

logger = logging.getLogger("balloonscene.scene")


@router.get("/scene", response_model=Scene, summary="Get the current balloon and fire scene")
async def get_scene(cache: SceneCache = Depends(get_scene_cache)) -> Scene:
    """Return the cached scene, rebuilding it first if it has expired."""

    try:
        return await cache.get_scene()
    except Exception as exc:
        logger.exception("Scene build failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "scene_build_failed", "message": "Failed to build scene"},
        ) from exc
