"""API routers for the balloonscene backend."""

from fastapi import APIRouter

from balloonscene.config import settings

from .health import router as health_router
from .scene import router as scene_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(scene_router)

if settings.debug_endpoints:
    from .debug import router as debug_router

    api_router.include_router(debug_router)

__all__ = ["api_router"]
