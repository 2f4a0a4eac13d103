"""Health check endpoint."""

from fastapi import APIRouter
from balloonscene.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check() -> dict[str, object]:
    """Simple health check endpoint."""
    return {
        "status": "ok",
        "env": settings.balloonscene_env,
        "firms_configured": settings.firms_configured,
    }
