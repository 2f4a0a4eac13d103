from __future__ import annotations

import contextlib
import logging
import time

import uvicorn
from fastapi import FastAPI, Request

from balloonscene.api import api_router
from balloonscene.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
# httpx logs request URLs at INFO; the FIRMS URL path carries the map key
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger("balloonscene")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the feed configuration on startup."""

    logger.info("Balloon feed: %s", settings.balloon_base_url)
    if settings.firms_configured:
        logger.info("FIRMS key loaded; product %s", settings.firms_product)
    else:
        logger.warning("No FIRMS key configured; scenes will carry no fires")
    logger.info("Scene cache TTL: %s s", settings.scene_cache_ttl_seconds)

    yield


app = FastAPI(title="Balloonscene Backend", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "balloonscene backend is running"}


def run() -> None:
    """Serve the app with uvicorn on the configured port."""

    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
