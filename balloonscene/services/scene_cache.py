"""TTL cache for the assembled scene.

The cache is refreshed lazily: a read after the TTL has elapsed rebuilds the
scene before returning it. Concurrent reads that miss share one in-flight
build instead of each hitting the upstream feeds. A failed build leaves the
previous scene in place.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from balloonscene.config import settings
from balloonscene.models.scene import Scene
from balloonscene.services.scene_builder import SceneBuilder

logger = logging.getLogger("balloonscene.scene_cache")

SceneFactory = Callable[[], Awaitable[Scene]]


class SceneCache:
    """Memoize one scene for ``ttl_seconds``, with single-flight rebuilds."""

    def __init__(
        self,
        build: SceneFactory,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._build = build
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.scene_cache_ttl_seconds
        self._clock = clock
        self._scene: Optional[Scene] = None
        self._built_at: Optional[float] = None
        self._inflight: Optional[asyncio.Task[Scene]] = None

    @property
    def scene(self) -> Optional[Scene]:
        return self._scene

    def is_fresh(self) -> bool:
        if self._scene is None or self._built_at is None:
            return False
        return self._clock() - self._built_at < self.ttl_seconds

    def invalidate(self) -> None:
        self._built_at = None

    async def get_scene(self) -> Scene:
        if self.is_fresh():
            return self._scene  # type: ignore[return-value]

        if self._inflight is None:
            logger.info("Scene cache stale; rebuilding")
            self._inflight = asyncio.ensure_future(self._rebuild())
        else:
            logger.debug("Scene rebuild already in flight; awaiting it")

        # shield: one caller going away must not cancel the shared build
        return await asyncio.shield(self._inflight)

    async def _rebuild(self) -> Scene:
        started = self._clock()
        try:
            scene = await self._build()
        except Exception:
            logger.warning("Scene rebuild failed; keeping previous scene", exc_info=True)
            raise
        finally:
            self._inflight = None

        self._scene = scene
        self._built_at = self._clock()
        logger.info("Scene cached (build took %.2f s)", self._built_at - started)
        return scene


_default_cache: Optional[SceneCache] = None


def get_scene_cache() -> SceneCache:
    """Return the process-wide scene cache, creating it on first use."""

    global _default_cache

    if _default_cache is None:
        _default_cache = SceneCache(SceneBuilder().build_scene)
    return _default_cache


__all__ = ["SceneCache", "SceneFactory", "get_scene_cache"]
