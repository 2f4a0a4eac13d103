"""Assemble the map scene from the balloon and fire feeds."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Callable, Optional

from balloonscene.config import settings
from balloonscene.ingestors import BalloonIngestor, FirmsIngestor
from balloonscene.models.flight import Flight
from balloonscene.models.scene import Scene
from balloonscene.services.correlation import summarize_flights_with_fires
from balloonscene.services.geo import compute_bounds
from balloonscene.services.reconstruction import reconstruct_flights

logger = logging.getLogger("balloonscene.scene_builder")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SceneBuilder:
    """Orchestrates one scene build: flights, bounds, fires, correlation."""

    def __init__(
        self,
        balloon_ingestor: Optional[BalloonIngestor] = None,
        fire_ingestor: Optional[FirmsIngestor] = None,
        *,
        downsample_step: int | None = None,
        bounds_margin: float | None = None,
        correlate_full_track: bool | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.balloon_ingestor = balloon_ingestor or BalloonIngestor()
        self.fire_ingestor = fire_ingestor or FirmsIngestor()
        self.downsample_step = (
            downsample_step if downsample_step is not None else settings.track_downsample_step
        )
        self.bounds_margin = (
            bounds_margin if bounds_margin is not None else settings.bounds_margin_deg
        )
        self.correlate_full_track = (
            correlate_full_track
            if correlate_full_track is not None
            else settings.correlate_full_track
        )
        self.now = now

    async def load_flights(self) -> list[Flight]:
        snapshots = await self.balloon_ingestor.fetch_snapshots()
        return reconstruct_flights(
            snapshots, now=self.now(), downsample_step=self.downsample_step
        )

    async def build_scene(self) -> Scene:
        flights = await self.load_flights()
        if not flights:
            logger.warning("No balloon flights reconstructed; serving an empty scene")
            return Scene(flights=[], fires=[], bounds=None, generated_at=self.now())

        bounds = compute_bounds(flights, margin=self.bounds_margin)
        fires = await self.fire_ingestor.get_fires(bounds)
        correlated = summarize_flights_with_fires(
            flights, fires, full_track=self.correlate_full_track
        )

        logger.info(
            "Scene built: flights=%s fires=%s bounds=%s",
            len(correlated),
            len(fires),
            bounds.area_coords() if bounds else None,
        )
        return Scene(flights=correlated, fires=fires, bounds=bounds, generated_at=self.now())


__all__ = ["SceneBuilder"]
