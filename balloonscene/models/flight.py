"""Models for balloon positions and reconstructed flights."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from balloonscene.models.fire import Fire


class Point(BaseModel):
    """One observation of one balloon at one snapshot time."""

    id: str = Field(..., description="Balloon identity within the snapshot index scheme")
    lat: float = Field(..., allow_inf_nan=False, description="Latitude in decimal degrees")
    lon: float = Field(..., allow_inf_nan=False, description="Longitude in decimal degrees")
    altitude: Optional[float] = Field(
        default=None, description="Altitude as reported by the feed, if numeric"
    )
    timestamp: datetime = Field(
        ..., description="Snapshot time derived as now minus the hour offset (UTC)"
    )

    model_config = ConfigDict(frozen=True)


class FireSummary(BaseModel):
    """Nearest-fire information attached to a flight."""

    min_distance_km: Optional[float] = Field(
        default=None, description="Great-circle distance to the closest fire"
    )
    closest_fire: Optional[Fire] = Field(
        default=None, description="The fire detection at that distance"
    )

    model_config = ConfigDict(frozen=True)


class Flight(BaseModel):
    """A reconstructed 24 hour track for one balloon identity."""

    id: str = Field(..., description="Balloon identity shared by every track point")
    track: list[Point] = Field(..., description="Points ordered oldest to newest")
    latest: Point = Field(..., description="Most recent point of the track")
    fire_summary: Optional[FireSummary] = Field(
        default=None, description="Attached once fires have been correlated"
    )

    model_config = ConfigDict(frozen=True)


__all__ = ["FireSummary", "Flight", "Point"]
