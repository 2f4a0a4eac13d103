"""Scene payload served to the map client."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from balloonscene.models.fire import Fire
from balloonscene.models.flight import Flight


class BoundingRegion(BaseModel):
    """Padded lat/lon box enclosing every reconstructed track."""

    min_lat: float = Field(..., alias="minLat")
    max_lat: float = Field(..., alias="maxLat")
    min_lon: float = Field(..., alias="minLon")
    max_lon: float = Field(..., alias="maxLon")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def area_coords(self) -> str:
        """Return the region as FIRMS expects it: ``west,south,east,north``."""

        return f"{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"


class Scene(BaseModel):
    """Fully assembled flights, fires and bounds for one cache interval."""

    flights: list[Flight] = Field(default_factory=list)
    fires: list[Fire] = Field(default_factory=list)
    bounds: Optional[BoundingRegion] = None
    generated_at: datetime = Field(..., description="When the scene was assembled (UTC)")

    model_config = ConfigDict(frozen=True)


class BalloonsResponse(BaseModel):
    """Uncorrelated flights returned by the debug endpoint."""

    flights: list[Flight] = Field(default_factory=list)


__all__ = ["BalloonsResponse", "BoundingRegion", "Scene"]
