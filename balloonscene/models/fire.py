"""Models for FIRMS hotspot detections."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Fire(BaseModel):
    """One thermal anomaly detection from the FIRMS area feed."""

    lat: float = Field(..., allow_inf_nan=False, description="Latitude in decimal degrees")
    lon: float = Field(..., allow_inf_nan=False, description="Longitude in decimal degrees")
    brightness: Optional[float] = Field(
        default=None, description="Brightness temperature in Kelvin"
    )
    confidence: Optional[str] = Field(
        default=None, description="Detection confidence as reported by the product"
    )
    acq_date: Optional[str] = Field(default=None, description="Acquisition date (YYYY-MM-DD)")
    acq_time: Optional[str] = Field(default=None, description="Acquisition time (HHMM, UTC)")
    satellite: Optional[str] = Field(default=None, description="Satellite identifier")

    model_config = ConfigDict(frozen=True)


__all__ = ["Fire"]
