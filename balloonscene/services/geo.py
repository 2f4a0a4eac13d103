"""Geographic helpers: great-circle distance and track bounding regions."""

from __future__ import annotations

from collections.abc import Sequence
import math
from typing import Optional

from balloonscene.models.flight import Flight
from balloonscene.models.scene import BoundingRegion

EARTH_RADIUS_KM = 6371.0

# Kept just inside the valid range so FIRMS never sees an out-of-domain area
LAT_LIMIT = 89.9
LON_LIMIT = 179.9

DEFAULT_MARGIN_DEG = 5.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers between two points in degrees."""

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _clamped_span(low: float, high: float, limit: float, margin: float) -> tuple[float, float]:
    low = min(max(low, -limit), limit)
    high = min(max(high, -limit), limit)
    if low < high:
        return low, high

    # Collapsed span: every point beyond one limit, or a zero margin
    gap = margin if margin > 0 else DEFAULT_MARGIN_DEG
    if high >= limit:
        return limit - gap, limit
    if low <= -limit:
        return -limit, -limit + gap
    return max(low - gap, -limit), min(high + gap, limit)


def compute_bounds(
    flights: Sequence[Flight], margin: float = DEFAULT_MARGIN_DEG
) -> Optional[BoundingRegion]:
    """Padded, clamped box around every point of every track.

    Returns ``None`` when there are no points to enclose.
    """

    margin = abs(margin)
    points = [point for flight in flights for point in flight.track]
    if not points:
        return None

    min_lat = min(point.lat for point in points) - margin
    max_lat = max(point.lat for point in points) + margin
    min_lon = min(point.lon for point in points) - margin
    max_lon = max(point.lon for point in points) + margin

    min_lat, max_lat = _clamped_span(min_lat, max_lat, LAT_LIMIT, margin)
    min_lon, max_lon = _clamped_span(min_lon, max_lon, LON_LIMIT, margin)

    return BoundingRegion(min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon)


__all__ = ["EARTH_RADIUS_KM", "LAT_LIMIT", "LON_LIMIT", "compute_bounds", "haversine_km"]
