"""Correlate fire detections with balloon flights by great-circle distance."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from balloonscene.models.fire import Fire
from balloonscene.models.flight import FireSummary, Flight
from balloonscene.services.geo import haversine_km

logger = logging.getLogger("balloonscene.services.correlation")


def nearest_fire(lat: float, lon: float, fires: Sequence[Fire]) -> tuple[float | None, Fire | None]:
    """Return ``(distance_km, fire)`` for the closest fire, or ``(None, None)``."""

    best_distance: float | None = None
    best_fire: Fire | None = None
    for fire in fires:
        distance = haversine_km(lat, lon, fire.lat, fire.lon)
        if best_distance is None or distance < best_distance:
            best_distance = distance
            best_fire = fire
    return best_distance, best_fire


def summarize_flight(flight: Flight, fires: Sequence[Fire], full_track: bool = False) -> FireSummary:
    points = flight.track if full_track else [flight.latest]

    best_distance: float | None = None
    best_fire: Fire | None = None
    for point in points:
        distance, fire = nearest_fire(point.lat, point.lon, fires)
        if distance is not None and (best_distance is None or distance < best_distance):
            best_distance = distance
            best_fire = fire

    return FireSummary(min_distance_km=best_distance, closest_fire=best_fire)


def summarize_flights_with_fires(
    flights: Sequence[Flight], fires: Sequence[Fire], full_track: bool = False
) -> list[Flight]:
    """Attach a fire summary to a copy of every flight.

    By default only each flight's latest position is compared; ``full_track``
    compares every track point at proportionally higher cost.
    """

    summarized = [
        flight.model_copy(update={"fire_summary": summarize_flight(flight, fires, full_track)})
        for flight in flights
    ]
    logger.debug(
        "Correlated %s flights against %s fires (full_track=%s)",
        len(flights),
        len(fires),
        full_track,
    )
    return summarized


__all__ = ["nearest_fire", "summarize_flight", "summarize_flights_with_fires"]
