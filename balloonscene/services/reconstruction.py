"""Stitch hourly balloon snapshots into per-balloon flight tracks."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
import logging
from typing import Any

from balloonscene.models.flight import Flight, Point
from balloonscene.services.normalizer import normalize_snapshot

logger = logging.getLogger("balloonscene.services.reconstruction")

# Tracks this short are never downsampled
MIN_DOWNSAMPLE_LENGTH = 3


def snapshot_time(now: datetime, hour: int) -> datetime:
    """Timestamp assigned to the snapshot fetched ``hour`` hours back."""

    return now - timedelta(hours=hour)


def downsample_track(track: Sequence[Point], step: int) -> list[Point]:
    """Keep every ``step``-th point, always including the first and last."""

    if step <= 1 or len(track) <= MIN_DOWNSAMPLE_LENGTH:
        return list(track)

    sampled = list(track[::step])
    if sampled[-1] is not track[-1]:
        sampled.append(track[-1])
    return sampled


def reconstruct_flights(
    snapshots: Mapping[int, Sequence[Any] | None],
    now: datetime,
    downsample_step: int = 1,
) -> list[Flight]:
    """Group normalized points by identity into time-ordered flights.

    ``snapshots`` maps hour offset to the raw snapshot array, or ``None`` for
    an hour that could not be fetched. Flights are returned in the order
    their identity was first seen, scanning hours from most recent back.
    """

    histories: dict[str, list[Point]] = {}
    for hour in sorted(snapshots):
        snapshot = snapshots[hour]
        if snapshot is None:
            logger.debug("Snapshot missing for hour %s", hour)
            continue

        for point in normalize_snapshot(snapshot, snapshot_time(now, hour)):
            histories.setdefault(point.id, []).append(point)

    flights: list[Flight] = []
    for identity, points in histories.items():
        # sorted() is stable, so equal timestamps keep fetch order
        ordered = sorted(points, key=lambda point: point.timestamp)
        track = downsample_track(ordered, downsample_step)
        flights.append(Flight(id=identity, track=track, latest=track[-1]))

    logger.debug("Reconstructed %s flights", len(flights))
    return flights


__all__ = ["downsample_track", "reconstruct_flights", "snapshot_time"]
