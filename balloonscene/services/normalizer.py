"""Normalize raw balloon feed records into canonical points.

The feed has no documented schema. Today every record is a ``[lat, lon, alt]``
array; an object form with named coordinate fields is accepted as well. Each
raw record is classified once into a :class:`TupleRecord` or an
:class:`ObjectRecord` and only then converted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
import logging
import math
from typing import Any, Optional, Union

from balloonscene.models.flight import Point

logger = logging.getLogger("balloonscene.services.normalizer")


@dataclass(frozen=True)
class TupleRecord:
    """``[lat, lon, altitude?]`` record."""

    values: Sequence[Any]


@dataclass(frozen=True)
class ObjectRecord:
    """Record exposing ``lat``/``latitude``, ``lon``/``longitude``, ``alt``/``altitude``, ``id``."""

    fields: Mapping[str, Any]


RawRecord = Union[TupleRecord, ObjectRecord]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _first_present(fields: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = fields.get(key)
        if value is not None:
            return value
    return None


def default_identity(index: int) -> str:
    """Identity for a record that carries none: its position in the snapshot.

    This only links points across hours if the feed keeps balloons in the
    same array order every hour.
    """

    return f"balloon-{index}"


def classify_record(raw: Any) -> Optional[RawRecord]:
    if isinstance(raw, (str, bytes)):
        return None
    if isinstance(raw, Sequence):
        return TupleRecord(values=raw)
    if isinstance(raw, Mapping):
        return ObjectRecord(fields=raw)
    return None


def _from_tuple(record: TupleRecord, index: int) -> Optional[tuple[str, Any, Any, Any]]:
    values = record.values
    if len(values) < 2:
        return None
    altitude = values[2] if len(values) > 2 else None
    return default_identity(index), values[0], values[1], altitude


def _from_object(record: ObjectRecord, index: int) -> Optional[tuple[str, Any, Any, Any]]:
    fields = record.fields
    raw_id = fields.get("id")
    identity = str(raw_id) if raw_id is not None else default_identity(index)
    return (
        identity,
        _first_present(fields, "lat", "latitude"),
        _first_present(fields, "lon", "longitude"),
        _first_present(fields, "alt", "altitude"),
    )


def normalize_point(raw: Any, timestamp: datetime, index: int) -> Optional[Point]:
    """Convert one feed record into a :class:`Point`, or ``None`` if malformed."""

    record = classify_record(raw)
    if record is None:
        return None

    if isinstance(record, TupleRecord):
        parts = _from_tuple(record, index)
    else:
        parts = _from_object(record, index)
    if parts is None:
        return None

    identity, lat, lon, altitude = parts
    if not _is_number(lat) or not _is_number(lon):
        return None

    return Point(
        id=identity,
        lat=float(lat),
        lon=float(lon),
        altitude=float(altitude) if _is_number(altitude) else None,
        timestamp=timestamp,
    )


def normalize_snapshot(snapshot: Sequence[Any], timestamp: datetime) -> list[Point]:
    """Normalize every record of one snapshot, dropping malformed ones."""

    points: list[Point] = []
    for index, raw in enumerate(snapshot):
        point = normalize_point(raw, timestamp, index)
        if point is not None:
            points.append(point)

    dropped = len(snapshot) - len(points)
    if dropped:
        logger.debug("Dropped %s malformed records from snapshot at %s", dropped, timestamp)
    return points


__all__ = [
    "ObjectRecord",
    "RawRecord",
    "TupleRecord",
    "classify_record",
    "default_identity",
    "normalize_point",
    "normalize_snapshot",
]
