"""Data ingestors for balloonscene."""

from .balloons import HOURS_OF_HISTORY, BalloonIngestor, snapshot_url
from .firms import FirmsIngestor, parse_fire_csv

__all__ = [
    "BalloonIngestor",
    "FirmsIngestor",
    "HOURS_OF_HISTORY",
    "parse_fire_csv",
    "snapshot_url",
]
