"""Pydantic models for the balloonscene backend."""

from .fire import Fire
from .flight import FireSummary, Flight, Point
from .scene import BalloonsResponse, BoundingRegion, Scene

__all__ = [
    "BalloonsResponse",
    "BoundingRegion",
    "Fire",
    "FireSummary",
    "Flight",
    "Point",
    "Scene",
]
