"""Service-layer helpers for the balloonscene backend."""

from .correlation import nearest_fire, summarize_flight, summarize_flights_with_fires
from .geo import compute_bounds, haversine_km
from .normalizer import classify_record, normalize_point, normalize_snapshot
from .reconstruction import downsample_track, reconstruct_flights, snapshot_time
from .scene_builder import SceneBuilder
from .scene_cache import SceneCache, get_scene_cache

__all__ = [
    "SceneBuilder",
    "SceneCache",
    "classify_record",
    "compute_bounds",
    "downsample_track",
    "get_scene_cache",
    "haversine_km",
    "nearest_fire",
    "normalize_point",
    "normalize_snapshot",
    "reconstruct_flights",
    "snapshot_time",
    "summarize_flight",
    "summarize_flights_with_fires",
]
