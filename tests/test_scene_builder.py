from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from balloonscene.models.fire import Fire
from balloonscene.services.scene_builder import SceneBuilder

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeBalloonIngestor:
    def __init__(self, snapshots: dict | None = None, fail: bool = False):
        self.snapshots = snapshots or {hour: None for hour in range(24)}
        self.fail = fail
        self.call_count = 0

    async def fetch_snapshots(self):
        self.call_count += 1
        if self.fail:
            raise RuntimeError("balloon fail")
        return self.snapshots


class FakeFirmsIngestor:
    def __init__(self, fires: list[Fire] | None = None):
        self.fires = fires or []
        self.call_count = 0
        self.bounds = None

    async def get_fires(self, bounds):
        self.call_count += 1
        self.bounds = bounds
        return self.fires


def _builder(balloons, fires, **kwargs) -> SceneBuilder:
    return SceneBuilder(
        balloon_ingestor=balloons,
        fire_ingestor=fires,
        downsample_step=kwargs.pop("downsample_step", 1),
        bounds_margin=kwargs.pop("bounds_margin", 5.0),
        correlate_full_track=kwargs.pop("correlate_full_track", False),
        now=lambda: NOW,
    )


@pytest.mark.anyio
async def test_build_scene_correlates_fires_within_bounds():
    snapshots = {hour: None for hour in range(24)}
    snapshots[0] = [[10.0, 20.0, 100], [11.0, 21.0]]
    fire = Fire(lat=12.0, lon=22.0, brightness=300.0)
    fires = FakeFirmsIngestor(fires=[fire])

    scene = await _builder(FakeBalloonIngestor(snapshots), fires).build_scene()

    assert scene.generated_at == NOW
    assert len(scene.flights) == 2
    assert scene.fires == [fire]
    assert scene.bounds is not None
    assert (scene.bounds.min_lat, scene.bounds.max_lat) == (5.0, 16.0)
    assert (scene.bounds.min_lon, scene.bounds.max_lon) == (15.0, 26.0)
    assert fires.bounds == scene.bounds
    for flight in scene.flights:
        assert flight.fire_summary is not None
        assert flight.fire_summary.closest_fire == fire
        assert flight.fire_summary.min_distance_km > 0


@pytest.mark.anyio
async def test_build_scene_without_fires_keeps_flights():
    snapshots = {hour: None for hour in range(24)}
    snapshots[2] = [[1.0, 2.0]]

    scene = await _builder(FakeBalloonIngestor(snapshots), FakeFirmsIngestor()).build_scene()

    assert len(scene.flights) == 1
    assert scene.fires == []
    summary = scene.flights[0].fire_summary
    assert summary is not None
    assert summary.min_distance_km is None
    assert summary.closest_fire is None


@pytest.mark.anyio
async def test_build_scene_without_flights_skips_fire_feed():
    fires = FakeFirmsIngestor(fires=[Fire(lat=1.0, lon=1.0)])

    scene = await _builder(FakeBalloonIngestor(), fires).build_scene()

    assert scene.flights == []
    assert scene.fires == []
    assert scene.bounds is None
    assert scene.generated_at == NOW
    assert fires.call_count == 0


@pytest.mark.anyio
async def test_build_scene_propagates_unexpected_failure():
    builder = _builder(FakeBalloonIngestor(fail=True), FakeFirmsIngestor())

    with pytest.raises(RuntimeError):
        await builder.build_scene()


@pytest.mark.anyio
async def test_scene_serializes_for_the_client():
    snapshots = {hour: None for hour in range(24)}
    snapshots[0] = [[10.0, 20.0, 100]]

    scene = await _builder(FakeBalloonIngestor(snapshots), FakeFirmsIngestor()).build_scene()
    payload = scene.model_dump(mode="json", by_alias=True)

    assert set(payload) == {"flights", "fires", "bounds", "generated_at"}
    assert set(payload["bounds"]) == {"minLat", "maxLat", "minLon", "maxLon"}
    flight = payload["flights"][0]
    assert flight["id"] == "balloon-0"
    assert flight["latest"]["altitude"] == 100.0
    assert flight["fire_summary"] == {"min_distance_km": None, "closest_fire": None}


@pytest.mark.anyio
async def test_built_scene_is_immutable():
    snapshots = {hour: None for hour in range(24)}
    snapshots[0] = [[10.0, 20.0]]

    scene = await _builder(FakeBalloonIngestor(snapshots), FakeFirmsIngestor()).build_scene()

    with pytest.raises(ValidationError):
        scene.fires = [Fire(lat=0.0, lon=0.0)]
    with pytest.raises(ValidationError):
        scene.flights[0].fire_summary = None
    with pytest.raises(ValidationError):
        scene.flights[0].fire_summary.min_distance_km = 1.0
