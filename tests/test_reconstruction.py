from datetime import datetime, timedelta, timezone

from balloonscene.models.flight import Point
from balloonscene.services.reconstruction import (
    downsample_track,
    reconstruct_flights,
    snapshot_time,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _empty_hours() -> dict:
    return {hour: None for hour in range(24)}


def _point(idx: int) -> Point:
    return Point(id="b", lat=float(idx), lon=0.0, timestamp=NOW + timedelta(hours=idx))


def test_snapshot_time_counts_back_from_now():
    assert snapshot_time(NOW, 0) == NOW
    assert snapshot_time(NOW, 5) == NOW - timedelta(hours=5)


def test_single_hour_yields_one_point_flights():
    snapshots = _empty_hours()
    snapshots[0] = [[10.0, 20.0, 100], [11.0, 21.0]]

    flights = reconstruct_flights(snapshots, now=NOW)

    assert len(flights) == 2
    first, second = flights
    assert first.id == "balloon-0"
    assert len(first.track) == 1
    assert first.latest.altitude == 100.0
    assert second.id == "balloon-1"
    assert len(second.track) == 1
    assert second.latest.altitude is None


def test_tracks_are_sorted_oldest_first_and_latest_is_last():
    snapshots = _empty_hours()
    snapshots[0] = [[3.0, 3.0]]
    snapshots[1] = [[2.0, 2.0]]
    snapshots[5] = [[1.0, 1.0], [9.0, 9.0]]

    flights = reconstruct_flights(snapshots, now=NOW)
    by_id = {flight.id: flight for flight in flights}

    track = by_id["balloon-0"].track
    assert [point.lat for point in track] == [1.0, 2.0, 3.0]
    assert all(a.timestamp <= b.timestamp for a, b in zip(track, track[1:]))
    assert by_id["balloon-0"].latest == track[-1]
    assert by_id["balloon-0"].latest.timestamp == NOW

    # seen in one hour only: a shorter track, not an error
    assert len(by_id["balloon-1"].track) == 1
    assert by_id["balloon-1"].latest.timestamp == NOW - timedelta(hours=5)


def test_identity_follows_array_position_across_hours():
    # Known risk: if the feed reorders balloons between hours, points from
    # different balloons are stitched into one track.
    snapshots = _empty_hours()
    snapshots[0] = [[1.0, 1.0], [50.0, 50.0]]
    snapshots[1] = [[50.5, 50.5], [1.5, 1.5]]

    flights = reconstruct_flights(snapshots, now=NOW)
    by_id = {flight.id: flight for flight in flights}

    assert [point.lat for point in by_id["balloon-0"].track] == [50.5, 1.0]


def test_explicit_ids_group_across_positions():
    snapshots = _empty_hours()
    snapshots[0] = [{"id": "w-1", "lat": 1.0, "lon": 1.0}]
    snapshots[1] = [[0.0, 0.0], {"id": "w-1", "lat": 0.5, "lon": 0.5}]

    flights = reconstruct_flights(snapshots, now=NOW)
    by_id = {flight.id: flight for flight in flights}

    assert [point.lat for point in by_id["w-1"].track] == [0.5, 1.0]


def test_no_snapshots_yield_no_flights():
    assert reconstruct_flights(_empty_hours(), now=NOW) == []


def test_downsample_keeps_short_tracks_intact():
    track = [_point(i) for i in range(3)]

    assert downsample_track(track, 5) == track


def test_downsample_keeps_first_and_last():
    track = [_point(i) for i in range(10)]

    sampled = downsample_track(track, 4)

    assert [point.lat for point in sampled] == [0.0, 4.0, 8.0, 9.0]


def test_downsample_step_one_is_identity():
    track = [_point(i) for i in range(6)]

    assert downsample_track(track, 1) == track


def test_reconstruct_with_downsampling_keeps_latest_last():
    snapshots = {hour: [[float(hour), 0.0]] for hour in range(24)}

    flights = reconstruct_flights(snapshots, now=NOW, downsample_step=5)

    assert len(flights) == 1
    flight = flights[0]
    assert flight.track[0].timestamp == NOW - timedelta(hours=23)
    assert flight.latest == flight.track[-1]
    assert flight.latest.timestamp == NOW
    assert len(flight.track) < 24


def test_equal_timestamps_keep_fetch_order():
    snapshots = _empty_hours()
    snapshots[0] = [
        {"id": "dup", "lat": 1.0, "lon": 1.0},
        {"id": "dup", "lat": 2.0, "lon": 2.0},
        {"id": "dup", "lat": 3.0, "lon": 3.0},
    ]
    snapshots[1] = [{"id": "dup", "lat": 0.0, "lon": 0.0}]

    flights = reconstruct_flights(snapshots, now=NOW)

    assert len(flights) == 1
    assert [point.lat for point in flights[0].track] == [0.0, 1.0, 2.0, 3.0]
    assert flights[0].latest.lat == 3.0
