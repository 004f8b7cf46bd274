import gpxpy

from stravatrack.activity import Activity
from stravatrack.formats.gpx import build_gpx, track_description, write_gpx
from stravatrack.segments import SegmentEffort


def _ride(make_summary, **overrides):
    activity = Activity(make_summary(**overrides))
    activity.merge_metadata({"shoes": "Speedster"})
    activity.set_description("Great climb today")
    activity.segment_efforts = [SegmentEffort("The Hill", 185, rank=2, segment_id=11)]
    activity.set_coordinates([(33.7, -84.3), (33.8, -84.4)])
    return activity


def test_track_description(make_summary):
    activity = _ride(make_summary)

    assert track_description(activity).splitlines() == [
        "distance: 10000",
        "total_elevation_gain: 120.5",
        "moving_time: 1800",
        "elapsed_time: 2000",
        "shoes: Speedster",
        "Great climb today",
        "The Hill  0:03:05",
    ]
    assert "The Hill" not in track_description(activity, include_segments=False)


def test_only_activities_with_geometry_become_tracks(make_summary):
    no_track = Activity(make_summary(id=2))
    yoga = Activity(make_summary(id=3, type="Yoga"))
    yoga.set_coordinates([(1.0, 2.0)])

    gpx = build_gpx([_ride(make_summary), no_track, yoga])

    assert len(gpx.tracks) == 1
    assert gpx.tracks[0].name == "2021-05-01, Ride 10 km, Morning Ride"


def test_write_gpx(tmp_path, make_summary):
    path = tmp_path / "out.gpx"

    count = write_gpx(str(path), [_ride(make_summary), _ride(make_summary, id=2, commute=True)])

    assert count == 2
    with open(path, encoding="utf-8") as f:
        gpx = gpxpy.parse(f)
    first, second = gpx.tracks
    assert first.type == "Ride"
    assert first.comment is None
    assert second.comment == "commute"
    points = first.segments[0].points
    assert [(p.latitude, p.longitude) for p in points] == [(33.7, -84.3), (33.8, -84.4)]
    assert points[0].time.isoformat().startswith("2021-05-01T10:00:00")
    assert points[1].time is None
    assert "shoes: Speedster" in first.description
