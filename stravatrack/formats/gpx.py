"""GPX track export for stravatrack.

Builds one GPX track per activity that has geometry. Activity metadata,
the residual description and starred segment efforts are written to the
track description so they survive a round trip through mapping tools.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import gpxpy.gpx

from stravatrack.activity import Activity

CREATOR = "stravatrack"


def track_description(activity: Activity, include_segments: bool = True) -> str:
    """Render the text stored in a track's description."""
    lines = [f"{key}: {value}" for key, value in activity.ordered_metadata() if key != "description"]
    if activity.description:
        lines.append(activity.description)
    if include_segments:
        lines.extend(str(effort) for effort in activity.segment_efforts)
    return "\n".join(lines)


def _start_time(activity: Activity) -> datetime | None:
    if not activity.start_date:
        return None
    try:
        return datetime.fromisoformat(activity.start_date)
    except ValueError:
        return None


def build_track(activity: Activity, include_segments: bool = True) -> gpxpy.gpx.GPXTrack:
    track = gpxpy.gpx.GPXTrack(name=str(activity), description=track_description(activity, include_segments))
    track.type = activity.type
    if activity.commute:
        track.comment = "commute"

    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)
    start_time = _start_time(activity)
    for index, (lat, lng) in enumerate(activity.coordinates):
        point = gpxpy.gpx.GPXTrackPoint(latitude=lat, longitude=lng)
        # Streams are fetched without timestamps; only the first point is anchored
        if index == 0:
            point.time = start_time
        segment.points.append(point)
    return track


def build_gpx(activities: Iterable[Activity], include_segments: bool = True) -> gpxpy.gpx.GPX:
    """Build a GPX document from the activities that have geometry."""
    gpx = gpxpy.gpx.GPX()
    gpx.creator = CREATOR
    for activity in activities:
        if activity.has_geometry():
            gpx.tracks.append(build_track(activity, include_segments))
    return gpx


def write_gpx(path: str, activities: Iterable[Activity], include_segments: bool = True) -> int:
    """Write activities to *path* as GPX. Returns the number of tracks written."""
    gpx = build_gpx(activities, include_segments)
    with open(path, "w", encoding="utf-8") as f:
        f.write(gpx.to_xml())
    return len(gpx.tracks)

