"""Activity model for stravatrack.

An ``Activity`` is built from one summary record of the Strava activities
listing and is enriched at most once from the matching detailed record.
Structured fields live in typed attributes; values parsed out of the
description live in the ordered ``metadata`` mapping, with ``keys`` keeping
the order in which they were added so output is reproducible.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from stravatrack.errors import InvalidRecordError
from stravatrack.utils import format_km
from stravatrack.validation import validate_summary

if TYPE_CHECKING:
    from stravatrack.filters import ActivityFilter
    from stravatrack.segments import SegmentEffort

log = logging.getLogger(__name__)

# Summary fields copied into the metadata mapping, in output order
PHYSICAL_KEYS = (
    "distance",
    "total_elevation_gain",
    "moving_time",
    "elapsed_time",
    "average_temp",
    "device_name",
)

NO_GEOMETRY_TYPES = re.compile(r"^(Workout|Yoga|Weight\s?Training)$", re.IGNORECASE)


class Activity:
    """One completed exercise session."""

    def __init__(self, data: Mapping[str, Any]):
        result = validate_summary(data)
        if not result.ok:
            record_id = data.get("id") if isinstance(data, Mapping) else None
            raise InvalidRecordError(result.error, record_id if isinstance(record_id, int) else None)

        self.raw: dict[str, Any] = dict(data)
        self.id: int = int(data["id"])
        self.commute: bool = data["commute"]
        self.name: str = str(data.get("name") or "")
        self.type: str | None = data.get("type")
        self.distance: float = float(data.get("distance") or 0)
        self.total_elevation_gain = data.get("total_elevation_gain")
        self.moving_time = data.get("moving_time")
        self.elapsed_time = data.get("elapsed_time")
        self.start_date: str = str(data.get("start_date") or "")
        self.start_date_local: str = str(data.get("start_date_local") or "")

        self.description: str | None = None
        self.metadata: dict[str, str] = {}
        self.keys: list[str] = []
        self.segment_efforts: list[SegmentEffort] = []
        self._coordinates: tuple[tuple[float, float], ...] = ()

        for key in PHYSICAL_KEYS:
            value = data.get(key)
            if value is not None:
                self.metadata[key] = str(value)
                self.keys.append(key)
        self._summary_keys = frozenset(self.keys)

        self._as_string = f"{self.start_date_local[:10]}, {self.type} {format_km(self.distance)} km, {self.name}"

    @classmethod
    def from_summary(cls, data: Mapping[str, Any]) -> Activity:
        """Build an Activity from a summary record, raising InvalidRecordError on a bad shape."""
        return cls(data)

    def __str__(self) -> str:
        return self._as_string

    def __repr__(self) -> str:
        return f"Activity({self.id}: {self._as_string})"

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def coordinates(self) -> tuple[tuple[float, float], ...]:
        return self._coordinates

    def set_coordinates(self, points: Iterable[Iterable[float]]) -> None:
        """Populate the (lat, lng) track from a stream fetch.

        Coordinates are fixed once set; setting the same track again is a no-op.
        """
        coordinates = tuple((float(lat), float(lng)) for lat, lng in points)
        if self._coordinates and coordinates != self._coordinates:
            raise ValueError(f"Coordinates already set for activity {self.id}")
        self._coordinates = coordinates

    def has_geometry(self) -> bool:
        """True when the activity has a track worth exporting."""
        if not isinstance(self.type, str) or NO_GEOMETRY_TYPES.match(self.type):
            return False
        return len(self._coordinates) > 0

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def _track_key(self, key: str) -> None:
        if key not in self.keys:
            self.keys.append(key)

    def merge_metadata(self, pairs: Mapping[str, str], overridable_keys: Iterable[str] = ()) -> None:
        """Add description key/value pairs to the metadata mapping.

        Pairs are additive: a key seeded from the summary record is left alone
        unless it is listed in *overridable_keys*.
        """
        overridable = set(overridable_keys)
        for key, value in pairs.items():
            if key in self._summary_keys and key not in overridable:
                log.debug("Ignoring description value for %s on %s: already set from summary", key, self)
                continue
            self.metadata[key] = value
            self._track_key(key)

    def set_description(self, residual: str) -> None:
        self.description = residual
        self.metadata["description"] = residual
        self._track_key("description")

    def ordered_metadata(self) -> list[tuple[str, str]]:
        """Metadata as (key, value) pairs in tracked key order."""
        return [(key, self.metadata[key]) for key in self.keys if key in self.metadata]

    # ------------------------------------------------------------------
    # Filtering and ordering
    # ------------------------------------------------------------------

    @property
    def start_timestamp(self) -> int | None:
        """Start time as epoch seconds, or None if the start date is unparseable."""
        if not self.start_date:
            return None
        try:
            dt = datetime.fromisoformat(self.start_date)
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return int(dt.timestamp())

    def include(self, activity_filter: ActivityFilter) -> bool:
        """Return True if the activity passes *activity_filter*."""
        commute_ok = (
            (not activity_filter.commute_only and not activity_filter.non_commute_only)
            or (activity_filter.commute_only and self.commute)
            or (activity_filter.non_commute_only and not self.commute)
        )
        if not commute_ok:
            return False
        if activity_filter.exclude is not None and self.type in activity_filter.exclude:
            return False
        if activity_filter.include is not None and self.type not in activity_filter.include:
            return False
        return True


def compare_by_start_date(a: Activity, b: Activity) -> int:
    """Order activities by their ISO-8601 start date string."""
    if a.start_date < b.start_date:
        return -1
    if a.start_date > b.start_date:
        return 1
    return 0


def sort_by_start_date(activities: Iterable[Activity]) -> list[Activity]:
    """Stable sort by start date; activities with equal dates keep their input order."""
    return sorted(activities, key=functools.cmp_to_key(compare_by_start_date))
