"""Base interface for activity data sources.

The enrichment pipeline only ever sees plain JSON-style records; a source is
responsible for talking to the remote service and returning those records.
"""

from abc import ABC, abstractmethod
from typing import Any

from stravatrack.filters import DateRange


class ActivitySource(ABC):
    """Abstract base class for activity data sources."""

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize the source with configuration."""
        self.config = config or {}

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this source."""

    @abstractmethod
    def get_athlete(self) -> dict[str, Any]:
        """Return the authenticated athlete's profile record."""

    @abstractmethod
    def get_activities(self, date_range: DateRange) -> list[dict[str, Any]]:
        """Return summary activity records that start inside *date_range*."""

    @abstractmethod
    def get_activity_detail(self, activity_id: int) -> dict[str, Any] | None:
        """Return the detailed record for one activity."""

    @abstractmethod
    def get_starred_segments(self) -> list[dict[str, Any]]:
        """Return the athlete's starred segment records."""

    @abstractmethod
    def get_coordinates(self, activity_id: int) -> list[tuple[float, float]]:
        """Return the activity's (lat, lng) track, empty if it has none."""

    def get_activities_for_ranges(self, date_ranges: list[DateRange]) -> list[dict[str, Any]]:
        """Fetch summaries for several date ranges, dropping repeated activities.

        Ranges may overlap; the first occurrence of an activity id wins.
        """
        seen: set[Any] = set()
        records: list[dict[str, Any]] = []
        for date_range in date_ranges:
            for record in self.get_activities(date_range):
                activity_id = record.get("id") if isinstance(record, dict) else None
                if activity_id is not None and activity_id in seen:
                    continue
                seen.add(activity_id)
                records.append(record)
        return records
