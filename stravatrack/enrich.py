"""Activity enrichment pipeline.

This module contains the pure logic that turns raw activity records into the
filtered, enriched, ordered activity set handed to the track exporter:
  - building ``Activity`` objects from summary records
  - merging in detailed records (description metadata, starred segment efforts)
  - date-range and activity-type filtering
  - ordering by start date

Network access is supplied by the caller as plain callables, so everything
here is synchronous and free of I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, NamedTuple

from stravatrack.activity import NO_GEOMETRY_TYPES, Activity, sort_by_start_date
from stravatrack.errors import InvalidRecordError
from stravatrack.filters import ActivityFilter, DateRange, in_any_range
from stravatrack.metadata import extract_metadata
from stravatrack.segments import StarredSegmentRegistry, collect_segment_efforts
from stravatrack.validation import validate_detail

DetailFetcher = Callable[[int], Mapping[str, Any] | None]
CoordinateFetcher = Callable[[int], Iterable[Iterable[float]] | None]


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


class SkippedActivity(NamedTuple):
    activity_id: int | None
    reason: str

    def __str__(self) -> str:
        if self.activity_id is None:
            return f"Skipped activity record: {self.reason}"
        return f"Skipped activity {self.activity_id}: {self.reason}"


class EnrichmentResult(NamedTuple):
    activities: list[Activity]
    skipped: list[SkippedActivity]


# ---------------------------------------------------------------------------
# Enricher
# ---------------------------------------------------------------------------


class Enricher:
    """Merges detailed records into activities using one run's segment configuration.

    The starred registry and alias table are read-only for the lifetime of
    the enricher, so activities can be enriched independently of each other.
    """

    def __init__(
        self,
        starred: StarredSegmentRegistry | None = None,
        aliases: Mapping[str, str] | None = None,
        overridable_keys: Iterable[str] = (),
    ):
        self.starred = starred or StarredSegmentRegistry()
        self.aliases = dict(aliases or {})
        self.overridable_keys = frozenset(overridable_keys)
        self.log = logging.getLogger(f"{__name__}.Enricher")

    def build_activity(self, summary: Mapping[str, Any]) -> Activity:
        return Activity.from_summary(summary)

    def enrich(self, activity: Activity, detail: Mapping[str, Any]) -> None:
        """Merge a detailed record into *activity*.

        Description metadata is merged additively. Starred segment efforts
        replace any efforts from a previous call, so enriching twice with the
        same detail gives the same efforts as enriching once.
        """
        result = validate_detail(detail, activity.id)
        if not result.ok:
            raise InvalidRecordError(result.error, activity.id)

        self.log.info("Adding activity details for %s", activity)

        description = detail.get("description")
        if description:
            extracted = extract_metadata(description)
            activity.merge_metadata(extracted.pairs, self.overridable_keys)
            if extracted.residual is not None:
                activity.set_description(extracted.residual)

        efforts = detail.get("segment_efforts")
        if efforts:
            activity.segment_efforts = collect_segment_efforts(efforts, self.starred, self.aliases)

    def run(
        self,
        summaries: Iterable[Mapping[str, Any]],
        fetch_detail: DetailFetcher | None = None,
        fetch_coordinates: CoordinateFetcher | None = None,
        activity_filter: ActivityFilter | None = None,
        date_ranges: Iterable[DateRange] | None = None,
    ) -> EnrichmentResult:
        """Build, filter, enrich and order activities from summary records.

        A failing fetch leaves that activity with summary-only data. An invalid
        record drops the activity and is reported in ``skipped``.
        """
        activity_filter = activity_filter or ActivityFilter()
        date_ranges = list(date_ranges or [])
        activities: list[Activity] = []
        skipped: list[SkippedActivity] = []

        for summary in summaries:
            try:
                activity = self.build_activity(summary)
            except InvalidRecordError as e:
                self.log.warning("%s", e)
                skipped.append(SkippedActivity(e.record_id, e.reason))
                continue

            if date_ranges and not in_any_range(activity.start_timestamp, date_ranges):
                self.log.debug("Dropping %s: outside requested date ranges", activity)
                continue
            if not activity.include(activity_filter):
                self.log.debug("Dropping %s: excluded by activity filter", activity)
                continue

            if fetch_detail is not None:
                try:
                    detail = fetch_detail(activity.id)
                except Exception as e:
                    self.log.warning("Could not fetch details for %s: %s", activity, e)
                    detail = None
                if detail is not None:
                    try:
                        self.enrich(activity, detail)
                    except InvalidRecordError as e:
                        self.log.warning("%s", e)
                        skipped.append(SkippedActivity(activity.id, e.reason))
                        continue

            if fetch_coordinates is not None and _wants_geometry(activity):
                try:
                    points = fetch_coordinates(activity.id)
                except Exception as e:
                    self.log.warning("Could not fetch coordinates for %s: %s", activity, e)
                    points = None
                if points:
                    try:
                        activity.set_coordinates(points)
                    except (ValueError, TypeError) as e:
                        self.log.warning("Ignoring malformed coordinates for %s: %s", activity, e)

            activities.append(activity)

        return EnrichmentResult(sort_by_start_date(activities), skipped)


def _wants_geometry(activity: Activity) -> bool:
    """Whether a stream fetch can produce an exportable track for *activity*."""
    if activity.coordinates or not isinstance(activity.type, str):
        return False
    return not NO_GEOMETRY_TYPES.match(activity.type)
