"""Core stravatrack functionality: configuration, source management and runs."""

import logging
import os
from typing import Any

from .appconfig import SegmentsFile, load_config
from .enrich import EnrichmentResult, Enricher
from .filters import ActivityFilter, DateRange
from .providers.base_provider import ActivitySource
from .providers.strava import StravaProvider
from .segments import StarredSegmentRegistry


class Stravatrack:
    """Main stravatrack class that handles configuration and the Strava source."""

    def __init__(self, source: ActivitySource | None = None):
        self.config = load_config()
        self.home_timezone = self.config.get("home_timezone", "UTC")
        self.log = logging.getLogger(f"{__name__}.Stravatrack")

        if self.config.get("debug"):
            logging.basicConfig(level=logging.DEBUG)

        self.segments_file = SegmentsFile(self.config.get("segments_file", "segments.json"))
        self._strava = source
        self._starred: StarredSegmentRegistry | None = None

    @property
    def strava(self) -> ActivitySource | None:
        """Get the Strava source, initializing it if a token is available."""
        if not self._strava:
            token = os.environ.get("STRAVA_ACCESS_TOKEN")
            if token:
                self._strava = StravaProvider(token, config={"debug": self.config.get("debug", False)})
        return self._strava

    def _require_source(self) -> ActivitySource:
        source = self.strava
        if source is None:
            raise RuntimeError("No Strava access token. Set STRAVA_ACCESS_TOKEN in your environment or .env file.")
        return source

    @property
    def activity_filter(self) -> ActivityFilter:
        return ActivityFilter.from_config(self.config.get("activity_filter"))

    def parse_date_ranges(self, values: list[str]) -> list[DateRange]:
        return [DateRange.parse(value, self.home_timezone) for value in values]

    def starred_segments(self) -> StarredSegmentRegistry:
        """Fetch the athlete's starred segments once per run."""
        if self._starred is None:
            self._starred = StarredSegmentRegistry(self._require_source().get_starred_segments())
        return self._starred

    def enricher(self) -> Enricher:
        """Build an enricher from the starred segments and the current alias table."""
        if self.segments_file.read():
            self.log.info("Loaded %d segment aliases from %s", len(self.segments_file.aliases), self.segments_file.path)
        metadata_cfg: dict[str, Any] = self.config.get("metadata") or {}
        return Enricher(
            starred=self.starred_segments(),
            aliases=self.segments_file.aliases,
            overridable_keys=metadata_cfg.get("overridable_keys") or (),
        )

    def collect_activities(
        self,
        date_ranges: list[DateRange],
        activity_filter: ActivityFilter | None = None,
        details: bool = True,
        coordinates: bool = True,
    ) -> EnrichmentResult:
        """Fetch, enrich, filter and order activities for the given date ranges.

        ``details`` controls the per-activity detail fetch (description metadata
        and segment efforts); ``coordinates`` controls the stream fetch.
        """
        source = self._require_source()
        summaries = source.get_activities_for_ranges(date_ranges)
        self.log.info("Retrieved %d activity summaries", len(summaries))

        if details:
            enricher = self.enricher()
        else:
            enricher = Enricher(overridable_keys=(self.config.get("metadata") or {}).get("overridable_keys") or ())

        return enricher.run(
            summaries,
            fetch_detail=source.get_activity_detail if details else None,
            fetch_coordinates=source.get_coordinates if coordinates else None,
            activity_filter=activity_filter or self.activity_filter,
            date_ranges=date_ranges,
        )

    def cleanup(self):
        """Release the Strava client's HTTP session, if one was opened."""
        client = getattr(self._strava, "client", None)
        session = getattr(getattr(client, "protocol", None), "rsession", None)
        if session is not None:
            session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cleanup()
