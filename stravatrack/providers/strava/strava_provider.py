"""Strava activity source for stravatrack."""

import datetime
import logging
import os
from collections.abc import Mapping
from typing import Any

import pytz
from stravalib import Client
from stravalib.exc import AccessUnauthorized

from stravatrack.filters import DateRange
from stravatrack.providers.base_provider import ActivitySource


class StravaProvider(ActivitySource):
    def __init__(self, token: str, config: dict[str, Any] | None = None):
        super().__init__(config)

        self.debug = os.environ.get("STRAVALIB_DEBUG") == "1"
        if not self.debug and self.config:
            self.debug = self.config.get("debug", False)

        if self.debug:
            logging.basicConfig(level=logging.DEBUG)

        self.log = logging.getLogger(f"{__name__}.StravaProvider")
        self.client = Client(access_token=token)

    @property
    def provider_name(self) -> str:
        """Return the name of this provider."""
        return "strava"

    @staticmethod
    def _to_record(strava_lib_object) -> dict[str, Any]:
        """Convert a stravalib model to a plain JSON-style dict."""
        if isinstance(strava_lib_object, Mapping):
            return dict(strava_lib_object)
        if hasattr(strava_lib_object, "model_dump"):
            return strava_lib_object.model_dump(mode="json")
        return dict(strava_lib_object)

    def _handle_unauthorized(self, exc: AccessUnauthorized, operation: str) -> None:
        """Re-raise a 401 with a message telling the user what to do."""
        self.log.error("Strava 401 Unauthorized during %s", operation)
        raise AccessUnauthorized(
            f"Strava token revoked or expired ({operation}). Set a fresh STRAVA_ACCESS_TOKEN."
        ) from exc

    def get_athlete(self) -> dict[str, Any]:
        try:
            return self._to_record(self.client.get_athlete())
        except AccessUnauthorized as exc:
            self._handle_unauthorized(exc, "get_athlete")

    def get_activities(self, date_range: DateRange) -> list[dict[str, Any]]:
        """Fetch summary activities that start inside *date_range*."""
        after = datetime.datetime.fromtimestamp(date_range.after, pytz.UTC)
        before = datetime.datetime.fromtimestamp(date_range.before, pytz.UTC)

        try:
            activities = []
            for activity in self.client.get_activities(after=after, before=before, limit=None):
                activities.append(self._to_record(activity))
        except AccessUnauthorized as exc:
            self._handle_unauthorized(exc, "get_activities")

        self.log.info("Found %d Strava activities between %s and %s", len(activities), after.date(), before.date())
        return activities

    def get_activity_detail(self, activity_id: int) -> dict[str, Any] | None:
        """Fetch the detailed record, including description and segment efforts."""
        try:
            detail = self.client.get_activity(int(activity_id))
        except AccessUnauthorized as exc:
            self._handle_unauthorized(exc, "get_activity")
        if detail is None:
            return None
        return self._to_record(detail)

    def get_starred_segments(self) -> list[dict[str, Any]]:
        try:
            return [self._to_record(segment) for segment in self.client.get_starred_segments(limit=None)]
        except AccessUnauthorized as exc:
            self._handle_unauthorized(exc, "get_starred_segments")

    def get_coordinates(self, activity_id: int) -> list[tuple[float, float]]:
        """Fetch the latlng stream for an activity."""
        try:
            streams = self.client.get_activity_streams(int(activity_id), types=["latlng"])
        except AccessUnauthorized as exc:
            self._handle_unauthorized(exc, "get_activity_streams")

        stream = streams.get("latlng") if streams else None
        if stream is None or not stream.data:
            return []
        return [(float(lat), float(lng)) for lat, lng in stream.data]
