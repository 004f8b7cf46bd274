"""Activity data sources for stravatrack."""

from .strava.strava_provider import StravaProvider

__all__ = [
    "StravaProvider",
]
