from .strava_provider import StravaProvider

__all__ = ["StravaProvider"]
