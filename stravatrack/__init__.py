"""This is the init module for stravatrack"""

from .activity import Activity
from .enrich import Enricher, EnrichmentResult
from .errors import InvalidRecordError
from .filters import ActivityFilter, DateRange
from .providers.strava import StravaProvider

__version__ = "0.0.1"
__all__ = [
    "Activity",
    "ActivityFilter",
    "DateRange",
    "Enricher",
    "EnrichmentResult",
    "InvalidRecordError",
    "StravaProvider",
]
