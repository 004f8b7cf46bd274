"""Shared utility functions for the stravatrack package."""

from __future__ import annotations

import math
from typing import Any


def format_hms(total_seconds: Any) -> str:
    """Format a number of seconds as ``H:MM:SS``.

    Returns an empty string when the value cannot be interpreted as seconds.
    """
    try:
        total_seconds = int(total_seconds)
    except (ValueError, TypeError):
        return ""
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def format_km(distance_m: Any) -> str:
    """Format a distance in metres as kilometres with at most one decimal.

    Rounds half up (12350 m is ``12.4``) and drops a trailing ``.0``
    (10000 m is ``10``).
    """
    try:
        tenths = math.floor(float(distance_m) / 100 + 0.5)
    except (ValueError, TypeError, OverflowError):
        tenths = 0
    if tenths % 10 == 0:
        return str(tenths // 10)
    return f"{tenths / 10:.1f}"
