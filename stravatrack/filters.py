"""Date range and activity-type filters applied to the activity listing."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

import pytz
from dateutil.relativedelta import relativedelta


class DateRange(NamedTuple):
    """Half-open interval ``[after, before)`` in epoch seconds."""

    after: int
    before: int

    def __contains__(self, timestamp: object) -> bool:
        if not isinstance(timestamp, int | float) or isinstance(timestamp, bool):
            return False
        return self.after <= timestamp < self.before

    @classmethod
    def parse(cls, value: str, timezone: str = "UTC") -> DateRange:
        """Parse ``YYYYMMDD-YYYYMMDD``, ``YYYYMMDD`` or ``YYYY-MM`` in *timezone*.

        A two-date range includes the whole of its last day.
        """
        try:
            tz = pytz.timezone(timezone)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"Unknown timezone {timezone!r}") from e
        value = value.strip()

        if len(value) == 7 and value[4] == "-":
            year, month = map(int, value.split("-"))
            start = tz.localize(datetime.datetime(year, month, 1))
            end = tz.localize(datetime.datetime(year, month, 1) + relativedelta(months=1))
            return cls(int(start.timestamp()), int(end.timestamp()))

        if "-" in value:
            first, last = value.split("-", 1)
        else:
            first, last = value, value
        start_day = datetime.datetime.strptime(first, "%Y%m%d")
        end_day = datetime.datetime.strptime(last, "%Y%m%d") + relativedelta(days=1)
        if end_day <= start_day:
            raise ValueError(f"Date range {value!r} ends before it starts")
        return cls(int(tz.localize(start_day).timestamp()), int(tz.localize(end_day).timestamp()))


def in_any_range(timestamp: int | None, date_ranges: Iterable[DateRange]) -> bool:
    """True if *timestamp* falls inside at least one of *date_ranges*."""
    if timestamp is None:
        return False
    return any(timestamp in date_range for date_range in date_ranges)


@dataclass(frozen=True)
class ActivityFilter:
    """Which activities to keep, by commute flag and activity type.

    With neither commute option set, commute status is not filtered.
    ``exclude`` and ``include`` are lists of activity types; None disables them.
    """

    commute_only: bool = False
    non_commute_only: bool = False
    include: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> ActivityFilter:
        config = config or {}
        return cls(
            commute_only=bool(config.get("commute_only", False)),
            non_commute_only=bool(config.get("non_commute_only", False)),
            include=parse_type_list(config.get("include")),
            exclude=parse_type_list(config.get("exclude")),
        )


def parse_type_list(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return tuple(t.strip() for t in value.split(",") if t.strip())
    return tuple(str(t) for t in value)
