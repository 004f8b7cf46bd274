"""Starred segment matching for activity segment efforts.

An activity's detailed record lists every segment effort Strava matched.
Only efforts on segments the athlete has starred are kept, and their names
are rewritten through the user's alias table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from stravatrack.utils import format_hms

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentEffort:
    """One timed traversal of a starred segment within an activity."""

    name: str
    elapsed_time: int
    rank: int | None = None
    segment_id: int | None = None
    start_date_local: str | None = None

    @property
    def elapsed_hms(self) -> str:
        return format_hms(self.elapsed_time)

    def __str__(self) -> str:
        return f"{self.name}  {self.elapsed_hms}"


class StarredSegmentRegistry:
    """Read-only set of starred segment names.

    Built once per run from the starred-segments response; never mutated
    during enrichment.
    """

    def __init__(self, segments: Iterable[Mapping[str, Any]] | None = None):
        self._segments: dict[str, Mapping[str, Any]] = {}
        for segment in segments or []:
            name = segment.get("name") if isinstance(segment, Mapping) else None
            if isinstance(name, str) and name not in self._segments:
                self._segments[name] = segment

    @classmethod
    def from_names(cls, names: Iterable[str]) -> StarredSegmentRegistry:
        return cls({"name": name} for name in names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def get(self, name: str) -> Mapping[str, Any] | None:
        """Return the starred segment record for *name*, if any."""
        return self._segments.get(name)


def resolve_segment_name(raw_name: str, aliases: Mapping[str, str] | None) -> str:
    """Return the canonical name for a raw segment effort name.

    The name is trimmed and looked up exactly in *aliases*; without an alias
    the trimmed name is returned unchanged.
    """
    name = str(raw_name).strip()
    if aliases and name in aliases:
        return aliases[name]
    return name


def _effort_rank(effort: Mapping[str, Any]) -> int | None:
    for field in ("pr_rank", "kom_rank"):
        value = effort.get(field)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def _effort_elapsed(effort: Mapping[str, Any]) -> int:
    try:
        return int(effort.get("elapsed_time") or 0)
    except (ValueError, TypeError):
        return 0


def _effort_segment_id(effort: Mapping[str, Any]) -> int | None:
    segment = effort.get("segment")
    if isinstance(segment, Mapping):
        segment_id = segment.get("id")
        if isinstance(segment_id, int) and not isinstance(segment_id, bool):
            return segment_id
    return None


def collect_segment_efforts(
    efforts: Iterable[Mapping[str, Any]],
    starred: StarredSegmentRegistry,
    aliases: Mapping[str, str] | None = None,
) -> list[SegmentEffort]:
    """Filter raw segment efforts down to starred segments, in input order.

    Membership is checked on the raw effort name before alias resolution, so
    an unstarred segment is dropped even if it has an alias. Repeated
    segments are kept: climbing the same hill twice yields two efforts.
    """
    result: list[SegmentEffort] = []
    for effort in efforts:
        if not isinstance(effort, Mapping):
            continue
        raw_name = effort.get("name")
        if raw_name not in starred:
            log.debug("Skipping segment effort %r: segment is not starred", raw_name)
            continue

        name = resolve_segment_name(raw_name, aliases)
        segment_effort = SegmentEffort(
            name=name,
            elapsed_time=_effort_elapsed(effort),
            rank=_effort_rank(effort),
            segment_id=_effort_segment_id(effort),
            start_date_local=effort.get("start_date_local"),
        )
        log.info("Adding segment '%s', elapsed time %s", name, segment_effort.elapsed_hms)
        result.append(segment_effort)
    return result
