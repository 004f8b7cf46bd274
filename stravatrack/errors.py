"""Typed exceptions raised by stravatrack.

Record-level failures are local to one activity: the enricher catches
``InvalidRecordError`` and records it in the skipped manifest instead of
aborting the run.
"""

from __future__ import annotations


class InvalidRecordError(ValueError):
    """Raised when a summary or detailed activity record has the wrong shape."""

    def __init__(self, reason: str, record_id: int | None = None) -> None:
        if record_id is None:
            message = f"Invalid activity record: {reason}"
        else:
            message = f"Invalid activity record {record_id}: {reason}"
        super().__init__(message)
        self.reason = reason
        self.record_id = record_id


class ConfigError(RuntimeError):
    """Raised when a configuration or segments file cannot be used."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
