"""Shape checks for activity records returned by the Strava API.

Each check returns a ``ValidationResult`` holding either the record or the
reason it was rejected; callers decide whether a rejection is fatal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

# Summary fields converted to numbers when an Activity is built
NUMERIC_SUMMARY_KEYS = ("distance",)


class ValidationResult(NamedTuple):
    record: Mapping[str, Any] | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def valid(cls, record: Mapping[str, Any]) -> ValidationResult:
        return cls(record, None)

    @classmethod
    def invalid(cls, error: str) -> ValidationResult:
        return cls(None, error)


def is_number(value: Any) -> bool:
    """True for ints and floats, excluding bools."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    """True for ints and integral floats such as ``1.0``, excluding bools."""
    if isinstance(value, float):
        return value.is_integer()
    return is_number(value)


def validate_summary(data: Any) -> ValidationResult:
    """Check that *data* looks like a summary activity record."""
    if not isinstance(data, Mapping):
        return ValidationResult.invalid(f"expected a mapping, got {type(data).__name__}")
    if not is_integer(data.get("id")):
        return ValidationResult.invalid(f"'id' must be an integer, got {data.get('id')!r}")
    if not isinstance(data.get("commute"), bool):
        return ValidationResult.invalid(f"'commute' must be a boolean, got {data.get('commute')!r}")
    for key in NUMERIC_SUMMARY_KEYS:
        value = data.get(key)
        if value is not None and not is_number(value):
            return ValidationResult.invalid(f"'{key}' must be a number, got {value!r}")
    return ValidationResult.valid(data)


def validate_detail(data: Any, activity_id: int | None = None) -> ValidationResult:
    """Check that *data* looks like a detailed activity record.

    When *activity_id* is given the record must describe that activity.
    """
    if not isinstance(data, Mapping):
        return ValidationResult.invalid(f"expected a mapping, got {type(data).__name__}")
    detail_id = data.get("id")
    if not is_integer(detail_id):
        return ValidationResult.invalid(f"'id' must be an integer, got {detail_id!r}")
    if activity_id is not None and detail_id != activity_id:
        return ValidationResult.invalid(f"detail record is for activity {detail_id}")
    description = data.get("description")
    if description is not None and not isinstance(description, str):
        return ValidationResult.invalid("'description' must be a string")
    efforts = data.get("segment_efforts")
    if efforts is not None and not isinstance(efforts, list):
        return ValidationResult.invalid("'segment_efforts' must be a list")
    return ValidationResult.valid(data)
