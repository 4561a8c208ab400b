"""
Request field normalization.

A logical field may arrive under several key spellings (``startDate`` or
``start_date``); the first spelling present in the body wins. Coercions raise
``FieldValidationError`` labelled with the field name.
"""
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from trip_planner.core.exceptions import FieldValidationError

JsonBody = Dict[str, Any]

MAX_TRIP_DAYS = 120
INTEGER_MIN = -(2 ** 63)
INTEGER_MAX = 2 ** 63 - 1

_ABSENT = object()
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def value_of(body: JsonBody, keys: Sequence[str]) -> Any:
    """
    Return the value under the first key spelling present in ``body``.

    Args:
        body: Decoded JSON object
        keys: Accepted spellings in priority order

    Returns:
        The value (which may be ``None``), or ``None`` when no spelling is present
    """
    value = lookup(body, keys)
    return None if value is _ABSENT else value


def lookup(body: JsonBody, keys: Sequence[str]) -> Any:
    """Like ``value_of`` but returns the ``ABSENT`` sentinel when no key is present."""
    for key in keys:
        if key in body:
            return body[key]
    return _ABSENT


def has_any_key(body: JsonBody, keys: Sequence[str]) -> bool:
    return any(key in body for key in keys)


def as_required_string(value: Any, label: str) -> str:
    """
    Require a non-empty string.

    Raises:
        FieldValidationError: If the value is not a string or is blank
    """
    if not isinstance(value, str) or not value.strip():
        raise FieldValidationError(f"{label} is required", field=label)
    return value.strip()


def as_optional_string(value: Any, label: str) -> Optional[str]:
    """Absent, null and blank strings all normalize to ``None``."""
    if value is None or value is _ABSENT:
        return None
    if not isinstance(value, str):
        raise FieldValidationError(f"{label} must be a string", field=label)
    trimmed = value.strip()
    return trimmed or None


def as_required_integer(value: Any, label: str) -> int:
    """
    Accept a JSON integer or a string holding one.

    Values must fit a signed 64-bit column.

    Raises:
        FieldValidationError: If the value cannot be read as an integer
    """
    number = _read_integer(value)
    if number is None or not INTEGER_MIN <= number <= INTEGER_MAX:
        raise FieldValidationError(f"{label} must be an integer", field=label)
    return number


def _read_integer(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip(), 10)
        except ValueError:
            return None
    return None


def as_optional_integer(value: Any, label: str) -> Optional[int]:
    if value is None or value is _ABSENT or value == "":
        return None
    return as_required_integer(value, label)


def as_date_only(value: str, label: str) -> str:
    """
    Validate a ``YYYY-MM-DD`` calendar date.

    The string must survive a round trip through ``date`` unchanged, so
    ``2026-04-31`` is rejected.

    Raises:
        FieldValidationError: If the format or the calendar date is wrong
    """
    if not _DATE_PATTERN.match(value):
        raise FieldValidationError(f"{label} must be YYYY-MM-DD", field=label)
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        raise FieldValidationError(f"{label} is invalid", field=label)
    if parsed.isoformat() != value:
        raise FieldValidationError(f"{label} is invalid", field=label)
    return value


def as_iso_datetime(value: str, label: str) -> str:
    """
    Parse an instant and return it as UTC ISO-8601 with milliseconds.

    Naive values are read as UTC. ``2026-04-10T09:30:00+09:00`` becomes
    ``2026-04-10T00:30:00.000Z``.

    Raises:
        FieldValidationError: If the value does not parse or has no UTC equivalent
    """
    try:
        return format_instant(datetime.fromisoformat(value.strip()))
    except (ValueError, OverflowError):
        # OverflowError: parses, but the UTC conversion leaves the datetime range
        raise FieldValidationError(f"{label} must be a valid datetime", field=label)


def format_instant(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def as_choice(value: str, label: str, choices: Sequence[str]) -> str:
    if value not in choices:
        raise FieldValidationError(
            f"{label} must be one of {', '.join(choices)}", field=label
        )
    return value


def build_date_range(start_date: str, end_date: str) -> List[str]:
    """
    Inclusive list of calendar dates from ``start_date`` to ``end_date``.

    Raises:
        FieldValidationError: On an inverted range or a span over MAX_TRIP_DAYS
    """
    start = date.fromisoformat(start_date)
    end = date.fromisoformat(end_date)

    if start > end:
        raise FieldValidationError("startDate must be before or equal to endDate", field="startDate")

    span = (end - start).days + 1
    if span > MAX_TRIP_DAYS:
        raise FieldValidationError(f"Trip length is limited to {MAX_TRIP_DAYS} days", field="endDate")

    return [(start + timedelta(days=offset)).isoformat() for offset in range(span)]
