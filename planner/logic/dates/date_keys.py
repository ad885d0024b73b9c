"""Date keys and labels for the planner.

A date key is the ISO ``YYYY-MM-DD`` form of the nominal calendar day. It is
built from the date's own fields, so the machine's local UTC offset never moves
a day onto its neighbour, and keys sort in calendar order.

"Today" is evaluated in a reference timezone (``PLANNER_TIMEZONE``) rather than
in the machine's local zone.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from planner.utilities.config import PLANNER_TIMEZONE
from planner.utilities.constants import DATE_KEY_FORMAT, RELATIVE_LABELS, SECONDS_PER_DAY

DateLike = Union[date, datetime]


def resolve_tz(name: Optional[str] = None) -> tzinfo:
    """Return the tzinfo for an IANA name (default: configured reference zone)."""
    tz_name = (name or PLANNER_TIMEZONE).strip()
    if tz_name.upper() in ("UTC", "Z", "GMT"):
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def _as_date(value: DateLike) -> date:
    # datetime is a subclass of date; keep its wall-clock date, drop the time
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def current_date(tz: Optional[str] = None, now: Optional[datetime] = None) -> date:
    """Today's date as seen in the reference timezone.

    ``now`` may be passed to pin the clock; a naive ``now`` is taken as UTC.
    """
    zone = resolve_tz(tz)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone).date()


def to_key(value: DateLike) -> str:
    d = _as_date(value)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_key(key: str) -> date:
    """Inverse of :func:`to_key`. Raises ValueError for malformed keys."""
    if not isinstance(key, str) or len(key) != 10:
        raise ValueError(f"Invalid date key: {key!r} (expected YYYY-MM-DD)")
    try:
        parsed = datetime.strptime(key, DATE_KEY_FORMAT).date()
    except ValueError as ex:
        raise ValueError(f"Invalid date key: {key!r} (expected YYYY-MM-DD)") from ex
    # strptime also takes " 5" for %d; only the canonical spelling is a key
    if to_key(parsed) != key:
        raise ValueError(f"Invalid date key: {key!r} (expected {to_key(parsed)!r})")
    return parsed


def is_date_key(key) -> bool:
    try:
        parse_key(key)
    except ValueError:
        return False
    return True


def shift_day(value: DateLike, days: int) -> date:
    return _as_date(value) + timedelta(days=days)


def _midnight(value: DateLike, zone: tzinfo) -> datetime:
    return datetime.combine(_as_date(value), time.min, tzinfo=zone)


def day_difference(value: DateLike, reference: DateLike, tz: Optional[str] = None) -> int:
    """Calendar days from ``reference`` to ``value``.

    Both sides are moved to local midnight in the reference zone and compared
    as absolute instants. A day spanning a DST change lasts 23 or 25 hours, so
    the quotient is rounded, never truncated.
    """
    zone = resolve_tz(tz)
    a = _midnight(value, zone).astimezone(timezone.utc)
    b = _midnight(reference, zone).astimezone(timezone.utc)
    return round((a - b).total_seconds() / SECONDS_PER_DAY)


def to_display_label(value: DateLike, today: Optional[date] = None, tz: Optional[str] = None) -> str:
    """'Today' / 'Tomorrow' / 'Yesterday', else e.g. 'Monday, March 11'."""
    if today is None:
        today = current_date(tz)
    diff = day_difference(value, today, tz)
    if diff in RELATIVE_LABELS:
        return RELATIVE_LABELS[diff]
    d = _as_date(value)
    return f"{d:%A}, {d:%B} {d.day}"


def to_short_label(value: DateLike) -> str:
    d = _as_date(value)
    return f"{d:%b} {d.day}"


def is_relative_label(label: str) -> bool:
    return label in RELATIVE_LABELS.values()


__all__ = [
    'resolve_tz', 'current_date', 'to_key', 'parse_key', 'is_date_key', 'shift_day',
    'day_difference', 'to_display_label', 'to_short_label', 'is_relative_label',
]
