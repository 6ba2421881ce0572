"""UTC time helpers for SRS scheduling.

All ISO strings produced by this module are UTC and end with 'Z', with second precision:
YYYY-MM-DDTHH:MM:SSZ

Nothing in the scheduling core reads the wall clock on its own; callers pass
``now`` in explicitly. ``utc_now`` is the default clock for the service layer.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return current time as UTC ISO string with second precision and trailing 'Z'."""
    return utc_datetime_to_iso_z(utc_now())


def as_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_datetime_to_iso_z(dt: datetime) -> str:
    """Format a datetime as UTC ISO string with second precision and trailing 'Z'."""
    dt = as_utc(dt).replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


def parse_iso_z(s: str) -> datetime:
    """Parse an ISO-8601 string ending with 'Z' (or '+00:00') into UTC datetime.

    Accepts both second precision and fractional seconds.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(s))


def add_days(now: datetime, days: int) -> datetime:
    return as_utc(now) + timedelta(days=days)


def add_days_iso(now: datetime, days: int) -> str:
    return utc_datetime_to_iso_z(add_days(now, days))


def end_of_day(now: datetime) -> datetime:
    """Return the last representable instant of ``now``'s UTC calendar day."""
    return datetime.combine(as_utc(now).date(), time.max, tzinfo=timezone.utc)


def date_key(dt: datetime) -> str:
    """Return the UTC calendar day of ``dt`` as YYYY-MM-DD."""
    return as_utc(dt).date().isoformat()


def days_between(earlier: date, later: date) -> int:
    return (later - earlier).days


def is_due(due_date: datetime | str, now: datetime) -> bool:
    """Return True when an item scheduled for ``due_date`` is due at ``now``.

    An item is due at the exact instant of its due date, not only after it.
    """
    if isinstance(due_date, str):
        due_date = parse_iso_z(due_date)
    return as_utc(now) >= as_utc(due_date)
