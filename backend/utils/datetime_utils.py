"""Date and time helpers for UTC instants exchanged with the provider and client."""

from datetime import date, datetime
from typing import Optional, Union

import pytz
from dateutil.parser import isoparse


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure datetime is in UTC.

    Naive datetimes are taken to already be UTC.
    """
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def parse_utc_instant(value: Union[str, datetime]) -> datetime:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Accepts a trailing 'Z', explicit offsets and fractional seconds.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(isoparse(value))


def format_utc_iso(dt: datetime) -> str:
    """
    Format a datetime as UTC ISO-8601 with millisecond precision.

    Example: 2024-06-01T17:30:00.000Z
    """
    dt = ensure_utc(dt)
    return dt.strftime('%Y-%m-%dT%H:%M:%S.') + f"{dt.microsecond // 1000:03d}Z"


def midnight_utc_iso(day: Union[str, date]) -> str:
    """
    Midnight UTC on a calendar date, as used for all-day events.

    Raises:
        ValueError: If the string is not a YYYY-MM-DD date
    """
    if isinstance(day, str):
        day = datetime.strptime(day, '%Y-%m-%d').date()
    return format_utc_iso(datetime(day.year, day.month, day.day, tzinfo=pytz.utc))


def normalize_utc_iso(value: Optional[str]) -> Optional[str]:
    """Re-express any ISO-8601 instant as the canonical UTC string."""
    if not value:
        return None
    return format_utc_iso(parse_utc_instant(value))
