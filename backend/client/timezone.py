"""
Display-zone conversion for the calendar client.

Events are stored in UTC; the client shows and edits them in one of two
supported zones, using the editable pattern yyyy-MM-ddTHH:mm (minute
precision, no seconds or offset).
"""

import re
from datetime import datetime
from typing import Optional, Union

import pytz

from config.calendar import DisplayConfig
from utils.datetime_utils import format_utc_iso, parse_utc_instant
from utils.exceptions import UnsupportedTimezoneError

TIMEZONES = DisplayConfig.TIMEZONES
SUPPORTED_ZONES = tuple(name for name, _label in TIMEZONES)
DEFAULT_TIMEZONE = DisplayConfig.DEFAULT_TIMEZONE

_INPUT_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}')


def get_zone(zone: str):
    """
    Resolve a supported display zone.

    Raises:
        UnsupportedTimezoneError: For any zone outside the supported set
    """
    if zone not in SUPPORTED_ZONES:
        raise UnsupportedTimezoneError(
            f"Unsupported timezone '{zone}'. Supported: {', '.join(SUPPORTED_ZONES)}"
        )
    return pytz.timezone(zone)


def zone_label(zone: str) -> str:
    get_zone(zone)
    return dict(TIMEZONES)[zone]


def localize(naive: datetime, zone: str) -> datetime:
    """
    Attach a display zone to a wall-clock time.

    Wall-clock times that do not exist (spring-forward gap) are shifted
    forward by the gap; repeated times (fall-back) resolve to standard time.
    """
    tz = get_zone(zone)
    return tz.normalize(tz.localize(naive, is_dst=False))


def from_input_value(value: Optional[str], zone: str) -> Optional[datetime]:
    """
    Strictly parse an editable local string.

    Returns:
        Aware datetime in the display zone, or None when the value is empty,
        does not match yyyy-MM-ddTHH:mm exactly, or names an impossible date
    """
    if not value or not _INPUT_PATTERN.fullmatch(value):
        return None
    try:
        naive = datetime.strptime(value, DisplayConfig.INPUT_FORMAT)
    except ValueError:
        return None
    return localize(naive, zone)


def to_input_value(instant: Union[str, datetime], zone: str) -> str:
    """
    Project a UTC instant into the display zone as an editable string.

    Args:
        instant: Aware datetime or ISO-8601 string (naive means UTC)
        zone: Supported display zone
    """
    local = parse_utc_instant(instant).astimezone(get_zone(zone))
    return local.strftime(DisplayConfig.INPUT_FORMAT)


def to_utc_iso(value: Optional[str], zone: str) -> Optional[str]:
    """Convert an editable local string to a UTC ISO string, or None if unparseable."""
    local = from_input_value(value, zone)
    if local is None:
        return None
    return format_utc_iso(local)


def duration_hours(start_local: Optional[str], end_local: Optional[str], zone: str) -> str:
    """
    Duration preview between two editable strings, e.g. '1.5h'.

    Returns the placeholder when either side fails to parse.
    """
    start = from_input_value(start_local, zone)
    end = from_input_value(end_local, zone)
    if start is None or end is None:
        return DisplayConfig.EMPTY_PLACEHOLDER
    hours = (end - start).total_seconds() / 3600
    return f"{hours:.1f}h"


def utc_preview(start_local: Optional[str], zone: str) -> str:
    """UTC rendering of a local start value, e.g. 'Jun 01, 5:30 PM', or the placeholder."""
    local = from_input_value(start_local, zone)
    if local is None:
        return DisplayConfig.EMPTY_PLACEHOLDER
    utc = local.astimezone(pytz.utc)
    hour = utc.hour % 12 or 12
    return f"{utc.strftime('%b %d')}, {hour}:{utc.minute:02d} {utc.strftime('%p')}"
