"""
Google Calendar format transformations.

Every field of a provider event is optional here. The projection to the
canonical CalendarEvent applies the default rules in one place so provider
schema drift surfaces in this module only.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from config.calendar import EventDefaults
from models.calendar_event import CalendarEvent, EventPayload
from utils.datetime_utils import midnight_utc_iso, normalize_utc_iso
from utils.exceptions import UpstreamError


class GoogleEventTime(BaseModel):
    """start/end of a Google event: dateTime for timed events, date for all-day"""
    model_config = ConfigDict(extra='ignore')

    dateTime: Optional[str] = None
    date: Optional[str] = None
    timeZone: Optional[str] = None


class GoogleAttendee(BaseModel):
    model_config = ConfigDict(extra='ignore')

    email: Optional[str] = None


class GoogleEvent(BaseModel):
    """The subset of a Google Calendar event resource the proxy reads"""
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    status: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    attendees: Optional[List[GoogleAttendee]] = None
    start: Optional[GoogleEventTime] = None
    end: Optional[GoogleEventTime] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == 'cancelled'


def _to_utc(event_time: Optional[GoogleEventTime]) -> Optional[str]:
    """
    Normalize a Google start/end to a UTC ISO string.

    dateTime (any offset) → same instant in UTC; date only → midnight UTC
    on that date; neither → None.
    """
    if event_time is None:
        return None
    try:
        if event_time.dateTime:
            return normalize_utc_iso(event_time.dateTime)
        if event_time.date:
            return midnight_utc_iso(event_time.date)
    except ValueError:
        raise UpstreamError(
            f"Unrecognised event time from provider: {event_time.dateTime or event_time.date}"
        )
    return None


def parse_google_event(google_event: Dict) -> GoogleEvent:
    """Validate raw provider JSON into the optional-field projection."""
    return GoogleEvent.model_validate(google_event or {})


def to_calendar_event(google_event: Dict) -> CalendarEvent:
    """
    Transform a Google Calendar event to the canonical CalendarEvent.

    Args:
        google_event: Event resource as returned by the Calendar API

    Returns:
        CalendarEvent with placeholder title, empty description and
        attendee list defaults applied

    Raises:
        UpstreamError: If a start/end time cannot be parsed
    """
    event = parse_google_event(google_event)
    return CalendarEvent(
        id=event.id or '',
        title=event.summary or EventDefaults.PLACEHOLDER_TITLE,
        description=event.description or '',
        attendees=[a.email for a in (event.attendees or []) if a.email],
        startUtc=_to_utc(event.start),
        endUtc=_to_utc(event.end),
    )


def from_event_payload(payload: EventPayload) -> Dict:
    """
    Transform a create/update payload to a Google Calendar request body.

    Both endpoints are explicitly marked UTC. The body is always complete:
    missing description and attendees are sent empty.
    """
    return {
        'summary': payload.title,
        'description': payload.description or '',
        'attendees': [{'email': email} for email in (payload.attendees or [])],
        'start': {
            'dateTime': payload.startUtc,
            'timeZone': EventDefaults.EVENT_TIMEZONE,
        },
        'end': {
            'dateTime': payload.endUtc,
            'timeZone': EventDefaults.EVENT_TIMEZONE,
        },
    }
