"""
Google Calendar event fetching.
Returns events normalized to the canonical CalendarEvent shape.
"""

from typing import Dict, List, Optional

from config.calendar import GoogleConfig
from models.calendar_event import CalendarEvent
from utils.logging_utils import log_provider_call
from . import client, transform


@log_provider_call("events.list")
def list_raw_events(
    service,
    calendar_id: str,
    time_min: Optional[str] = None,
    time_max: Optional[str] = None
) -> List[Dict]:
    """
    Fetch every event occurrence in a window, following pagination.

    Recurring events are expanded into single instances and ordered by
    start time. Bounds are only sent when given.

    Args:
        service: Calendar v3 resource
        calendar_id: Calendar to read
        time_min: Lower bound for event end time (UTC ISO), optional
        time_max: Upper bound for event start time (UTC ISO), optional

    Returns:
        Raw event resources as returned by Google

    Raises:
        UpstreamError: If any page request fails
    """
    params = {
        'calendarId': calendar_id,
        'singleEvents': True,
        'orderBy': 'startTime',
        'maxResults': GoogleConfig.LIST_PAGE_SIZE,
    }
    if time_min:
        params['timeMin'] = time_min
    if time_max:
        params['timeMax'] = time_max

    items: List[Dict] = []
    page_token = None
    while True:
        if page_token:
            params['pageToken'] = page_token
        page = client.execute(service.events().list(**params), "Failed to load events")
        items.extend(page.get('items', []))
        page_token = page.get('nextPageToken')
        if not page_token:
            return items


def list_events(
    service,
    calendar_id: str,
    time_min: Optional[str] = None,
    time_max: Optional[str] = None
) -> List[CalendarEvent]:
    """
    List non-cancelled events in a window as CalendarEvents.

    Raises:
        UpstreamError: If the provider call fails or returns an unreadable time
    """
    raw_events = list_raw_events(service, calendar_id, time_min, time_max)
    return [
        transform.to_calendar_event(event)
        for event in raw_events
        if event.get('status') != 'cancelled'
    ]
