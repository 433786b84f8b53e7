"""
Google Calendar event creation, update and deletion.
Accepts EventPayload bodies and returns normalized CalendarEvents.
"""

from models.calendar_event import CalendarEvent, EventPayload
from utils.logging_utils import log_provider_call
from . import client, transform


@log_provider_call("events.insert")
def create_event(service, calendar_id: str, payload: EventPayload) -> CalendarEvent:
    """
    Create a single event in Google Calendar.

    Returns:
        The provider's representation of the created event; Google assigns
        the identifier

    Raises:
        UpstreamError: If the provider rejects the event
    """
    created = client.execute(
        service.events().insert(
            calendarId=calendar_id,
            body=transform.from_event_payload(payload)
        ),
        "Failed to create event"
    )
    return transform.to_calendar_event(created)


@log_provider_call("events.patch")
def update_event(service, calendar_id: str, event_id: str, payload: EventPayload) -> CalendarEvent:
    """
    Replace the fields of an existing event.

    The full body is always sent, so fields the caller omitted are cleared
    rather than left untouched.

    Raises:
        UpstreamError: If the provider rejects the update
    """
    updated = client.execute(
        service.events().patch(
            calendarId=calendar_id,
            eventId=event_id,
            body=transform.from_event_payload(payload)
        ),
        "Failed to update event"
    )
    return transform.to_calendar_event(updated)


@log_provider_call("events.delete")
def delete_event(service, calendar_id: str, event_id: str) -> None:
    """
    Delete an event.

    Raises:
        UpstreamError: If the provider rejects the deletion
    """
    client.execute(
        service.events().delete(calendarId=calendar_id, eventId=event_id),
        "Failed to delete event"
    )
