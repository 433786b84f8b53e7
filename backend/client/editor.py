"""
Event editor state machine.

The editor is either closed, creating an event from a selected time range,
or editing an existing event. Save and delete are its only side effects:
one API call, then close and refresh the visible range. There is no
optimistic update; the view refetches from the server.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from models.calendar_event import CalendarEvent
from . import timezone

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class EventDraft:
    """Zone-local, string-based form state of the event being edited"""

    title: str = ""
    description: str = ""
    attendees: str = ""
    start_local: str = ""
    end_local: str = ""
    id: Optional[str] = None


EMPTY_DRAFT = EventDraft()


def split_attendees(attendees: str) -> List[str]:
    """Split a comma-delimited attendee string, trimming and dropping empties."""
    return [email.strip() for email in attendees.split(',') if email.strip()]


def draft_from_event(event: CalendarEvent, zone: str) -> EventDraft:
    """Project a stored event into an editable draft in the display zone."""
    return EventDraft(
        id=event.id,
        title=event.title,
        description=event.description or "",
        attendees=", ".join(event.attendees),
        start_local=timezone.to_input_value(event.startUtc, zone) if event.startUtc else "",
        end_local=timezone.to_input_value(event.endUtc, zone) if event.endUtc else "",
    )


def draft_from_selection(start: datetime, end: datetime, zone: str) -> EventDraft:
    """A blank draft spanning a selected time range."""
    return replace(
        EMPTY_DRAFT,
        start_local=timezone.to_input_value(start, zone),
        end_local=timezone.to_input_value(end, zone),
    )


def build_payload(draft: EventDraft, zone: str) -> Optional[Dict]:
    """
    Turn a draft into a create/update payload.

    Returns:
        The payload, or None when either time field fails to parse
    """
    start_utc = timezone.to_utc_iso(draft.start_local, zone)
    end_utc = timezone.to_utc_iso(draft.end_local, zone)
    if not start_utc or not end_utc:
        return None

    return {
        'title': draft.title.strip(),
        'description': draft.description.strip(),
        'attendees': split_attendees(draft.attendees),
        'startUtc': start_utc,
        'endUtc': end_utc,
    }


class EventEditor:
    """Create/edit modal state and its save and delete actions"""

    def __init__(self, api, zone: str = timezone.DEFAULT_TIMEZONE, on_change: Optional[Callable[[], None]] = None):
        """
        Args:
            api: CalendarApiClient (or anything with the same methods)
            zone: Current display zone
            on_change: Called after a successful save or delete (view refetch)
        """
        self.api = api
        self.zone = zone
        self.on_change = on_change
        self.mode = EditorMode.CLOSED
        self.draft = EMPTY_DRAFT
        self.active_event: Optional[CalendarEvent] = None

    @property
    def is_open(self) -> bool:
        return self.mode is not EditorMode.CLOSED

    @property
    def heading(self) -> str:
        return "Create event" if self.mode is EditorMode.CREATE else "Edit event"

    @property
    def duration(self) -> str:
        return timezone.duration_hours(self.draft.start_local, self.draft.end_local, self.zone)

    @property
    def utc_preview(self) -> str:
        return timezone.utc_preview(self.draft.start_local, self.zone)

    def open_create(self, start: datetime, end: datetime) -> None:
        self.mode = EditorMode.CREATE
        self.active_event = None
        self.draft = draft_from_selection(start, end, self.zone)

    def open_edit(self, event: CalendarEvent) -> None:
        self.mode = EditorMode.EDIT
        self.active_event = event
        self.draft = draft_from_event(event, self.zone)

    def change(self, **fields) -> EventDraft:
        """Apply edits to the draft (title, description, attendees, start_local, end_local)."""
        self.draft = replace(self.draft, **fields)
        return self.draft

    def close(self) -> None:
        self.mode = EditorMode.CLOSED
        self.active_event = None
        self.draft = EMPTY_DRAFT

    def save(self) -> Optional[Dict]:
        """
        Persist the draft.

        Returns:
            The server's event, or None when the save was refused (editor
            closed, or a time field that does not parse; nothing is sent)

        Raises:
            ApiError: On a failed request; the editor stays open with the draft
        """
        if not self.is_open:
            return None

        payload = build_payload(self.draft, self.zone)
        if payload is None:
            logger.debug("Save refused: start or end time does not parse")
            return None

        if self.mode is EditorMode.CREATE:
            result = self.api.create_event(payload)
        else:
            result = self.api.update_event(self.draft.id, payload)

        self._finish()
        return result

    def delete(self) -> bool:
        """
        Delete the event being edited.

        Returns:
            True if a delete was issued, False outside edit mode

        Raises:
            ApiError: On a failed request; the editor stays open
        """
        if self.mode is not EditorMode.EDIT or self.active_event is None:
            return False

        self.api.delete_event(self.active_event.id)
        self._finish()
        return True

    def _finish(self) -> None:
        self.close()
        if self.on_change:
            self.on_change()
