"""
Calendar view model.

Tracks the visible date range in the display zone, fetches the events in
that range from the proxy, and routes selections and clicks to the editor.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple

import pytz
import requests
from dateutil.relativedelta import relativedelta

from config.calendar import DisplayConfig
from models.calendar_event import CalendarEvent
from utils.datetime_utils import format_utc_iso
from utils.exceptions import ApiError
from . import timezone
from .editor import EventEditor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    """Identifies the range a fetch was started for"""
    generation: int
    start: str
    end: str


def _week_start(day: date) -> date:
    # Weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _check_view(view: str) -> None:
    if view not in DisplayConfig.VIEWS:
        raise ValueError(f"Unknown view '{view}'. Supported: {', '.join(DisplayConfig.VIEWS)}")


def visible_dates(view: str, anchor: date) -> Tuple[date, date]:
    """
    First visible date and the date after the last one.

    Month grids always show six whole weeks.
    """
    if view == 'timeGridDay':
        return anchor, anchor + timedelta(days=1)
    if view == 'timeGridWeek':
        start = _week_start(anchor)
        return start, start + timedelta(days=7)
    if view == 'dayGridMonth':
        start = _week_start(anchor.replace(day=1))
        return start, start + timedelta(weeks=6)
    raise ValueError(f"Unknown view '{view}'. Supported: {', '.join(DisplayConfig.VIEWS)}")


class CalendarView:
    """Visible range, fetched events and editor wiring for the calendar widget"""

    def __init__(
        self,
        api,
        zone: str = timezone.DEFAULT_TIMEZONE,
        view: str = DisplayConfig.DEFAULT_VIEW,
        now: Optional[Callable[[], datetime]] = None
    ):
        timezone.get_zone(zone)
        _check_view(view)

        self.api = api
        self.zone = zone
        self.view = view
        self._now = now or (lambda: datetime.now(pytz.utc))
        self.anchor = self._today()
        self.events: List[CalendarEvent] = []
        self.auth_state: Dict = {'authenticated': False}
        self._generation = 0
        self.editor = EventEditor(api, zone=zone, on_change=self.refetch)

    def _today(self) -> date:
        return self._now().astimezone(timezone.get_zone(self.zone)).date()

    # ------------------------------------------------------------------
    # Range
    # ------------------------------------------------------------------

    def visible_range(self) -> Tuple[str, str]:
        """Visible range as UTC ISO bounds, computed from local midnights."""
        first, after_last = visible_dates(self.view, self.anchor)
        start = timezone.localize(datetime.combine(first, datetime.min.time()), self.zone)
        end = timezone.localize(datetime.combine(after_last, datetime.min.time()), self.zone)
        return format_utc_iso(start), format_utc_iso(end)

    def _step(self) -> relativedelta:
        if self.view == 'dayGridMonth':
            return relativedelta(months=1)
        if self.view == 'timeGridWeek':
            return relativedelta(weeks=1)
        return relativedelta(days=1)

    def _move_to(self, anchor: date) -> bool:
        self.anchor = anchor
        self._generation += 1
        return self.refetch()

    def next(self) -> bool:
        return self._move_to(self.anchor + self._step())

    def prev(self) -> bool:
        return self._move_to(self.anchor - self._step())

    def today(self) -> bool:
        return self._move_to(self._today())

    def change_view(self, view: str) -> bool:
        _check_view(view)
        self.view = view
        return self._move_to(self.anchor)

    def set_timezone(self, zone: str) -> bool:
        """
        Switch the display zone and refetch.

        Raises:
            UnsupportedTimezoneError: For zones outside the supported set
        """
        timezone.get_zone(zone)
        self.zone = zone
        self.editor.zone = zone
        return self._move_to(self.anchor)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def begin_fetch(self) -> FetchTicket:
        start, end = self.visible_range()
        return FetchTicket(self._generation, start, end)

    def complete_fetch(self, ticket: FetchTicket, events: List[Dict]) -> bool:
        """
        Apply fetched events if the range has not changed since the fetch began.

        Returns:
            True if applied, False if the result was stale and discarded
        """
        if ticket.generation != self._generation:
            logger.debug(f"Discarding stale fetch for {ticket.start}..{ticket.end}")
            return False
        self.events = [CalendarEvent.model_validate(event) for event in events]
        return True

    def refetch(self) -> bool:
        """
        Fetch the visible range.

        Raises:
            ApiError: On a failed fetch; previously rendered events stay
        """
        ticket = self.begin_fetch()
        events = self.api.get_events(ticket.start, ticket.end)
        return self.complete_fetch(ticket, events)

    def rendered_events(self) -> List[Dict]:
        """Events projected into the display zone."""
        return [
            {
                'id': event.id,
                'title': event.title,
                'start': timezone.to_input_value(event.startUtc, self.zone) if event.startUtc else None,
                'end': timezone.to_input_value(event.endUtc, self.zone) if event.endUtc else None,
                'event': event,
            }
            for event in self.events
        ]

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def select(self, start: datetime, end: datetime) -> None:
        """A time range was selected: open the editor in create mode."""
        self.editor.open_create(start, end)

    def click(self, event_id: str) -> bool:
        """
        An event was clicked: open the editor in edit mode.

        Returns:
            False if no rendered event has that id
        """
        for event in self.events:
            if event.id == event_id:
                self.editor.open_edit(event)
                return True
        return False

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def load_auth_status(self) -> Dict:
        """Ask the server who is signed in; any failure counts as signed out."""
        try:
            self.auth_state = self.api.get_auth_status()
        except (ApiError, requests.RequestException) as e:
            logger.warning(f"Auth status unavailable: {e}")
            self.auth_state = {'authenticated': False}
        return self.auth_state

    @property
    def login_url(self) -> str:
        return self.api.login_url()
