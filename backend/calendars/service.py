"""
Calendar proxy service.

Translates the proxy's operations into Google Calendar calls for one
session. Every provider call is preceded by a token freshness check; the
caller receives the (possibly refreshed) session state to persist.
"""

import logging
from typing import Callable, List, Optional, Tuple

from googleapiclient.discovery import build

from auth.session import SessionState
from calendars.google import auth as google_auth
from calendars.google import client, create, fetch
from config.settings import AppSettings
from models.calendar_event import CalendarEvent, EventPayload

logger = logging.getLogger(__name__)


class CalendarProxy:
    """Proxy for the configured Google calendar, acting on a session's behalf"""

    def __init__(self, settings: AppSettings, service_builder: Callable = build):
        """
        Args:
            settings: Server settings (client credentials, calendar id)
            service_builder: googleapiclient build function, injectable for tests
        """
        self.settings = settings
        self.service_builder = service_builder

    @property
    def calendar_id(self) -> str:
        return self.settings.calendar_id

    def authorize(self, state: SessionState) -> Tuple[object, SessionState]:
        """
        Produce a Calendar resource authorized for the session.

        Refreshes the access token when it is stale.

        Returns:
            (service, state) where state carries the refreshed token record
            if one was issued; callers persist it before proceeding

        Raises:
            UpstreamError: If the refresh token is missing or rejected
        """
        credentials = google_auth.credentials_from_record(state.tokens, self.settings)
        tokens = google_auth.refresh_if_needed(credentials, state.tokens)
        if tokens is not state.tokens:
            logger.info(f"Access token refreshed (token version {tokens.version})")
        service = client.build_calendar_service(credentials, self.service_builder)
        return service, state.with_tokens(tokens)

    def list_events(self, service, start: Optional[str] = None, end: Optional[str] = None) -> List[CalendarEvent]:
        return fetch.list_events(service, self.calendar_id, time_min=start, time_max=end)

    def create_event(self, service, payload: EventPayload) -> CalendarEvent:
        return create.create_event(service, self.calendar_id, payload)

    def update_event(self, service, event_id: str, payload: EventPayload) -> CalendarEvent:
        return create.update_event(service, self.calendar_id, event_id, payload)

    def delete_event(self, service, event_id: str) -> None:
        create.delete_event(service, self.calendar_id, event_id)

    @staticmethod
    def identity(state: Optional[SessionState]) -> dict:
        """Who is signed in, from the session alone (no provider call)."""
        if state is None:
            return {'authenticated': False}
        return {'authenticated': True, 'email': state.email}

    def authorization_url(self) -> str:
        return google_auth.get_authorization_url(self.settings)

    def complete_login(self, code: str) -> SessionState:
        """
        Exchange an authorization code and build a fresh session.

        Raises:
            UpstreamError: If the exchange or the email lookup fails
        """
        credentials = google_auth.exchange_code(self.settings, code)
        email = google_auth.fetch_user_email(credentials, self.service_builder)
        logger.info("User signed in with Google")
        return SessionState(tokens=google_auth.record_from_credentials(credentials), email=email)
