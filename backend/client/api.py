"""
HTTP client for the calendar proxy API.

One requests.Session is shared by every call so the session cookie set at
login travels with each request.
"""

import os
from urllib.parse import quote
from typing import Dict, List, Optional

import requests

from config.calendar import DisplayConfig
from utils.exceptions import ApiError


def _handle_json(response: requests.Response):
    """Return the JSON body, or raise ApiError carrying the response text."""
    if not response.ok:
        raise ApiError(response.status_code, response.text)
    return response.json()


class CalendarApiClient:
    """Client for the proxy's JSON-over-HTTP contract"""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        """
        Args:
            base_url: API origin; defaults to CALENDAR_API_BASE_URL or localhost:4000
            session: Shared requests session (cookie jar)
        """
        base_url = base_url or os.getenv('CALENDAR_API_BASE_URL') or DisplayConfig.DEFAULT_API_BASE_URL
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def get_events(self, start: str, end: str) -> List[Dict]:
        response = self.session.get(self._url('/events'), params={'start': start, 'end': end})
        return _handle_json(response)

    def create_event(self, payload: Dict) -> Dict:
        response = self.session.post(self._url('/events'), json=payload)
        return _handle_json(response)

    def update_event(self, event_id: str, payload: Dict) -> Dict:
        response = self.session.patch(self._url(f'/events/{quote(event_id, safe="")}'), json=payload)
        return _handle_json(response)

    def delete_event(self, event_id: str) -> Dict:
        response = self.session.delete(self._url(f'/events/{quote(event_id, safe="")}'))
        return _handle_json(response)

    def get_auth_status(self) -> Dict:
        response = self.session.get(self._url('/auth/me'))
        return _handle_json(response)

    def logout(self) -> Dict:
        response = self.session.post(self._url('/auth/logout'))
        return _handle_json(response)

    def health(self) -> Dict:
        response = self.session.get(self._url('/health'))
        return _handle_json(response)

    def login_url(self) -> str:
        """Where the browser goes to start the Google login."""
        return self._url('/auth/google')
