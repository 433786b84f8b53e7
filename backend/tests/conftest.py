"""
Shared fixtures for the calendar proxy tests.

The Google API is replaced by a MagicMock resource handed out by a fake
service builder; no test talks to the network.
"""

import os
import sys
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import MagicMock

import pytest

# Add backend to path for imports
backend_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

from app import create_app
from auth.session import SESSION_KEY, SessionState, TokenRecord
from calendars.service import CalendarProxy
from config.settings import AppSettings


def make_settings(**overrides) -> AppSettings:
    values = dict(
        google_client_id='client-id.apps.googleusercontent.com',
        google_client_secret='client-secret',
        google_redirect_uri='http://localhost:4000/auth/google/callback',
        calendar_id='team@group.calendar.google.com',
        session_password='test_session_password_32_chars_long',
        frontend_origin='http://localhost:5173',
    )
    values.update(overrides)
    return AppSettings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def google_service():
    """Fake Calendar/userinfo resource; configure .execute return values per test."""
    return MagicMock(name='google_service')


@pytest.fixture
def service_builder(google_service):
    return MagicMock(name='build', return_value=google_service)


@pytest.fixture
def app(settings, service_builder):
    proxy = CalendarProxy(settings, service_builder=service_builder)
    flask_app = create_app(settings=settings, calendar_proxy=proxy, strict_config=False)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def valid_tokens():
    return TokenRecord(
        access_token='access-1',
        refresh_token='refresh-1',
        expiry=datetime.now(dt_timezone.utc) + timedelta(hours=1),
        scope='https://www.googleapis.com/auth/calendar openid',
    )


@pytest.fixture
def login(app, client, valid_tokens):
    """Put a session in the test client's cookie jar."""
    def _login(tokens: TokenRecord = None, email: str = 'user@example.com') -> SessionState:
        state = SessionState(tokens=tokens or valid_tokens, email=email)
        with client.session_transaction() as sess:
            sess[SESSION_KEY] = app.extensions['session_store'].encode(state)
        return state
    return _login


@pytest.fixture
def stored_state(app, client):
    """Read back the SessionState currently held in the cookie."""
    def _stored_state():
        with client.session_transaction() as sess:
            blob = sess.get(SESSION_KEY)
        return app.extensions['session_store'].decode(blob) if blob else None
    return _stored_state
