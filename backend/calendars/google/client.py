"""
Google API service construction and request execution.
Every provider failure leaves this module as an UpstreamError.
"""

from typing import Any, Callable, Dict

from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiClientError, HttpError
from httplib2 import HttpLib2Error

from config.calendar import GoogleConfig
from utils.exceptions import UpstreamError

PROVIDER_ERRORS = (GoogleApiClientError, GoogleAuthError, HttpLib2Error, OSError)


def build_calendar_service(credentials: Credentials, service_builder: Callable = build):
    """Build a Calendar v3 resource authorized with the given credentials."""
    name, version = GoogleConfig.CALENDAR_API
    return service_builder(name, version, credentials=credentials, cache_discovery=False)


def provider_error_message(error: Exception, default: str) -> str:
    """
    Best human-readable message for a provider failure.

    HttpError carries Google's error reason; other errors use their text.
    Falls back to default when the provider gave no message.
    """
    if isinstance(error, HttpError):
        reason = getattr(error, 'reason', None)
        if reason:
            return str(reason)
    return str(error) or default


def execute(request: Any, default_message: str) -> Dict:
    """
    Execute a prepared googleapiclient request.

    No retries: a failure is reported once, with the provider's message.

    Raises:
        UpstreamError: On any HTTP, auth or transport failure
    """
    try:
        return request.execute()
    except PROVIDER_ERRORS as e:
        raise UpstreamError(provider_error_message(e, default_message)) from e
