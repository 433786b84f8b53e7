"""
Google Calendar authentication and credential management.
Handles the OAuth consent redirect, code exchange, token refresh and
the identity lookup made at login.
"""

import os
from datetime import datetime
from typing import Callable, Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from auth.session import TokenRecord
from config.calendar import GoogleConfig
from config.settings import AppSettings
from utils.datetime_utils import ensure_utc
from utils.exceptions import UpstreamError
from utils.logging_utils import log_provider_call
from . import client

# Google answers with the granted scope list (incl. previously granted ones
# when include_granted_scopes is set); oauthlib must not reject that.
os.environ.setdefault('OAUTHLIB_RELAX_TOKEN_SCOPE', '1')


def _client_config(settings: AppSettings) -> dict:
    return {
        "web": {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "auth_uri": GoogleConfig.AUTH_URI,
            "token_uri": GoogleConfig.TOKEN_URI,
            "redirect_uris": [settings.google_redirect_uri]
        }
    }


def create_flow(settings: AppSettings) -> Flow:
    """Create an OAuth flow from the configured client id/secret."""
    return Flow.from_client_config(
        _client_config(settings),
        scopes=GoogleConfig.SCOPES,
        redirect_uri=settings.google_redirect_uri,
        autogenerate_code_verifier=False
    )


def get_authorization_url(settings: AppSettings) -> str:
    """
    Generate the Google consent-screen URL.

    Offline access plus prompt=consent make Google issue a refresh token on
    every login.

    Returns:
        Authorization URL to redirect the user to
    """
    flow = create_flow(settings)
    authorization_url, _ = flow.authorization_url(
        access_type='offline',
        include_granted_scopes='true',
        prompt='consent'
    )
    return authorization_url


@log_provider_call("oauth.token")
def exchange_code(settings: AppSettings, code: str) -> Credentials:
    """
    Exchange an authorization code for a token set.

    Raises:
        UpstreamError: If Google rejects the code or cannot be reached
    """
    flow = create_flow(settings)
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        raise UpstreamError(client.provider_error_message(e, "Failed to exchange authorization code")) from e
    return flow.credentials


@log_provider_call("oauth2.userinfo")
def fetch_user_email(credentials: Credentials, service_builder: Callable = build) -> Optional[str]:
    """
    Look up the authenticated user's email via the userinfo endpoint.

    Raises:
        UpstreamError: If the lookup fails
    """
    name, version = GoogleConfig.USERINFO_API
    service = service_builder(name, version, credentials=credentials, cache_discovery=False)
    user_info = client.execute(service.userinfo().get(), "Failed to load user profile")
    return user_info.get('email')


def _naive_utc(expiry: Optional[datetime]) -> Optional[datetime]:
    # google-auth compares expiry against a naive UTC clock
    if expiry is None:
        return None
    return ensure_utc(expiry).replace(tzinfo=None)


def credentials_from_record(record: TokenRecord, settings: AppSettings) -> Credentials:
    """Build google-auth Credentials from a stored token record."""
    credentials = Credentials(
        token=record.access_token,
        refresh_token=record.refresh_token,
        id_token=record.id_token,
        token_uri=GoogleConfig.TOKEN_URI,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        scopes=record.scope.split() if record.scope else None
    )
    credentials.expiry = _naive_utc(record.expiry)
    return credentials


def record_from_credentials(credentials: Credentials, base: Optional[TokenRecord] = None) -> TokenRecord:
    """
    Capture Credentials as a token record.

    With a base record the fields are merged over it (new version only if
    something changed); otherwise a first version is created.
    """
    scopes = getattr(credentials, 'granted_scopes', None) or credentials.scopes
    issued = {
        'access_token': credentials.token,
        'refresh_token': credentials.refresh_token,
        'expiry': ensure_utc(credentials.expiry) if credentials.expiry else None,
        'scope': ' '.join(scopes) if scopes else None,
        'id_token': credentials.id_token,
    }
    if base is None:
        return TokenRecord(token_type='Bearer', version=1, **issued)
    return base.merged(**issued)


@log_provider_call("oauth.refresh")
def _refresh(credentials: Credentials) -> None:
    credentials.refresh(Request())


def refresh_if_needed(credentials: Credentials, record: TokenRecord) -> TokenRecord:
    """
    Make sure the access token is current before a provider call.

    Args:
        credentials: Credentials built from record (refreshed in place)
        record: The stored token record

    Returns:
        record itself when the access token is still valid, otherwise a new
        record carrying the freshly issued fields

    Raises:
        UpstreamError: If no refresh token is stored or Google rejects it
    """
    if credentials.valid:
        return record

    if not credentials.refresh_token:
        raise UpstreamError("Access token expired and no refresh token is available")

    try:
        _refresh(credentials)
    except GoogleAuthError as e:
        raise UpstreamError(client.provider_error_message(e, "Failed to refresh access token")) from e

    return record_from_credentials(credentials, record)
