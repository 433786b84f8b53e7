"""
Cookie-backed session state.

The session holds the delegated Google token set and the cached user email.
It is serialized to JSON, encrypted with the session secret and stored in
Flask's signed, http-only session cookie. There is no server-side store.
"""

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from flask import session

from utils.datetime_utils import format_utc_iso, parse_utc_instant
from utils.encryption import decrypt_token, encrypt_token

logger = logging.getLogger(__name__)

SESSION_KEY = 'calendar'


@dataclass(frozen=True)
class TokenRecord:
    """
    Versioned snapshot of the delegated credential.

    Records are never mutated. A refresh produces a new record through
    merged(), with the version bumped whenever any field changed.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None
    token_type: Optional[str] = 'Bearer'
    scope: Optional[str] = None
    id_token: Optional[str] = None
    version: int = 1

    def merged(self, **issued: Any) -> 'TokenRecord':
        """
        Merge newly issued token fields over this record.

        Fields issued as None keep their current value (Google omits the
        refresh token on refresh responses).

        Returns:
            self if nothing changed, otherwise a new record with version + 1
        """
        updates = {
            name: value for name, value in issued.items()
            if value is not None and getattr(self, name) != value
        }
        if not updates:
            return self
        return replace(self, version=self.version + 1, **updates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'access_token': self.access_token,
            'refresh_token': self.refresh_token,
            'expiry': format_utc_iso(self.expiry) if self.expiry else None,
            'token_type': self.token_type,
            'scope': self.scope,
            'id_token': self.id_token,
            'version': self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TokenRecord':
        expiry = data.get('expiry')
        return cls(
            access_token=data.get('access_token'),
            refresh_token=data.get('refresh_token'),
            expiry=parse_utc_instant(expiry) if expiry else None,
            token_type=data.get('token_type'),
            scope=data.get('scope'),
            id_token=data.get('id_token'),
            version=int(data.get('version', 1)),
        )


@dataclass(frozen=True)
class SessionState:
    """Everything the server keeps for one browser."""

    tokens: TokenRecord
    email: Optional[str] = None

    def with_tokens(self, tokens: TokenRecord) -> 'SessionState':
        if tokens is self.tokens:
            return self
        return replace(self, tokens=tokens)

    def to_dict(self) -> Dict[str, Any]:
        return {'tokens': self.tokens.to_dict(), 'email': self.email}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionState':
        return cls(tokens=TokenRecord.from_dict(data['tokens']), email=data.get('email'))


class SessionStore:
    """Reads and writes SessionState in the current request's cookie session."""

    def __init__(self, secret: str):
        self.secret = secret

    def encode(self, state: SessionState) -> str:
        return encrypt_token(json.dumps(state.to_dict()), self.secret)

    def decode(self, blob: str) -> Optional[SessionState]:
        """
        Decrypt and parse a stored session blob.

        Returns:
            SessionState, or None if the blob is unreadable (treated as
            logged out)
        """
        plain = decrypt_token(blob, self.secret)
        if not plain:
            return None
        try:
            return SessionState.from_dict(json.loads(plain))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Discarding malformed session payload: {type(e).__name__}")
            return None

    def load(self) -> Optional[SessionState]:
        blob = session.get(SESSION_KEY)
        if not blob:
            return None
        return self.decode(blob)

    def save(self, state: SessionState) -> None:
        session[SESSION_KEY] = self.encode(state)
        session.permanent = False

    def clear(self) -> None:
        session.clear()
