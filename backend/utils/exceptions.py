"""Custom exceptions shared by the calendar proxy server and client."""

from typing import Iterable, Optional


class CalendarProxyError(Exception):
    """Base exception for calendar proxy errors."""

    status_code = 500

    def to_dict(self) -> dict:
        return {'error': str(self)}


class ConfigurationError(CalendarProxyError):
    """Raised when required server configuration is missing."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__("Missing server configuration")

    def to_dict(self) -> dict:
        return {'error': str(self), 'missing': self.missing}


class AuthenticationError(CalendarProxyError):
    """Raised when a request has no authenticated session."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class UpstreamError(CalendarProxyError):
    """Raised when a call to the calendar provider fails for any reason."""


class InvalidRequestError(CalendarProxyError):
    """Raised when a request body does not have the expected shape."""

    status_code = 400

    def __init__(self, message: str, details: Optional[list] = None):
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> dict:
        return {'error': str(self), 'code': 'INVALID_REQUEST', 'details': self.details}


class ValidationError(CalendarProxyError):
    """Raised client-side when a local date-time string cannot be parsed."""


class UnsupportedTimezoneError(ValidationError):
    """Raised when a display zone outside the supported set is requested."""


class ApiError(CalendarProxyError):
    """Raised by the HTTP client when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message or f"Request failed: {status_code}")
