"""
Server settings loaded once from the environment.

Settings are built at startup and passed explicitly to the app factory and
the calendar proxy. Missing required values are reported loudly at startup;
protected routes also refuse to run until they are provided.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import List, Optional

from dotenv import load_dotenv

from utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Used only to sign the cookie when SESSION_PASSWORD is absent, so that
# unauthenticated routes keep working in development.
DEV_SESSION_PASSWORD = 'dev_password_32_chars_long_dev_password'


@dataclass(frozen=True)
class AppSettings:
    """Validated server configuration."""

    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: Optional[str] = None
    calendar_id: Optional[str] = None
    session_password: Optional[str] = None

    frontend_origin: str = 'http://localhost:5173'
    cookie_samesite: str = 'Lax'
    session_cookie_name: str = 'calendar_session'
    environment: str = 'development'
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    redis_url: Optional[str] = None

    # Env var name for each required field, in reporting order
    REQUIRED = (
        ('google_client_id', 'GOOGLE_CLIENT_ID'),
        ('google_client_secret', 'GOOGLE_CLIENT_SECRET'),
        ('google_redirect_uri', 'GOOGLE_REDIRECT_URI'),
        ('calendar_id', 'GOOGLE_CALENDAR_ID'),
        ('session_password', 'SESSION_PASSWORD'),
    )

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> 'AppSettings':
        """
        Build settings from environment variables (and a .env file).

        Empty strings are treated as unset.
        """
        if load_env_file:
            load_dotenv()

        def env(name: str, default: Optional[str] = None) -> Optional[str]:
            value = os.getenv(name)
            return value if value else default

        defaults = {f.name: f.default for f in fields(cls)}
        return cls(
            google_client_id=env('GOOGLE_CLIENT_ID'),
            google_client_secret=env('GOOGLE_CLIENT_SECRET'),
            google_redirect_uri=env('GOOGLE_REDIRECT_URI'),
            calendar_id=env('GOOGLE_CALENDAR_ID'),
            session_password=env('SESSION_PASSWORD'),
            frontend_origin=env('FRONTEND_ORIGIN', defaults['frontend_origin']),
            cookie_samesite=env('COOKIE_SAMESITE', defaults['cookie_samesite']).capitalize(),
            session_cookie_name=env('SESSION_COOKIE_NAME', defaults['session_cookie_name']),
            environment=env('APP_ENV', defaults['environment']).lower(),
            log_level=env('LOG_LEVEL', defaults['log_level']),
            log_file=env('LOG_FILE'),
            redis_url=env('REDIS_URL'),
        )

    def missing_keys(self) -> List[str]:
        """Names of required environment variables that are not set."""
        return [env_name for attr, env_name in self.REQUIRED if not getattr(self, attr)]

    @property
    def is_configured(self) -> bool:
        return not self.missing_keys()

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    @property
    def cookie_secret(self) -> str:
        """Secret used to sign and encrypt the session cookie."""
        return self.session_password or DEV_SESSION_PASSWORD

    def require(self) -> None:
        """
        Raise if any required value is missing.

        Raises:
            ConfigurationError: listing the missing environment variables
        """
        missing = self.missing_keys()
        if missing:
            raise ConfigurationError(missing)

    def validate(self, strict: bool = False) -> None:
        """
        Check required values at startup.

        Logs an error naming every missing key. With strict=True the
        process fails fast instead of serving 500s on protected routes.
        """
        missing = self.missing_keys()
        if not missing:
            logger.info("Server configuration complete")
            return

        logger.error(f"Missing server configuration: {', '.join(missing)}")
        if strict:
            raise ConfigurationError(missing)
