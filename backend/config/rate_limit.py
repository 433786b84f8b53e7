"""
Rate limiting configuration for the API.
Supports both in-memory (development) and Redis (production) storage.
"""

import os
from typing import Optional


class RateLimitConfig:
    """Rate limiting configuration."""

    # Storage backend
    REDIS_URL: Optional[str] = os.getenv('REDIS_URL')

    # Defaults applied globally by Flask-Limiter. A calendar page load makes a
    # handful of calls, and every navigation refetches the visible range.
    DEFAULT_LIMITS = ["2000 per day", "500 per hour"]

    # Login endpoints hit Google's consent/token endpoints
    AUTH_LIMIT = "30 per minute"

    @classmethod
    def get_storage_uri(cls, redis_url: Optional[str] = None) -> str:
        """
        Get storage URI for Flask-Limiter.

        Returns:
            Redis URL if configured, otherwise in-memory storage.
        """
        redis_url = redis_url or cls.REDIS_URL
        if redis_url:
            return redis_url
        else:
            return "memory://"


# Production deployment note:
# Set REDIS_URL environment variable to enable Redis:
#   export REDIS_URL="redis://localhost:6379"
#   or
#   export REDIS_URL="redis://:password@redis-host:6379/0"
