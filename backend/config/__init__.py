"""
Configuration Module

- config/settings.py   → Environment-sourced server settings (validated)
- config/calendar.py   → Google API constants, event defaults, display zones
- config/rate_limit.py → Flask-Limiter storage and limits

Usage:
    from config import AppSettings
    settings = AppSettings.from_env()
"""

from .settings import AppSettings
from .calendar import GoogleConfig, EventDefaults, DisplayConfig
from .rate_limit import RateLimitConfig

__all__ = [
    'AppSettings',
    'GoogleConfig',
    'EventDefaults',
    'DisplayConfig',
    'RateLimitConfig',
]
