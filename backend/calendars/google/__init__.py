"""
Google Calendar integration module.

Provides authentication, event fetching, and event writes for Google Calendar.
Events leave this package in the canonical CalendarEvent shape.
"""

from calendars.google import auth, client, fetch, create, transform

__all__ = [
    'auth',
    'client',
    'fetch',
    'create',
    'transform',
]
