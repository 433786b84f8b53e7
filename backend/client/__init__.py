"""
Calendar client: display-zone conversion, the event editor, the calendar
view model and the HTTP client for the proxy API.
"""

from .api import CalendarApiClient
from .editor import EditorMode, EventDraft, EventEditor, split_attendees
from .view import CalendarView

__all__ = [
    'CalendarApiClient',
    'CalendarView',
    'EditorMode',
    'EventDraft',
    'EventEditor',
    'split_attendees',
]
