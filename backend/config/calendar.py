"""
Calendar provider and display configuration.
"""


class GoogleConfig:
    """Google OAuth and Calendar API constants."""

    AUTH_URI: str = 'https://accounts.google.com/o/oauth2/auth'
    TOKEN_URI: str = 'https://oauth2.googleapis.com/token'

    # Calendar read/write plus basic identity
    SCOPES = [
        'https://www.googleapis.com/auth/calendar',
        'openid',
        'https://www.googleapis.com/auth/userinfo.email',
    ]

    CALENDAR_API = ('calendar', 'v3')
    USERINFO_API = ('oauth2', 'v2')

    # Max results per API page when listing events
    LIST_PAGE_SIZE: int = 250


class EventDefaults:
    """Defaults applied when normalizing provider events."""

    PLACEHOLDER_TITLE: str = '(No title)'
    EVENT_TIMEZONE: str = 'UTC'


class DisplayConfig:
    """Client-side display settings."""

    # The closed set of supported display zones: (IANA name, label)
    TIMEZONES = (
        ('America/Chicago', 'America/Chicago (CST/CDT)'),
        ('Asia/Kolkata', 'Asia/Kolkata (IST)'),
    )
    DEFAULT_TIMEZONE: str = TIMEZONES[0][0]

    # Editable date-time field pattern (yyyy-MM-ddTHH:mm)
    INPUT_FORMAT: str = '%Y-%m-%dT%H:%M'
    EMPTY_PLACEHOLDER: str = '--'

    VIEWS = ('dayGridMonth', 'timeGridWeek', 'timeGridDay')
    DEFAULT_VIEW: str = 'timeGridWeek'

    DEFAULT_API_BASE_URL: str = 'http://localhost:4000'
