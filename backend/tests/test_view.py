"""
Tests for the calendar view model.

The clock is pinned to Wednesday 2024-06-05 15:00 UTC (10:00 in Chicago,
20:30 in Kolkata) and the API client is a MagicMock.
"""

import os
import sys
from datetime import date, datetime
from unittest.mock import MagicMock

import pytest
import pytz
import requests

# Add backend to path for imports
backend_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

from client.editor import EditorMode
from client.view import CalendarView, visible_dates
from utils.exceptions import ApiError, UnsupportedTimezoneError

NOW = datetime(2024, 6, 5, 15, 0, tzinfo=pytz.utc)

EVENT = {
    'id': 'evt1',
    'title': 'Sync',
    'description': '',
    'attendees': ['a@x.com'],
    'startUtc': '2024-06-05T17:30:00.000Z',
    'endUtc': '2024-06-05T18:30:00.000Z',
}


@pytest.fixture
def api():
    api = MagicMock(name='api')
    api.get_events.return_value = [EVENT]
    return api


@pytest.fixture
def view(api):
    return CalendarView(api, zone='America/Chicago', view='timeGridWeek', now=lambda: NOW)


class TestVisibleDates:
    """Date ranges per view, weeks starting on Sunday"""

    def test_day(self):
        assert visible_dates('timeGridDay', date(2024, 6, 5)) == (date(2024, 6, 5), date(2024, 6, 6))

    def test_week_starts_sunday(self):
        assert visible_dates('timeGridWeek', date(2024, 6, 5)) == (date(2024, 6, 2), date(2024, 6, 9))
        assert visible_dates('timeGridWeek', date(2024, 6, 2)) == (date(2024, 6, 2), date(2024, 6, 9))
        assert visible_dates('timeGridWeek', date(2024, 6, 8)) == (date(2024, 6, 2), date(2024, 6, 9))

    def test_month_is_six_weeks(self):
        # June 2024 starts on a Saturday
        assert visible_dates('dayGridMonth', date(2024, 6, 20)) == (date(2024, 5, 26), date(2024, 7, 7))

    def test_unknown_view(self):
        with pytest.raises(ValueError):
            visible_dates('listWeek', date(2024, 6, 5))


class TestVisibleRange:
    """UTC bounds computed from local midnights"""

    def test_initial_state(self, view, api):
        assert view.anchor == date(2024, 6, 5)
        assert view.events == []
        api.get_events.assert_not_called()

    def test_week_in_chicago(self, view):
        assert view.visible_range() == ('2024-06-02T05:00:00.000Z', '2024-06-09T05:00:00.000Z')

    def test_day_in_chicago(self, api):
        view = CalendarView(api, zone='America/Chicago', view='timeGridDay', now=lambda: NOW)
        assert view.visible_range() == ('2024-06-05T05:00:00.000Z', '2024-06-06T05:00:00.000Z')

    def test_month_in_chicago(self, api):
        view = CalendarView(api, zone='America/Chicago', view='dayGridMonth', now=lambda: NOW)
        assert view.visible_range() == ('2024-05-26T05:00:00.000Z', '2024-07-07T05:00:00.000Z')

    def test_week_in_kolkata(self, api):
        view = CalendarView(api, zone='Asia/Kolkata', view='timeGridWeek', now=lambda: NOW)
        assert view.visible_range() == ('2024-06-01T18:30:00.000Z', '2024-06-08T18:30:00.000Z')

    def test_today_depends_on_zone(self, api):
        late = datetime(2024, 6, 5, 20, 0, tzinfo=pytz.utc)
        assert CalendarView(api, zone='America/Chicago', now=lambda: late).anchor == date(2024, 6, 5)
        assert CalendarView(api, zone='Asia/Kolkata', now=lambda: late).anchor == date(2024, 6, 6)

    def test_rejects_unsupported_zone(self, api):
        with pytest.raises(UnsupportedTimezoneError):
            CalendarView(api, zone='Europe/London', now=lambda: NOW)


class TestNavigation:
    """Every range change refetches"""

    def test_next_week(self, view, api):
        assert view.next() is True
        assert view.anchor == date(2024, 6, 12)
        api.get_events.assert_called_once_with('2024-06-09T05:00:00.000Z', '2024-06-16T05:00:00.000Z')
        assert [event.id for event in view.events] == ['evt1']

    def test_prev_week(self, view, api):
        view.prev()
        api.get_events.assert_called_once_with('2024-05-26T05:00:00.000Z', '2024-06-02T05:00:00.000Z')

    def test_next_month(self, api):
        view = CalendarView(api, zone='America/Chicago', view='dayGridMonth', now=lambda: NOW)
        view.next()
        assert view.anchor == date(2024, 7, 5)

    def test_today_returns_to_now(self, view):
        view.next()
        view.next()
        view.today()
        assert view.anchor == date(2024, 6, 5)

    def test_change_view(self, view, api):
        view.change_view('timeGridDay')
        assert view.view == 'timeGridDay'
        api.get_events.assert_called_once_with('2024-06-05T05:00:00.000Z', '2024-06-06T05:00:00.000Z')

    def test_change_to_unknown_view(self, view, api):
        with pytest.raises(ValueError):
            view.change_view('agenda')
        assert view.view == 'timeGridWeek'
        api.get_events.assert_not_called()

    def test_set_timezone_refetches_and_updates_editor(self, view, api):
        view.set_timezone('Asia/Kolkata')
        assert view.zone == 'Asia/Kolkata'
        assert view.editor.zone == 'Asia/Kolkata'
        api.get_events.assert_called_once_with('2024-06-01T18:30:00.000Z', '2024-06-08T18:30:00.000Z')

    def test_set_unsupported_timezone(self, view, api):
        with pytest.raises(UnsupportedTimezoneError):
            view.set_timezone('UTC')
        assert view.zone == 'America/Chicago'
        api.get_events.assert_not_called()


class TestFetching:
    """Stale results are discarded, failures keep what is shown"""

    def test_stale_fetch_is_discarded(self, view, api):
        ticket = view.begin_fetch()
        api.get_events.return_value = []
        view.next()

        assert view.complete_fetch(ticket, [EVENT]) is False
        assert view.events == []

    def test_current_fetch_is_applied(self, view):
        ticket = view.begin_fetch()
        assert view.complete_fetch(ticket, [EVENT]) is True
        assert view.events[0].title == 'Sync'

    def test_failed_fetch_keeps_events(self, view, api):
        view.refetch()
        api.get_events.side_effect = ApiError(500, 'boom')

        with pytest.raises(ApiError):
            view.next()
        assert [event.id for event in view.events] == ['evt1']

    def test_rendered_events_in_display_zone(self, view):
        view.refetch()
        rendered = view.rendered_events()
        assert rendered[0]['start'] == '2024-06-05T12:30'
        assert rendered[0]['end'] == '2024-06-05T13:30'

        view.set_timezone('Asia/Kolkata')
        assert view.rendered_events()[0]['start'] == '2024-06-05T23:00'

    def test_rendered_event_without_times(self, view):
        view.complete_fetch(view.begin_fetch(), [{'id': 'x', 'title': '(No title)'}])
        assert view.rendered_events()[0]['start'] is None


class TestInteraction:
    """Selections and clicks open the editor"""

    def test_select_opens_create(self, view):
        view.select(
            datetime(2024, 6, 5, 17, 0, tzinfo=pytz.utc),
            datetime(2024, 6, 5, 18, 0, tzinfo=pytz.utc),
        )
        assert view.editor.mode is EditorMode.CREATE
        assert view.editor.draft.start_local == '2024-06-05T12:00'

    def test_click_opens_edit(self, view):
        view.refetch()
        assert view.click('evt1') is True
        assert view.editor.mode is EditorMode.EDIT
        assert view.editor.draft.id == 'evt1'

    def test_click_unknown_event(self, view):
        view.refetch()
        assert view.click('missing') is False
        assert view.editor.mode is EditorMode.CLOSED

    def test_save_triggers_refetch(self, view, api):
        view.refetch()
        view.click('evt1')
        view.editor.save()

        api.update_event.assert_called_once()
        assert api.get_events.call_count == 2


class TestAuthStatus:
    """Auth status lookups never raise"""

    def test_authenticated(self, view, api):
        api.get_auth_status.return_value = {'authenticated': True, 'email': 'user@example.com'}
        assert view.load_auth_status() == {'authenticated': True, 'email': 'user@example.com'}

    @pytest.mark.parametrize('error', [ApiError(500, 'boom'), requests.ConnectionError('refused')])
    def test_failure_means_signed_out(self, view, api, error):
        api.get_auth_status.side_effect = error
        assert view.load_auth_status() == {'authenticated': False}
        assert view.auth_state == {'authenticated': False}

    def test_login_url(self, view, api):
        api.login_url.return_value = 'http://localhost:4000/auth/google'
        assert view.login_url == 'http://localhost:4000/auth/google'
