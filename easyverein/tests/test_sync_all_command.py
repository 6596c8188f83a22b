"""
Phase 4 Tests: Master Sync

These tests validate that sync_all runs every step with one shared client and
that a failing step is reported without stopping the others.
"""
from datetime import date
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase, override_settings
from unittest import mock

from calendars.models import Calendar
from easyverein.exceptions import TransportError
from members.models import Member

API = 'https://easyverein.com/api/v2.0'

EVENT = {
    'id': 501,
    'calendar': f'{API}/calendar/1',
    'name': 'Lauftreff',
    'start': '2024-01-01T18:00:00+01:00',
    'end': '2024-01-01T19:30:00+01:00',
}


@override_settings(EASYVEREIN_API_TOKEN='test_token', EASYVEREIN_CALENDAR_IDS=[], EASYVEREIN_PAGE_DELAY=0)
@mock.patch('easyverein.services.client.EasyVereinClient.get_members')
@mock.patch('easyverein.services.client.EasyVereinClient.get_event_participations')
@mock.patch('easyverein.services.client.EasyVereinClient.get_events_for_day')
@mock.patch('easyverein.services.client.EasyVereinClient.get_calendars')
class TestSyncAllCommand(TestCase):
    """Test the sync_all management command"""

    def test_all_steps_succeed(self, mock_calendars, mock_events, mock_participations, mock_members):
        mock_calendars.return_value = [{'id': 1, 'name': 'Training'}]
        mock_events.return_value = [EVENT]
        mock_participations.return_value = []
        mock_members.return_value = [{'id': 12, 'paymentAmount': '5.00'}]

        out = StringIO()
        call_command('sync_all', '2024-01-01', stdout=out)

        output = out.getvalue()
        self.assertIn('✓ CALENDARS', output)
        self.assertIn('✓ EVENTS', output)
        self.assertIn('✓ MEMBERS', output)
        mock_events.assert_called_once_with(date(2024, 1, 1), [])

    def test_failed_step_does_not_stop_later_steps(self, mock_calendars, mock_events, mock_participations,
                                                   mock_members):
        """Should still sync members when calendars fail, then exit non-zero"""
        mock_calendars.side_effect = TransportError('Connection refused')
        mock_events.return_value = []
        mock_members.return_value = [{'id': 12, 'paymentAmount': '5.00'}]

        out = StringIO()
        with self.assertRaises(CommandError) as context:
            call_command('sync_all', '2024-01-01', stdout=out)

        self.assertIn('Calendars', str(context.exception))
        self.assertEqual(Calendar.objects.count(), 0)
        self.assertTrue(Member.objects.filter(pk=12).exists())
        output = out.getvalue()
        self.assertIn('✗ CALENDARS', output)
        self.assertIn('✓ MEMBERS', output)

    def test_unexpected_exception_is_contained(self, mock_calendars, mock_events, mock_participations,
                                               mock_members):
        """Should report an unexpected error in one step as that step's failure"""
        mock_calendars.return_value = []
        mock_events.side_effect = RuntimeError('boom')
        mock_members.return_value = []

        out = StringIO()
        with self.assertRaises(CommandError):
            call_command('sync_all', '2024-01-01', stdout=out)

        self.assertIn('✗ EVENTS: Failed: RuntimeError: boom', out.getvalue())
        mock_members.assert_called_once_with()

    @override_settings(EASYVEREIN_API_TOKEN='')
    def test_missing_token_aborts_before_any_step(self, mock_calendars, mock_events, mock_participations,
                                                  mock_members):
        with self.assertRaises(CommandError):
            call_command('sync_all', stdout=StringIO())

        mock_calendars.assert_not_called()
        mock_members.assert_not_called()
