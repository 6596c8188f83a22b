"""
Record mapping tests.

These tests validate how easyVerein JSON records are turned into model field
values: reference ids, timestamps, flags, and rejection of unusable records.
"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import TestCase, override_settings

from easyverein.exceptions import MappingError
from easyverein.services.mapping import (
    extract_id_from_url,
    extract_member_id,
    extract_reference_id,
    map_calendar,
    map_event,
    map_member,
    map_participation,
    normalize_timestamp,
    to_flag,
)

API = 'https://easyverein.com/api/v2.0'


class TestReferenceIds(TestCase):
    """Test id extraction from resource URLs"""

    def test_extract_trailing_id(self):
        self.assertEqual(extract_id_from_url('https://api/x/calendar/4821'), 4821)

    def test_extract_id_from_empty_input(self):
        self.assertIsNone(extract_id_from_url(None))
        self.assertIsNone(extract_id_from_url(''))

    def test_extract_id_without_trailing_digits(self):
        self.assertIsNone(extract_id_from_url('https://api/x/calendar/'))
        self.assertIsNone(extract_id_from_url('https://api/x/calendar/abc'))

    def test_reference_id_accepts_objects_and_numbers(self):
        """Should resolve nested objects, bare ids and URLs alike"""
        self.assertEqual(extract_reference_id({'id': 22014754, 'name': 'Training'}), 22014754)
        self.assertEqual(extract_reference_id(17), 17)
        self.assertEqual(extract_reference_id('17'), 17)
        self.assertEqual(extract_reference_id(f'{API}/organization/9'), 9)
        self.assertIsNone(extract_reference_id(None))
        self.assertIsNone(extract_reference_id({}))

    def test_member_id_from_participation_address(self):
        self.assertEqual(extract_member_id(f'{API}/contact-details/3141'), 3141)
        self.assertIsNone(extract_member_id(f'{API}/member/3141'))
        self.assertIsNone(extract_member_id(None))


class TestValueCoercion(TestCase):
    """Test timestamp and flag normalization"""

    @override_settings(TIME_ZONE='Europe/Berlin')
    def test_timestamp_with_offset(self):
        """Should keep wall-clock time for offsets matching the local zone"""
        value = normalize_timestamp('2024-03-01T18:30:00+01:00')

        self.assertIsNotNone(value.tzinfo)
        self.assertEqual(value.strftime('%Y-%m-%d %H:%M:%S'), '2024-03-01 18:30:00')

    @override_settings(TIME_ZONE='Europe/Berlin')
    def test_utc_timestamp_is_converted_to_local_time(self):
        value = normalize_timestamp('2024-03-01T17:30:00Z')

        self.assertEqual(value.strftime('%Y-%m-%d %H:%M:%S'), '2024-03-01 18:30:00')
        self.assertEqual(value, datetime(2024, 3, 1, 17, 30, tzinfo=dt_timezone.utc))

    def test_timestamp_is_truncated_to_seconds(self):
        value = normalize_timestamp('2024-03-01T18:30:00.987654+00:00')

        self.assertEqual(value.microsecond, 0)

    def test_missing_timestamp_is_none(self):
        self.assertIsNone(normalize_timestamp(None))
        self.assertIsNone(normalize_timestamp(''))

    def test_unparsable_timestamp_raises(self):
        with self.assertRaises(MappingError):
            normalize_timestamp('next tuesday', 'start')

    def test_flags(self):
        self.assertEqual(to_flag(True), 1)
        self.assertEqual(to_flag(False), 0)
        self.assertEqual(to_flag(None), 0)
        self.assertEqual(to_flag('true'), 1)
        self.assertEqual(to_flag('false'), 0)


class TestEntityMapping(TestCase):
    """Test per-entity field mapping"""

    def test_map_calendar(self):
        fields = map_calendar({
            'id': 22014754,
            'org': f'{API}/organization/77',
            'name': 'Training',
            'color': '#ff0000',
            'isPublic': True,
            '_deleteAfterDate': None,
            '_deletedBy': None,
        })

        self.assertEqual(fields['id'], 22014754)
        self.assertEqual(fields['org_id'], 77)
        self.assertEqual(fields['name'], 'Training')
        self.assertEqual(fields['description'], '')
        self.assertEqual(fields['is_public'], 1)
        self.assertIsNone(fields['deleted_after'])
        self.assertIsNone(fields['deleted_by'])

    def test_map_calendar_soft_deletion(self):
        fields = map_calendar({
            'id': 1,
            '_deleteAfterDate': '2024-06-30T00:00:00+02:00',
            '_deletedBy': f'{API}/user/5',
        })

        self.assertIsNotNone(fields['deleted_after'])
        self.assertEqual(fields['deleted_by'], 5)
        self.assertEqual(fields['is_public'], 0)

    def test_map_event(self):
        fields = map_event({
            'id': 501,
            'org': f'{API}/organization/77',
            'calendar': {'id': 22014754, 'name': 'Training'},
            'parent': f'{API}/event/500',
            'creator': f'{API}/member/9',
            'name': 'Lauftreff',
            'locationName': 'Stadtpark',
            'locationObject': {'city': 'Berlin', 'zip': '10115'},
            'start': '2024-01-01T18:00:00+01:00',
            'end': '2024-01-01T19:30:00+01:00',
            'maxParticipators': 20,
            'allDay': False,
            'canceled': True,
        })

        self.assertEqual(fields['calendar_id'], 22014754)
        self.assertEqual(fields['parent_id'], 500)
        self.assertEqual(fields['creator_id'], 9)
        self.assertIsNone(fields['reservation_parent_id'])
        self.assertEqual(fields['location_object'], '{"city": "Berlin", "zip": "10115"}')
        self.assertEqual(fields['max_participants'], 20)
        self.assertIsNone(fields['min_participants'])
        self.assertEqual(fields['canceled'], 1)
        self.assertEqual(fields['all_day'], 0)
        self.assertEqual(fields['is_public'], 0)
        self.assertIsNone(fields['start_participation'])
        self.assertNotIn('actual_participants', fields)

    def test_map_event_requires_start_and_end(self):
        with self.assertRaises(MappingError):
            map_event({'id': 501, 'name': 'No times'})

    def test_map_participation(self):
        fields = map_participation({
            'id': 9001,
            'participationAddress': f'{API}/contact-details/3141',
            'org': f'{API}/organization/77',
            'state': 1,
            'showName': True,
            'priceGroup': f'{API}/event-price-group/4',
        }, event_id=501)

        self.assertEqual(fields['event_id'], 501)
        self.assertEqual(fields['member_id'], 3141)
        self.assertEqual(fields['state'], 1)
        self.assertEqual(fields['show_name'], 1)
        self.assertEqual(fields['price_group_id'], 4)

    def test_map_participation_rejects_unresolvable_member(self):
        """Should refuse a participation whose address isn't a contact-details URL"""
        with self.assertRaises(MappingError) as context:
            map_participation({'id': 9002, 'participationAddress': f'{API}/guest/1', 'state': 1}, event_id=501)

        self.assertIn('Could not extract member ID', str(context.exception))

    def test_map_member(self):
        fields = map_member({
            'id': 12,
            'membershipNumber': 'M-0012',
            'emailOrUserName': 'anna@example.org',
            'paymentAmount': '12.50',
            'paymentIntervallMonths': 12,
        })

        self.assertEqual(fields, {'id': 12, 'payment_amount': Decimal('12.50'), 'payment_interval_months': 12})

    def test_map_member_without_payment(self):
        fields = map_member({'id': 13, 'paymentAmount': None, 'paymentIntervallMonths': None})

        self.assertIsNone(fields['payment_amount'])
        self.assertIsNone(fields['payment_interval_months'])

    def test_map_member_blank_payment_amount_is_null(self):
        """Should treat an empty paymentAmount like a missing one"""
        fields = map_member({'id': 14, 'paymentAmount': '', 'paymentIntervallMonths': ''})

        self.assertIsNone(fields['payment_amount'])
        self.assertIsNone(fields['payment_interval_months'])

    def test_record_without_id_raises(self):
        for mapper in (map_calendar, map_event, map_member):
            with self.assertRaises(MappingError):
                mapper({'name': 'orphan'})
