"""
Translate easyVerein API records into model field values.

Every function here is pure: it takes one decoded JSON object and returns the
keyword arguments for an upsert, or raises MappingError.

Mapping:
- easyVerein calendar → calendars.Calendar
- easyVerein event → events.Event
- easyVerein event participation → events.Participation
- easyVerein member → members.Member
"""
import json
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from django.utils import timezone

from easyverein.exceptions import MappingError

TRAILING_ID_PATTERN = re.compile(r'/(\d+)$')
MEMBER_ID_PATTERN = re.compile(r'/contact-details/(\d+)$')


def extract_id_from_url(url) -> Optional[int]:
    """
    Return the trailing numeric path segment of a resource URL.

    >>> extract_id_from_url('https://easyverein.com/api/v2.0/calendar/4821')
    4821

    Empty input, non-strings and URLs without trailing digits give None.
    """
    if not url or not isinstance(url, str):
        return None
    match = TRAILING_ID_PATTERN.search(url)
    return int(match.group(1)) if match else None


def extract_reference_id(value) -> Optional[int]:
    """Id of a related resource given as URL, nested object or bare number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, dict):
        return extract_reference_id(value.get('id'))
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return extract_id_from_url(value)


def extract_member_id(participation_address) -> Optional[int]:
    """Member (contact details) id from a participation address URL."""
    if not participation_address or not isinstance(participation_address, str):
        return None
    match = MEMBER_ID_PATTERN.search(participation_address)
    return int(match.group(1)) if match else None


def normalize_timestamp(value, field_name: str = 'timestamp') -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into local time, to the second.

    Missing values give None; naive values are taken to be in the current
    time zone.
    """
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError:
            raise MappingError(f"Invalid {field_name}: {value!r}")

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return timezone.localtime(parsed).replace(microsecond=0)


def to_flag(value) -> int:
    """Coerce a boolean-like value to 0/1; missing means 0."""
    if isinstance(value, str):
        return 1 if value.strip().lower() in ('1', 'true', 'yes') else 0
    return 1 if value else 0


def to_json_text(value) -> Optional[str]:
    if value in (None, '', {}):
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def _required(record: Dict, key: str):
    value = record.get(key)
    if value in (None, ''):
        raise MappingError(f"Record {record.get('id', '?')} is missing required field '{key}'")
    return value


def _record_id(record: Dict) -> int:
    if not isinstance(record, dict):
        raise MappingError(f"Expected an object, got {type(record).__name__}")
    try:
        return int(_required(record, 'id'))
    except (TypeError, ValueError):
        raise MappingError(f"Invalid id: {record.get('id')!r}")


def _optional_int(record: Dict, key: str) -> Optional[int]:
    value = record.get(key)
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MappingError(f"Record {record.get('id', '?')} has a non-numeric '{key}': {value!r}")


def _soft_deletion(record: Dict) -> Dict:
    return {
        'deleted_after': normalize_timestamp(record.get('_deleteAfterDate'), '_deleteAfterDate'),
        'deleted_by': extract_reference_id(record.get('_deletedBy')),
    }


def map_calendar(record: Dict) -> Dict:
    """Field values for calendars.Calendar."""
    return {
        'id': _record_id(record),
        'org_id': extract_reference_id(record.get('org')),
        'name': record.get('name') or '',
        'description': record.get('description') or '',
        'color': record.get('color'),
        'is_public': to_flag(record.get('isPublic')),
        **_soft_deletion(record),
    }


def map_event(record: Dict) -> Dict:
    """
    Field values for events.Event.

    actual_participants is left out; the event sync decides it once the
    participations are known.
    """
    event_id = _record_id(record)
    return {
        'id': event_id,
        'org_id': extract_reference_id(record.get('org')),
        'calendar_id': extract_reference_id(record.get('calendar')),
        'parent_id': extract_reference_id(record.get('parent')),
        'creator_id': extract_reference_id(record.get('creator')),
        'reservation_parent_id': extract_reference_id(record.get('reservationParentEvent')),
        'name': record.get('name') or '',
        'description': record.get('description') or '',
        'prologue': record.get('prologue') or '',
        'note': record.get('note') or '',
        'location_name': record.get('locationName'),
        'location_object': to_json_text(record.get('locationObject')),
        'start': normalize_timestamp(_required(record, 'start'), 'start'),
        'end': normalize_timestamp(_required(record, 'end'), 'end'),
        'start_participation': normalize_timestamp(record.get('startParticipation'), 'startParticipation'),
        'end_participation': normalize_timestamp(record.get('endParticipation'), 'endParticipation'),
        'min_participants': _optional_int(record, 'minParticipators'),
        'max_participants': _optional_int(record, 'maxParticipators'),
        'all_day': to_flag(record.get('allDay')),
        'canceled': to_flag(record.get('canceled')),
        'is_locked': to_flag(record.get('isLocked')),
        'is_public': to_flag(record.get('isPublic')),
        'is_reservation': to_flag(record.get('isReservation')),
        'show_memberarea': to_flag(record.get('showMemberarea')),
        'mass_participations': to_flag(record.get('massParticipations')),
        **_soft_deletion(record),
    }


def map_participation(record: Dict, event_id: int) -> Dict:
    """Field values for events.Participation; the member must be resolvable."""
    participation_id = _record_id(record)
    address = record.get('participationAddress')
    member_id = extract_member_id(address)
    if member_id is None:
        raise MappingError(f"Could not extract member ID from: {address!r}")

    return {
        'id': participation_id,
        'event_id': event_id,
        'member_id': member_id,
        'org_id': extract_reference_id(record.get('org')),
        'name': record.get('name') or '',
        'description': record.get('description') or '',
        'show_name': to_flag(record.get('showName')),
        'state': _optional_int(record, 'state'),
        'price_group_id': extract_reference_id(record.get('priceGroup')),
        **_soft_deletion(record),
    }


def map_member(record: Dict) -> Dict:
    """Field values for members.Member."""
    member_id = _record_id(record)
    amount = record.get('paymentAmount')
    if amount in (None, ''):
        amount = None
    else:
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise MappingError(f"Member {member_id} has an invalid paymentAmount: {amount!r}")

    return {
        'id': member_id,
        'payment_amount': amount,
        'payment_interval_months': _optional_int(record, 'paymentIntervallMonths'),
    }
