"""
Calendar sync: fetch every calendar once and upsert it.
"""
import logging

from calendars.models import Calendar
from clubsync.sync_utils import SyncResult
from easyverein.exceptions import RecordError, SyncStepError
from easyverein.services.mapping import map_calendar

logger = logging.getLogger(__name__)


class CalendarSync:
    """Mirrors all easyVerein calendars into the calendars table."""

    def __init__(self, client, store):
        self.client = client
        self.store = store

    def run(self) -> SyncResult:
        result = SyncResult(source='Calendars')

        logger.info("Fetching calendars...")
        try:
            calendars = self.client.get_calendars()
        except SyncStepError as e:
            logger.error(f"Error fetching calendars: {e}")
            result.fail(str(e))
            return result

        result.fetched = len(calendars)
        logger.info(f"Found {len(calendars)} calendars")

        for record in calendars:
            self._process_calendar(record, result)

        return result

    def _process_calendar(self, record, result):
        calendar_id = record.get('id') if isinstance(record, dict) else None
        try:
            fields = map_calendar(record)
            exists = self.store.exists(Calendar, fields['id'])
            self.store.upsert(Calendar, fields)
        except RecordError as e:
            logger.warning(f"Error processing calendar {calendar_id}: {e}")
            result.record_error(f"Calendar {calendar_id}: {e}")
            return

        if exists:
            result.updated += 1
            logger.info(f"Updated calendar: {fields['name']}")
        else:
            result.created += 1
            logger.info(f"New calendar: {fields['name']}")
