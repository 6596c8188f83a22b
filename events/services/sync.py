"""
Event sync: walk a day range, mirror each day's events and their participations.

For every event the row is saved first with a provisional participant count,
then its participations are saved, and finally the event is saved again with
the number of confirmed participations.
"""
import logging
from datetime import date, timedelta
from typing import Optional, Sequence

from clubsync.sync_utils import SyncResult, yesterday
from easyverein.exceptions import RecordError, SyncStepError
from easyverein.services.mapping import map_event, map_participation
from events.models import Event, Participation

logger = logging.getLogger(__name__)


class EventSync:
    """Mirrors easyVerein events and participations into the events tables."""

    def __init__(self, client, store, calendar_ids: Sequence[int] = ()):
        self.client = client
        self.store = store
        self.calendar_ids = list(calendar_ids)

    def run(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> SyncResult:
        """
        Sync every day from start_date to end_date, both inclusive.

        Defaults to yesterday. A request failure ends the day it happened on;
        the following days are still synced.
        """
        start_date = start_date or yesterday()
        end_date = end_date or start_date
        result = SyncResult(source='Events')

        day = start_date
        while day <= end_date:
            self.sync_day(day, result)
            day += timedelta(days=1)

        return result

    def sync_day(self, day: date, result: SyncResult):
        logger.info(f"Fetching events for {day.isoformat()}")
        try:
            events = self.client.get_events_for_day(day, self.calendar_ids)
            result.fetched += len(events)
            logger.info(f"Fetched {len(events)} events")

            for record in events:
                self._process_event(record, result)
        except SyncStepError as e:
            logger.error(f"Error syncing events for {day.isoformat()}: {e}")
            result.fail(f"{day.isoformat()}: {e}")

    def _process_event(self, record, result: SyncResult):
        event_id = record.get('id') if isinstance(record, dict) else None
        try:
            fields = map_event(record)
            exists = self.store.exists(Event, fields['id'])

            # Existing rows keep their last count until the participations are in
            provisional = dict(fields)
            if not exists:
                provisional['actual_participants'] = 0
            self.store.upsert(Event, provisional)
        except RecordError as e:
            logger.warning(f"Error processing event {event_id}: {e}")
            result.record_error(f"Event {event_id}: {e}")
            return

        confirmed = self._sync_participations(fields['id'], result)

        try:
            self.store.upsert(Event, {**fields, 'actual_participants': confirmed})
        except RecordError as e:
            logger.warning(f"Error updating participant count of event {event_id}: {e}")
            result.record_error(f"Event {event_id}: {e}")
            return

        label = f"{fields['name']} ({fields['start'].strftime('%Y-%m-%d %H:%M')})"
        if exists:
            result.updated += 1
            logger.info(f"Updated: {label}, {confirmed} confirmed")
        else:
            result.created += 1
            logger.info(f"New: {label}, {confirmed} confirmed")

    def _sync_participations(self, event_id: int, result: SyncResult) -> int:
        """Save the event's participations and return how many are confirmed."""
        participations = self.client.get_event_participations(event_id)
        confirmed = 0

        for record in participations:
            participation_id = record.get('id') if isinstance(record, dict) else None
            try:
                fields = map_participation(record, event_id)
                participation, _ = self.store.upsert(Participation, fields)
            except RecordError as e:
                logger.warning(f"Error processing participation {participation_id} of event {event_id}: {e}")
                result.record_error(f"Participation {participation_id} (event {event_id}): {e}")
                continue

            if participation.is_confirmed:
                confirmed += 1

        logger.debug(f"Processed {len(participations)} participations for event {event_id}, {confirmed} confirmed")
        return confirmed
