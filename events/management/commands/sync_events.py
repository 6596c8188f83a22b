"""
Django management command to sync events and their participations from easyVerein.

Events are fetched day by day; each event's participant count is recomputed
from its confirmed participations.

Usage:
    python manage.py sync_events                          # yesterday
    python manage.py sync_events 2024-01-01               # a single day
    python manage.py sync_events 2024-01-01 2024-01-31    # a range, inclusive
"""
from clubsync.sync_utils import BaseSyncCommand, add_date_range_arguments, parse_date_range
from events.services.sync import EventSync


class Command(BaseSyncCommand):
    help = 'Sync events and participations from easyVerein for a date range'
    source_name = 'Events'

    def add_arguments(self, parser):
        add_date_range_arguments(parser)

    def handle(self, *args, **options):
        # Validate the dates before touching credentials or the API
        options['date_range'] = parse_date_range(options.get('start_date'), options.get('end_date'))
        super().handle(*args, **options)

    def sync(self, client, store, config, **options):
        start_date, end_date = options['date_range']
        self.stdout.write(f'Date range: {start_date} to {end_date}')
        return EventSync(client, store, calendar_ids=config.calendar_ids).run(start_date, end_date)
