"""
Django management command to sync calendars from easyVerein.

Usage:
    python manage.py sync_calendars
"""
from calendars.services.sync import CalendarSync
from clubsync.sync_utils import BaseSyncCommand


class Command(BaseSyncCommand):
    help = 'Sync calendars from easyVerein'
    source_name = 'Calendars'

    def sync(self, client, store, config, **options):
        return CalendarSync(client, store).run()
