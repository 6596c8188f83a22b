"""
Django management command to sync active members from easyVerein.

Usage:
    python manage.py sync_members
"""
from clubsync.sync_utils import BaseSyncCommand
from members.services.sync import MemberSync


class Command(BaseSyncCommand):
    help = 'Sync active members from easyVerein'
    source_name = 'Members'

    def sync(self, client, store, config, **options):
        return MemberSync(client, store).run()
