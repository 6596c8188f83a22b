"""
Django management command to sync every easyVerein entity in one run.

Runs, in order:
- Calendars
- Events and participations (for the given day range)
- Members

All three share one API client, so a token refreshed during one step is used
by the next. A failing step is reported and the remaining steps still run.

Usage:
    python manage.py sync_all [START_DATE [END_DATE]]

This command is ideal for scheduled jobs (cron, etc.)
"""
from datetime import datetime

from django.core.management.base import CommandError

from calendars.services.sync import CalendarSync
from clubsync.sync_utils import BaseSyncCommand, SyncResult, add_date_range_arguments, parse_date_range
from events.services.sync import EventSync
from members.services.sync import MemberSync


class Command(BaseSyncCommand):
    help = 'Sync calendars, events and members from easyVerein'
    source_name = 'All'

    def add_arguments(self, parser):
        add_date_range_arguments(parser)

    def handle(self, *args, **options):
        start_date, end_date = parse_date_range(options.get('start_date'), options.get('end_date'))
        started = datetime.now()

        self.write_banner('EASYVEREIN - MASTER SYNC')
        self.stdout.write(f'Started at: {started.strftime("%Y-%m-%d %H:%M:%S")}')
        self.stdout.write(f'Events from {start_date} to {end_date}\n')

        config = self.build_config()
        client = self.connect(config)
        store = self.build_store()

        steps = [
            ('Calendars', lambda: CalendarSync(client, store).run()),
            ('Events', lambda: EventSync(client, store, config.calendar_ids).run(start_date, end_date)),
            ('Members', lambda: MemberSync(client, store).run()),
        ]

        results = []
        for index, (name, step) in enumerate(steps, start=1):
            self.stdout.write(self.style.HTTP_INFO(f'\n[{index}/{len(steps)}] Syncing {name.lower()}...'))
            try:
                result = step()
            except Exception as e:
                result = SyncResult(source=name)
                result.fail(f'{type(e).__name__}: {e}')
            results.append(result)
            self.write_summary(result)

        duration = (datetime.now() - started).total_seconds()

        self.stdout.write('\n' + '=' * 60)
        self.stdout.write(self.style.SUCCESS('  SYNC SUMMARY'))
        self.stdout.write('=' * 60)
        for result in results:
            if result.success:
                self.stdout.write(self.style.SUCCESS(f'✓ {result.source.upper()}: {result.summary}'))
            else:
                self.stdout.write(self.style.ERROR(f'✗ {result.source.upper()}: {result.summary}'))
        self.stdout.write(f'\nCompleted in {duration:.1f} seconds')
        self.stdout.write('=' * 60)

        self.sync_results = results
        failed = [r.source for r in results if not r.success]
        if failed:
            raise CommandError(f'Sync failed for: {", ".join(failed)}')
