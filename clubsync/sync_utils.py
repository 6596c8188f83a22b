"""
Shared sync infrastructure for management commands.

SyncResult: structured return type for all sync orchestrators.
BaseSyncCommand: base class that wires config, token store, client and store
together and prints the run summary.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

DATE_FORMAT = "%Y-%m-%d"


@dataclass
class SyncResult:
    """Structured result from a sync operation."""

    source: str
    success: bool = True
    fetched: int = 0
    created: int = 0
    updated: int = 0
    errors: List[str] = field(default_factory=list)
    error_message: str = ""

    @property
    def error_count(self):
        return len(self.errors)

    @property
    def summary(self):
        if not self.success:
            return f"Failed: {self.error_message}"
        parts = [f"{self.fetched} fetched"]
        if self.created:
            parts.append(f"{self.created} new")
        if self.updated:
            parts.append(f"{self.updated} updated")
        if self.errors:
            parts.append(f"{self.error_count} errors")
        return ", ".join(parts)

    def record_error(self, message):
        """Count a record that was skipped; the run goes on."""
        self.errors.append(message)

    def fail(self, message):
        """Mark the step as aborted. Later failures are appended to the message."""
        self.success = False
        self.error_message = f"{self.error_message}; {message}" if self.error_message else message


def yesterday() -> date:
    return timezone.localdate() - timedelta(days=1)


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise CommandError("Invalid date format. Please use YYYY-MM-DD format.")


def add_date_range_arguments(parser):
    parser.add_argument(
        "start_date", nargs="?", help="First day to sync, YYYY-MM-DD (default: yesterday)"
    )
    parser.add_argument(
        "end_date", nargs="?", help="Last day to sync, YYYY-MM-DD (default: start_date)"
    )


def parse_date_range(start_arg: Optional[str], end_arg: Optional[str]) -> Tuple[date, date]:
    """
    Resolve the optional start/end arguments into an inclusive day range.

    Both given: that range. Only a start: that single day. Neither: yesterday.
    """
    if start_arg:
        start = parse_date(start_arg)
        end = parse_date(end_arg) if end_arg else start
    else:
        start = end = yesterday()

    if end < start:
        raise CommandError(f"End date {end} is before start date {start}.")
    return start, end


class BaseSyncCommand(BaseCommand):
    """
    Base class for easyVerein sync management commands.

    Provides:
    - build_client() / build_store() from the Django settings
    - write_summary() for a SyncResult
    - self.sync_result for structured result access after handle()

    Subclasses override `sync(client, store, config, **options)` and return a SyncResult.
    """

    # Subclasses set this to their entity name (e.g., 'Calendars', 'Events')
    source_name = ""

    def build_config(self):
        from easyverein.config import SyncConfig

        return SyncConfig.from_settings()

    def build_client(self, config):
        from easyverein.services.client import EasyVereinClient
        from easyverein.tokens import build_token_store

        return EasyVereinClient(config, build_token_store())

    def build_store(self):
        from easyverein.services.persistence import UpsertStore

        return UpsertStore()

    def connect(self, config):
        """build_client(), reporting missing credentials as a CommandError."""
        try:
            return self.build_client(config)
        except ImproperlyConfigured as e:
            self.stdout.write(self.style.ERROR(f"\n✗ Configuration Error: {e}"))
            self.stdout.write(self.style.WARNING("\nMake sure to set:"))
            self.stdout.write("  API_TOKEN=your-easyverein-api-token")
            raise CommandError(str(e))

    def handle(self, *_args, **options):
        self.write_banner(f"EASYVEREIN {self.source_name.upper()} SYNC")

        config = self.build_config()
        client = self.connect(config)

        self.sync_result = self.sync(client, self.build_store(), config, **options)
        self.write_summary(self.sync_result)

        if not self.sync_result.success:
            raise CommandError(self.sync_result.error_message)

    def sync(self, client, store, config, **options):
        """Override in subclasses. Must return a SyncResult."""
        raise NotImplementedError

    def write_banner(self, title):
        self.stdout.write(self.style.SUCCESS("=" * 60))
        self.stdout.write(self.style.SUCCESS(f"  {title}"))
        self.stdout.write(self.style.SUCCESS("=" * 60))

    def write_summary(self, result):
        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS(f"  {result.source.upper()} SYNC SUMMARY"))
        self.stdout.write("=" * 60)
        self.stdout.write(f"Total fetched: {result.fetched}")
        self.stdout.write(self.style.SUCCESS(f"✓ New: {result.created}"))
        self.stdout.write(self.style.WARNING(f"↻ Updated: {result.updated}"))
        self.stdout.write(f"⊘ Errors: {result.error_count}")
        for message in result.errors:
            self.stdout.write(self.style.WARNING(f"  - {message}"))
        if not result.success:
            self.stdout.write(self.style.ERROR(f"✗ Failed: {result.error_message}"))
        self.stdout.write("=" * 60)
