"""
Runtime configuration for a sync run.

Built once from Django settings at command start and handed to the client and
orchestrators, so nothing below the commands reads settings or the environment.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from django.conf import settings


@dataclass(frozen=True)
class SyncConfig:
    api_base_url: str = "https://easyverein.com/api/v2.0"
    page_size: int = 100
    page_delay: float = 1.0
    calendar_ids: List[int] = field(default_factory=list)
    max_rate_limit_retries: int = 5
    backoff_seconds: int = 5
    connect_timeout: float = 10
    read_timeout: float = 30

    @property
    def timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)

    @classmethod
    def from_settings(cls):
        return cls(
            api_base_url=settings.EASYVEREIN_API_URL.rstrip('/'),
            page_delay=settings.EASYVEREIN_PAGE_DELAY,
            calendar_ids=list(settings.EASYVEREIN_CALENDAR_IDS),
        )
