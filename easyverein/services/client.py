"""
easyVerein API Client for fetching calendars, events, participations and members.

This client handles bearer token authentication (including the refresh-token
flow), HTTP 429 backoff and pagination against the easyVerein REST API v2.0.
"""
import logging
import time
from datetime import date
from typing import Dict, List, Optional, Sequence
from urllib.parse import parse_qsl, urlparse

import requests

from easyverein.config import SyncConfig
from easyverein.exceptions import (
    ApiRequestFailed,
    RateLimitExceeded,
    TokenRefreshFailed,
    TransportError,
)
from easyverein.tokens import TokenStore

logger = logging.getLogger(__name__)


class EasyVereinClient:
    """Client for interacting with the easyVerein API v2.0."""

    REFRESH_ENDPOINT = 'refresh-token'
    TOKEN_REFRESH_MARKER = 'tokenRefreshNeeded'

    def __init__(self, config: SyncConfig, token_store: TokenStore):
        self.config = config
        self.token_store = token_store

    def _url(self, resource: str) -> str:
        return f"{self.config.api_base_url}/{resource.strip('/')}"

    def _send(self, url: str, params: Optional[Dict] = None) -> requests.Response:
        headers = {
            'Authorization': f'Bearer {self.token_store.get()}',
            'Accept': 'application/json',
        }
        try:
            return requests.request(
                'GET',
                url,
                headers=headers,
                params=params,
                timeout=self.config.timeout,
                verify=True,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

    def _decode(self, response: requests.Response, url: str):
        try:
            return response.json()
        except ValueError:
            raise ApiRequestFailed(response.status_code, response.text, url)

    def refresh_token(self) -> str:
        """
        Exchange the current token for a fresh one.

        The new token replaces the old one in the token store, which persists it.

        Returns:
            The new token
        """
        logger.info("Token needs refreshing...")
        response = self._send(self._url(self.REFRESH_ENDPOINT))

        if response.status_code != 200:
            raise TokenRefreshFailed(
                f"Token refresh failed with status code {response.status_code}: {response.text}"
            )

        try:
            new_token = response.json().get('token')
        except (ValueError, AttributeError):
            new_token = None
        if not new_token:
            raise TokenRefreshFailed("Token refresh response did not contain a token")

        self.token_store.replace(new_token)
        logger.info("Token refreshed successfully")
        return new_token

    def request(self, resource: str, params: Optional[Dict] = None):
        """
        Make an authenticated GET request, retrying on rate limits and stale tokens.

        A 429 is retried after sleeping attempt * backoff_seconds, until
        max_rate_limit_retries retries have been spent. A stale token triggers
        one refresh per call; that retry does not count as a rate-limit attempt.

        Args:
            resource: API resource path (e.g., 'event/42/participation')
            params: Query parameters

        Returns:
            Decoded JSON body
        """
        url = self._url(resource)
        max_retries = self.config.max_rate_limit_retries
        attempt = 0
        refreshed = False

        while True:
            logger.debug(f"Making request to: {url} {params or ''}")
            response = self._send(url, params)
            status = response.status_code

            if status == 429:
                attempt += 1
                if attempt > max_retries:
                    raise RateLimitExceeded(attempt)
                wait = attempt * self.config.backoff_seconds
                logger.warning(
                    f"Rate limit hit, waiting {wait} seconds (attempt {attempt} of {max_retries})..."
                )
                time.sleep(wait)
                continue

            stale = status == 401 and self.TOKEN_REFRESH_MARKER in (response.text or '')
            if not stale:
                if status != 200:
                    raise ApiRequestFailed(status, response.text, url)
                payload = self._decode(response, url)
                stale = isinstance(payload, dict) and payload.get(self.TOKEN_REFRESH_MARKER) is True
                if not stale:
                    return payload

            if refreshed:
                raise TokenRefreshFailed("API still reports a stale token after refreshing")
            self.refresh_token()
            refreshed = True

    @staticmethod
    def _carry_over_params(next_url: str) -> Dict[str, str]:
        """Query parameters of a 'next' link (offset, limit, filters)."""
        return dict(parse_qsl(urlparse(next_url).query, keep_blank_values=True))

    def fetch_all(
        self,
        resource: str,
        params: Optional[Dict] = None,
        paging: str = 'cursor',
        page_delay: float = 0,
    ) -> List[Dict]:
        """
        Fetch every page of a list resource.

        Args:
            resource: API resource path
            params: Filter parameters for the first page
            paging: 'cursor' follows the query string of each 'next' link,
                    'page' sends an incrementing page number instead
            page_delay: Seconds to wait between page requests

        Returns:
            All results, in the order the pages arrived
        """
        params = dict(params or {})
        params.setdefault('limit', self.config.page_size)
        page = 1
        results = []

        while True:
            if paging == 'page':
                params['page'] = page

            response = self.request(resource, dict(params))
            if isinstance(response, list):
                results.extend(response)
                break

            page_results = response.get('results') or []
            results.extend(page_results)
            logger.debug(f"Fetched {len(page_results)} records from {resource} (page {page})")

            next_url = response.get('next')
            if not next_url:
                break

            if paging == 'cursor':
                next_params = {**params, **self._carry_over_params(next_url)}
                if {k: str(v) for k, v in next_params.items()} == {k: str(v) for k, v in params.items()}:
                    logger.warning(f"Next link for {resource} repeats the current page, stopping: {next_url}")
                    break
                params = next_params
            page += 1

            if page_delay:
                time.sleep(page_delay)

        return results

    def get_calendars(self) -> List[Dict]:
        """Fetch all calendars, pausing between pages."""
        return self.fetch_all('calendar', page_delay=self.config.page_delay)

    def get_events_for_day(self, day: date, calendar_ids: Sequence[int] = ()) -> List[Dict]:
        """
        Fetch the events starting on a given day.

        Args:
            day: Day to fetch
            calendar_ids: Only events in these calendars (all calendars if empty)

        Returns:
            List of event records
        """
        params = {
            'start__gte': f'{day.isoformat()} 00:00:00',
            'start__lte': f'{day.isoformat()} 23:59:59',
        }
        if len(calendar_ids) == 1:
            params['calendar'] = calendar_ids[0]
        elif calendar_ids:
            params['calendar__in'] = ','.join(str(c) for c in calendar_ids)

        return self.fetch_all('event', params)

    def get_event_participations(self, event_id: int) -> List[Dict]:
        """Fetch the non-deleted participations of an event."""
        return self.fetch_all(f'event/{event_id}/participation', {'deleted': 'false'})

    def get_members(self) -> List[Dict]:
        """Fetch all members who haven't left, page by page."""
        return self.fetch_all('member', {'has_left': 'false'}, paging='page')
