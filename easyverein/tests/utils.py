"""
Shared helpers for easyVerein API tests.
"""
import json
from unittest import mock

from easyverein.config import SyncConfig
from easyverein.services.client import EasyVereinClient
from easyverein.tokens import TokenStore

BASE_URL = 'https://easyverein.test/api/v2.0'


def make_response(status_code=200, payload=None, text=None):
    """Mock requests.Response; without a payload, .json() raises like requests does."""
    response = mock.Mock()
    response.status_code = status_code
    if payload is not None:
        response.json.return_value = payload
        response.text = text if text is not None else json.dumps(payload)
    else:
        response.json.side_effect = ValueError('Expecting value: line 1 column 1 (char 0)')
        response.text = text or ''
    return response


def make_page(results, next_url=None):
    return make_response(200, {'count': len(results), 'next': next_url, 'results': results})


def make_client(token='old_token', sink=None, **config):
    config.setdefault('api_base_url', BASE_URL)
    config.setdefault('page_delay', 0)
    return EasyVereinClient(SyncConfig(**config), TokenStore(token, sink))


def requested_url(call):
    """URL of a recorded requests.request('GET', url, ...) call."""
    return call[0][1]
