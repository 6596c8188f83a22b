"""
Phase 2 Tests: Rate Limiting

These tests validate the HTTP 429 backoff loop: linear backoff of
attempt * 5 seconds, giving up once five retries have been spent.
"""
from django.test import TestCase
from unittest import mock

from easyverein.exceptions import RateLimitExceeded
from easyverein.tests.utils import make_client, make_response


def rate_limited():
    return make_response(429, text='{"detail": "Request was throttled."}')


class TestRateLimiting(TestCase):
    """Test 429 handling in EasyVereinClient.request"""

    @mock.patch('easyverein.services.client.time.sleep')
    @mock.patch('requests.request')
    def test_single_429_then_success(self, mock_request, mock_sleep):
        """Should wait 5 seconds once and return the second response"""
        mock_request.side_effect = [rate_limited(), make_response(200, {'results': [{'id': 1}]})]

        client = make_client()
        result = client.request('member')

        self.assertEqual(result, {'results': [{'id': 1}]})
        mock_sleep.assert_called_once_with(5)

    @mock.patch('easyverein.services.client.time.sleep')
    @mock.patch('requests.request')
    def test_succeeds_on_sixth_attempt_after_five_429s(self, mock_request, mock_sleep):
        """Should back off 5, 10, 15, 20, 25 seconds and succeed on the 6th request"""
        # Mock: Five rate-limited responses, then success
        mock_request.side_effect = [rate_limited() for _ in range(5)] + [make_response(200, {'results': []})]

        client = make_client()
        result = client.request('event')

        # Assert: Sixth request succeeded
        self.assertEqual(result, {'results': []})
        self.assertEqual(mock_request.call_count, 6)

        # Assert: Linear backoff, in order
        self.assertEqual(
            mock_sleep.call_args_list,
            [mock.call(5), mock.call(10), mock.call(15), mock.call(20), mock.call(25)]
        )

    @mock.patch('easyverein.services.client.time.sleep')
    @mock.patch('requests.request')
    def test_six_429s_raise_rate_limit_exceeded(self, mock_request, mock_sleep):
        """Should give up with RateLimitExceeded after the sixth 429"""
        mock_request.side_effect = [rate_limited() for _ in range(6)]

        client = make_client()
        with self.assertRaises(RateLimitExceeded) as context:
            client.request('event')

        self.assertEqual(mock_request.call_count, 6)
        self.assertEqual(mock_sleep.call_count, 5)
        self.assertEqual(context.exception.attempts, 6)
        self.assertIn('rate limiting', str(context.exception))

    @mock.patch('easyverein.services.client.time.sleep')
    @mock.patch('requests.request')
    def test_backoff_budget_is_per_request(self, mock_request, mock_sleep):
        """Should start counting from 1 again for the next request"""
        mock_request.side_effect = [
            rate_limited(), make_response(200, {'id': 1}),
            rate_limited(), make_response(200, {'id': 2}),
        ]

        client = make_client()
        client.request('calendar/1')
        client.request('calendar/2')

        self.assertEqual(mock_sleep.call_args_list, [mock.call(5), mock.call(5)])

    @mock.patch('easyverein.services.client.time.sleep')
    @mock.patch('requests.request')
    def test_backoff_settings_are_configurable(self, mock_request, mock_sleep):
        """Should honour a custom retry budget and backoff step"""
        mock_request.side_effect = [rate_limited() for _ in range(3)]

        client = make_client(max_rate_limit_retries=2, backoff_seconds=1)
        with self.assertRaises(RateLimitExceeded):
            client.request('member')

        self.assertEqual(mock_sleep.call_args_list, [mock.call(1), mock.call(2)])
