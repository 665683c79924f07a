"""
Unit tests for the Data Adapter module.
Uses mocked API responses to simulate external dependencies.
"""

import unittest
import json
import os
import sys
from unittest.mock import patch, MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import requests
from config import ReportConfig
from data_adapter import (
    acquire_access_token,
    fetch_usage_rows,
    graph_headers,
    parse_usage_payload,
    setup_logging,
)
from error_handling import APIError, AuthenticationError, ServerError


def make_response(body: bytes, content_type: str = 'text/csv', status_code: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers['Content-Type'] = content_type
    response.url = 'https://graph.example.com/beta/reports'
    return response


CSV_BODY = (
    '\ufeffReport Date,Service Area,Tenant ID,App ID,Request Count\r\n'
    '2025-08-04,Mail,t1,123,50\r\n'
    '2025-08-05,,t1,456,\r\n'
).encode('utf-8')


class TestParseUsagePayload(unittest.TestCase):
    """Tests for JSON and CSV response parsing."""

    def test_csv_with_bom(self):
        rows = parse_usage_payload(make_response(CSV_BODY))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0]['Report Date'], '2025-08-04')
        self.assertEqual(rows[0]['Request Count'], '50')
        self.assertEqual(rows[1]['Service Area'], '')
        self.assertEqual(rows[1]['Request Count'], '')

    def test_csv_keeps_leading_zeros_as_text(self):
        body = b'AppId,Count\n007,0012\n'
        rows = parse_usage_payload(make_response(body))
        self.assertEqual(rows, [{'AppId': '007', 'Count': '0012'}])

    def test_csv_header_only(self):
        rows = parse_usage_payload(make_response(b'AppId,Count\n'))
        self.assertEqual(rows, [])

    def test_empty_body(self):
        self.assertEqual(parse_usage_payload(make_response(b'')), [])

    def test_json_value_envelope(self):
        body = json.dumps({'value': [{'appId': '1', 'requestCount': 3}]}).encode('utf-8')
        rows = parse_usage_payload(make_response(body, 'application/json; charset=utf-8'))
        self.assertEqual(rows, [{'appId': '1', 'requestCount': 3}])

    def test_json_bare_list(self):
        body = json.dumps([{'AppId': '1'}]).encode('utf-8')
        rows = parse_usage_payload(make_response(body, 'application/json'))
        self.assertEqual(rows, [{'AppId': '1'}])

    def test_json_without_value(self):
        rows = parse_usage_payload(make_response(b'{"value": null}', 'application/json'))
        self.assertEqual(rows, [])


class TestFetchUsageRows(unittest.TestCase):
    """Tests for fetch_usage_rows."""

    def setUp(self):
        self.config = ReportConfig(lookback_days=7, graph_base_url='https://graph.example.com')

    @patch('data_adapter.requests.get')
    def test_period_token_in_url(self, mock_get):
        mock_get.return_value = make_response(CSV_BODY)

        rows = fetch_usage_rows(self.config, 'tok')

        self.assertEqual(len(rows), 2)
        url = mock_get.call_args.args[0]
        self.assertEqual(url, "https://graph.example.com/beta/reports/getApiUsageReport(period='D7')")
        self.assertEqual(mock_get.call_args.kwargs['headers']['Authorization'], 'Bearer tok')

    @patch('data_adapter.requests.get')
    def test_empty_dataset_is_not_error(self, mock_get):
        mock_get.return_value = make_response(b'', 'text/csv')
        self.assertEqual(fetch_usage_rows(self.config, 'tok'), [])

    @patch('data_adapter.requests.get')
    def test_401_raises_authentication_error(self, mock_get):
        mock_get.return_value = make_response(b'', 'application/json', status_code=401)

        with self.assertRaises(AuthenticationError) as ctx:
            fetch_usage_rows(self.config, 'bad')
        self.assertEqual(ctx.exception.status_code, 401)

    @patch('data_adapter.requests.get')
    def test_500_raises_server_error(self, mock_get):
        mock_get.return_value = make_response(b'', 'application/json', status_code=503)

        with self.assertRaises(ServerError):
            fetch_usage_rows(self.config, 'tok')
        mock_get.assert_called_once()

    @patch('data_adapter.requests.get')
    def test_timeout_raises_api_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout("timed out")

        with self.assertRaises(APIError) as ctx:
            fetch_usage_rows(self.config, 'tok')
        self.assertEqual(ctx.exception.status_code, 'TIMEOUT')

    @patch('data_adapter.requests.get')
    def test_connection_error_raises_api_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")

        with self.assertRaises(APIError) as ctx:
            fetch_usage_rows(self.config, 'tok')
        self.assertEqual(ctx.exception.status_code, 'CONNECTION_ERROR')


class TestAcquireAccessToken(unittest.TestCase):
    """Tests for token acquisition."""

    @patch.dict(os.environ, {'GRAPH_ACCESS_TOKEN': 'env_token'}, clear=True)
    def test_env_token_used(self):
        self.assertEqual(acquire_access_token(), 'env_token')

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_credentials_raise_value_error(self):
        with self.assertRaises(ValueError) as ctx:
            acquire_access_token()
        self.assertIn('AZURE_TENANT_ID', str(ctx.exception))

    @patch('data_adapter.requests.post')
    @patch.dict(os.environ, {
        'AZURE_TENANT_ID': 'tenant',
        'AZURE_CLIENT_ID': 'client',
        'AZURE_CLIENT_SECRET': 'secret',
    }, clear=True)
    def test_client_credentials_flow(self, mock_post):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json.return_value = {'access_token': 'issued', 'expires_in': 3599}
        mock_post.return_value = response

        self.assertEqual(acquire_access_token(), 'issued')

        url = mock_post.call_args.args[0]
        form = mock_post.call_args.kwargs['data']
        self.assertEqual(url, 'https://login.microsoftonline.com/tenant/oauth2/v2.0/token')
        self.assertEqual(form['grant_type'], 'client_credentials')
        self.assertEqual(form['scope'], 'https://graph.microsoft.com/.default')

    @patch('data_adapter.requests.post')
    @patch.dict(os.environ, {}, clear=True)
    def test_rejected_credentials_raise_authentication_error(self, mock_post):
        mock_post.return_value = make_response(b'{}', 'application/json', status_code=401)

        with self.assertRaises(AuthenticationError):
            acquire_access_token('tenant', 'client', 'wrong')

    @patch('data_adapter.requests.post')
    @patch.dict(os.environ, {}, clear=True)
    def test_missing_access_token_in_response(self, mock_post):
        mock_post.return_value = make_response(b'{"token_type": "Bearer"}', 'application/json')

        with self.assertRaises(ValueError):
            acquire_access_token('tenant', 'client', 'secret')


class TestHelpers(unittest.TestCase):
    """Tests for header and logging helpers."""

    def test_graph_headers(self):
        headers = graph_headers('abc')
        self.assertEqual(headers['Authorization'], 'Bearer abc')

    def test_setup_logging_configures_handlers(self):
        import logging
        import tempfile

        log_dir = tempfile.mkdtemp()
        log_file = os.path.join(log_dir, 'report.log')
        setup_logging(log_file)

        root = logging.getLogger()
        handler_types = [type(h).__name__ for h in root.handlers]
        self.assertIn('FileHandler', handler_types)
        self.assertIn('StreamHandler', handler_types)

        for h in root.handlers[:]:
            if isinstance(h, logging.FileHandler):
                h.close()
                root.removeHandler(h)

        os.unlink(log_file)
        os.rmdir(log_dir)


if __name__ == '__main__':
    unittest.main()
