"""
Unit tests for the Column Resolver module.
"""

import unittest
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from column_resolver import (
    FIELD_SYNONYMS,
    LogicalField,
    resolve,
    resolve_field,
    resolve_raw,
)


class TestResolve(unittest.TestCase):
    """Tests for synonym priority and blank handling."""

    def test_first_synonym_wins(self):
        row = {'AppId': 'second', 'appId': 'first'}
        self.assertEqual(resolve(row, ['appId', 'AppId']), 'first')

    def test_falls_through_missing_synonyms(self):
        row = {'App ID': '555'}
        self.assertEqual(resolve(row, ['appId', 'AppId', 'App ID']), '555')

    def test_whitespace_value_treated_as_absent(self):
        row = {'appId': '   ', 'AppId': 'real'}
        self.assertEqual(resolve(row, ['appId', 'AppId']), 'real')

    def test_all_blank_returns_none(self):
        row = {'appId': '', 'AppId': '  \t'}
        self.assertIsNone(resolve(row, ['appId', 'AppId']))

    def test_no_match_returns_none(self):
        self.assertIsNone(resolve({'other': 'x'}, ['appId']))

    def test_none_value_skipped(self):
        row = {'appId': None, 'AppId': 'abc'}
        self.assertEqual(resolve(row, ['appId', 'AppId']), 'abc')

    def test_value_is_trimmed(self):
        self.assertEqual(resolve({'Date': ' 2025-08-04 '}, ['Date']), '2025-08-04')

    def test_non_string_value_stringified(self):
        self.assertEqual(resolve({'Count': 12}, ['Count']), '12')

    def test_does_not_mutate_row(self):
        row = {'appId': ' x '}
        resolve(row, ['appId'])
        self.assertEqual(row, {'appId': ' x '})


class TestResolveRaw(unittest.TestCase):
    """Tests for the non-trimming resolution used by request counts."""

    def test_whitespace_value_accepted(self):
        row = {'requestCount': '  ', 'RequestCount': '10'}
        self.assertEqual(resolve_raw(row, ['requestCount', 'RequestCount']), '  ')

    def test_empty_string_skipped(self):
        row = {'requestCount': '', 'RequestCount': '10'}
        self.assertEqual(resolve_raw(row, ['requestCount', 'RequestCount']), '10')

    def test_integer_value_returned_unchanged(self):
        self.assertEqual(resolve_raw({'Usage': 0}, ['Usage']), 0)

    def test_missing_returns_none(self):
        self.assertIsNone(resolve_raw({}, ['Usage', 'Count']))


class TestFieldSynonyms(unittest.TestCase):
    """Tests for the static synonym table."""

    def test_every_logical_field_has_synonyms(self):
        for field in LogicalField:
            self.assertTrue(FIELD_SYNONYMS[field])

    def test_app_id_priority_order(self):
        self.assertEqual(
            FIELD_SYNONYMS[LogicalField.APP_ID],
            ['appId', 'AppId', 'App ID', 'ApplicationId']
        )

    def test_request_count_priority_order(self):
        self.assertEqual(
            FIELD_SYNONYMS[LogicalField.REQUEST_COUNT],
            ['requestCount', 'RequestCount', 'Request Count', 'Usage', 'Count']
        )

    def test_resolve_field_uses_table(self):
        row = {'Report Date': '2025-08-01', 'Tenant ID': 't1'}
        self.assertEqual(resolve_field(row, LogicalField.DATE), '2025-08-01')
        self.assertEqual(resolve_field(row, LogicalField.TENANT_ID), 't1')
        self.assertIsNone(resolve_field(row, LogicalField.SERVICE_AREA))


if __name__ == '__main__':
    unittest.main()
