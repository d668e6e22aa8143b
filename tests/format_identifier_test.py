"""
Unit tests for format identification

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import sys
import os
# Add src to path for imports (needed when running test file directly)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import io
import unittest
import constants as const
from brokers import schwab_transactions, sofi_transactions
from brokers.profile import BrokerageType, BrokerProfile
from converter import convert_stream
from exceptions import FormatNotRecognized
from format_identifier import FormatRegistry, default_registry, find_matching_line
from symbols import SymbolRegistry

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


class TestFindMatchingLine(unittest.TestCase):

    def test_find_matching_line(self):
        stream = io.BytesIO(b"foo\nzero\none\n")
        collection = {"zero": 0, "one": 1}

        # should find "zero" and leave the stream on it
        self.assertEqual(find_matching_line(stream, collection), 0)
        self.assertEqual(find_matching_line(stream, collection), 0)

        # read past "zero"
        stream.readline()
        self.assertEqual(find_matching_line(stream, collection), 1)

        self.assertIsNone(find_matching_line(stream, {"two": 2}))

    def test_crlf_and_bom(self):
        stream = io.BytesIO("\ufeffheader\r\nrow\r\n".encode("utf-8"))
        self.assertEqual(find_matching_line(stream, {"header": "h"}), "h")
        self.assertEqual(stream.tell(), 0)

    def test_empty_stream(self):
        self.assertIsNone(find_matching_line(io.BytesIO(b""), {"header": 1}))


class TestFormatRegistry(unittest.TestCase):

    def setUp(self):
        self.formats = default_registry()

    def test_formats_supported(self):
        self.assertEqual(self.formats.formats_supported(), ["schwab", "sofi"])

    def test_header_on_first_line(self):
        stream = io.BytesIO((const.SOFI_HEADER + "\n01/05/2024,Rent,Withdrawal,-1.00,0.00,Posted\n").encode())
        profile = self.formats.identify(stream)
        self.assertEqual(profile.brokerage, BrokerageType.SOFI)
        self.assertEqual(stream.tell(), 0)

    def test_header_after_preamble(self):
        with open(os.path.join(DATA_DIR, 'schwab_activity.csv'), 'rb') as f:
            stream = io.BytesIO(f.read())
        profile = self.formats.identify(stream)
        self.assertIs(profile, schwab_transactions.PROFILE)
        self.assertEqual(stream.readline().decode().rstrip("\r\n"), const.SCHWAB_HEADER)

    def test_no_match(self):
        stream = io.BytesIO(b"Run Date,Account,Action\n1,2,3\n")
        self.assertIsNone(self.formats.identify(stream))

    def test_no_match_names_file(self):
        stream = io.BytesIO(b"Run Date,Account,Action\n1,2,3\n")
        with self.assertRaises(FormatNotRecognized) as cm:
            convert_stream(stream, SymbolRegistry(), self.formats, source="history.csv")
        self.assertIn("history.csv", str(cm.exception))
        self.assertEqual(cm.exception.supported, ["schwab", "sofi"])

    def test_later_registration_wins(self):
        formats = FormatRegistry()
        formats.register(schwab_transactions.PROFILE)
        duplicate = BrokerProfile(
            brokerage=BrokerageType.SOFI,
            header=const.SCHWAB_HEADER,
            columns=sofi_transactions.COLUMNS,
            account_type=sofi_transactions.PROFILE.account_type,
            classifier=sofi_transactions.classifier,
        )
        with self.assertLogs('format_identifier', level='WARNING'):
            formats.register(duplicate)
        profile = formats.identify(io.BytesIO((const.SCHWAB_HEADER + "\n").encode()))
        self.assertIs(profile, duplicate)


if __name__ == '__main__':
    unittest.main()
