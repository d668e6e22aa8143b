#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import sys
import os
# Add src to path for imports (needed when running test file directly)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import tempfile
import unittest
from datetime import date
from brokers.profile import AccountType
from exceptions import UnregisteredSymbolLookup
from file_names import FileNames
from qif_actions import (
    Buy, CapGainLong, CashOnly, Dividend, MarginInterest, Sell, SharesIn, ShortSell, Trade
)
from qif_writer import QifWriter
from security import SecurityType
from symbols import SymbolRegistry

SECURITIES = "!Type:Security\nNXYZ Corp\nSXYZ\nTStock\n^\n"

OPTION = "AAPL  240119C00150000"
OPTION_NAME = "CALL : APPLE INC - AAPL 01/19/2024 150.00 C"

BUY = Buy(Trade(date(2024, 1, 3), "XYZ", "50.00", "10", "500.00", ""))
DEPOSIT = CashOnly(date(2024, 1, 2), "Tfr BANK", "1000.00", memo="Tfr BANK")


def read_lines(path):
    with open(path, encoding='utf-8', newline='') as f:
        return f.read().split("\n")


class TestQifRender(unittest.TestCase):

    def setUp(self):
        self.registry = SymbolRegistry.from_qif(SECURITIES)
        self.registry.enter_if_not_found(OPTION, OPTION_NAME, SecurityType.OPTION)
        self.writer = QifWriter(self.registry, AccountType.INVEST)

    def test_trade_linked(self):
        self.assertEqual(self.writer.render(BUY, "Brokerage Cash"), [
            "D1/3'24", "NBuyX", "YXYZ Corp", "I50.00", "Q10", "U500.00", "T500.00", "MXYZ Corp", "O",
            "L[Brokerage Cash]", "$500.00", "^",
        ])

    def test_trade_not_linked(self):
        action = ShortSell(Trade(date(2024, 1, 5), OPTION, "2.50", "100", "249.34", "0.66"))
        self.assertEqual(self.writer.render(action, None), [
            "D1/5'24", "NShtSell", f"Y{OPTION_NAME}", "I2.50", "Q100", "U249.34", "T249.34", f"M{OPTION_NAME}",
            "O0.66", "$249.34", "^",
        ])

    def test_expired_trade(self):
        action = Sell(Trade(date(2024, 1, 19), OPTION, "", "-100", "", ""))
        lines = self.writer.render(action, None)
        self.assertEqual(lines[1], "NSell")
        self.assertEqual(lines[3:7], ["I", "Q-100", "U", "T"])

    def test_margin_interest(self):
        action = MarginInterest(date(2024, 1, 31), "MARGIN INTEREST", "12.34")
        self.assertEqual(self.writer.render(action, "Cash"), [
            "D1/31'24", "NMargIntX", "U12.34", "T12.34", "MMARGIN INTEREST", "L[Cash]", "$12.34", "^",
        ])

    def test_security_income(self):
        self.assertEqual(self.writer.render(Dividend(date(2024, 1, 9), "XYZ", "12.50"), None), [
            "D1/9'24", "NDiv", "YXYZ Corp", "U12.50", "T12.50", "MXYZ Corp", "$12.50", "^",
        ])
        self.assertEqual(self.writer.render(CapGainLong(date(2024, 12, 20), "XYZ", "8.20"), None)[1], "NCGLong")

    def test_shares_in_ignores_link(self):
        action = SharesIn(date(2024, 4, 1), "XYZ", 25)
        self.assertEqual(self.writer.render(action, "Cash"), [
            "D4/1'24", "NShrsIn", "YXYZ Corp", "Q25", "MXYZ Corp", "^",
        ])

    def test_cash_only(self):
        self.assertEqual(self.writer.render(DEPOSIT, None), [
            "D1/2'24", "U1000.00", "T1000.00", "PTfr BANK", "MTfr BANK", "^",
        ])
        action = CashOnly(date(2024, 1, 2), "Rent", "-1500.00", category="Housing")
        self.assertEqual(self.writer.render(action, None), [
            "D1/2'24", "U-1500.00", "T-1500.00", "PRent", "LHousing", "^",
        ])

    def test_unknown_symbol(self):
        action = Buy(Trade(date(2024, 1, 3), "NOPE", "1.00", "1", "1.00", ""))
        with self.assertRaises(UnregisteredSymbolLookup):
            self.writer.render(action, None)


class TestQifFiles(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.file_names = FileNames.from_input("activity.csv", AccountType.INVEST, outdir=self.tmpdir.name)
        self.registry = SymbolRegistry.from_qif(SECURITIES)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_linked_cash_goes_to_linked_file(self):
        writer = QifWriter(self.registry, AccountType.INVEST, "Brokerage Cash")
        count, linked_count = writer.write_transactions([DEPOSIT, BUY], self.file_names)
        self.assertEqual((count, linked_count), (1, 1))

        linked = read_lines(self.file_names.linked_cash_qif)
        self.assertEqual(linked, ["!Type:Bank", "D1/2'24", "U1000.00", "T1000.00", "PTfr BANK", "MTfr BANK", "^", ""])

        transactions = read_lines(self.file_names.transactions_qif)
        self.assertEqual(transactions[0], "!Type:Invst")
        self.assertEqual(transactions[2], "NBuyX")
        self.assertEqual(transactions.count("^"), 1)

    def test_cash_stays_without_link(self):
        writer = QifWriter(self.registry, AccountType.INVEST)
        count, linked_count = writer.write_transactions([DEPOSIT, BUY], self.file_names)
        self.assertEqual((count, linked_count), (2, 0))
        self.assertFalse(os.path.exists(self.file_names.linked_cash_qif))

        transactions = read_lines(self.file_names.transactions_qif)
        self.assertEqual(transactions[:3], ["!Type:Invst", "D1/2'24", "U1000.00"])
        self.assertIn("NBuy", transactions)

    def test_bank_header_for_cash_account(self):
        file_names = FileNames.from_input("sofi.csv", AccountType.CASH, outdir=self.tmpdir.name)
        writer = QifWriter(self.registry, AccountType.CASH)
        writer.write_transactions([DEPOSIT], file_names)
        self.assertEqual(read_lines(file_names.transactions_qif)[0], "!Type:Bank")

    def test_no_actions_no_files(self):
        writer = QifWriter(self.registry, AccountType.INVEST, "Brokerage Cash")
        summary = writer.write_all([], self.file_names)
        self.assertEqual((summary.transaction_count, summary.linked_count, summary.securities), (0, 0, []))
        self.assertEqual(os.listdir(self.tmpdir.name), [])

        lines = writer.summary_lines(summary, self.file_names)
        self.assertIn("No new securities found. No .qif file containing new securities generated.", lines)

    def test_only_linked_cash(self):
        writer = QifWriter(self.registry, AccountType.INVEST, "Brokerage Cash")
        writer.write_transactions([DEPOSIT], self.file_names)
        self.assertFalse(os.path.exists(self.file_names.transactions_qif))
        self.assertTrue(os.path.exists(self.file_names.linked_cash_qif))

    def test_new_securities_sorted(self):
        self.registry.enter_if_not_found("MSFT", "Microsoft Corporation", SecurityType.STOCK)
        self.registry.enter_if_not_found(OPTION, OPTION_NAME, SecurityType.OPTION)
        writer = QifWriter(self.registry, AccountType.INVEST)
        securities = writer.write_securities(self.file_names.securities_qif)

        self.assertEqual([s.symbol for s in securities], [OPTION, "MSFT"])
        self.assertEqual(read_lines(self.file_names.securities_qif), [
            "!Type:Security", f"N{OPTION_NAME}", f"S{OPTION}", "TOption", "^",
            "!Type:Security", "NMicrosoft Corporation", "SMSFT", "TStock", "^",
            "",
        ])

    def test_summary_lines(self):
        self.registry.enter_if_not_found("MSFT", "Microsoft Corporation", SecurityType.STOCK)
        writer = QifWriter(self.registry, AccountType.INVEST, "Brokerage Cash")
        summary = writer.write_all([DEPOSIT, BUY], self.file_names)
        lines = writer.summary_lines(summary, self.file_names)
        self.assertEqual(lines[0], "1 new securities found.")
        self.assertIn("1 transaction(s) found.", lines)
        self.assertIn("1 linked cash transaction(s) found.", lines)


if __name__ == '__main__':
    unittest.main()
