#!/usr/bin/env python3
"""
QIF serialization of ledger actions and newly discovered securities.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import os
from collections import namedtuple
from contextlib import ExitStack
from typing import TextIO

import constants as const
import util
from brokers.profile import AccountType
from file_names import FileNames
from qif_actions import (
    CashOnly,
    LedgerAction,
    MarginInterest,
    SecurityIncome,
    SharesIn,
    TradeAction,
)
from security import Security
from symbols import SymbolRegistry


# Module-level logger
logger = logging.getLogger(__name__)

QifSummary = namedtuple("QifSummary", ["transaction_count", "linked_count", "securities"])


class QifWriter:
    def __init__(self, registry: SymbolRegistry, account_type: AccountType, linked_account: str | None = None) -> None:
        self.registry = registry
        self.account_type = account_type
        self.linked_account = linked_account

    def render(self, action: LedgerAction, linked_account: str | None) -> list[str]:
        """QIF lines for one action, including the closing '^'"""
        lines: list[str] = []
        if isinstance(action, TradeAction):
            trade = action.trade
            name = self.registry.lookup(trade.symbol)
            lines.append(f"D{util.to_qif_date(trade.date)}")
            lines.append(self._action_line(action, linked_account))
            lines.append(f"Y{name}")
            lines.append(f"I{trade.price}")
            lines.append(f"Q{trade.quantity}")
            lines.append(f"U{trade.amount}")
            lines.append(f"T{trade.amount}")
            lines.append(f"M{name}")
            lines.append(f"O{trade.fees}")
            lines.extend(self._linked_lines(linked_account, trade.amount))
        elif isinstance(action, MarginInterest):
            lines.append(f"D{util.to_qif_date(action.date)}")
            lines.append(self._action_line(action, linked_account))
            lines.append(f"U{action.amount}")
            lines.append(f"T{action.amount}")
            lines.append(f"M{action.memo}")
            lines.extend(self._linked_lines(linked_account, action.amount))
        elif isinstance(action, SecurityIncome):
            name = self.registry.lookup(action.symbol)
            lines.append(f"D{util.to_qif_date(action.date)}")
            lines.append(self._action_line(action, linked_account))
            lines.append(f"Y{name}")
            lines.append(f"U{action.amount}")
            lines.append(f"T{action.amount}")
            lines.append(f"M{name}")
            lines.extend(self._linked_lines(linked_account, action.amount))
        elif isinstance(action, SharesIn):
            # shares arrive without cash, never a transfer
            name = self.registry.lookup(action.symbol)
            lines.append(f"D{util.to_qif_date(action.date)}")
            lines.append(f"N{action.kind}")
            lines.append(f"Y{name}")
            lines.append(f"Q{action.quantity}")
            lines.append(f"M{name}")
        elif isinstance(action, CashOnly):
            lines.append(f"D{util.to_qif_date(action.date)}")
            lines.append(f"U{action.amount}")
            lines.append(f"T{action.amount}")
            lines.append(f"P{action.payee}")
            if action.memo is not None:
                lines.append(f"M{action.memo}")
            if action.category is not None:
                lines.append(f"L{action.category}")
        else:
            raise TypeError(f"Unknown ledger action: {action!r}")
        lines.append(const.QIF_END_OF_RECORD)
        return lines

    def _action_line(self, action: LedgerAction, linked_account: str | None) -> str:
        # "X" marks an action whose cash moves through a linked account
        return f"N{action.kind}{'X' if linked_account is not None else ''}"

    def _linked_lines(self, linked_account: str | None, amount: str) -> list[str]:
        lines = []
        if linked_account is not None:
            lines.append(f"L[{linked_account}]")
        lines.append(f"${amount}")
        return lines

    def write_transactions(self, actions: list[LedgerAction], file_names: FileNames) -> tuple[int, int]:
        """
        Write actions to the transactions file and, for cash only actions when a
        linked account is set, to the linked cash file.

        Files are created only when something is routed to them.

        Returns:
            (transaction_count, linked_count)
        """
        transaction_count = 0
        linked_count = 0

        with ExitStack() as stack:
            transactions_output: TextIO | None = None
            linked_output: TextIO | None = None

            for action in actions:
                if action.is_cash_only() and self.linked_account is not None:
                    if linked_output is None:
                        linked_output = stack.enter_context(_create(file_names.linked_cash_qif))
                        _write_lines(linked_output, [const.QIF_BANK_HEADER])
                    _write_lines(linked_output, self.render(action, None))
                    linked_count += 1
                else:
                    if transactions_output is None:
                        transactions_output = stack.enter_context(_create(file_names.transactions_qif))
                        _write_lines(transactions_output, [self.account_type.qif_header()])
                    _write_lines(transactions_output, self.render(action, self.linked_account))
                    transaction_count += 1

        logger.info(f"Wrote {transaction_count} transactions and {linked_count} linked cash transactions")
        return transaction_count, linked_count

    def write_securities(self, path: str | os.PathLike) -> list[Security]:
        """Write the securities first seen in this run, sorted by symbol. Nothing is written when there are none."""
        securities = sorted(self.registry.new_securities(), key=lambda s: s.symbol)
        if not securities:
            logger.info("No new securities found")
            return securities

        with _create(path) as output:
            for security in securities:
                _write_lines(output, [
                    const.QIF_SECURITY_HEADER,
                    f"N{security.name}",
                    f"S{security.symbol}",
                    f"T{security.security_type.as_qif()}",
                    const.QIF_END_OF_RECORD,
                ])
        logger.info(f"Wrote {len(securities)} new securities to {path}")
        return securities

    def write_all(self, actions: list[LedgerAction], file_names: FileNames) -> QifSummary:
        securities = self.write_securities(file_names.securities_qif)
        transaction_count, linked_count = self.write_transactions(actions, file_names)
        return QifSummary(transaction_count, linked_count, securities)

    def summary_lines(self, summary: QifSummary, file_names: FileNames) -> list[str]:
        lines = []
        if summary.securities:
            lines.append(f"{len(summary.securities)} new securities found.")
            lines.append(f"Creating .qif file for new securities: {file_names.securities_qif}")
            lines.append("Before importing transactions to Quicken, import this securities .qif file.")
            lines.append("To avoid possible interference with existing transactions, specify a")
            lines.append("non-investment account such as a bank account when importing this file.")
        else:
            lines.append("No new securities found. No .qif file containing new securities generated.")
        lines.append("")

        if summary.transaction_count > 0:
            lines.append(f"{summary.transaction_count} transaction(s) found.")
            lines.append(f"For these transactions, import '{file_names.transactions_qif}' into the appropriate account.")
            lines.append("")

        if summary.linked_count > 0:
            lines.append(f"{summary.linked_count} linked cash transaction(s) found.")
            lines.append(f"For these linked cash transactions, import '{file_names.linked_cash_qif}' "
                         f"into the linked cash account: '{self.linked_account}'.")
            lines.append("")
        return lines


def _create(path: str | os.PathLike) -> TextIO:
    return open(path, "w", encoding="utf-8", newline="\n")


def _write_lines(output: TextIO, lines: list[str]) -> None:
    for line in lines:
        output.write(line)
        output.write("\n")
