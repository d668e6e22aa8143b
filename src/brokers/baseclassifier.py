#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
from collections import namedtuple
from collections.abc import Callable, Iterable

from tabulate import tabulate

import constants as const
import option_symbol
import util
from brokers.basecsvprocessor import BrokerRow
from exceptions import ConversionError, UnsupportedActionLabel
from qif_actions import (
    CashOnly,
    LedgerAction,
    MarginInterest,
    SecurityIncome,
    SharesIn,
    Trade,
    TradeAction,
)
from security import SecurityType
from symbols import SymbolRegistry


# Module-level logger
logger = logging.getLogger(__name__)

Notice = namedtuple("Notice", ["label", "message", "row"])

Handler = Callable[["TransactionClassifier", BrokerRow], list[LedgerAction]]


def format_row(row: BrokerRow) -> str:
    return tabulate([(field, value) for field, value in row._asdict().items() if value], tablefmt="simple")


class TransactionClassifier:
    """
    Maps broker rows to ledger actions through a label -> handler table.

    Labels missing from the table go to the fallback handler. Rows must be
    supplied oldest first; actions come back in the same order.
    """

    def __init__(self, actions: dict[str, Handler], registry: SymbolRegistry, fallback: Handler | None = None) -> None:
        self.actions = actions
        self.registry = registry
        self.fallback = fallback if fallback is not None else cash_only_or_fail
        self.notices: list[Notice] = []

    def notice(self, row: BrokerRow, message: str) -> None:
        logger.warning(f"{message} ({row.action!r} on {row.date})")
        self.notices.append(Notice(row.action, message, row))

    def classify(self, row: BrokerRow) -> list[LedgerAction]:
        handler = self.actions.get(row.action, self.fallback)
        return handler(self, row)

    def classify_all(self, rows: Iterable[BrokerRow]) -> list[LedgerAction]:
        actions: list[LedgerAction] = []
        for row in rows:
            try:
                actions.extend(self.classify(row))
            except ConversionError:
                logger.error(f"Unable to convert row:\n{format_row(row)}")
                raise
        logger.info(f"Classified {len(actions)} actions, {len(self.notices)} notices")
        return actions


def to_trade(classifier: TransactionClassifier, row: BrokerRow) -> Trade:
    security = option_symbol.security_details(row.symbol, row.description)

    quantity = row.quantity
    if security.security_type == SecurityType.OPTION:
        quantity = quantity + const.OPTION_SHARES_SUFFIX

    trade = Trade(
        date=util.parse_broker_date(row.date),
        symbol=security.symbol,
        price=row.price,
        quantity=quantity,
        amount=util.strip_leading_minus(row.amount),
        fees=row.fees,
    )
    classifier.registry.enter_if_not_found(*security)
    return trade


def to_expired_trade(classifier: TransactionClassifier, row: BrokerRow) -> Trade:
    security = option_symbol.security_details(row.symbol, row.description)
    if security.security_type != SecurityType.OPTION:
        raise UnsupportedActionLabel(row.action, "Expired found in CSV for non-option")

    # closes the position in the opposite direction
    quantity = util.negate_quantity(row.quantity) + const.OPTION_SHARES_SUFFIX

    trade = Trade(
        date=util.parse_broker_date(row.date),
        symbol=security.symbol,
        price="",
        quantity=quantity,
        amount="",
        fees="",
    )
    classifier.registry.enter_if_not_found(*security)
    return trade


def trade(action: type[TradeAction]) -> Handler:
    def handler(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
        return [action(to_trade(classifier, row))]
    return handler


def expired(action: type[TradeAction]) -> Handler:
    def handler(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
        return [action(to_expired_trade(classifier, row))]
    return handler


def margin_interest(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
    # reported negative, the ledger wants a positive expense
    return [MarginInterest(
        date=util.parse_broker_date(row.date),
        memo=row.description,
        amount=util.strip_leading_minus(row.amount),
    )]


def security_income(action: type[SecurityIncome]) -> Handler:
    def handler(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
        security = option_symbol.security_details(row.symbol, row.description)
        classifier.registry.enter_if_not_found(*security)
        return [action(date=util.parse_broker_date(row.date), symbol=security.symbol, amount=row.amount)]
    return handler


def shares_in(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
    security = option_symbol.security_details(row.symbol, row.description)
    try:
        quantity = int(row.quantity)
    except ValueError as e:
        raise UnsupportedActionLabel(row.action, f"Non-integer quantity {row.quantity!r} for") from e
    date = util.parse_broker_date(row.date)
    classifier.registry.enter_if_not_found(*security)
    return [SharesIn(date=date, symbol=security.symbol, quantity=quantity)]


def cash_only(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
    return [CashOnly(
        date=util.parse_broker_date(row.date),
        payee=row.description,
        memo=row.description,
        amount=row.amount,
    )]


def not_handled(message: str) -> Handler:
    def handler(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
        classifier.notice(row, message)
        return []
    return handler


def cash_only_or_fail(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
    if row.quantity or row.price or row.fees:
        logger.error(f"Unrecognized action with priced data:\n{format_row(row)}")
        raise UnsupportedActionLabel(row.action)

    actions = cash_only(classifier, row)
    classifier.notice(
        row,
        f"Unrecognized action found in .CSV: {row.action!r}. "
        "No quantity, price or fees found so entering in linked account only.",
    )
    return actions
