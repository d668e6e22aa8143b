#!/usr/bin/env python3
"""
Canonical ledger actions produced by classification and consumed by the QIF writer.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar


@dataclass(frozen=True)
class Trade:
    date: date
    symbol: str
    price: str
    quantity: str
    amount: str
    fees: str


@dataclass(frozen=True)
class LedgerAction:
    # QIF "N" line; None for records that carry no investment action
    kind: ClassVar[str | None] = None

    def is_cash_only(self) -> bool:
        return False


@dataclass(frozen=True)
class TradeAction(LedgerAction):
    trade: Trade


@dataclass(frozen=True)
class Buy(TradeAction):
    kind: ClassVar[str] = "Buy"


@dataclass(frozen=True)
class Sell(TradeAction):
    kind: ClassVar[str] = "Sell"


@dataclass(frozen=True)
class ShortSell(TradeAction):
    kind: ClassVar[str] = "ShtSell"


@dataclass(frozen=True)
class CoverShort(TradeAction):
    kind: ClassVar[str] = "CvrShrt"


@dataclass(frozen=True)
class MarginInterest(LedgerAction):
    kind: ClassVar[str] = "MargInt"
    date: date
    memo: str
    amount: str


@dataclass(frozen=True)
class SecurityIncome(LedgerAction):
    date: date
    symbol: str
    amount: str


@dataclass(frozen=True)
class Dividend(SecurityIncome):
    kind: ClassVar[str] = "Div"


@dataclass(frozen=True)
class CapGainShort(SecurityIncome):
    kind: ClassVar[str] = "CGShort"


@dataclass(frozen=True)
class CapGainLong(SecurityIncome):
    kind: ClassVar[str] = "CGLong"


@dataclass(frozen=True)
class SharesIn(LedgerAction):
    kind: ClassVar[str] = "ShrsIn"
    date: date
    symbol: str
    quantity: int


@dataclass(frozen=True)
class CashOnly(LedgerAction):
    """Plain cash movement, eligible for the linked cash account"""
    date: date
    payee: str
    amount: str
    memo: str | None = None
    category: str | None = None

    def is_cash_only(self) -> bool:
        return True
