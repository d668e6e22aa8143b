#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import constants as const
from brokers.basecsvprocessor import BaseCSVProcessor
from brokers.baseclassifier import TransactionClassifier
from symbols import SymbolRegistry


class BrokerageType(Enum):
    """Enumeration of supported brokerage formats"""
    SCHWAB = "schwab"
    SOFI = "sofi"


class AccountType(Enum):
    INVEST = "invest"
    CASH = "cash"

    def qif_header(self) -> str:
        if self is AccountType.INVEST:
            return const.QIF_INVEST_HEADER
        return const.QIF_BANK_HEADER


@dataclass(frozen=True)
class BrokerProfile:
    brokerage: BrokerageType
    header: str
    columns: dict[str, str]
    account_type: AccountType
    classifier: Callable[[SymbolRegistry], TransactionClassifier]

    def processor(self) -> BaseCSVProcessor:
        return BaseCSVProcessor(self.columns)
