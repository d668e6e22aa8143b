#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

from collections import namedtuple
from enum import Enum

from exceptions import UnrecognizedSecurityType


class SecurityType(Enum):
    """Security types understood by the ledger, valued by their QIF token"""
    STOCK = "Stock"
    OPTION = "Option"
    MUTUAL_FUND = "Mutual Fund"
    MARKET_INDEX = "Market Index"

    @classmethod
    def from_qif(cls, token: str) -> "SecurityType":
        for security_type in cls:
            if security_type.value == token:
                return security_type
        raise UnrecognizedSecurityType(token)

    def as_qif(self) -> str:
        return self.value


Security = namedtuple("Security", ["symbol", "name", "security_type"])
