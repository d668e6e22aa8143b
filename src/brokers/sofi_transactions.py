#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""


import constants as const
from brokers import baseclassifier as bc
from brokers.basecsvprocessor import BrokerRow
from brokers.baseclassifier import TransactionClassifier
from brokers.profile import AccountType, BrokerageType, BrokerProfile
from qif_actions import LedgerAction
from symbols import SymbolRegistry


COLUMNS = {
    "Date": "date",
    "Description": "description",
    "Type": "action",
    "Amount": "amount",
}


def unrecognized(classifier: TransactionClassifier, row: BrokerRow) -> list[LedgerAction]:
    # a bank account has nothing but cash, so every row can land there
    actions = bc.cash_only(classifier, row)
    classifier.notice(row, f"Unrecognized action found in .CSV: {row.action!r}. Entering as cash only.")
    return actions


def classifier(registry: SymbolRegistry) -> TransactionClassifier:
    table: dict[str, bc.Handler] = {
        "Withdrawal": bc.cash_only,
        "Deposit": bc.cash_only,
    }
    return TransactionClassifier(table, registry, fallback=unrecognized)


PROFILE = BrokerProfile(
    brokerage=BrokerageType.SOFI,
    header=const.SOFI_HEADER,
    columns=COLUMNS,
    account_type=AccountType.CASH,
    classifier=classifier,
)
