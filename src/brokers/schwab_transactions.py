#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""


import constants as const
from brokers import baseclassifier as bc
from brokers.baseclassifier import TransactionClassifier
from brokers.profile import AccountType, BrokerageType, BrokerProfile
from qif_actions import Buy, CapGainLong, CapGainShort, CoverShort, Dividend, Sell, ShortSell
from symbols import SymbolRegistry

COLUMNS = {
    "Date": "date",
    "Action": "action",
    "Symbol": "symbol",
    "Description": "description",
    "Quantity": "quantity",
    "Price": "price",
    "Fees & Comm": "fees",
    "Amount": "amount",
}

DIVIDEND_ACTIONS = ["Cash Dividend", "Qualified Dividend", "Non-Qualified Div", "Special Dividend",
                    "Reinvest Dividend", "Qual Div Reinvest", "Pr Yr Div Reinvest"]

CASH_ACTIONS = ["Foreign Tax Paid", "ADR Mgmt Fee", "Cash In Lieu", "MoneyLink Deposit", "MoneyLink Transfer",
                "Wire Funds", "Wire Sent", "Funds Received", "Misc Cash Entry", "Service Fee", "Journal",
                "Pr Yr Cash Div", "Pr Yr Cash Div Adj", "Bank Interest", "Credit Interest"]

STOCK_SPLIT_NOTICE = (
    "Stock Split not handled. Schwab reports the number of shares added by the split but "
    "Quicken records the factor the old share count is multiplied by. Without the starting "
    "share count the factor can not be calculated, so the split has to be entered by hand."
)
NAME_CHANGE_NOTICE = "Name Change not handled, enter it by hand."
JOURNALED_SHARES_NOTICE = "Journaled Shares not handled, the share move has to be entered by hand."


def actions() -> dict[str, bc.Handler]:
    table: dict[str, bc.Handler] = {
        "Buy": bc.trade(Buy),
        "Buy to Open": bc.trade(Buy),
        "Sell": bc.trade(Sell),
        "Sell to Close": bc.trade(Sell),
        "Sell to Open": bc.trade(ShortSell),
        "Buy to Close": bc.trade(CoverShort),
        "Expired": bc.expired(Sell),
        "Margin Interest": bc.margin_interest,
        "Short Term Cap Gain": bc.security_income(CapGainShort),
        "Long Term Cap Gain": bc.security_income(CapGainLong),
        "Spin-off": bc.shares_in,
        "Stock Split": bc.not_handled(STOCK_SPLIT_NOTICE),
        "Name Change": bc.not_handled(NAME_CHANGE_NOTICE),
        "Journaled Shares": bc.not_handled(JOURNALED_SHARES_NOTICE),
    }
    for label in DIVIDEND_ACTIONS:
        table[label] = bc.security_income(Dividend)
    for label in CASH_ACTIONS:
        table[label] = bc.cash_only
    return table


def classifier(registry: SymbolRegistry) -> TransactionClassifier:
    return TransactionClassifier(actions(), registry, fallback=bc.cash_only_or_fail)


PROFILE = BrokerProfile(
    brokerage=BrokerageType.SCHWAB,
    header=const.SCHWAB_HEADER,
    columns=COLUMNS,
    account_type=AccountType.INVEST,
    classifier=classifier,
)
