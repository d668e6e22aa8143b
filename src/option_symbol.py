#!/usr/bin/env python3
"""
Listed option recognition and canonical encoding.

Brokers spell an option position twice: once in the symbol column
("AAPL 01/19/2024 150.00 C") and once in the description column
("CALL APPLE INC $150 EXP 01/19/24"). Both spellings must agree before the
row is treated as an option. The canonical ledger symbol is the fixed-width
OCC style encoding, e.g. "AAPL  240119C00150000".

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import re
from datetime import date, datetime

from exceptions import OptionCrossValidationMismatch
from security import Security, SecurityType


# Module-level logger
logger = logging.getLogger(__name__)

SYMBOL_RE = re.compile(
    r"""^
    ([A-Z]*)                # underlying symbol
    \ (\d{2}/\d{2}/\d{4})   # expiration date
    \ ([\d.]*)              # strike price
    \ ([PC])                # put or call
    $""",
    re.VERBOSE,
)

DESCRIPTION_RE = re.compile(
    r"""^
    (PUT|CALL)              # put or call
    \ ([^$]*)\$             # description of underlying
    ([\d.]*)                # strike price
    \ EXP                   # EXP
    \ (\d{2}/\d{2}/\d{2})   # expiration date
    $""",
    re.VERBOSE,
)

TICKER_WIDTH = 6
STRIKE_DOLLAR_DIGITS = 5
STRIKE_CENT_DIGITS = 3


def security_details(symbol: str, description: str) -> Security:
    """
    Resolve the ledger symbol, display name and type for a symbol/description pair.

    Args:
        symbol: Broker symbol column
        description: Broker description column

    Returns:
        Security. Anything whose symbol does not look like an option passes
        through unchanged as a Stock.

    Raises:
        OptionCrossValidationMismatch: symbol looks like an option but the
            description does not, or the two disagree on strike, expiration
            or put/call.
    """
    symbol_match = SYMBOL_RE.match(symbol)
    if symbol_match is None:
        return Security(symbol, description, SecurityType.STOCK)

    description_match = DESCRIPTION_RE.match(description)
    if description_match is None:
        logger.error(f"Symbol {symbol} looks like option but description {description} does not")
        raise OptionCrossValidationMismatch(symbol, description, "description is not an option")

    ticker, symbol_expiration, strike, right = symbol_match.groups()
    put_call, underlying, description_strike, description_expiration = description_match.groups()

    if _to_float(strike, symbol, description) != _to_float(description_strike, symbol, description):
        raise OptionCrossValidationMismatch(symbol, description, "strike price differs")

    expiration = _to_date(symbol_expiration, "%m/%d/%Y", symbol, description)
    if expiration != _to_date(description_expiration, "%m/%d/%y", symbol, description):
        raise OptionCrossValidationMismatch(symbol, description, "expiration date differs")

    if (put_call == "CALL") != (right == "C"):
        raise OptionCrossValidationMismatch(symbol, description, "put/call differs")

    canonical = (
        ticker.ljust(TICKER_WIDTH)
        + expiration.strftime("%y%m%d")
        + right
        + encode_strike(strike, symbol, description)
    )
    name = (
        f"{put_call} : {underlying.rstrip()} - {ticker} "
        f"{expiration.strftime('%m/%d/%Y')} {strike} {right}"
    )
    logger.debug(f"Option {symbol!r} encoded as {canonical!r}")
    return Security(canonical, name, SecurityType.OPTION)


def encode_strike(strike: str, symbol: str = "", description: str = "") -> str:
    """Fixed point strike: 5 dollar digits zero-padded left, 3 cent digits zero-padded right"""
    dollars, _, cents = strike.partition(".")
    if not (dollars or cents) or not all(part.isdigit() for part in (dollars, cents) if part):
        raise OptionCrossValidationMismatch(symbol, description, f"malformed strike {strike!r}")
    if len(dollars) > STRIKE_DOLLAR_DIGITS or len(cents) > STRIKE_CENT_DIGITS:
        raise OptionCrossValidationMismatch(symbol, description, f"strike {strike!r} does not fit")
    return dollars.rjust(STRIKE_DOLLAR_DIGITS, "0") + cents.ljust(STRIKE_CENT_DIGITS, "0")


def _to_float(value: str, symbol: str, description: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise OptionCrossValidationMismatch(symbol, description, f"malformed strike {value!r}") from e


def _to_date(value: str, fmt: str, symbol: str, description: str) -> date:
    try:
        return datetime.strptime(value, fmt).date()
    except ValueError as e:
        raise OptionCrossValidationMismatch(symbol, description, f"malformed expiration {value!r}") from e
