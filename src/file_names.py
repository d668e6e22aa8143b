#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import constants as const
from brokers.profile import AccountType


@dataclass(frozen=True)
class FileNames:
    transactions_qif: Path
    linked_cash_qif: Path
    securities_qif: Path

    @classmethod
    def from_input(cls, transactions: str | os.PathLike, account_type: AccountType,
                   outdir: str | os.PathLike | None = None) -> "FileNames":
        """
        Output names for a transactions csv: 'activity.csv' in an investment
        account gives invest_activity.qif, linked_cash_activity.qif and
        securities_activity.qif in outdir (default: current directory).
        """
        base = Path(transactions).with_suffix(const.QIF_EXTENSION).name
        directory = Path(outdir) if outdir is not None else Path(".")

        prefix = const.INVEST_PREFIX if account_type is AccountType.INVEST else const.CASH_PREFIX
        return cls(
            transactions_qif=directory / f"{prefix}{base}",
            linked_cash_qif=directory / f"{const.LINKED_CASH_PREFIX}{base}",
            securities_qif=directory / f"{const.SECURITIES_PREFIX}{base}",
        )
