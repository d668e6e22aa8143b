#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import os

from dotenv import load_dotenv


load_dotenv()

# Logging
LOG_FILE = os.getenv("CSV2QIF_LOG_FILE", "csv2qif.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

# App Version
VERSION = "0.3.0"

# Output file name prefixes
INVEST_PREFIX = "invest_"
CASH_PREFIX = "cash_"
LINKED_CASH_PREFIX = "linked_cash_"
SECURITIES_PREFIX = "securities_"
QIF_EXTENSION = ".qif"

# QIF headers
QIF_INVEST_HEADER = "!Type:Invst"
QIF_BANK_HEADER = "!Type:Bank"
QIF_SECURITY_HEADER = "!Type:Security"
QIF_END_OF_RECORD = "^"

# Contracts are quoted per contract, the ledger wants shares
OPTION_SHARES_SUFFIX = "00"

CURRENCY_MARKER = "$"

# Broker CSV header lines
SCHWAB_HEADER = '"Date","Action","Symbol","Description","Quantity","Price","Fees & Comm","Amount"'
SOFI_HEADER = "Date,Description,Type,Amount,Current balance,Status"
