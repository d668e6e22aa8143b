"""
Broker CSV formats.

This package contains the broker-specific CSV decoding and transaction
classification (Schwab brokerage, SoFi banking) for QIF conversion.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""
