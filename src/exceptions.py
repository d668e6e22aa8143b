#!/usr/bin/env python3
"""
Conversion errors.

Every condition that aborts a run derives from ConversionError so the CLI can
report it uniformly. The tolerated trailing CSV footer and benign unhandled
action labels are not errors and never raise.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""


class ConversionError(ValueError):
    """Base class for fatal conversion errors"""


class FormatNotRecognized(ConversionError):
    def __init__(self, path, supported: list[str] | None = None) -> None:
        self.path = path
        self.supported = supported or []
        super().__init__(f"No recognized csv header found in file: {path}")


class InputNotUtf8(ConversionError):
    def __init__(self, offset: int, reason: str) -> None:
        self.offset = offset
        self.reason = reason
        super().__init__(f"Transactions csv is not valid UTF-8 at byte {offset}: {reason}")


class MissingRequiredColumns(ConversionError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required columns: {missing}")


class RowResumedAfterFooter(ConversionError):
    def __init__(self, line_number: int) -> None:
        self.line_number = line_number
        super().__init__(
            f"Still getting transactions csv content when should be done (line {line_number})"
        )


class OptionCrossValidationMismatch(ConversionError):
    def __init__(self, symbol: str, description: str, reason: str) -> None:
        self.symbol = symbol
        self.description = description
        self.reason = reason
        super().__init__(f"Option symbol {symbol!r} and description {description!r} disagree: {reason}")


class UnregisteredSymbolLookup(ConversionError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Expected to find symbol in securities: {symbol!r}")


class UnsupportedActionLabel(ConversionError):
    def __init__(self, label: str, reason: str = "Unrecognized action found in .CSV file") -> None:
        self.label = label
        super().__init__(f"{reason}: {label!r}")


class UnrecognizedSecurityType(ConversionError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unrecognized security type: {token!r}")


class DateParseError(ConversionError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Could not parse date: {text!r}")
