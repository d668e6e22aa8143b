#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import os
import re
from collections import namedtuple
from enum import Enum
from pathlib import Path

from exceptions import UnregisteredSymbolLookup
from security import Security, SecurityType


# Module-level logger
logger = logging.getLogger(__name__)

SECURITY_RE = re.compile(
    r"""
    ^!Type:Security\r?\n
    ^N([^\r\n]*)\r?\n       # name
    ^S([^\r\n]*)\r?\n       # symbol
    ^T([^\r\n]*)(?:\r?\n|\Z)  # type
    """,
    re.VERBOSE | re.MULTILINE,
)


class Provenance(Enum):
    BASE = "base"  # already in the target ledger
    NEW = "new"    # first seen during this run


RegisteredSecurity = namedtuple("RegisteredSecurity", ["security", "provenance"])


class SymbolRegistry:
    """
    Securities known to the ledger plus the ones discovered while converting.

    Each symbol is stored once, tagged with where it came from. Entries are
    only ever added, never replaced.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegisteredSecurity] = {}

    @classmethod
    def from_qif(cls, contents: str) -> "SymbolRegistry":
        registry = cls()
        for match in SECURITY_RE.finditer(contents):
            name, symbol, token = match.groups()
            security_type = SecurityType.from_qif(token)
            registry._add_base(Security(symbol, name, security_type))
        logger.info(f"Loaded {registry.base_count()} securities from ledger")
        return registry

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "SymbolRegistry":
        path = Path(path)
        try:
            contents = path.read_text(encoding="utf-8-sig")
        except OSError as e:
            logger.error(f"Unable to read from current securities file {path}: {e}")
            raise
        return cls.from_qif(contents)

    def _add_base(self, security: Security) -> None:
        existing = self._entries.get(security.symbol)
        if existing is not None:
            logger.warning(
                f"Symbol found multiple times in baseline securities file: {security.symbol}. "
                f"First name found (used): {existing.security.name!r}, "
                f"later name found (ignored): {security.name!r}"
            )
            return
        self._entries[security.symbol] = RegisteredSecurity(security, Provenance.BASE)

    def enter_if_not_found(self, symbol: str, name: str, security_type: SecurityType) -> None:
        if symbol in self._entries:
            return
        logger.debug(f"New security {symbol!r} ({security_type.value}): {name}")
        self._entries[symbol] = RegisteredSecurity(Security(symbol, name, security_type), Provenance.NEW)

    def security(self, symbol: str) -> Security:
        entry = self._entries.get(symbol)
        if entry is None:
            logger.error(f"Expected to find symbol in securities: {symbol!r}")
            raise UnregisteredSymbolLookup(symbol)
        return entry.security

    def lookup(self, symbol: str) -> str:
        return self.security(symbol).name

    def new_securities(self) -> list[Security]:
        return [e.security for e in self._entries.values() if e.provenance is Provenance.NEW]

    def base_count(self) -> int:
        return sum(1 for e in self._entries.values() if e.provenance is Provenance.BASE)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._entries

    def __len__(self) -> int:
        return len(self._entries)
