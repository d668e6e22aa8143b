"""
Brokerage CSV Format Identifier

Selects the broker profile for an input by scanning for a line that exactly
matches a registered CSV header. Brokers put a preamble (account name,
export date) above the header, so the scan is not limited to the first line.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import io
import logging
from typing import BinaryIO, TypeVar

from brokers import schwab_transactions, sofi_transactions
from brokers.profile import BrokerProfile


# Module-level logger
logger = logging.getLogger(__name__)

V = TypeVar("V")

BOM = "\ufeff"


def find_matching_line(stream: BinaryIO, collection: dict[str, V]) -> V | None:
    """
    Scan forward for a line equal to one of the collection's keys.

    On a match the stream is rewound to the start of the matching line and
    the associated value is returned. None when the stream runs out.
    """
    empty_reads = 0
    while empty_reads < 2:
        start = stream.tell()
        raw = stream.readline()
        if not raw:
            empty_reads += 1
            continue
        empty_reads = 0

        line = raw.decode("utf-8", errors="replace")
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        line = line.lstrip(BOM)

        value = collection.get(line)
        if value is not None:
            stream.seek(start, io.SEEK_SET)
            return value
    return None


class FormatRegistry:

    def __init__(self) -> None:
        self.profiles: dict[str, BrokerProfile] = {}

    def register(self, profile: BrokerProfile) -> None:
        if profile.header in self.profiles:
            logger.warning(f"Header already registered, {profile.brokerage.value} replaces "
                           f"{self.profiles[profile.header].brokerage.value}")
        self.profiles[profile.header] = profile

    def identify(self, stream: BinaryIO) -> BrokerProfile | None:
        profile = find_matching_line(stream, self.profiles)
        if profile is None:
            logger.info("No registered csv header found")
        else:
            logger.info(f"Format matched: {profile.brokerage.value}")
        return profile

    def formats_supported(self) -> list[str]:
        return [profile.brokerage.value for profile in self.profiles.values()]


def default_registry() -> FormatRegistry:
    registry = FormatRegistry()
    registry.register(schwab_transactions.PROFILE)
    registry.register(sofi_transactions.PROFILE)
    return registry
