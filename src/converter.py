#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import logging
import os
from collections import namedtuple
from typing import BinaryIO

import util
from brokers.basecsvprocessor import BaseCSVProcessor
from brokers.baseclassifier import Notice
from brokers.profile import BrokerProfile
from exceptions import FormatNotRecognized
from file_names import FileNames
from format_identifier import FormatRegistry, default_registry
from qif_actions import LedgerAction
from qif_writer import QifSummary, QifWriter
from symbols import SymbolRegistry


# Module-level logger
logger = logging.getLogger(__name__)

Conversion = namedtuple("Conversion", ["profile", "actions", "registry", "notices"])


def convert_stream(stream: BinaryIO, registry: SymbolRegistry, formats: FormatRegistry | None = None,
                   source: str = "<stream>", debug: bool = False) -> Conversion:
    """
    Identify, decode and classify a broker CSV held in memory.

    Args:
        stream: Seekable binary stream with the whole CSV
        registry: Securities known to the ledger; new ones are added to it
        formats: Header registry, defaults to every supported broker
        source: Name used in error messages
        debug: Log the decoded rows

    Returns:
        Conversion with the matched profile, actions oldest first and notices
    """
    if formats is None:
        formats = default_registry()

    profile: BrokerProfile | None = formats.identify(stream)
    if profile is None:
        logger.error(f"No recognized csv header found in file: {source}")
        raise FormatNotRecognized(source, formats.formats_supported())

    processor = profile.processor()
    processor.set_debug(debug)
    df = processor.process(stream)
    classifier = profile.classifier(registry)
    actions: list[LedgerAction] = classifier.classify_all(BaseCSVProcessor.rows_oldest_first(df))
    notices: list[Notice] = classifier.notices
    return Conversion(profile, actions, registry, notices)


def convert_file(transactions: str | os.PathLike, current_securities: str | os.PathLike | None = None,
                 linked_account: str | None = None,
                 outdir: str | os.PathLike | None = None,
                 debug: bool = False) -> tuple[Conversion, FileNames, QifSummary, list[str]]:
    logger.info(f"Processing CSV file: {transactions}")
    stream = util.read_file_to_buffer(transactions)

    if current_securities is not None:
        registry = SymbolRegistry.from_file(current_securities)
    else:
        registry = SymbolRegistry()

    conversion = convert_stream(stream, registry, source=str(transactions), debug=debug)

    file_names = FileNames.from_input(transactions, conversion.profile.account_type, outdir)
    writer = QifWriter(registry, conversion.profile.account_type, linked_account)
    summary = writer.write_all(conversion.actions, file_names)
    return conversion, file_names, summary, writer.summary_lines(summary, file_names)
