#!/usr/bin/env python3
"""
Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import csv
import io
import logging
from collections import namedtuple
from collections.abc import Iterator
from typing import BinaryIO

import pandas as pd

import util
from exceptions import InputNotUtf8, MissingRequiredColumns, RowResumedAfterFooter


# Module-level logger
logger = logging.getLogger(__name__)

BrokerRow = namedtuple("BrokerRow", ["date", "action", "symbol", "description", "quantity", "price", "fees", "amount"])

CURRENCY_FIELDS = ["price", "fees", "amount"]


class BaseCSVProcessor:
    """
    Decodes a broker CSV into BrokerRow fields.

    columns maps the broker's CSV column names to BrokerRow field names.
    Fields the broker does not provide come out as empty strings.
    """

    def __init__(self, columns: dict[str, str], strip_currency: bool = True):
        self.columns = columns
        self.strip_currency = strip_currency
        self.debug = False

    def set_debug(self, debug: bool):
        self.debug = debug

    def read_csv(self, stream: BinaryIO) -> pd.DataFrame:
        """
        Read rows from the header line at the stream's position.

        Brokers append one malformed line (totals, disclaimers) after the data.
        The first row that does not decode is taken to be that footer and
        reading stops there. Anything but blank lines after it is an error.
        """
        start = stream.tell()
        content = stream.read()
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            offset = start + e.start
            logger.error(f"Undecodable byte at offset {offset}: {e.reason}")
            raise InputNotUtf8(offset, e.reason) from e
        reader = csv.reader(io.StringIO(text))

        header = next(reader, None)
        if header is None:
            return pd.DataFrame(columns=list(self.columns))

        records = []
        footer_line = None
        for record in reader:
            if not record:
                continue
            if footer_line is not None:
                logger.error(f"Line {reader.line_num} found after presumed footer at line {footer_line}")
                raise RowResumedAfterFooter(reader.line_num)
            if len(record) != len(header):
                footer_line = reader.line_num
                logger.debug(f"Treating line {footer_line} as trailing footer: {record}")
                continue
            records.append(record)

        return pd.DataFrame(records, columns=header, dtype=str)

    def cvs_req_cols(self, df, required_cols: list[str]):
        if not all(col in df.columns for col in required_cols):
            missing = [col for col in required_cols if col not in df.columns]
            logger.error(f"Missing required columns: {missing}. Found columns: {list(df.columns)}")
            raise MissingRequiredColumns(missing)

    def clean(self, df) -> pd.DataFrame:
        df = df.copy()
        if self.strip_currency:
            for field in CURRENCY_FIELDS:
                if field in df.columns:
                    df[field] = df[field].map(util.strip_currency)
        return df

    def set_columns(self, df) -> pd.DataFrame:
        df = df[list(self.columns)].rename(columns=self.columns).copy()
        for field in BrokerRow._fields:
            if field not in df.columns:
                df[field] = ""
        return df[list(BrokerRow._fields)]

    def process(self, stream: BinaryIO) -> pd.DataFrame:
        df = self.read_csv(stream)
        logger.debug(f"Loaded {len(df)} rows with {len(df.columns)} columns")

        self.cvs_req_cols(df, list(self.columns))

        # Trim whitespace
        for col in df.columns:
            df[col] = df[col].str.strip()

        df = self.set_columns(df)
        df = self.clean(df)
        if self.debug:
            logger.debug(f"Decoded rows:\n{df.to_string()}")

        logger.info(f"Decoded {len(df)} rows")
        return df

    @classmethod
    def rows_oldest_first(cls, df: pd.DataFrame) -> Iterator[BrokerRow]:
        # csv files have the newest transactions first
        df = df.sort_index(ascending=False)
        for record in df.itertuples(index=False, name=None):
            yield BrokerRow(*record)
