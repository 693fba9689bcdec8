"""
CsvCodec for abbreviation datasets.

Decodes CSV text into Row objects and encodes rows back to CSV text.
Decoding is best effort: a dataset load never fails on bad cells.
"""

import csv
import io
import logging
from typing import List, Optional

import pandas as pd

from models import Row, COLUMNS, parse_completed
from utils.performance import monitor_performance
from utils.validation import missing_columns

logger = logging.getLogger(__name__)

# Alternate header names accepted for a column
FIELD_FALLBACKS = {
    "abbreviation": "abbr",
    "long_form": "long",
}


class CsvCodec:
    """
    Converts between CSV text and Row objects.
    
    Attributes:
        encodings: Byte encodings tried in order by decode_bytes
    """
    
    def __init__(self, encodings: Optional[List[str]] = None):
        self.encodings = encodings or ["utf-8-sig", "gbk"]
    
    def decode_bytes(self, content: bytes) -> str:
        """
        Decode raw file bytes to text.
        
        Tries each configured encoding, then falls back to UTF-8 with
        replacement characters so that loading never fails on encoding.
        """
        for encoding in self.encodings:
            try:
                return content.decode(encoding)
            except UnicodeDecodeError:
                continue
        logger.warning(f"File is not valid {'/'.join(self.encodings)}; undecodable bytes replaced")
        return content.decode("utf-8", errors="replace")
    
    @monitor_performance("csv_decode")
    def decode(self, text: str) -> List[Row]:
        """
        Parse CSV text with a header row into Row objects.
        
        Text with unbalanced quotes is re-read with quote characters taken
        literally, so a malformed file still yields its rows.
        
        Args:
            text: CSV text
        
        Returns:
            Rows in file order; an empty list for empty or header-only text
        """
        if not text or not text.strip():
            return []
        
        quoting = csv.QUOTE_MINIMAL
        if text.count('"') % 2:
            logger.warning("CSV has an unterminated quote; reading quote characters literally")
            quoting = csv.QUOTE_NONE
        
        try:
            df = self._read_frame(text, quoting)
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as e:
            logger.warning(f"Malformed CSV ({e}); reading quote characters literally")
            try:
                df = self._read_frame(text, csv.QUOTE_NONE)
            except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
                logger.error(f"CSV could not be parsed, no rows loaded: {e}")
                return []
        
        absent = missing_columns(list(df.columns))
        if absent:
            logger.warning(f"CSV is missing columns {absent}; they default to empty")
        
        rows = []
        for record in df.to_dict(orient="records"):
            rows.append(Row(
                sentence=self._field(record, "sentence"),
                abbreviation=self._field(record, "abbreviation"),
                long_form=self._field(record, "long_form"),
                domain=self._field(record, "domain"),
                completed=parse_completed(record.get("completed")),
            ))
        return rows
    
    @staticmethod
    def _read_frame(text: str, quoting: int) -> pd.DataFrame:
        header = pd.read_csv(io.StringIO(text), nrows=0, dtype=str, engine="python", quoting=quoting).columns
        width = len(header)
        
        df = pd.read_csv(
            io.StringIO(text),
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            quoting=quoting,
            # Extra trailing fields are dropped instead of rejecting the line
            on_bad_lines=lambda fields: fields[:width],
        )
        df = df.fillna("")
        df.columns = [str(column).strip() for column in df.columns]
        return df
    
    @monitor_performance("csv_encode")
    def encode(self, rows: List[Row]) -> str:
        """
        Serialize rows to CSV text.
        
        The header is always sentence,abbreviation,long_form,domain,completed
        and the completion flag is written as true/false.
        """
        df = pd.DataFrame([row.to_record() for row in rows], columns=COLUMNS)
        return df.to_csv(index=False, lineterminator="\n")
    
    @staticmethod
    def _field(record: dict, name: str) -> str:
        if name in record:
            value = record[name]
        elif FIELD_FALLBACKS.get(name) in record:
            value = record[FIELD_FALLBACKS[name]]
        else:
            return ""
        return "" if value is None or pd.isna(value) else str(value)
