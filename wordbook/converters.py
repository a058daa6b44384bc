"""
Bulk format converters.

Whole-collection conversion to and from:
- CSV text (header + one row per entry)
- JSON text (array of entry records)
- quick text ("term — meaning" per line, import only)

Decoders are tolerant: unusable rows, records and lines are skipped, and
input that cannot be parsed at all yields an empty list.
"""

from __future__ import annotations

import io
import json
import logging

import pandas as pd
from pydantic import ValidationError

from wordbook.codec import (
    EntryDecodeError,
    column_index_from_header,
    from_row,
    from_tree,
    to_row,
    to_tree,
)
from wordbook.constants import CSV_COLUMNS, QUICK_TEXT_SEPARATOR
from wordbook.schemas import WordEntry

logger = logging.getLogger(__name__)


# ---- CSV ----

def collection_to_table(entries: list[WordEntry]) -> str:
    """Serialize entries to CSV text with the fixed column header."""
    df = pd.DataFrame([to_row(entry) for entry in entries], columns=CSV_COLUMNS)
    return df.to_csv(index=False)


def table_to_collection(text: str) -> list[WordEntry]:
    """
    Parse CSV text into entries.

    The header row decides which column holds which field, so columns may be
    reordered or missing. Rows without term or meaning, and rows that fail
    to decode, are skipped.

    Returns:
        Decoded entries (empty if there is no data row or the text is not CSV)
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            on_bad_lines="skip",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeError) as e:
        logger.warning("Could not parse CSV text: %s", e)
        return []

    if df.empty:
        return []

    column_index = column_index_from_header(df.columns)

    entries = []
    skipped = 0
    for row in df.itertuples(index=False, name=None):
        try:
            entry = from_row(row, column_index)
        except (ValidationError, ValueError) as e:
            logger.debug("Skipping CSV row %r: %s", row, e)
            entry = None
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        logger.info("Skipped %d unusable CSV row(s)", skipped)
    return entries


# ---- JSON ----

def collection_to_structured_text(entries: list[WordEntry]) -> str:
    """Serialize entries to a JSON array."""
    return json.dumps([to_tree(entry) for entry in entries], ensure_ascii=False)


def structured_text_to_collection(text: str) -> list[WordEntry]:
    """
    Parse a JSON array of entry records.

    Returns:
        Decoded entries; empty if the text is not a JSON array. Records that
        fail to decode are skipped.
    """
    try:
        records = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning("Could not parse JSON text: %s", e)
        return []

    if not isinstance(records, list):
        logger.warning("Expected a JSON array, got %s", type(records).__name__)
        return []

    entries = []
    for record in records:
        try:
            entries.append(from_tree(record))
        except EntryDecodeError as e:
            logger.debug("Skipping JSON record: %s", e)

    skipped = len(records) - len(entries)
    if skipped:
        logger.info("Skipped %d unusable JSON record(s)", skipped)
    return entries


# ---- Quick Text ----

def quick_text_to_collection(text: str) -> list[WordEntry]:
    """
    Parse "term — meaning" lines (em-dash separator).

    Everything after the first em-dash is the meaning, including any further
    em-dashes. Lines without a separator or with an empty side are skipped.
    """
    entries = []
    for line in text.splitlines():
        if not line.strip():
            continue

        term, separator, meaning = line.partition(QUICK_TEXT_SEPARATOR)
        term = term.strip()
        meaning = meaning.strip()
        if not separator or not term or not meaning:
            logger.debug("Skipping quick text line: %r", line)
            continue

        entries.append(WordEntry(term=term, meaning=meaning))

    return entries
