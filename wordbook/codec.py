"""
Entry Codec - single-record conversion.

Converts one WordEntry to and from:
- a CSV row (fixed column order, list fields joined with '|')
- a JSON object (camelCase keys, native types)
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import pandas as pd
from pydantic import ValidationError

from wordbook.constants import (
    CSV_COLUMNS,
    IN_CELL_DELIMITER,
    MAX_REVIEW_STAGE,
    MIN_REVIEW_STAGE,
)
from wordbook.schemas import WordEntry, now_ms


# Keys that must be present in a JSON record
REQUIRED_TREE_FIELDS = ("id", "term", "meaning", "createdAtEpoch", "updatedAtEpoch")


class EntryDecodeError(ValueError):
    """A single record could not be decoded into a WordEntry."""


# ---- Typed Column Reader ----

class ColumnReader:
    """
    Typed access to the cells of one CSV row.

    Every accessor returns None (or an empty list) when the column is not in
    the header, the row is too short, or the cell is blank.
    """

    def __init__(self, row: Sequence[Any], column_index: dict[str, int]):
        self._row = row
        self._column_index = column_index

    def _raw(self, name: str) -> Optional[str]:
        index = self._column_index.get(name)
        if index is None or index >= len(self._row):
            return None
        value = self._row[index]
        if value is None or pd.isna(value):
            return None
        value = str(value)
        return value if value != "" else None

    def text(self, name: str) -> Optional[str]:
        return self._raw(name)

    def integer(self, name: str) -> Optional[int]:
        value = self._raw(name)
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError:
            return None

    def boolean(self, name: str) -> Optional[bool]:
        value = self._raw(name)
        if value is None:
            return None
        return value.strip().lower() == "true"

    def text_list(self, name: str) -> list[str]:
        return split_cell(self._raw(name))


def join_cell(values: list[str]) -> str:
    """Join list values into one CSV cell."""
    return IN_CELL_DELIMITER.join(values)


def split_cell(cell: Optional[str]) -> list[str]:
    """Split a CSV cell back into list values (empty pieces dropped)."""
    if not cell:
        return []
    return [value for value in cell.split(IN_CELL_DELIMITER) if value]


# ---- CSV Rows ----

def to_row(entry: WordEntry) -> list[str]:
    """Convert an entry to CSV cell values in CSV_COLUMNS order."""
    return [
        entry.id,
        entry.term,
        entry.phonetic or "",
        entry.part_of_speech or "",
        entry.meaning,
        join_cell(entry.examples),
        join_cell(entry.synonyms),
        join_cell(entry.antonyms),
        join_cell(entry.tags),
        "true" if entry.favorite else "false",
        str(entry.created_at_epoch),
        str(entry.updated_at_epoch),
        str(entry.review_stage),
        str(entry.next_review_epoch),
    ]


def column_index_from_header(header: Sequence[Any]) -> dict[str, int]:
    """Map header names to their positions (surrounding whitespace and a BOM ignored)."""
    return {
        str(name).lstrip("\ufeff").strip(): position
        for position, name in enumerate(header)
    }


def from_row(row: Sequence[Any], column_index: dict[str, int]) -> Optional[WordEntry]:
    """
    Build an entry from a CSV row.

    Args:
        row: Cell values
        column_index: Header name -> position (see column_index_from_header)

    Returns:
        WordEntry, or None if term or meaning is missing

    Raises:
        ValidationError: If the remaining values do not form a valid entry
    """
    reader = ColumnReader(row, column_index)

    term = reader.text("term")
    meaning = reader.text("meaning")
    if term is None or meaning is None or not term.strip() or not meaning.strip():
        return None

    now = now_ms()

    review_stage = reader.integer("reviewStage")
    if review_stage is None or not MIN_REVIEW_STAGE <= review_stage <= MAX_REVIEW_STAGE:
        review_stage = MIN_REVIEW_STAGE

    fields: dict[str, Any] = {
        "term": term,
        "phonetic": reader.text("phonetic"),
        "part_of_speech": reader.text("partOfSpeech"),
        "meaning": meaning,
        "examples": reader.text_list("examples"),
        "synonyms": reader.text_list("synonyms"),
        "antonyms": reader.text_list("antonyms"),
        "tags": reader.text_list("tags"),
        "favorite": reader.boolean("favorite") or False,
        "created_at_epoch": _or_default(reader.integer("createdAtEpoch"), now),
        "updated_at_epoch": _or_default(reader.integer("updatedAtEpoch"), now),
        "review_stage": review_stage,
        "next_review_epoch": _or_default(reader.integer("nextReviewEpoch"), now),
    }

    # Keep the generated id when the column is missing or blank
    entry_id = reader.text("id")
    if entry_id is not None:
        fields["id"] = entry_id

    return WordEntry(**fields)


def _or_default(value: Optional[int], default: int) -> int:
    return default if value is None else value


# ---- JSON Records ----

def to_tree(entry: WordEntry) -> dict[str, Any]:
    """Convert an entry to a JSON-ready dict with camelCase keys."""
    return entry.model_dump(by_alias=True)


def from_tree(record: Any) -> WordEntry:
    """
    Build an entry from a JSON record.

    Null values fall back to field defaults. id, term, meaning,
    createdAtEpoch and updatedAtEpoch are required.

    Raises:
        EntryDecodeError: If the record is not an object, misses a required
            key or holds invalid values
    """
    if not isinstance(record, dict):
        raise EntryDecodeError(f"Expected an object, got {type(record).__name__}")

    missing = [key for key in REQUIRED_TREE_FIELDS if record.get(key) is None]
    if missing:
        raise EntryDecodeError(f"Missing required field(s): {', '.join(missing)}")

    data = {key: value for key, value in record.items() if value is not None}
    try:
        return WordEntry.model_validate(data)
    except ValidationError as e:
        raise EntryDecodeError(f"Invalid record {record.get('id')!r}: {e}") from e
