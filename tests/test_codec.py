import math

import pytest

from wordbook import EntryDecodeError, WordEntry, from_row, from_tree, now_ms, to_row, to_tree
from wordbook.codec import ColumnReader, column_index_from_header, split_cell
from wordbook.constants import CSV_COLUMNS

FULL_INDEX = column_index_from_header(CSV_COLUMNS)


# ---- CSV rows ----

def test_to_row_layout(full_entry):
    assert to_row(full_entry) == [
        "entry-1",
        "verrekijker",
        "ˈvɛrəˌkɛikər",
        "noun",
        "binoculars, field glasses",
        "Ik kijk door de verrekijker.|Pak de verrekijker!",
        "kijker",
        "",
        "travel|nature",
        "true",
        "1700000000000",
        "1700000500000",
        "3",
        "1700100000000",
    ]


def test_to_row_empty_optionals(make_entry):
    row = to_row(make_entry(favorite=False))
    assert row[2] == ""  # phonetic
    assert row[3] == ""  # partOfSpeech
    assert row[9] == "false"


def test_row_round_trip(full_entry):
    assert from_row(to_row(full_entry), FULL_INDEX) == full_entry


def test_row_round_trip_without_optionals(make_entry):
    entry = make_entry()
    assert from_row(to_row(entry), FULL_INDEX) == entry


@pytest.mark.parametrize("term, meaning", [("", "to walk"), ("lopen", ""), ("  ", "to walk")])
def test_from_row_requires_term_and_meaning(term, meaning):
    assert from_row(["x", term, meaning], {"id": 0, "term": 1, "meaning": 2}) is None


def test_from_row_missing_columns():
    assert from_row(["lopen"], {"term": 0}) is None


def test_from_row_reordered_subset():
    before = now_ms()
    entry = from_row(["to walk", "lopen"], {"meaning": 0, "term": 1})
    after = now_ms()

    assert entry.term == "lopen"
    assert entry.meaning == "to walk"
    assert len(entry.id) == 36
    assert entry.tags == []
    assert entry.favorite is False
    assert entry.review_stage == 0
    assert before <= entry.created_at_epoch <= after
    assert before <= entry.next_review_epoch <= after


def test_from_row_bad_numbers_fall_back():
    index = {"term": 0, "meaning": 1, "createdAtEpoch": 2, "updatedAtEpoch": 3, "reviewStage": 4}
    before = now_ms()
    entry = from_row(["lopen", "to walk", "yesterday", "", "lots"], index)
    after = now_ms()

    assert before <= entry.created_at_epoch <= after
    assert before <= entry.updated_at_epoch <= after
    assert entry.review_stage == 0


def test_from_row_out_of_range_stage_falls_back():
    entry = from_row(["lopen", "to walk", "9"], {"term": 0, "meaning": 1, "reviewStage": 2})
    assert entry.review_stage == 0


@pytest.mark.parametrize("cell, expected", [("true", True), (" TRUE ", True), ("false", False), ("yes", False), ("", False)])
def test_from_row_favorite(cell, expected):
    entry = from_row(["lopen", "to walk", cell], {"term": 0, "meaning": 1, "favorite": 2})
    assert entry.favorite is expected


def test_from_row_keeps_list_values_verbatim():
    entry = from_row(["lopen", "to walk", " a | b||c"], {"term": 0, "meaning": 1, "tags": 2})
    assert entry.tags == [" a ", " b", "c"]


def test_column_reader_handles_nan_and_short_rows():
    reader = ColumnReader(["lopen", math.nan], {"term": 0, "meaning": 1, "tags": 5})
    assert reader.text("term") == "lopen"
    assert reader.text("meaning") is None
    assert reader.text("missing") is None
    assert reader.text_list("tags") == []
    assert reader.integer("term") is None
    assert reader.boolean("meaning") is None


def test_split_cell_empty():
    assert split_cell(None) == []
    assert split_cell("") == []


# ---- JSON records ----

def test_to_tree_uses_camel_case(full_entry):
    tree = to_tree(full_entry)
    assert list(tree) == CSV_COLUMNS
    assert tree["partOfSpeech"] == "noun"
    assert tree["examples"] == ["Ik kijk door de verrekijker.", "Pak de verrekijker!"]
    assert tree["favorite"] is True


def test_tree_round_trip(full_entry):
    assert from_tree(to_tree(full_entry)) == full_entry


def test_from_tree_defaults():
    entry = from_tree({
        "id": "a",
        "term": "lopen",
        "meaning": "to walk",
        "phonetic": None,
        "examples": None,
        "createdAtEpoch": 10,
        "updatedAtEpoch": 20,
    })
    assert entry.phonetic is None
    assert entry.examples == []
    assert entry.tags == []
    assert entry.favorite is False
    assert entry.review_stage == 0
    assert entry.next_review_epoch == 10


@pytest.mark.parametrize("missing", ["id", "term", "meaning", "createdAtEpoch", "updatedAtEpoch"])
def test_from_tree_required_fields(missing):
    record = {"id": "a", "term": "t", "meaning": "m", "createdAtEpoch": 1, "updatedAtEpoch": 2}
    del record[missing]
    with pytest.raises(EntryDecodeError, match=missing):
        from_tree(record)


def test_from_tree_invalid_values():
    with pytest.raises(EntryDecodeError):
        from_tree({"id": "a", "term": "t", "meaning": "m", "createdAtEpoch": "soon", "updatedAtEpoch": 2})


def test_from_tree_not_an_object():
    with pytest.raises(EntryDecodeError):
        from_tree(["not", "a", "record"])


def test_decode_error_is_value_error():
    assert issubclass(EntryDecodeError, ValueError)
    assert isinstance(from_tree(to_tree(WordEntry(term="a", meaning="b"))), WordEntry)


def test_column_index_ignores_bom_and_whitespace():
    assert column_index_from_header(["\ufeffid", " term ", "meaning"]) == {
        "id": 0, "term": 1, "meaning": 2,
    }
