import pytest

from wordbook import LocalStoragePaths, WordEntry


@pytest.fixture
def paths(tmp_path):
    """Storage paths inside a per-test temp directory."""
    return LocalStoragePaths(tmp_path / "data")


@pytest.fixture
def make_entry():
    """Factory for entries with sensible defaults."""
    def _make(term="lopen", meaning="to walk", **fields):
        return WordEntry(term=term, meaning=meaning, **fields)
    return _make


@pytest.fixture
def full_entry():
    """An entry with every field populated."""
    return WordEntry(
        id="entry-1",
        term="verrekijker",
        phonetic="ˈvɛrəˌkɛikər",
        part_of_speech="noun",
        meaning="binoculars, field glasses",
        examples=["Ik kijk door de verrekijker.", "Pak de verrekijker!"],
        synonyms=["kijker"],
        antonyms=[],
        tags=["travel", "nature"],
        favorite=True,
        created_at_epoch=1_700_000_000_000,
        updated_at_epoch=1_700_000_500_000,
        review_stage=3,
        next_review_epoch=1_700_100_000_000,
    )
