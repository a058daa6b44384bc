"""
Wordbook Constants and Parameters

File layout, CSV column order and review scheduling parameters in one place.
"""

from enum import Enum


# ---- Review Difficulty ----

class ReviewDifficulty(str, Enum):
    """User feedback on a flashcard review."""
    HARD = "hard"   # Struggled to recall
    GOOD = "good"   # Recalled normally
    EASY = "easy"   # Recalled instantly


# ---- Review Stages ----

MIN_REVIEW_STAGE = 0
MAX_REVIEW_STAGE = 5

MS_PER_DAY = 86_400_000

# Days until next review per stage, by difficulty (hard is always 1 day)
DAYS_PER_STAGE = {
    ReviewDifficulty.EASY: 7,
    ReviewDifficulty.GOOD: 2,
}

STAGE_STEP = {
    ReviewDifficulty.EASY: +2,
    ReviewDifficulty.GOOD: +1,
    ReviewDifficulty.HARD: -1,
}


# ---- CSV Layout ----

# Column order of the CSV mirror and CSV exports
CSV_COLUMNS = [
    "id",
    "term",
    "phonetic",
    "partOfSpeech",
    "meaning",
    "examples",
    "synonyms",
    "antonyms",
    "tags",
    "favorite",
    "createdAtEpoch",
    "updatedAtEpoch",
    "reviewStage",
    "nextReviewEpoch",
]

IN_CELL_DELIMITER = "|"  # Separates list values inside one CSV cell

QUICK_TEXT_SEPARATOR = "—"  # em-dash: "term — meaning"


# ---- Storage ----

WORDS_JSON_NAME = "words.json"
WORDS_JSON_TEMP_NAME = "words.json.tmp"
WORDS_CSV_NAME = "words.csv"
BACKUPS_DIR_NAME = "backups"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M"

DEFAULT_SAVE_DELAY_MS = 600  # Debounce window for writes
