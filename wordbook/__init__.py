"""
Wordbook - local dictionary word store

File-backed store for dictionary entries with debounced atomic saves,
a CSV mirror, backups, JSON / CSV / quick-text import and a simple
spaced-repetition scheduler.

Quick start:
    from wordbook import LocalStoragePaths, WordEntry, WordRepository, apply_review

    async with WordRepository(LocalStoragePaths.from_settings()) as repo:
        await repo.add(WordEntry(term="lopen", meaning="to walk"))

        entry = repo.cache[0]
        await repo.update(apply_review(entry, "good"))
"""

# Data model
from wordbook.schemas import WordEntry, generate_entry_id, now_ms

# Repository API
from wordbook.repository import (
    BackupError,
    StorageError,
    WordbookError,
    WordRepository,
    merge_by_term,
)

# Storage locations
from wordbook.paths import LocalStoragePaths, StoragePaths

# Codecs and converters
from wordbook.codec import EntryDecodeError, from_row, from_tree, to_row, to_tree
from wordbook.converters import (
    collection_to_structured_text,
    collection_to_table,
    quick_text_to_collection,
    structured_text_to_collection,
    table_to_collection,
)

# Scheduling
from wordbook.constants import ReviewDifficulty
from wordbook.scheduler import ReviewSchedule, apply_review, next_schedule

# Queries
from wordbook.queries import (
    SortOption,
    all_parts_of_speech,
    all_tags,
    due_for_review,
    filter_and_sort,
)


__all__ = [
    # Data model
    "WordEntry",
    "generate_entry_id",
    "now_ms",

    # Repository
    "WordRepository",
    "merge_by_term",
    "WordbookError",
    "StorageError",
    "BackupError",

    # Storage locations
    "StoragePaths",
    "LocalStoragePaths",

    # Codecs and converters
    "EntryDecodeError",
    "to_row",
    "from_row",
    "to_tree",
    "from_tree",
    "collection_to_table",
    "table_to_collection",
    "collection_to_structured_text",
    "structured_text_to_collection",
    "quick_text_to_collection",

    # Scheduling
    "ReviewDifficulty",
    "ReviewSchedule",
    "next_schedule",
    "apply_review",

    # Queries
    "SortOption",
    "filter_and_sort",
    "due_for_review",
    "all_tags",
    "all_parts_of_speech",
]
