"""
Query helpers over a collection of entries.

Search, filtering and sorting for word lists, plus the due-for-review
list and tag / part-of-speech listings used for filters.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from wordbook.schemas import WordEntry, now_ms


class SortOption(str, Enum):
    """Sort orders for word lists."""
    ALPHABETICAL = "alphabetical"
    RECENTLY_ADDED = "recently_added"
    DUE_FOR_REVIEW = "due_for_review"


def _matches_query(entry: WordEntry, query: str) -> bool:
    return (
        query in entry.term.lower()
        or query in entry.meaning.lower()
        or any(query in tag.lower() for tag in entry.tags)
    )


def filter_and_sort(
    entries: Iterable[WordEntry],
    query: str = "",
    favorites_only: bool = False,
    tags: Iterable[str] = (),
    parts_of_speech: Iterable[str] = (),
    sort: SortOption = SortOption.ALPHABETICAL
) -> list[WordEntry]:
    """
    Filter and sort entries for display.

    Args:
        entries: Entries to filter
        query: Case-insensitive substring matched against term, meaning and tags
        favorites_only: If True, only return favorites
        tags: If given, keep entries having at least one of these tags
        parts_of_speech: If given, keep entries with one of these parts of speech
        sort: Sort order

    Returns:
        New list of matching entries
    """
    query = query.strip().lower()
    active_tags = set(tags)
    active_parts = set(parts_of_speech)

    filtered = []
    for entry in entries:
        if query and not _matches_query(entry, query):
            continue
        if favorites_only and not entry.favorite:
            continue
        if active_tags and not any(tag in active_tags for tag in entry.tags):
            continue
        if active_parts and entry.part_of_speech not in active_parts:
            continue
        filtered.append(entry)

    sort = SortOption(sort)
    if sort == SortOption.ALPHABETICAL:
        filtered.sort(key=lambda e: e.term.lower())
    elif sort == SortOption.RECENTLY_ADDED:
        filtered.sort(key=lambda e: e.created_at_epoch, reverse=True)
    elif sort == SortOption.DUE_FOR_REVIEW:
        filtered.sort(key=lambda e: e.next_review_epoch)

    return filtered


def due_for_review(
    entries: Iterable[WordEntry],
    now: Optional[int] = None
) -> list[WordEntry]:
    """Entries whose next review time has passed, earliest first."""
    if now is None:
        now = now_ms()
    due = [entry for entry in entries if entry.next_review_epoch <= now]
    due.sort(key=lambda e: e.next_review_epoch)
    return due


def all_tags(entries: Iterable[WordEntry]) -> list[str]:
    """Sorted unique tags across all entries."""
    tags: set[str] = set()
    for entry in entries:
        tags.update(entry.tags)
    return sorted(tags)


def all_parts_of_speech(entries: Iterable[WordEntry]) -> list[str]:
    """Sorted unique non-empty parts of speech."""
    return sorted({
        entry.part_of_speech
        for entry in entries
        if entry.part_of_speech and entry.part_of_speech.strip()
    })
