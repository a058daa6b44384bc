"""
Pydantic model for a dictionary word entry.

The field aliases are the camelCase names used in words.json and in the
CSV header; Python code uses the snake_case field names.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wordbook.constants import MAX_REVIEW_STAGE, MIN_REVIEW_STAGE


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return time.time_ns() // 1_000_000


def generate_entry_id() -> str:
    """
    Generate a unique entry ID (UUID).

    Returns:
        UUID string
    """
    return str(uuid.uuid4())


class WordEntry(BaseModel):
    """
    A single word entry in the dictionary.

    Entries are immutable; use with_changes() to derive an edited copy.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=generate_entry_id, min_length=1)

    # Field order matches the CSV column order
    term: str = Field(..., description="The word or phrase itself (merge key)")
    phonetic: Optional[str] = None
    part_of_speech: Optional[str] = Field(default=None, alias="partOfSpeech")
    meaning: str = Field(..., description="Definition of the term")
    examples: list[str] = Field(default_factory=list)
    synonyms: list[str] = Field(default_factory=list)
    antonyms: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    favorite: bool = False

    # Timestamps (ms since epoch)
    created_at_epoch: int = Field(default_factory=now_ms, alias="createdAtEpoch")
    updated_at_epoch: int = Field(default_factory=now_ms, alias="updatedAtEpoch")

    # Spaced repetition
    review_stage: int = Field(
        default=MIN_REVIEW_STAGE,
        ge=MIN_REVIEW_STAGE,
        le=MAX_REVIEW_STAGE,
        alias="reviewStage",
    )
    next_review_epoch: int = Field(
        default_factory=lambda data: data.get("created_at_epoch", now_ms()),
        alias="nextReviewEpoch",
        description="Defaults to the creation time (due immediately)",
    )

    @field_validator("term", "meaning")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("examples", "synonyms", "antonyms", "tags")
    @classmethod
    def _drop_empty_items(cls, values: list[str]) -> list[str]:
        return [value for value in values if value]

    @property
    def term_key(self) -> str:
        """Normalized term used for merge imports."""
        return self.term.lower()

    def with_changes(self, **changes: Any) -> WordEntry:
        """
        Return a validated copy with the given fields replaced.

        updated_at_epoch is stamped with the current time (never moving
        backwards) unless given explicitly.

        Raises:
            ValueError: If id or created_at_epoch is changed, or the result
                is not a valid entry
        """
        for frozen_field in ("id", "created_at_epoch"):
            if frozen_field in changes:
                raise ValueError(f"{frozen_field} cannot be changed")

        changes.setdefault("updated_at_epoch", max(now_ms(), self.updated_at_epoch))
        return type(self).model_validate({**self.model_dump(), **changes})

    def is_due(self, now: Optional[int] = None) -> bool:
        """Check if the entry is due for review."""
        if now is None:
            now = now_ms()
        return now >= self.next_review_epoch

    def __str__(self) -> str:
        return f"WordEntry(id={self.id}, term={self.term})"
