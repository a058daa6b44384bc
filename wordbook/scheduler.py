"""
Scheduler - Review Stage Logic

Pure review scheduling (no repository calls).

Each review moves an entry between stages 0-5 and pushes its next review
further out the higher the stage:

    easy: stage + 2, due in 7 x stage days
    good: stage + 1, due in 2 x stage days
    hard: stage - 1, due in 1 day

Stage 0 is always due again in 1 day. Callers persist the result with
WordRepository.update().
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Union

from wordbook.constants import (
    DAYS_PER_STAGE,
    MAX_REVIEW_STAGE,
    MIN_REVIEW_STAGE,
    MS_PER_DAY,
    STAGE_STEP,
    ReviewDifficulty,
)
from wordbook.schemas import WordEntry, now_ms


class ReviewSchedule(NamedTuple):
    stage: int
    next_review_epoch: int


def next_schedule(
    current_stage: int,
    difficulty: Union[ReviewDifficulty, str],
    now: Optional[int] = None
) -> ReviewSchedule:
    """
    Compute the new review stage and next review time.

    Args:
        current_stage: Current review stage (0-5)
        difficulty: User feedback ("easy", "good" or "hard")
        now: Current time in ms since epoch (defaults to now)

    Returns:
        ReviewSchedule(stage, next_review_epoch)

    Raises:
        ValueError: If difficulty is not a known ReviewDifficulty
    """
    difficulty = ReviewDifficulty(difficulty)
    if now is None:
        now = now_ms()

    new_stage = current_stage + STAGE_STEP[difficulty]
    new_stage = max(MIN_REVIEW_STAGE, min(new_stage, MAX_REVIEW_STAGE))

    if new_stage == MIN_REVIEW_STAGE or difficulty == ReviewDifficulty.HARD:
        days = 1
    else:
        days = DAYS_PER_STAGE[difficulty] * new_stage

    return ReviewSchedule(new_stage, now + days * MS_PER_DAY)


def apply_review(
    entry: WordEntry,
    difficulty: Union[ReviewDifficulty, str],
    now: Optional[int] = None
) -> WordEntry:
    """
    Return a copy of entry rescheduled for the given feedback.

    The copy still has to be saved with WordRepository.update().
    """
    if now is None:
        now = now_ms()

    schedule = next_schedule(entry.review_stage, difficulty, now)
    return entry.with_changes(
        review_stage=schedule.stage,
        next_review_epoch=schedule.next_review_epoch,
        updated_at_epoch=max(now, entry.updated_at_epoch),
    )
