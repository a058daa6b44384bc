import pytest

from wordbook import ReviewDifficulty, ReviewSchedule, apply_review, next_schedule
from wordbook.constants import MS_PER_DAY

NOW = 1_700_000_000_000


@pytest.mark.parametrize("stage, difficulty, expected_stage, expected_days", [
    (3, "good", 4, 8),
    (0, "hard", 0, 1),
    (4, "easy", 5, 35),
    (0, "good", 1, 2),
    (0, "easy", 2, 14),
    (5, "good", 5, 10),
    (5, "easy", 5, 35),
    (3, "hard", 2, 1),
    (1, "hard", 0, 1),
])
def test_schedule_table(stage, difficulty, expected_stage, expected_days):
    schedule = next_schedule(stage, difficulty, NOW)
    assert schedule == ReviewSchedule(expected_stage, NOW + expected_days * MS_PER_DAY)


def test_accepts_enum():
    assert next_schedule(2, ReviewDifficulty.GOOD, NOW).stage == 3


def test_stage_stays_in_bounds():
    for difficulty in ReviewDifficulty:
        for stage in range(6):
            assert 0 <= next_schedule(stage, difficulty, NOW).stage <= 5


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        next_schedule(2, "impossible", NOW)


def test_defaults_to_current_time():
    schedule = next_schedule(0, "hard")
    assert schedule.next_review_epoch > NOW


def test_apply_review(make_entry):
    entry = make_entry(review_stage=1, created_at_epoch=NOW - 10, updated_at_epoch=NOW - 10)
    reviewed = apply_review(entry, "easy", NOW)

    assert reviewed.id == entry.id
    assert reviewed.review_stage == 3
    assert reviewed.next_review_epoch == NOW + 21 * MS_PER_DAY
    assert reviewed.updated_at_epoch == NOW
    assert entry.review_stage == 1


def test_apply_review_keeps_updated_monotonic(make_entry):
    entry = make_entry(updated_at_epoch=NOW + 5_000)
    assert apply_review(entry, "hard", NOW).updated_at_epoch == NOW + 5_000
