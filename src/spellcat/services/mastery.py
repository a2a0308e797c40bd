"""Mastery classification and review scheduling for practice words."""
from datetime import UTC, datetime, timedelta
from typing import Any, Iterable, Mapping, Optional, Tuple

from spellcat.config import LearningSettings, settings
from spellcat.models.spelling_models import (
    CelebrationLevel,
    MasteryLevelInfo,
    MasteryProgress,
    MasteryStatus,
)

MASTERY_LEVELS = [
    MasteryLevelInfo(0, "Need to Practice", "red", 0),
    MasteryLevelInfo(1, "Getting Started", "yellow-light", 1),
    MasteryLevelInfo(2, "Building Confidence", "yellow", 3),
    MasteryLevelInfo(3, "Doing Well!", "orange", 7),
    MasteryLevelInfo(4, "Almost There!", "green-light", 14),
    MasteryLevelInfo(5, "MASTERED!", "green", 30),
]


def _require_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} cannot be negative")
    return value


def _naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone(UTC).replace(tzinfo=None)
    return moment


def _now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def success_rate(attempts: int, correct_attempts: int) -> int:
    """Percentage of correct attempts, rounded half up; 0 before any attempt."""
    attempts = _require_count("attempts", attempts)
    correct_attempts = _require_count("correct_attempts", correct_attempts)
    if correct_attempts > attempts:
        raise ValueError("correct_attempts cannot exceed attempts")
    if attempts == 0:
        return 0
    return (correct_attempts * 200 + attempts) // (attempts * 2)


def _stats_counts(stats: Any) -> Tuple[int, int]:
    if isinstance(stats, Mapping):
        attempts = stats.get("attempts")
        correct = stats.get("correct_attempts", stats.get("correctAttempts"))
    else:
        attempts = getattr(stats, "attempts", None)
        correct = getattr(stats, "correct_attempts", None)
    return attempts, correct


def classify_mastery(stats: Any, learning: Optional[LearningSettings] = None) -> MasteryStatus:
    """Bucket a word's attempt history into a mastery status.

    ``stats`` is a mapping or an object with ``attempts`` and
    ``correct_attempts``. The status is recomputed on every call and never
    stored.
    """
    learning = learning or settings.learning
    attempts, correct = _stats_counts(stats)
    rate = success_rate(attempts, correct)

    if attempts == 0:
        return MasteryStatus.NOT_STARTED
    if rate >= learning.mastered_threshold and attempts >= learning.min_attempts_for_mastery:
        return MasteryStatus.MASTERED
    if rate >= learning.practicing_threshold:
        return MasteryStatus.PRACTICING
    return MasteryStatus.NEEDS_WORK


def is_review_due(next_review: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """Whether a scheduled review time has been reached."""
    if next_review is None:
        return False
    now = _naive_utc(now) if now is not None else _now()
    return now >= _naive_utc(next_review)


def calculate_next_review(
    correct_attempts: int,
    was_correct: bool,
    now: Optional[datetime] = None,
    learning: Optional[LearningSettings] = None,
) -> datetime:
    """Schedule the next review from the correct count before this answer.

    Correct answers move further out along the review intervals; a wrong
    answer brings the word back after the retry delay.
    """
    learning = learning or settings.learning
    correct_attempts = _require_count("correct_attempts", correct_attempts)
    now = _naive_utc(now) if now is not None else _now()

    if not was_correct:
        return now + timedelta(hours=learning.retry_delay_hours)

    intervals = learning.review_intervals
    days = intervals[min(correct_attempts, len(intervals) - 1)]
    return now + timedelta(days=days)


def adjust_difficulty(
    difficulty: int,
    attempts: int,
    rate: int,
    learning: Optional[LearningSettings] = None,
) -> int:
    """Move difficulty one step once a word has at least three attempts."""
    learning = learning or settings.learning
    if attempts < 3:
        return difficulty
    if rate >= 80:
        return min(learning.max_difficulty, difficulty + 1)
    if rate < 40:
        return max(learning.min_difficulty, difficulty - 1)
    return difficulty


def update_mastery_level(
    level: int,
    streak: int,
    was_correct: bool,
    learning: Optional[LearningSettings] = None,
) -> Tuple[int, int]:
    """Return the new ``(level, streak)`` after an answer.

    A correct answer extends the streak and the level follows it up to the
    maximum; a wrong answer drops two levels and resets the streak.
    """
    learning = learning or settings.learning
    if was_correct:
        streak = (streak or 0) + 1
        return min(streak, learning.max_mastery_level), streak
    return max((level or 0) - 2, 0), 0


def mastery_level_info(level: int) -> MasteryLevelInfo:
    return MASTERY_LEVELS[min(max(level, 0), len(MASTERY_LEVELS) - 1)]


def mastery_progress(levels: Iterable[Optional[int]]) -> MasteryProgress:
    """Summarise how many words sit at each mastery level."""
    by_level = {info.level: 0 for info in MASTERY_LEVELS}
    total = 0
    for level in levels:
        level = level or 0
        by_level[level] = by_level.get(level, 0) + 1
        total += 1

    top = MASTERY_LEVELS[-1].level
    mastered = by_level.get(top, 0)
    percentage = (mastered * 200 + total) // (total * 2) if total else 0
    return MasteryProgress(total=total, mastered=mastered, percentage=percentage, by_level=by_level)


def celebration_level(score: float) -> CelebrationLevel:
    if score >= 80:
        return CelebrationLevel.GREAT
    if score >= 60:
        return CelebrationLevel.GOOD
    return CelebrationLevel.KEEP_TRYING
