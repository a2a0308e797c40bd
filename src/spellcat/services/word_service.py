"""Service for managing practice words and their statistics."""
import logging
from typing import Iterable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from spellcat import monitoring
from spellcat.config import LearningSettings, settings
from spellcat.data.words import get_words_for_year_group
from spellcat.models.base import utcnow
from spellcat.models.models import Word
from spellcat.models.spelling_models import MasteryStatus, PracticeWord, WordWithStats
from spellcat.services import mastery

logger = logging.getLogger(__name__)


def to_word_with_stats(word: Word, learning: Optional[LearningSettings] = None) -> WordWithStats:
    """Snapshot a stored word with its derived success rate and status."""
    return WordWithStats(
        id=word.id,
        word=word.word,
        difficulty=word.difficulty,
        attempts=word.attempts,
        correct_attempts=word.correct_attempts,
        success_rate=mastery.success_rate(word.attempts, word.correct_attempts),
        status=mastery.classify_mastery(word, learning),
        mastery_level=word.mastery_level or 0,
        last_attempted=word.last_attempted,
        next_review=word.next_review,
    )


class WordService:
    """Service for managing practice words and their statistics."""

    def __init__(self, db: Session, learning: Optional[LearningSettings] = None):
        """Initialize the service with a database session."""
        self.db = db
        self.learning = learning or settings.learning

    def get_word_by_text(self, text: str) -> Optional[Word]:
        """Get a word by its text, ignoring case."""
        return self.db.query(Word).filter(Word.word == text.strip().lower()).first()

    def get_word_count(self) -> int:
        """Get the count of words in the database."""
        return self.db.query(Word).count()

    def add_word(self, text: str, difficulty: int = 1) -> Word:
        """Add a word, or return the existing one with the same text."""
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Word text must be a non-empty string")
        if not self.learning.min_difficulty <= difficulty <= self.learning.max_difficulty:
            raise ValueError(
                f"Difficulty must be between {self.learning.min_difficulty} "
                f"and {self.learning.max_difficulty}"
            )

        existing_word = self.get_word_by_text(text)
        if existing_word:
            return existing_word

        word = Word(word=text.strip().lower(), difficulty=difficulty)
        self.db.add(word)
        self.db.commit()
        self.db.refresh(word)
        return word

    def seed_words(self, texts: Iterable[str]) -> int:
        """Insert words that are not stored yet. Returns how many were added."""
        existing = {row[0] for row in self.db.query(Word.word).all()}
        added = 0
        for text in texts:
            normalized = text.strip().lower()
            if not normalized or normalized in existing:
                continue
            self.db.add(Word(word=normalized, difficulty=1))
            existing.add(normalized)
            added += 1
        self.db.commit()
        return added

    def initialize_word_list(self, year_group: Optional[int] = None) -> int:
        """Seed the curriculum list for a year group when no words exist."""
        if self.get_word_count() > 0:
            return 0
        year_group = year_group or self.learning.year_group
        added = self.seed_words(get_words_for_year_group(year_group))
        logger.info("Initialized word list with %d words for year group %d", added, year_group)
        return added

    def _to_practice_word(self, word: Word) -> PracticeWord:
        return PracticeWord(word=word.word, is_new_word=word.attempts == 0, difficulty=word.difficulty)

    def get_random_word(self) -> PracticeWord:
        """Pick the next practice word.

        Words due for review (or never scheduled) come first, then words
        without enough correct attempts, then anything.
        """
        now = utcnow()
        word = (
            self.db.query(Word)
            .filter(or_(Word.next_review.is_(None), Word.next_review <= now))
            .order_by(func.random())
            .first()
        )
        if word is None:
            word = (
                self.db.query(Word)
                .filter(Word.correct_attempts < self.learning.unmastered_correct_limit)
                .order_by(func.random())
                .first()
            )
        if word is None:
            word = self.db.query(Word).order_by(func.random()).first()
        if word is None:
            raise LookupError("No words available for practice")
        return self._to_practice_word(word)

    def apply_answer(self, text: str, was_correct: bool) -> Word:
        """Apply one answer to a word's stats without committing.

        Callers commit; ``update_word_stats`` does so for a single answer and
        the session services do so once per session.
        """
        if not isinstance(was_correct, bool):
            raise ValueError("was_correct must be a boolean")
        word = self.get_word_by_text(text)
        if not word:
            raise LookupError(f"Word {text!r} not found")

        now = utcnow()
        previous_correct = word.correct_attempts
        word.attempts += 1
        if was_correct:
            word.correct_attempts += 1

        rate = mastery.success_rate(word.attempts, word.correct_attempts)
        word.last_attempted = now
        word.next_review = mastery.calculate_next_review(previous_correct, was_correct, now, self.learning)
        word.difficulty = mastery.adjust_difficulty(word.difficulty, word.attempts, rate, self.learning)
        word.mastery_level, word.consecutive_correct = mastery.update_mastery_level(
            word.mastery_level, word.consecutive_correct, was_correct, self.learning
        )
        return word

    def update_word_stats(self, text: str, was_correct: bool) -> WordWithStats:
        """Record one answer against a word and reschedule its review."""
        word = self.apply_answer(text, was_correct)
        self.db.commit()
        monitoring.record_attempt(was_correct)
        logger.info(
            "Recorded %s answer for %r (%d/%d, level %d)",
            "correct" if was_correct else "incorrect",
            word.word,
            word.correct_attempts,
            word.attempts,
            word.mastery_level,
        )
        return to_word_with_stats(word, self.learning)

    def get_words_needing_review(self, limit: Optional[int] = None) -> List[WordWithStats]:
        """Attempted words whose review time has passed, earliest first."""
        limit = limit or self.learning.review_list_limit
        words = (
            self.db.query(Word)
            .filter(
                Word.attempts > 0,
                Word.next_review.is_not(None),
                Word.next_review <= utcnow(),
            )
            .order_by(Word.next_review.asc())
            .limit(limit)
            .all()
        )
        return [to_word_with_stats(word, self.learning) for word in words]

    def count_words_needing_review(self) -> int:
        return (
            self.db.query(Word)
            .filter(
                Word.attempts > 0,
                Word.next_review.is_not(None),
                Word.next_review <= utcnow(),
            )
            .count()
        )

    def get_words_with_stats(self, status: Optional[MasteryStatus] = None) -> List[WordWithStats]:
        """All words with derived stats, optionally only those in one status."""
        words = self.db.query(Word).order_by(Word.word).all()
        stats = [to_word_with_stats(word, self.learning) for word in words]
        if status is not None:
            stats = [item for item in stats if item.status is status]
        return stats

    def get_mastery_levels(self) -> List[int]:
        return [row[0] or 0 for row in self.db.query(Word.mastery_level).all()]
