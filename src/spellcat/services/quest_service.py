"""Service for quest chapters: word selection, progress and scoring."""
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from spellcat.config import LearningSettings, settings
from spellcat.models.base import utcnow
from spellcat.models.models import QuestProgress, Word
from spellcat.models.spelling_models import SessionResult, SessionType, SpellingAttempt
from spellcat.services import mastery
from spellcat.services.session_service import SessionService, validate_duration

logger = logging.getLogger(__name__)

PROGRESS_ID = 1


@dataclass
class WordCategories:
    """Words split by how urgently a quest should offer them."""
    struggling: List[Word] = field(default_factory=list)
    new: List[Word] = field(default_factory=list)
    review: List[Word] = field(default_factory=list)
    other: List[Word] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return {
            "struggling": len(self.struggling),
            "new": len(self.new),
            "review": len(self.review),
            "other": len(self.other),
        }


class QuestService:
    """Service for quest chapters: word selection, progress and scoring."""

    def __init__(
        self,
        db: Session,
        learning: Optional[LearningSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the service with a database session."""
        self.db = db
        self.learning = learning or settings.learning
        self.rng = rng or random.Random()
        self.session_service = SessionService(db, self.learning)

    def chapter_count(self) -> int:
        return len(self.learning.quest_word_counts)

    def _require_chapter(self, chapter: int) -> None:
        if isinstance(chapter, bool) or not isinstance(chapter, int) \
                or not 1 <= chapter <= self.chapter_count():
            raise ValueError(f"Chapter must be between 1 and {self.chapter_count()}")

    def get_progress(self) -> QuestProgress:
        """The stored progress, created at chapter 1 on first use."""
        progress = self.db.get(QuestProgress, PROGRESS_ID)
        if progress is None:
            progress = QuestProgress(
                id=PROGRESS_ID, current_chapter=1, completed_chapters=[], chapter_word_sets={}
            )
            self.db.add(progress)
            self.db.commit()
            logger.info("Created quest progress")
        return progress

    def reset_progress(self) -> QuestProgress:
        """Back to chapter 1 with no cached word sets."""
        progress = self.get_progress()
        progress.current_chapter = 1
        progress.completed_chapters = []
        progress.chapter_word_sets = {}
        self.db.commit()
        logger.info("Quest progress reset")
        return progress

    def unlocked_chapters(self, progress: QuestProgress) -> List[int]:
        return list(range(1, min(progress.current_chapter, self.chapter_count()) + 1))

    def progress_to_dict(self, progress: QuestProgress) -> Dict[str, Any]:
        return {
            "currentChapter": progress.current_chapter,
            "completedChapters": sorted(progress.completed_chapters or []),
            "unlockedChapters": self.unlocked_chapters(progress),
            "chapterCount": self.chapter_count(),
            "chapterWordSets": dict(progress.chapter_word_sets or {}),
        }

    def categorize_words(self, words: Sequence[Word], now: Optional[datetime] = None) -> WordCategories:
        """Split words into struggling, new, due for review and the rest.

        Each word lands in the first matching category, checking new words
        first, then struggling ones, then due reviews.
        """
        now = now or utcnow()
        categories = WordCategories()
        for word in words:
            if word.attempts == 0:
                categories.new.append(word)
            elif word.attempts >= self.learning.struggling_min_attempts and \
                    word.correct_attempts * 100 < self.learning.struggling_threshold * word.attempts:
                categories.struggling.append(word)
            elif mastery.is_review_due(word.next_review, now):
                categories.review.append(word)
            else:
                categories.other.append(word)
        return categories

    def select_words(self, categories: WordCategories, count: int) -> List[str]:
        """Take up to ``count`` words: struggling, then new, then review, then the rest."""
        prioritized: List[Word] = []
        for group in (categories.struggling, categories.new, categories.review, categories.other):
            shuffled = list(group)
            self.rng.shuffle(shuffled)
            prioritized.extend(shuffled)
        return [word.word for word in prioritized[:count]]

    def get_chapter_words(self, chapter: int) -> List[str]:
        """Words for a chapter, chosen once and reused until progress is reset."""
        self._require_chapter(chapter)
        progress = self.get_progress()
        cached = (progress.chapter_word_sets or {}).get(str(chapter))
        if cached:
            logger.debug("Using cached words for chapter %d", chapter)
            return list(cached)

        words = self.db.query(Word).order_by(Word.word).all()
        if not words:
            raise LookupError("No words available for quests")

        categories = self.categorize_words(words)
        selected = self.select_words(categories, self.learning.quest_word_counts[chapter - 1])
        word_sets = dict(progress.chapter_word_sets or {})
        word_sets[str(chapter)] = selected
        progress.chapter_word_sets = word_sets
        self.db.commit()
        logger.info(
            "Selected %d words for chapter %d from %s", len(selected), chapter, categories.counts()
        )
        return selected

    def mark_chapter_complete(self, chapter: int) -> QuestProgress:
        """Record a finished chapter and move the current chapter past it."""
        self._require_chapter(chapter)
        progress = self.get_progress()
        completed = list(progress.completed_chapters or [])
        if chapter not in completed:
            completed.append(chapter)
            progress.completed_chapters = completed
            progress.current_chapter = max(progress.current_chapter, chapter + 1)
            self.db.commit()
            logger.info("Chapter %d complete, current chapter %d", chapter, progress.current_chapter)
        return progress

    def create_quest_session(
        self,
        chapter: int,
        attempts: Sequence[SpellingAttempt],
        duration: Optional[int] = None,
    ) -> SessionResult:
        """Store a quest chapter's attempts, scored over the distinct words.

        A word counts as correct if any of its attempts was, and its stats
        get a single update no matter how many rounds it appeared in.
        """
        self._require_chapter(chapter)
        if not attempts:
            raise ValueError("Attempts array is required and must not be empty")
        validate_duration(duration)

        word_results: Dict[str, bool] = {}
        for attempt in attempts:
            word = attempt.word.strip().lower()
            word_results[word] = word_results.get(word, False) or attempt.is_correct
        self.session_service.require_known_words(word_results)

        record = self.session_service.store(
            SessionType.QUEST,
            attempts,
            total_words=len(word_results),
            correct_words=sum(1 for correct in word_results.values() if correct),
            word_results=list(word_results.items()),
            duration=duration,
            chapter=chapter,
        )
        return self.session_service.to_result(record, list(attempts))
