"""Service for aggregate practice progress."""
import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from spellcat.config import LearningSettings, settings
from spellcat.models.base import utcnow
from spellcat.models.models import PracticeSession, Word
from spellcat.models.spelling_models import MasteryStatus, ProgressStats
from spellcat.services import mastery
from spellcat.services.session_service import SessionService
from spellcat.services.word_service import WordService

logger = logging.getLogger(__name__)


def count_streak_days(practice_days: Iterable[date], today: date) -> int:
    """Consecutive practice days ending today, or yesterday if today is empty."""
    days = set(practice_days)
    current = today if today in days else today - timedelta(days=1)
    streak = 0
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


class ProgressService:
    """Service for aggregate practice progress."""

    def __init__(self, db: Session, learning: Optional[LearningSettings] = None):
        """Initialize the service with a database session."""
        self.db = db
        self.learning = learning or settings.learning
        self.word_service = WordService(db, self.learning)
        self.session_service = SessionService(db, self.learning)

    def get_streak_days(self, today: Optional[date] = None) -> int:
        today = today or utcnow().date()
        dates = [row[0].date() for row in self.db.query(PracticeSession.date).all()]
        return count_streak_days(dates, today)

    def get_progress_stats(self) -> ProgressStats:
        """Summarise attempts, recent scores, streak and review load."""
        words = self.db.query(Word).filter(Word.attempts > 0).all()
        mastered = sum(
            1 for word in words
            if mastery.classify_mastery(word, self.learning) is MasteryStatus.MASTERED
        )

        recent_sessions = self.session_service.get_recent_sessions()
        if recent_sessions:
            total = sum(session.score for session in recent_sessions)
            average_score = int(total / len(recent_sessions) + 0.5)
        else:
            average_score = 0

        stats = ProgressStats(
            total_words_learned=len(words),
            average_score=average_score,
            streak_days=self.get_streak_days(),
            total_practice_sessions=self.db.query(PracticeSession).count(),
            words_needing_review=self.word_service.count_words_needing_review(),
            mastered_words=mastered,
        )
        logger.debug("Progress stats: %s", stats)
        return stats
