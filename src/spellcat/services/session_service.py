"""Service for saving and scoring practice sessions."""
import logging
import secrets
import string
import time
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from spellcat import monitoring
from spellcat.config import LearningSettings, settings
from spellcat.models.base import utcnow
from spellcat.models.models import PracticeSession, WordAttempt
from spellcat.models.spelling_models import (
    HomophoneAttempt,
    SessionResult,
    SessionType,
    SpellingAttempt,
)
from spellcat.services import mastery
from spellcat.services.word_service import WordService

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_PREFIXES = {
    SessionType.PRACTICE: "session",
    SessionType.QUEST: "quest",
    SessionType.HOMOPHONES: "homophones",
}


def new_session_id(prefix: str = "session") -> str:
    """Build an id like ``session_1700000000000_k3j9x0a2b``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def session_score(correct_words: int, total_words: int) -> int:
    """Percentage of correct words, rounded half up."""
    if total_words <= 0:
        raise ValueError("A session needs at least one word")
    return (correct_words * 200 + total_words) // (total_words * 2)


def validate_duration(duration: Optional[int]) -> None:
    if duration is not None and (isinstance(duration, bool) or not isinstance(duration, int) or duration < 0):
        raise ValueError("Duration must be a non-negative number of seconds")


class SessionService:
    """Service for saving and scoring practice sessions."""

    def __init__(self, db: Session, learning: Optional[LearningSettings] = None):
        """Initialize the service with a database session."""
        self.db = db
        self.learning = learning or settings.learning
        self.word_service = WordService(db, self.learning)

    def require_known_words(self, words: Iterable[str]) -> None:
        """Raise LookupError for the first word not in the word list."""
        for word in words:
            if not self.word_service.get_word_by_text(word):
                raise LookupError(f"Word {word!r} not found")

    def create_session(
        self, attempts: Sequence[SpellingAttempt], duration: Optional[int] = None
    ) -> SessionResult:
        """Store a session with its attempts and update every word's stats."""
        if not attempts:
            raise ValueError("Attempts array is required and must not be empty")
        validate_duration(duration)
        self.require_known_words(attempt.word for attempt in attempts)

        correct_words = sum(1 for attempt in attempts if attempt.is_correct)
        record = self.store(
            SessionType.PRACTICE,
            attempts,
            total_words=len(attempts),
            correct_words=correct_words,
            word_results=[(attempt.word, attempt.is_correct) for attempt in attempts],
            duration=duration,
        )
        return self.to_result(record, list(attempts))

    def store(
        self,
        session_type: SessionType,
        attempts: Sequence[object],
        total_words: int,
        correct_words: int,
        word_results: Sequence[Tuple[str, bool]] = (),
        duration: Optional[int] = None,
        chapter: Optional[int] = None,
    ) -> PracticeSession:
        """Write a session, its attempts and its word stat updates in one commit.

        ``word_results`` lists the (word, was_correct) answers applied to the
        word statistics. Nothing is written if any part fails.
        """
        score = session_score(correct_words, total_words)
        record = PracticeSession(
            id=new_session_id(_ID_PREFIXES[session_type]),
            date=utcnow(),
            words_attempted=total_words,
            correct_words=correct_words,
            score=score,
            duration=duration or 0,
            session_type=session_type.value,
            chapter=chapter,
        )
        try:
            self.db.add(record)
            self.db.add_all(self._attempt_row(record, attempt) for attempt in attempts)
            for word, was_correct in word_results:
                self.word_service.apply_answer(word, was_correct)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for _, was_correct in word_results:
            monitoring.record_attempt(was_correct)
        monitoring.sessions_created.labels(session_type=session_type.value).inc()
        monitoring.session_score.observe(score)
        logger.info(
            "Saved %s session %s: %d/%d correct, score %d",
            session_type.value,
            record.id,
            correct_words,
            total_words,
            score,
        )
        return record

    def _attempt_row(self, record: PracticeSession, attempt: object) -> WordAttempt:
        if isinstance(attempt, HomophoneAttempt):
            return WordAttempt(
                session_id=record.id,
                word=attempt.word,
                user_spelling=attempt.selected_homophone,
                is_correct=attempt.is_correct,
                attempts=1,
                context_sentence=attempt.context_sentence,
                correct_homophone=attempt.correct_homophone,
                selected_homophone=attempt.selected_homophone,
                created_at=record.date,
            )
        return WordAttempt(
            session_id=record.id,
            word=attempt.word,
            user_spelling=attempt.user_spelling,
            is_correct=attempt.is_correct,
            attempts=attempt.attempts,
            round=attempt.round,
            created_at=record.date,
        )

    def update_session_duration(self, session_id: str, duration: int) -> bool:
        """Set a session's duration in seconds. Returns False if it is unknown."""
        if duration is None:
            raise ValueError("Duration must be a non-negative number of seconds")
        validate_duration(duration)
        record = self.db.get(PracticeSession, session_id)
        if record is None:
            return False
        record.duration = duration
        self.db.commit()
        return True

    def get_session(self, session_id: str) -> Optional[SessionResult]:
        """Get a stored session of any type with its attempts."""
        record = self.db.get(PracticeSession, session_id)
        if record is None:
            return None
        attempts = []
        for row in record.attempts:
            if row.correct_homophone is not None:
                attempts.append(HomophoneAttempt(
                    word=row.word,
                    selected_homophone=row.selected_homophone,
                    correct_homophone=row.correct_homophone,
                    context_sentence=row.context_sentence,
                    is_correct=row.is_correct,
                ))
            else:
                attempts.append(SpellingAttempt(
                    word=row.word,
                    user_spelling=row.user_spelling,
                    is_correct=row.is_correct,
                    attempts=row.attempts or 1,
                    round=row.round,
                ))
        return self.to_result(record, attempts)

    def get_recent_sessions(self, limit: Optional[int] = None) -> List[PracticeSession]:
        """Most recent sessions first."""
        limit = limit or self.learning.recent_sessions_limit
        return (
            self.db.query(PracticeSession)
            .order_by(PracticeSession.date.desc())
            .limit(limit)
            .all()
        )

    def to_result(self, record: PracticeSession, attempts: List[object]) -> SessionResult:
        score = int(record.score)
        return SessionResult(
            session_id=record.id,
            score=score,
            total_words=record.words_attempted,
            correct_words=record.correct_words,
            duration=record.duration,
            attempts=attempts,
            celebration_level=mastery.celebration_level(score),
            date=record.date,
            session_type=SessionType(record.session_type or SessionType.PRACTICE.value),
            chapter=record.chapter,
        )
