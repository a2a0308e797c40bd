"""Service for the homophones game."""
import logging
import random
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from spellcat.config import LearningSettings, settings
from spellcat.data.homophones import get_homophone_pairs, get_pair_for_word
from spellcat.models.spelling_models import (
    HomophoneAttempt,
    HomophoneChallenge,
    SessionResult,
    SessionType,
)
from spellcat.services.session_service import SessionService, validate_duration

logger = logging.getLogger(__name__)


class HomophoneService:
    """Service for the homophones game."""

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

    def get_random_challenge(self, year_level: Optional[int] = None) -> HomophoneChallenge:
        """A context sentence from a random group, with every spelling in that group."""
        year_level = year_level or self.learning.year_group
        pairs = get_homophone_pairs(year_level)
        if not pairs:
            raise LookupError(f"No homophones available for year level {year_level}")
        pair = self.rng.choice(pairs)
        target = self.rng.choice(pair.words)
        logger.debug("Homophone challenge %r from %s", target.word, pair.id)
        return HomophoneChallenge(
            word=target.word,
            context_sentence=target.context_sentence,
            homophones=[w.word for w in pair.words],
            correct_homophone=target.word,
            difficulty=pair.difficulty,
        )

    def _check_attempt(self, attempt: HomophoneAttempt) -> None:
        pair = get_pair_for_word(attempt.correct_homophone)
        if pair is None:
            raise LookupError(f"Homophone {attempt.correct_homophone!r} not found")
        spellings = {w.word for w in pair.words}
        if attempt.selected_homophone.strip().lower() not in spellings:
            raise ValueError(
                f"{attempt.selected_homophone!r} is not a homophone of {attempt.correct_homophone!r}"
            )
        matches = attempt.selected_homophone.strip().lower() == attempt.correct_homophone.strip().lower()
        if attempt.is_correct != matches:
            raise ValueError("isCorrect must say whether the selected homophone is the correct one")

    def create_session(
        self, attempts: Sequence[HomophoneAttempt], duration: Optional[int] = None
    ) -> SessionResult:
        """Store a homophones game. Word statistics are left alone."""
        if not attempts:
            raise ValueError("Attempts array is required and must not be empty")
        validate_duration(duration)
        for attempt in attempts:
            self._check_attempt(attempt)

        record = self.session_service.store(
            SessionType.HOMOPHONES,
            attempts,
            total_words=len(attempts),
            correct_words=sum(1 for attempt in attempts if attempt.is_correct),
            duration=duration,
        )
        return self.session_service.to_result(record, list(attempts))

    def get_session(self, session_id: str) -> Optional[SessionResult]:
        """A stored homophones game, or None for unknown ids and other session types."""
        result = self.session_service.get_session(session_id)
        if result is None or result.session_type is not SessionType.HOMOPHONES:
            return None
        return result
