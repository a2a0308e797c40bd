"""Tests for homophone service."""
import random

import pytest
from sqlalchemy.orm import Session

from spellcat.config import LearningSettings
from spellcat.data.homophones import get_pair_for_word
from spellcat.models.models import PracticeSession, Word, WordAttempt
from spellcat.models.spelling_models import HomophoneAttempt, SessionType
from spellcat.services.homophone_service import HomophoneService
from spellcat.services.session_service import SessionService


@pytest.fixture
def homophone_service(db: Session, learning: LearningSettings) -> HomophoneService:
    return HomophoneService(db, learning, rng=random.Random(3))


def choice(correct: str, selected: str) -> HomophoneAttempt:
    sentence = next(w.context_sentence for w in get_pair_for_word(correct).words if w.word == correct)
    return HomophoneAttempt(
        word=correct,
        selected_homophone=selected,
        correct_homophone=correct,
        context_sentence=sentence,
        is_correct=selected == correct,
    )


def test_random_challenge(homophone_service: HomophoneService) -> None:
    for _ in range(20):
        challenge = homophone_service.get_random_challenge(3)
        pair = get_pair_for_word(challenge.word)

        assert challenge.correct_homophone == challenge.word
        assert challenge.homophones == [w.word for w in pair.words]
        assert challenge.difficulty == pair.difficulty
        assert challenge.context_sentence in [w.context_sentence for w in pair.words]


def test_random_challenge_defaults_to_year_group(db: Session) -> None:
    service = HomophoneService(db, LearningSettings(year_group=3))
    assert service.get_random_challenge().word


def test_no_challenges_below_year_three(homophone_service: HomophoneService) -> None:
    with pytest.raises(LookupError):
        homophone_service.get_random_challenge(2)


def test_create_session(homophone_service: HomophoneService, db: Session) -> None:
    attempts = [choice("peace", "peace"), choice("mail", "male"), choice("reign", "reign")]

    result = homophone_service.create_session(attempts, duration=30)

    assert result.session_id.startswith("homophones_")
    assert result.session_type is SessionType.HOMOPHONES
    assert result.total_words == 3
    assert result.correct_words == 2
    assert result.score == 67
    assert db.query(WordAttempt).filter_by(selected_homophone="male").one().user_spelling == "male"
    assert db.query(Word).count() == 0


def test_session_round_trip(homophone_service: HomophoneService) -> None:
    created = homophone_service.create_session([choice("here", "hear")])

    fetched = homophone_service.get_session(created.session_id)

    assert fetched.attempts == [choice("here", "hear")]
    assert fetched.attempts[0].to_dict()["correctHomophone"] == "here"
    assert fetched.score == 0


def test_get_session_ignores_other_session_types(
    homophone_service: HomophoneService, db: Session, learning: LearningSettings
) -> None:
    db.add(PracticeSession(id="session_1", words_attempted=1, correct_words=1, score=100))
    db.commit()

    assert homophone_service.get_session("session_1") is None
    assert homophone_service.get_session("nope") is None
    assert SessionService(db, learning).get_session("session_1") is not None


def test_unknown_homophone(homophone_service: HomophoneService, db: Session) -> None:
    attempt = HomophoneAttempt(
        word="cat", selected_homophone="cat", correct_homophone="cat",
        context_sentence="The cat sat.", is_correct=True,
    )
    with pytest.raises(LookupError):
        homophone_service.create_session([attempt])
    assert db.query(PracticeSession).count() == 0


@pytest.mark.parametrize("attempt", [
    HomophoneAttempt(word="meat", selected_homophone="plane", correct_homophone="meat",
                     context_sentence="We had chicken meat for dinner.", is_correct=False),
    HomophoneAttempt(word="meat", selected_homophone="meet", correct_homophone="meat",
                     context_sentence="We had chicken meat for dinner.", is_correct=True),
    HomophoneAttempt(word="meat", selected_homophone="meat", correct_homophone="meat",
                     context_sentence="We had chicken meat for dinner.", is_correct=False),
])
def test_inconsistent_attempts_are_rejected(
    homophone_service: HomophoneService, db: Session, attempt: HomophoneAttempt
) -> None:
    with pytest.raises(ValueError):
        homophone_service.create_session([choice("peace", "peace"), attempt])
    assert db.query(PracticeSession).count() == 0


def test_create_session_requires_attempts(homophone_service: HomophoneService) -> None:
    with pytest.raises(ValueError):
        homophone_service.create_session([])


def test_attempt_from_dict() -> None:
    attempt = HomophoneAttempt.from_dict({
        "word": "grate",
        "selectedHomophone": "great",
        "correctHomophone": "grate",
        "contextSentence": "Mum will grate the cheese for dinner.",
        "isCorrect": False,
    })

    assert attempt == choice("grate", "great")
    with pytest.raises(ValueError):
        HomophoneAttempt.from_dict({"word": "grate", "isCorrect": False})
