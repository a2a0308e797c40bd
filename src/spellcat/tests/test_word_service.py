"""Tests for word service."""
from datetime import timedelta

import pytest
from faker import Faker
from sqlalchemy.orm import Session

from spellcat.config import LearningSettings
from spellcat.data.words import get_words_for_year_group
from spellcat.models.base import utcnow
from spellcat.models.models import Word
from spellcat.models.spelling_models import MasteryStatus
from spellcat.services.word_service import WordService

fake = Faker()


@pytest.fixture
def word_service(db: Session, learning: LearningSettings) -> WordService:
    """Create a word service instance."""
    return WordService(db, learning)


@pytest.fixture
def test_word(db: Session) -> Word:
    """Create a test word."""
    word = Word(word="because", difficulty=2)
    db.add(word)
    db.commit()
    db.refresh(word)
    return word


def test_add_word_normalizes_text(word_service: WordService) -> None:
    word = word_service.add_word("  February ")

    assert word.id is not None
    assert word.word == "february"
    assert word.attempts == 0
    assert word.correct_attempts == 0
    assert word.difficulty == 1


def test_add_existing_word_returns_it(word_service: WordService, test_word: Word) -> None:
    assert word_service.add_word("Because").id == test_word.id
    assert word_service.get_word_count() == 1


@pytest.mark.parametrize("text, difficulty", [("", 1), ("   ", 1), ("cat", 0), ("cat", 6)])
def test_add_word_validation(word_service: WordService, text: str, difficulty: int) -> None:
    with pytest.raises(ValueError):
        word_service.add_word(text, difficulty)


def test_get_word_by_text_ignores_case(word_service: WordService, test_word: Word) -> None:
    assert word_service.get_word_by_text("BECAUSE").id == test_word.id
    assert word_service.get_word_by_text("becuase") is None


def test_seed_words_skips_duplicates(word_service: WordService) -> None:
    added = word_service.seed_words(["Mr", "mr", "busy", "Busy", "", "people"])

    assert added == 3
    assert word_service.get_word_count() == 3


def test_seed_random_words(word_service: WordService) -> None:
    texts = [fake.unique.word() for _ in range(10)]

    assert word_service.seed_words(texts) == 10
    assert word_service.seed_words(texts) == 0
    assert word_service.get_word_by_text(texts[0].upper()) is not None


def test_initialize_word_list_only_when_empty(word_service: WordService) -> None:
    added = word_service.initialize_word_list(1)

    assert added == len(get_words_for_year_group(1))
    assert word_service.initialize_word_list(3) == 0


def test_initialize_year_three_deduplicates(word_service: WordService) -> None:
    """Test that 'busy', listed for two year groups, is stored once."""
    words = get_words_for_year_group(3)
    added = word_service.initialize_word_list(3)

    assert added == len({w.lower() for w in words})
    assert added == len(words) - 1


def test_get_random_word_empty_list(word_service: WordService) -> None:
    with pytest.raises(LookupError):
        word_service.get_random_word()


def test_get_random_word_prefers_due_words(word_service: WordService, db: Session) -> None:
    later = utcnow() + timedelta(days=3)
    for text in ("after", "again", "money"):
        db.add(Word(word=text, attempts=2, correct_attempts=2, next_review=later))
    db.add(Word(word="water", attempts=1, correct_attempts=0, next_review=utcnow() - timedelta(hours=1)))
    db.commit()

    for _ in range(5):
        assert word_service.get_random_word().word == "water"


def test_get_random_word_falls_back_to_unmastered(word_service: WordService, db: Session) -> None:
    later = utcnow() + timedelta(days=3)
    db.add(Word(word="after", attempts=4, correct_attempts=4, next_review=later))
    db.add(Word(word="money", attempts=2, correct_attempts=1, next_review=later))
    db.commit()

    practice = word_service.get_random_word()
    assert practice.word == "money"
    assert practice.is_new_word is False


def test_get_random_word_last_resort(word_service: WordService, db: Session) -> None:
    db.add(Word(word="after", attempts=4, correct_attempts=4, next_review=utcnow() + timedelta(days=3)))
    db.commit()

    assert word_service.get_random_word().word == "after"


def test_new_word_is_flagged(word_service: WordService, test_word: Word) -> None:
    practice = word_service.get_random_word()

    assert practice.word == "because"
    assert practice.is_new_word is True
    assert practice.difficulty == 2


def test_update_word_stats_correct(word_service: WordService, test_word: Word) -> None:
    before = utcnow()
    stats = word_service.update_word_stats("Because", True)

    assert stats.attempts == 1
    assert stats.correct_attempts == 1
    assert stats.success_rate == 100
    assert stats.status is MasteryStatus.PRACTICING
    assert stats.mastery_level == 1
    assert stats.last_attempted >= before
    assert timedelta(hours=23) < stats.next_review - before <= timedelta(days=1, minutes=1)


def test_update_word_stats_incorrect(word_service: WordService, test_word: Word) -> None:
    before = utcnow()
    stats = word_service.update_word_stats("because", False)

    assert stats.attempts == 1
    assert stats.correct_attempts == 0
    assert stats.status is MasteryStatus.NEEDS_WORK
    assert stats.next_review - before <= timedelta(hours=2, minutes=1)


def test_update_word_stats_only_increases(word_service: WordService, test_word: Word) -> None:
    """Test that the counts grow additively and never break correct <= attempts."""
    answers = [True, False, True, True, False, True]
    for count, answer in enumerate(answers, start=1):
        stats = word_service.update_word_stats("because", answer)
        assert stats.attempts == count
        assert stats.correct_attempts == sum(answers[:count])
        assert stats.correct_attempts <= stats.attempts


def test_update_word_stats_adjusts_difficulty(word_service: WordService, test_word: Word) -> None:
    for _ in range(3):
        stats = word_service.update_word_stats("because", True)

    assert stats.difficulty == 3
    assert stats.status is MasteryStatus.MASTERED


def test_wrong_answer_drops_mastery_level(word_service: WordService, test_word: Word, db: Session) -> None:
    for _ in range(4):
        word_service.update_word_stats("because", True)
    stats = word_service.update_word_stats("because", False)

    assert stats.mastery_level == 2
    db.refresh(test_word)
    assert test_word.consecutive_correct == 0


def test_update_unknown_word(word_service: WordService) -> None:
    with pytest.raises(LookupError):
        word_service.update_word_stats("zzz", True)


def test_get_words_needing_review(word_service: WordService, db: Session) -> None:
    now = utcnow()
    db.add_all([
        Word(word="after", attempts=1, correct_attempts=0, next_review=now - timedelta(hours=1)),
        Word(word="again", attempts=2, correct_attempts=1, next_review=now - timedelta(days=2)),
        Word(word="money", attempts=1, correct_attempts=1, next_review=now + timedelta(days=1)),
        Word(word="water", attempts=0, correct_attempts=0, next_review=now - timedelta(days=5)),
        Word(word="people"),
    ])
    db.commit()

    review = word_service.get_words_needing_review()

    assert [w.word for w in review] == ["again", "after"]
    assert review[0].success_rate == 50
    assert word_service.count_words_needing_review() == 2
    assert [w.word for w in word_service.get_words_needing_review(limit=1)] == ["again"]


def test_get_words_with_stats_filters_by_status(word_service: WordService, db: Session) -> None:
    db.add_all([
        Word(word="after", attempts=5, correct_attempts=5),
        Word(word="again", attempts=5, correct_attempts=1),
        Word(word="money", attempts=5, correct_attempts=3),
        Word(word="water"),
    ])
    db.commit()

    all_words = word_service.get_words_with_stats()
    assert [w.word for w in all_words] == ["after", "again", "money", "water"]
    assert [w.status for w in all_words] == [
        MasteryStatus.MASTERED,
        MasteryStatus.NEEDS_WORK,
        MasteryStatus.PRACTICING,
        MasteryStatus.NOT_STARTED,
    ]
    assert [w.word for w in word_service.get_words_with_stats(MasteryStatus.NEEDS_WORK)] == ["again"]
