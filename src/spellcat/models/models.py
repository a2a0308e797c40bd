"""Database models for the spelling app."""
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
)
from sqlalchemy.orm import relationship

from spellcat.models.base import Base, TimestampMixin, utcnow


class Word(Base, TimestampMixin):
    """Practice word with its running attempt statistics."""

    __tablename__ = "words"
    __table_args__ = (
        CheckConstraint("correct_attempts <= attempts", name="ck_words_correct_le_attempts"),
        CheckConstraint("difficulty BETWEEN 1 AND 5", name="ck_words_difficulty_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    word = Column(String, unique=True, nullable=False)  # stored lowercase
    difficulty = Column(Integer, nullable=False, default=1)  # 1-5 scale
    attempts = Column(Integer, nullable=False, default=0)
    correct_attempts = Column(Integer, nullable=False, default=0)
    last_attempted = Column(DateTime)
    next_review = Column(DateTime)
    mastery_level = Column(Integer, nullable=False, default=0)  # 0-5
    consecutive_correct = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Word {self.word!r} {self.correct_attempts}/{self.attempts}>"


class PracticeSession(Base):
    """A scored practice session."""

    __tablename__ = "sessions"

    id = Column(String, primary_key=True)
    date = Column(DateTime, nullable=False, default=utcnow)
    words_attempted = Column(Integer, nullable=False)
    correct_words = Column(Integer, nullable=False)
    score = Column(Float, nullable=False)
    duration = Column(Integer, nullable=False, default=0)  # in seconds
    session_type = Column(String, nullable=False, default="practice")  # practice, quest or homophones
    chapter = Column(Integer)  # quest sessions only

    # Relationships
    attempts = relationship(
        "WordAttempt",
        back_populates="session",
        order_by="WordAttempt.id",
    )


class WordAttempt(Base):
    """A single recorded spelling attempt; never updated after insert."""

    __tablename__ = "word_attempts"

    id = Column(Integer, primary_key=True)
    session_id = Column(String, ForeignKey("sessions.id"), nullable=True)
    word = Column(String, nullable=False)
    user_spelling = Column(String, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    attempts = Column(Integer, nullable=False, default=1)
    round = Column(Integer)  # quest round
    context_sentence = Column(String)
    correct_homophone = Column(String)
    selected_homophone = Column(String)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    session = relationship("PracticeSession", back_populates="attempts")


class QuestProgress(Base, TimestampMixin):
    """Quest chapter progress; a single row.

    JSON columns are replaced, never mutated in place, so changes are
    picked up on commit.
    """

    __tablename__ = "quest_progress"

    id = Column(Integer, primary_key=True)
    current_chapter = Column(Integer, nullable=False, default=1)
    completed_chapters = Column(JSON, nullable=False, default=list)
    # chapter number (as a string key) -> selected words
    chapter_word_sets = Column(JSON, nullable=False, default=dict)
