"""Models for spelling practice data structures."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class DifferenceKind(Enum):
    """How a character differs between the expected word and the typed one."""
    MISSING = "missing"  # in the expected word, not typed
    EXTRA = "extra"  # typed, not in the expected word
    WRONG = "wrong"  # typed in place of the expected character


class MasteryStatus(Enum):
    """Coarse mastery bucket derived from attempt history."""
    NOT_STARTED = "not-started"
    PRACTICING = "practicing"
    NEEDS_WORK = "needs-work"
    MASTERED = "mastered"


class CelebrationLevel(Enum):
    """Result banner shown for a session score."""
    GREAT = "great"
    GOOD = "good"
    KEEP_TRYING = "keep-trying"


class SessionType(Enum):
    """Kind of game a stored session came from."""
    PRACTICE = "practice"
    QUEST = "quest"
    HOMOPHONES = "homophones"


@dataclass(frozen=True)
class SpellingDifference:
    """One character-level difference found by the differ."""
    index: int
    expected: str
    actual: str
    kind: DifferenceKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "expected": self.expected,
            "actual": self.actual,
            "type": self.kind.value,
        }


@dataclass(frozen=True)
class HighlightChar:
    """A character of the original word annotated for display."""
    char: str
    is_highlighted: bool
    kind: Optional[DifferenceKind] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "char": self.char,
            "isHighlighted": self.is_highlighted,
            "highlightType": self.kind.value if self.kind else None,
        }


@dataclass(frozen=True)
class SpellingComparison:
    """Differences between two spellings plus both highlight projections."""
    differences: List[SpellingDifference]
    expected_highlight: List[HighlightChar]
    user_highlight: List[HighlightChar]

    @property
    def missing_letters(self) -> List[str]:
        """Expected characters the user left out, in order."""
        return [d.expected for d in self.differences if d.kind is DifferenceKind.MISSING]

    @property
    def is_match(self) -> bool:
        return not self.differences

    def to_dict(self) -> Dict[str, Any]:
        return {
            "differences": [d.to_dict() for d in self.differences],
            "expectedHighlight": [c.to_dict() for c in self.expected_highlight],
            "userHighlight": [c.to_dict() for c in self.user_highlight],
            "missingLetters": self.missing_letters,
        }


@dataclass(frozen=True)
class SpellingAttempt:
    """A submitted spelling attempt."""
    word: str
    user_spelling: str
    is_correct: bool
    attempts: int = 1
    round: Optional[int] = None  # quest round

    def __post_init__(self) -> None:
        if not isinstance(self.word, str) or not self.word.strip():
            raise ValueError("Attempt word must be a non-empty string")
        if not isinstance(self.user_spelling, str):
            raise ValueError("Attempt userSpelling must be a string")
        if not isinstance(self.is_correct, bool):
            raise ValueError("Attempt isCorrect must be a boolean")
        if isinstance(self.attempts, bool) or not isinstance(self.attempts, int) or self.attempts < 1:
            raise ValueError("Attempt count must be a positive integer")
        if self.round is not None and (
            isinstance(self.round, bool) or not isinstance(self.round, int) or self.round < 1
        ):
            raise ValueError("Attempt round must be a positive integer")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpellingAttempt":
        """Build an attempt from the camelCase JSON payload."""
        if not isinstance(data, dict):
            raise ValueError("Each attempt must be an object")
        attempts = data.get("attempts")
        return cls(
            word=data.get("word"),
            user_spelling=data.get("userSpelling"),
            is_correct=data.get("isCorrect"),
            attempts=1 if attempts is None else attempts,
            round=data.get("round"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "word": self.word,
            "userSpelling": self.user_spelling,
            "isCorrect": self.is_correct,
            "attempts": self.attempts,
        }
        if self.round is not None:
            data["round"] = self.round
        return data


@dataclass(frozen=True)
class HomophoneWord:
    """One member of a homophone group, with a sentence that needs it."""
    word: str
    context_sentence: str
    definition: str = ""


@dataclass(frozen=True)
class HomophonePair:
    """Words that sound alike but are spelled differently."""
    id: str
    difficulty: int
    year_level: int
    words: List[HomophoneWord]


@dataclass(frozen=True)
class HomophoneChallenge:
    """A context sentence and the homophone that fits it."""
    word: str
    context_sentence: str
    homophones: List[str]
    correct_homophone: str
    difficulty: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "contextSentence": self.context_sentence,
            "homophones": list(self.homophones),
            "correctHomophone": self.correct_homophone,
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class HomophoneAttempt:
    """A homophone chosen for a context sentence."""
    word: str
    selected_homophone: str
    correct_homophone: str
    context_sentence: str
    is_correct: bool

    def __post_init__(self) -> None:
        for name in ("word", "selected_homophone", "correct_homophone", "context_sentence"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Homophone attempt {name} must be a non-empty string")
        if not isinstance(self.is_correct, bool):
            raise ValueError("Homophone attempt isCorrect must be a boolean")

    @property
    def attempts(self) -> int:
        return 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HomophoneAttempt":
        if not isinstance(data, dict):
            raise ValueError("Each attempt must be an object")
        return cls(
            word=data.get("word"),
            selected_homophone=data.get("selectedHomophone"),
            correct_homophone=data.get("correctHomophone"),
            context_sentence=data.get("contextSentence"),
            is_correct=data.get("isCorrect"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "userSpelling": self.selected_homophone,
            "isCorrect": self.is_correct,
            "attempts": self.attempts,
            "contextSentence": self.context_sentence,
            "correctHomophone": self.correct_homophone,
            "selectedHomophone": self.selected_homophone,
        }


@dataclass
class WordWithStats:
    """A word with its attempt counts; success rate and status are derived."""
    id: int
    word: str
    difficulty: int
    attempts: int
    correct_attempts: int
    success_rate: int
    status: MasteryStatus
    mastery_level: int = 0
    last_attempted: Optional[datetime] = None
    next_review: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "difficulty": self.difficulty,
            "attempts": self.attempts,
            "correctAttempts": self.correct_attempts,
            "successRate": self.success_rate,
            "status": self.status.value,
            "masteryLevel": self.mastery_level,
            "lastAttempted": self.last_attempted.isoformat() if self.last_attempted else None,
            "nextReview": self.next_review.isoformat() if self.next_review else None,
        }


@dataclass(frozen=True)
class PracticeWord:
    """The next word offered for practice."""
    word: str
    is_new_word: bool
    difficulty: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "isNewWord": self.is_new_word,
            "difficulty": self.difficulty,
        }


@dataclass
class SessionResult:
    """Scored summary of a practice session."""
    session_id: str
    score: int
    total_words: int
    correct_words: int
    duration: int
    attempts: List[Union[SpellingAttempt, HomophoneAttempt]]
    celebration_level: CelebrationLevel
    date: Optional[datetime] = None
    session_type: SessionType = SessionType.PRACTICE
    chapter: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "score": self.score,
            "totalWords": self.total_words,
            "correctWords": self.correct_words,
            "duration": self.duration,
            "attempts": [a.to_dict() for a in self.attempts],
            "celebrationLevel": self.celebration_level.value,
            "date": self.date.isoformat() if self.date else None,
            "sessionType": self.session_type.value,
            "chapter": self.chapter,
        }


@dataclass
class ProgressStats:
    """Aggregate practice progress."""
    total_words_learned: int = 0
    average_score: int = 0
    streak_days: int = 0
    total_practice_sessions: int = 0
    words_needing_review: int = 0
    mastered_words: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalWordsLearned": self.total_words_learned,
            "averageScore": self.average_score,
            "streakDays": self.streak_days,
            "totalPracticeSessions": self.total_practice_sessions,
            "wordsNeedingReview": self.words_needing_review,
            "masteredWords": self.mastered_words,
        }


@dataclass(frozen=True)
class MasteryLevelInfo:
    """Display information for a mastery level."""
    level: int
    label: str
    color: str
    next_review_days: int


@dataclass
class MasteryProgress:
    """Distribution of words over mastery levels."""
    total: int
    mastered: int
    percentage: int
    by_level: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "mastered": self.mastered,
            "percentage": self.percentage,
            "byLevel": {str(level): count for level, count in self.by_level.items()},
        }
