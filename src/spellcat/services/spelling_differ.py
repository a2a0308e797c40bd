"""Character-level comparison of an expected word and a typed spelling."""
import logging
from typing import List

from spellcat.models.spelling_models import (
    DifferenceKind,
    HighlightChar,
    SpellingComparison,
    SpellingDifference,
)

logger = logging.getLogger(__name__)


def _require_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")


def find_spelling_differences(expected: str, actual: str) -> List[SpellingDifference]:
    """Align two spellings greedily and list their differences.

    Both strings are lowercased first. Two cursors walk the strings; on a
    mismatch the expected character is looked up further along the typed
    string and the typed character further along the expected string:

    * typed-side match found and strictly nearer (or no expected-side match):
      the typed character is ``extra``, only the typed cursor advances;
    * otherwise an expected-side match found: the expected character is
      ``missing``, only the expected cursor advances;
    * neither found: ``wrong``, both cursors advance.

    An exact distance tie therefore resolves to ``missing``. This is a
    heuristic, not a minimal edit script: ``("friend", "freind")`` gives a
    missing ``i`` at 2 followed by an extra ``i`` at 3.

    ``extra`` records carry the typed-string index; ``missing`` and ``wrong``
    records carry the expected-string index.
    """
    _require_str("expected", expected)
    _require_str("actual", actual)

    correct = expected.lower()
    user = actual.lower()
    differences: List[SpellingDifference] = []

    correct_index = 0
    user_index = 0

    while correct_index < len(correct) or user_index < len(user):
        if correct_index >= len(correct):
            differences.append(
                SpellingDifference(user_index, "", user[user_index], DifferenceKind.EXTRA)
            )
            user_index += 1
        elif user_index >= len(user):
            differences.append(
                SpellingDifference(correct_index, correct[correct_index], "", DifferenceKind.MISSING)
            )
            correct_index += 1
        elif correct[correct_index] == user[user_index]:
            correct_index += 1
            user_index += 1
        else:
            found_in_user = user.find(correct[correct_index], user_index + 1)
            found_in_correct = correct.find(user[user_index], correct_index + 1)

            if found_in_user != -1 and (
                found_in_correct == -1
                or found_in_user - user_index < found_in_correct - correct_index
            ):
                differences.append(
                    SpellingDifference(user_index, "", user[user_index], DifferenceKind.EXTRA)
                )
                user_index += 1
            elif found_in_correct != -1:
                differences.append(
                    SpellingDifference(correct_index, correct[correct_index], "", DifferenceKind.MISSING)
                )
                correct_index += 1
            else:
                differences.append(
                    SpellingDifference(
                        correct_index,
                        correct[correct_index],
                        user[user_index],
                        DifferenceKind.WRONG,
                    )
                )
                correct_index += 1
                user_index += 1

    return differences


def _project(word: str, differences: List[SpellingDifference], kinds: tuple) -> List[HighlightChar]:
    by_index = {}
    for diff in differences:
        if diff.kind in kinds:
            # first record at an index wins
            by_index.setdefault(diff.index, diff.kind)
    return [
        HighlightChar(char=char, is_highlighted=i in by_index, kind=by_index.get(i))
        for i, char in enumerate(word)
    ]


def diff_spelling(expected: str, actual: str) -> SpellingComparison:
    """Compare two spellings and build highlight data for both of them.

    The highlight projections keep the original casing of each input.
    """
    differences = find_spelling_differences(expected, actual)
    comparison = SpellingComparison(
        differences=differences,
        expected_highlight=_project(
            expected, differences, (DifferenceKind.MISSING, DifferenceKind.WRONG)
        ),
        user_highlight=_project(
            actual, differences, (DifferenceKind.EXTRA, DifferenceKind.WRONG)
        ),
    )
    logger.debug(
        "Compared %r with %r: %d difference(s)", expected, actual, len(differences)
    )
    return comparison


def check_spelling(user_input: str, correct_word: str) -> bool:
    """Whether a typed spelling matches the word, ignoring case and outer spaces."""
    _require_str("user_input", user_input)
    _require_str("correct_word", correct_word)
    return user_input.strip().lower() == correct_word.strip().lower()
