"""Tests for the spelling differ."""
import pytest
from faker import Faker

from spellcat.models.spelling_models import DifferenceKind, SpellingDifference
from spellcat.services.spelling_differ import (
    check_spelling,
    diff_spelling,
    find_spelling_differences,
)

fake = Faker()

MISSING = DifferenceKind.MISSING
EXTRA = DifferenceKind.EXTRA
WRONG = DifferenceKind.WRONG


@pytest.mark.parametrize("word", ["", "cat", "because", "Mississippi"])
def test_identical_words_have_no_differences(word: str) -> None:
    """Test that a word compared with itself yields nothing."""
    assert find_spelling_differences(word, word) == []


def test_random_identical_words_have_no_differences() -> None:
    for _ in range(20):
        word = fake.word()
        assert diff_spelling(word, word).differences == []


def test_comparison_ignores_case() -> None:
    assert find_spelling_differences("February", "february") == []
    assert find_spelling_differences("cat", "CAT") == []


def test_empty_user_spelling_is_all_missing() -> None:
    """Test that every expected character is reported missing, in order."""
    differences = find_spelling_differences("house", "")

    assert differences == [
        SpellingDifference(i, char, "", MISSING) for i, char in enumerate("house")
    ]


def test_empty_expected_word_is_all_extra() -> None:
    differences = find_spelling_differences("", "dog")

    assert differences == [
        SpellingDifference(i, "", char, EXTRA) for i, char in enumerate("dog")
    ]


def test_substitution() -> None:
    """Test the single-letter substitution case."""
    assert find_spelling_differences("cat", "cot") == [SpellingDifference(1, "a", "o", WRONG)]


def test_transposition_follows_greedy_tie_break() -> None:
    """Test "friend" typed as "freind".

    At index 2 both look-aheads are one step away; the tie is not strictly
    nearer on the typed side so the expected "i" is reported missing, and the
    stray "i" is then reported extra.
    """
    assert find_spelling_differences("friend", "freind") == [
        SpellingDifference(2, "i", "", MISSING),
        SpellingDifference(3, "", "i", EXTRA),
    ]


def test_missing_letter_in_the_middle() -> None:
    assert find_spelling_differences("because", "becase") == [
        SpellingDifference(4, "u", "", MISSING),
    ]


def test_extra_letter_in_the_middle() -> None:
    assert find_spelling_differences("said", "saild") == [
        SpellingDifference(3, "", "l", EXTRA),
    ]


def test_extra_letters_at_the_end() -> None:
    assert find_spelling_differences("cat", "cats!") == [
        SpellingDifference(3, "", "s", EXTRA),
        SpellingDifference(4, "", "!", EXTRA),
    ]


def test_disjoint_words() -> None:
    """Test that disjoint words give one record per character of the longer one."""
    assert find_spelling_differences("dog", "bus") == [
        SpellingDifference(0, "d", "b", WRONG),
        SpellingDifference(1, "o", "u", WRONG),
        SpellingDifference(2, "g", "s", WRONG),
    ]
    assert find_spelling_differences("horse", "cat") == [
        SpellingDifference(0, "h", "c", WRONG),
        SpellingDifference(1, "o", "a", WRONG),
        SpellingDifference(2, "r", "t", WRONG),
        SpellingDifference(3, "s", "", MISSING),
        SpellingDifference(4, "e", "", MISSING),
    ]


def test_highlight_projections() -> None:
    """Test that missing/wrong mark the expected side and extra/wrong the typed side."""
    comparison = diff_spelling("Friend", "Freind")

    assert [c.char for c in comparison.expected_highlight] == list("Friend")
    assert [c.char for c in comparison.user_highlight] == list("Freind")
    assert [c.is_highlighted for c in comparison.expected_highlight] == [
        False, False, True, False, False, False,
    ]
    assert comparison.expected_highlight[2].kind is MISSING
    assert [c.is_highlighted for c in comparison.user_highlight] == [
        False, False, False, True, False, False,
    ]
    assert comparison.user_highlight[3].kind is EXTRA


def test_wrong_highlights_both_sides() -> None:
    comparison = diff_spelling("cat", "cot")

    assert comparison.expected_highlight[1].kind is WRONG
    assert comparison.user_highlight[1].kind is WRONG
    assert not comparison.expected_highlight[0].is_highlighted
    assert not comparison.user_highlight[2].is_highlighted


def test_missing_letters() -> None:
    comparison = diff_spelling("because", "becase")
    assert comparison.missing_letters == ["u"]
    assert not comparison.is_match
    assert diff_spelling("cat", "cat").is_match


def test_to_dict_shape() -> None:
    data = diff_spelling("cat", "cot").to_dict()

    assert data["differences"] == [
        {"index": 1, "expected": "a", "actual": "o", "type": "wrong"},
    ]
    assert data["expectedHighlight"][1] == {
        "char": "a", "isHighlighted": True, "highlightType": "wrong",
    }
    assert data["userHighlight"][0] == {
        "char": "c", "isHighlighted": False, "highlightType": None,
    }
    assert data["missingLetters"] == []


def test_same_input_gives_same_output() -> None:
    first = diff_spelling("necessary", "neccesary")
    second = diff_spelling("necessary", "neccesary")
    assert first == second


@pytest.mark.parametrize("expected, actual", [(None, "cat"), ("cat", 3), (["c"], "c")])
def test_non_string_input_is_rejected(expected: object, actual: object) -> None:
    with pytest.raises(TypeError):
        diff_spelling(expected, actual)


def test_check_spelling() -> None:
    assert check_spelling(" Because ", "because")
    assert not check_spelling("becuase", "because")
    with pytest.raises(TypeError):
        check_spelling(None, "because")
