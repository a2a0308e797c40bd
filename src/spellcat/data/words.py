"""Curriculum word lists (common exception words by year group)."""
from typing import List

YEAR_1_WORDS = [
    "the", "a", "do", "to", "today", "of", "said", "says", "are", "were", "was",
    "is", "his", "has", "I", "you", "your", "they", "be", "he", "me", "she", "we",
    "no", "go", "so", "by", "my", "here", "there", "where", "love", "come", "some",
    "one", "once", "ask", "friend", "school", "put", "push", "pull", "full", "house", "our",
]

YEAR_2_WORDS = [
    "door", "floor", "poor", "because", "find", "kind", "mind", "behind", "child",
    "children", "wild", "climb", "most", "only", "both", "old", "cold", "gold",
    "hold", "told", "every", "everybody", "even", "great", "break", "steak",
    "pretty", "beautiful", "after", "fast", "last", "past", "father", "class",
    "grass", "pass", "plant", "path", "bath", "hour", "move", "prove", "improve",
    "sure", "sugar", "eye", "could", "should", "would", "who", "whole", "any",
    "many", "clothes", "busy", "people", "water", "again", "half", "money", "Mr",
    "Mrs", "parents",
]

# Years 3 and 4 share one list
YEAR_3_WORDS = [
    "accident", "accidentally", "actual", "actually", "address", "answer",
    "appear", "arrive", "believe", "bicycle", "breath", "breathe", "build",
    "busy", "business", "calendar", "caught", "centre", "century", "certain",
    "circle", "complete", "consider", "continue", "decide", "describe",
    "different", "difficult", "disappear", "early", "earth", "eight", "eighth",
    "enough", "exercise", "experience", "experiment", "extreme", "famous",
    "favourite", "February", "forward", "forwards", "fruit", "grammar", "group",
    "guard", "guide", "heard", "heart", "height", "history", "imagine",
    "increase", "important", "interest", "island", "knowledge", "learn",
    "length", "library", "material", "medicine", "mention", "minute", "natural",
    "naughty", "notice", "occasion", "occasionally", "often", "opposite",
    "ordinary", "particular", "peculiar", "perhaps", "popular", "position",
    "possess", "possession", "possible", "potatoes", "pressure", "probably",
    "promise", "purpose", "quarter", "question", "recent", "regular", "reign",
    "remember", "sentence", "separate", "special", "straight", "strange",
    "strength", "suppose", "surprise", "therefore", "though", "although",
    "thought", "through", "various", "weight", "woman", "women",
]


def get_words_for_year_group(year_group: int) -> List[str]:
    """Words for a year group, including every earlier year's words."""
    if year_group == 1:
        return list(YEAR_1_WORDS)
    if year_group == 2:
        return YEAR_1_WORDS + YEAR_2_WORDS
    # Year 3 & 4 is the default
    return YEAR_1_WORDS + YEAR_2_WORDS + YEAR_3_WORDS


def get_word_count_for_year_group(year_group: int) -> int:
    return len(get_words_for_year_group(year_group))


def get_year_group_display_name(year_group: int) -> str:
    if year_group == 1:
        return "Year 1"
    if year_group == 2:
        return "Year 2"
    return "Year 3 & 4"
