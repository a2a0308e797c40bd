"""Homophone groups with context sentences for the homophones game."""
from typing import List, Optional

from spellcat.models.spelling_models import HomophonePair, HomophoneWord


def _pair(pair_id: str, difficulty: int, *words: HomophoneWord, year_level: int = 3) -> HomophonePair:
    return HomophonePair(id=pair_id, difficulty=difficulty, year_level=year_level, words=list(words))


HOMOPHONE_PAIRS = [
    _pair(
        "accept_except", 3,
        HomophoneWord("accept", "I will accept your invitation to the party.", "to take or receive willingly"),
        HomophoneWord("except", "Everyone came to the party except Sarah.", "not including; but not"),
    ),
    _pair(
        "affect_effect", 4,
        HomophoneWord("affect", "The rain will affect our picnic plans.", "to make a change to something"),
        HomophoneWord("effect", "The effect of the rain was a cancelled picnic.", "a result or consequence"),
    ),
    _pair(
        "ball_bawl", 2,
        HomophoneWord("ball", "The children played with a red ball.", "a round object used in games"),
        HomophoneWord("bawl", "The baby began to bawl loudly.", "to cry very loudly"),
    ),
    _pair(
        "berry_bury", 2,
        HomophoneWord("berry", "She picked a sweet berry from the bush.", "a small round fruit"),
        HomophoneWord("bury", "The dog will bury the bone in the yard.", "to put something under the ground"),
    ),
    _pair(
        "brake_break", 2,
        HomophoneWord("brake", "Press the brake to stop the bike.", "a device that stops movement"),
        HomophoneWord("break", "Please don't break my favourite cup.", "to damage or split apart"),
    ),
    _pair(
        "fair_fare", 3,
        HomophoneWord("fair", "The teacher gave everyone a fair chance.", "treating people equally"),
        HomophoneWord("fare", "The bus fare costs two dollars.", "the cost of a journey"),
    ),
    _pair(
        "grate_great", 2,
        HomophoneWord("grate", "Mum will grate the cheese for dinner.", "to shred food into small pieces"),
        HomophoneWord("great", "We had a great time at the zoo.", "very good or excellent"),
    ),
    _pair(
        "groan_grown", 3,
        HomophoneWord("groan", "Dad let out a groan when he saw the mess.", "a low sound showing pain or annoyance"),
        HomophoneWord("grown", "The puppy has grown so much this year.", "became bigger or older"),
    ),
    _pair(
        "here_hear", 2,
        HomophoneWord("here", "Come here and sit with me.", "in this place"),
        HomophoneWord("hear", "Can you hear the birds singing?", "to perceive sounds with your ears"),
    ),
    _pair(
        "heel_heal_hell", 4,
        HomophoneWord("heel", "There's a blister on my heel.", "the back part of your foot"),
        HomophoneWord("heal", "The cut on my hand will heal quickly.", "to get better or recover"),
        HomophoneWord("he'll", "He'll be here at three o'clock.", "he will (shortened form)"),
    ),
    _pair(
        "knot_not", 2,
        HomophoneWord("knot", "Tie a knot in the rope.", "a tight loop in string or rope"),
        HomophoneWord("not", "I am not going to the shops today.", "used to make a negative statement"),
    ),
    _pair(
        "mail_male", 2,
        HomophoneWord("mail", "The postman delivered our mail.", "letters and packages sent by post"),
        HomophoneWord("male", "The male lion has a big mane.", "of the masculine gender"),
    ),
    _pair(
        "main_mane", 2,
        HomophoneWord("main", "The main door is at the front.", "the most important"),
        HomophoneWord("mane", "The horse's mane blew in the wind.", "long hair on an animal's neck"),
    ),
    _pair(
        "meat_meet", 2,
        HomophoneWord("meat", "We had chicken meat for dinner.", "flesh from animals used as food"),
        HomophoneWord("meet", "Let's meet at the playground.", "to come together with someone"),
    ),
    _pair(
        "medal_meddle", 3,
        HomophoneWord("medal", "She won a gold medal at sports day.", "an award for achievement"),
        HomophoneWord("meddle", "Don't meddle with things that aren't yours.", "to interfere with something"),
    ),
    _pair(
        "missed_mist", 2,
        HomophoneWord("missed", "I missed the bus this morning.", "failed to catch or hit something"),
        HomophoneWord("mist", "The morning mist covered the hills.", "tiny water droplets in the air"),
    ),
    _pair(
        "peace_piece", 2,
        HomophoneWord("peace", "We want peace between all countries.", "a time without fighting or war"),
        HomophoneWord("piece", "Can I have a piece of chocolate?", "a part or portion of something"),
    ),
    _pair(
        "plain_plane", 2,
        HomophoneWord("plain", "She wore a plain white dress.", "simple, without decoration"),
        HomophoneWord("plane", "The plane flew high in the sky.", "an aircraft that flies"),
    ),
    _pair(
        "rain_rein_reign", 4,
        HomophoneWord("rain", "The rain made the flowers grow.", "water falling from clouds"),
        HomophoneWord("rein", "Hold the horse's rein tightly.", "a strap used to control a horse"),
        HomophoneWord("reign", "The queen will reign for many years.", "to rule as a monarch"),
    ),
    _pair(
        "scene_seen", 3,
        HomophoneWord("scene", "The first scene in the play was funny.", "a part of a play or movie"),
        HomophoneWord("seen", "Have you seen my library book?", "past tense of see"),
    ),
    _pair(
        "weather_whether", 4,
        HomophoneWord("weather", "The weather is sunny today.", "conditions outside like rain or sun"),
        HomophoneWord("whether", "I don't know whether to go or stay.", "if; expressing doubt between choices"),
    ),
    _pair(
        "whose_whos", 3,
        HomophoneWord("whose", "Whose pencil is this on the floor?", "belonging to whom"),
        HomophoneWord("who's", "Who's coming to the party tonight?", "who is (shortened form)"),
    ),
]


def get_homophone_pairs(year_level: Optional[int] = None) -> List[HomophonePair]:
    """Pairs suitable for a year level; every pair when no level is given."""
    if year_level is None:
        return list(HOMOPHONE_PAIRS)
    return [pair for pair in HOMOPHONE_PAIRS if pair.year_level <= year_level]


def get_pair_for_word(word: str) -> Optional[HomophonePair]:
    """The group a homophone belongs to, ignoring case."""
    word = word.strip().lower()
    return next(
        (pair for pair in HOMOPHONE_PAIRS if any(w.word == word for w in pair.words)),
        None,
    )
