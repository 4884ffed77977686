import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Optional

import requests

logger = logging.getLogger(__name__)

WORD_LENGTH = 5
VOWELS = frozenset("AEIOUY")

# --- Built-in fallback word list ---
# Used until (or instead of, if it fails) the curated list is loaded.
# Doubles as the target pool so a game can always start.
FALLBACK_WORDS = [
    "ABOUT", "ABOVE", "ACTOR", "ADULT", "AFTER", "AGAIN", "AGENT", "AGREE", "ALARM", "ALBUM",
    "ALERT", "ALIKE", "ALIVE", "ALLOW", "ALONE", "ANGER", "ANGLE", "APPLE", "APPLY", "ARENA",
    "ARGUE", "ARISE", "AWARD", "AWARE", "BADGE", "BASIC", "BEACH", "BEGIN", "BEING", "BELOW",
    "BLACK", "BLAME", "BLIND", "BLOCK", "BLOOD", "BOARD", "BRAIN", "BRAVE", "BREAD", "BREAK",
    "BRICK", "BRIEF", "BRING", "BROWN", "BUILD", "CABIN", "CABLE", "CANDY", "CARRY", "CATCH",
    "CAUSE", "CHAIN", "CHAIR", "CHARM", "CHART", "CHASE", "CHEAP", "CHECK", "CHEST", "CHIEF",
    "CHILD", "CLAIM", "CLASS", "CLEAN", "CLEAR", "CLIMB", "CLOCK", "CLOSE", "CLOUD", "COAST",
    "COUNT", "COURT", "COVER", "CRAFT", "CRANE", "CRASH", "CREAM", "CRIME", "CROWD", "CROWN",
    "CURVE", "CYCLE", "DAILY", "DANCE", "DEATH", "DELAY", "DEPTH", "DOUBT", "DRAFT", "DRAMA",
    "DREAM", "DRESS", "DRINK", "DRIVE", "EAGER", "EARLY", "EARTH", "EIGHT", "ELVES", "EMPTY",
    "ENJOY", "ENTER", "EQUAL", "ERROR", "EVENT", "EVERY", "EXACT", "EXIST", "EXTRA", "FAITH",
    "FALSE", "FAULT", "FEAST", "FIELD", "FIGHT", "FINAL", "FLAME", "FLASH", "FLOOR", "FOCUS",
    "FORCE", "FRAME", "FRESH", "FRONT", "FRUIT", "GHOST", "GIANT", "GLASS", "GLOBE", "GRACE",
    "GRADE", "GRAIN", "GRAND", "GRANT", "GRASS", "GREAT", "GREEN", "GROUP", "GUARD", "GUESS",
    "GUEST", "GUIDE", "HAPPY", "HEART", "HEAVY", "HONEY", "HORSE", "HOTEL", "HOUSE", "HUMAN",
    "IDEAL", "IMAGE", "INDEX", "INNER", "ISSUE", "JUDGE", "KNIFE", "LARGE", "LASER", "LAUGH",
    "LAYER", "LEARN", "LEMON", "LEVEL", "LIGHT", "LIMIT", "LOCAL", "LUCKY", "LUNCH", "MAGIC",
    "MAJOR", "MARCH", "MATCH", "METAL", "MIGHT", "MINOR", "MODEL", "MONEY", "MONTH", "MOTOR",
    "MOUNT", "MOUSE", "MOUTH", "MUSIC", "NERVE", "NIGHT", "NOISE", "NORTH", "NOVEL", "NURSE",
    "OCEAN", "OFFER", "OFTEN", "ORDER", "OTHER", "OUTER", "OWNER", "PAINT", "PANEL", "PAPER",
    "PARTY", "PEACE", "PHONE", "PIANO", "PIECE", "PILOT", "PITCH", "PLACE", "PLAIN", "PLANE",
    "PLANT", "PLATE", "POINT", "POUND", "POWER", "PRESS", "PRICE", "PRIDE", "PRIME", "PRIZE",
    "PROOF", "PROUD", "QUEEN", "QUICK", "QUIET", "RADIO", "RAISE", "RANGE", "RAPID", "RATIO",
    "REACH", "READY", "RIVER", "ROBOT", "ROUND", "ROUTE", "ROYAL", "SCALE", "SCENE", "SCOPE",
    "SCORE", "SENSE", "SERVE", "SEVEN", "SHADE", "SHAPE", "SHARE", "SHARP", "SHEEP", "SHELF",
    "SHELL", "SHIFT", "SHINE", "SHIRT", "SHOCK", "SHORE", "SHORT", "SIGHT", "SKILL", "SLEEP",
    "SMALL", "SMART", "SMILE", "SMOKE", "SOLID", "SOUND", "SOUTH", "SPACE", "SPARE", "SPEAK",
    "SPEED", "SPEND", "SPORT", "STAFF", "STAGE", "STAND", "START", "STEAM", "STEEL", "STICK",
    "STILL", "STONE", "STORE", "STORM", "STORY", "STYLE", "SUGAR", "SWEET", "TABLE", "TASTE",
    "TEACH", "THEME", "THICK", "THING", "THINK", "THREE", "TIGER", "TIRED", "TITLE", "TOAST",
    "TODAY", "TOUCH", "TOWER", "TRACK", "TRADE", "TRAIN", "TREND", "TRIAL", "TRUST", "TRUTH",
    "UNCLE", "UNDER", "UNION", "UNITY", "UPPER", "URBAN", "USUAL", "VALUE", "VIDEO", "VISIT",
    "VOICE", "WASTE", "WATCH", "WATER", "WHEEL", "WHITE", "WHOLE", "WOMAN", "WORLD", "WORRY",
    "WORTH", "WOULD", "WRITE", "WRONG", "YIELD", "YOUNG", "YOUTH", "ZEBRA",
]

_LONG_CONSONANT_RUN = re.compile(r"[^AEIOUY]{4,}")
_LONG_VOWEL_RUN = re.compile(r"[AEIOUY]{3,}")


class DictionaryFormatError(ValueError):
    """The dictionary source returned data that doesn't follow the expected schema."""


# everything a source may raise that counts as a failed load
LOAD_ERRORS = (OSError, ValueError, requests.RequestException)


def normalize(word: str) -> str:
    return word.strip().upper()


def is_letters(word: str) -> bool:
    return word.isascii() and word.isalpha()


def _clean_words(words: Iterable[Any]) -> FrozenSet[str]:
    # keep only 5-letter alphabetic entries, silently dropping the rest
    cleaned = set()
    for word in words:
        if not isinstance(word, str):
            continue
        word = normalize(word)
        if len(word) == WORD_LENGTH and is_letters(word):
            cleaned.add(word)
    return frozenset(cleaned)


@dataclass(frozen=True)
class Dictionary:
    valid_guesses: FrozenSet[str]
    target_words: FrozenSet[str]
    is_fallback: bool = field(default=False, compare=False)

    def __contains__(self, word: str) -> bool:
        word = normalize(word)
        return word in self.valid_guesses or word in self.target_words

    @classmethod
    def fallback(cls) -> "Dictionary":
        words = _clean_words(FALLBACK_WORDS)
        return cls(valid_guesses=words, target_words=words, is_fallback=True)

    @classmethod
    def from_source(cls, data: Mapping[str, Any]) -> "Dictionary":
        """
        Builds a dictionary from a source payload of the form
        {"validGuesses": [...], "targetWords": [...]}. `targetWords` is optional;
        without it targets keep coming from the built-in list.
        """
        if not isinstance(data, Mapping):
            raise DictionaryFormatError(f"Expected a mapping, got {type(data).__name__}.")

        guesses = data.get("validGuesses")
        if not isinstance(guesses, list):
            raise DictionaryFormatError("'validGuesses' must be a list of words.")
        valid_guesses = _clean_words(guesses)
        if not valid_guesses:
            raise DictionaryFormatError("'validGuesses' has no 5-letter words.")

        targets = data.get("targetWords")
        if targets is None:
            target_words = _clean_words(FALLBACK_WORDS)
        elif isinstance(targets, list):
            target_words = _clean_words(targets) or _clean_words(FALLBACK_WORDS)
        else:
            raise DictionaryFormatError("'targetWords' must be a list of words.")

        return cls(valid_guesses=valid_guesses, target_words=target_words)


# --- Heuristics for words missing from the curated list ---
def is_repeating_pattern(word: str) -> bool:
    return len(set(word.upper())) == 1


def has_vowel(word: str) -> bool:
    return any(letter in VOWELS for letter in word.upper())


def has_unlikely_cluster(word: str) -> bool:
    """
    True for 4+ consonants or 3+ vowels in a row, shapes real words rarely have
    """
    word = word.upper()
    return bool(_LONG_CONSONANT_RUN.search(word) or _LONG_VOWEL_RUN.search(word))


# --- Dictionary sources ---
DictionarySource = Callable[[], Mapping[str, Any]]


class FileSource:
    """
    Reads a dictionary from disk. JSON files follow the {"validGuesses": [...]}
    schema, anything else is read as a plain word list with one word per line.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __call__(self) -> Mapping[str, Any]:
        if not self.path.is_file():
            raise FileNotFoundError(f"Error: Word list not found at '{self.path}'")
        with open(self.path, 'r', encoding='utf-8') as f:
            if self.path.suffix == '.json':
                try:
                    return json.load(f)
                except json.JSONDecodeError as e:
                    raise DictionaryFormatError(f"Malformed JSON in '{self.path}': {e}") from e
            words = [line.strip() for line in f if len(line.strip()) == WORD_LENGTH]
        return {"validGuesses": words}

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


class UrlSource:
    """Fetches a JSON dictionary over HTTP."""

    def __init__(self, url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def __call__(self) -> Mapping[str, Any]:
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status() # Raise HTTPError for bad responses (4xx or 5xx)
        try:
            return response.json()
        except ValueError as e:
            raise DictionaryFormatError(f"Response from {self.url} is not JSON.") from e

    def __repr__(self) -> str:
        return f"UrlSource({self.url!r})"


def source_for(location: str) -> DictionarySource:
    """Picks the source for a configured location (URL or path)."""
    if location.startswith(("http://", "https://")):
        return UrlSource(location)
    return FileSource(Path(location))


def load(source: DictionarySource) -> Dictionary:
    """
    Runs a source and builds the dictionary from its payload. Errors propagate;
    the controller decides how to surface them.
    """
    dictionary = Dictionary.from_source(source())
    logger.info(
        "Loaded %d valid guesses and %d target words from %r",
        len(dictionary.valid_guesses), len(dictionary.target_words), source,
    )
    return dictionary
