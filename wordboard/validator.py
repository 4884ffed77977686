from typing import Optional, Tuple

from . import dictionary as dict_
from .dictionary import Dictionary
from .types import ValidationError

WORD_LENGTH = dict_.WORD_LENGTH


def check_shape(guess: str) -> Optional[ValidationError]:
    """Length, then letters only. None when the guess has the shape of a word."""
    word = dict_.normalize(guess)
    if len(word) < WORD_LENGTH:
        return ValidationError.TOO_SHORT
    if len(word) > WORD_LENGTH:
        return ValidationError.TOO_LONG
    if not dict_.is_letters(word):
        return ValidationError.INVALID_CHARS
    return None


def validate(dictionary: Dictionary, guess: str) -> Tuple[Optional[str], Optional[ValidationError]]:
    """
    Checks whether a guess may be submitted.

    Returns:
        Tuple[Optional[str], Optional[ValidationError]]: the normalized (upper case)
        word and None when accepted, or None and the reason when rejected.
    """
    word = dict_.normalize(guess)

    reason = check_shape(word)
    if reason is not None:
        return None, reason

    # anything in the curated lists is accepted regardless of its shape
    if word in dictionary:
        return word, None

    # otherwise fall back to heuristics, a permissive net rather than a real dictionary
    if dict_.is_repeating_pattern(word):
        return None, ValidationError.REPEATING_PATTERN
    if not dict_.has_vowel(word):
        return None, ValidationError.NO_VOWELS
    if dict_.has_unlikely_cluster(word):
        return None, ValidationError.NOT_IN_DICTIONARY
    return word, None
