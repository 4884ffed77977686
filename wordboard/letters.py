from string import ascii_uppercase
from typing import Dict, Mapping, Sequence

from .types import CellStatus

LetterStatusMap = Mapping[str, CellStatus]


def merge(current: LetterStatusMap, word: str, statuses: Sequence[CellStatus]) -> Dict[str, CellStatus]:
    """
    Folds one scored guess into the letter map. A letter only ever moves to a
    stronger state (absent -> present -> correct), so a letter known to be
    correct is never downgraded by an absent copy elsewhere in the word.
    """
    merged = dict(current)
    for letter, status in zip(word.upper(), statuses):
        known = merged.get(letter)
        if known is None or status.strength > known.strength:
            merged[letter] = status
    return merged


def keyboard(letters: LetterStatusMap) -> Dict[str, CellStatus]:
    """
    Returns a mapping from every letter A-Z to its state, EMPTY when unused
    """
    return {letter: letters.get(letter, CellStatus.EMPTY) for letter in ascii_uppercase}
