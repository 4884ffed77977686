from collections import Counter
from typing import List

from .types import CellStatus

WORD_LENGTH = 5


def score(guess: str, target: str) -> List[CellStatus]:
    """
    Returns the letter-level feedback (correct, present, absent) for a guess
    against the target. Comparison is case-insensitive; the caller guarantees
    both words have the same length.
    """
    guess, target = guess.upper(), target.upper()

    # default all letters to absent
    states = [CellStatus.ABSENT] * len(guess)

    # letters of the target that still haven't been matched, with their count
    unmatched = Counter()

    # check for exact matches first
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            states[i] = CellStatus.CORRECT
        else:
            unmatched[t] += 1

    # then present letters, left to right, consuming one target occurrence each
    # so a letter guessed twice can't count twice against a single occurrence
    for i, g in enumerate(guess):
        if states[i] is CellStatus.CORRECT:
            continue
        if unmatched[g] > 0:
            states[i] = CellStatus.PRESENT
            unmatched[g] -= 1
    return states
