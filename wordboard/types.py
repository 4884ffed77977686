from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Union


class CellStatus(Enum):
    EMPTY   = "empty"
    ABSENT  = "absent"
    PRESENT = "present"
    CORRECT = "correct"

    @property
    def strength(self) -> int:
        # promotion order: empty -> absent -> present -> correct
        return _STRENGTH[self]


_STRENGTH = {
    CellStatus.EMPTY: 0,
    CellStatus.ABSENT: 1,
    CellStatus.PRESENT: 2,
    CellStatus.CORRECT: 3,
}


class CellRef(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Cell:
    position: CellRef
    letter: Optional[str] = None
    status: CellStatus = CellStatus.EMPTY


# --- Session outcomes ---
@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Playing:
    pass


@dataclass(frozen=True)
class Won:
    guess_count: int


@dataclass(frozen=True)
class Lost:
    target: str


SessionOutcome = Union[Loading, Playing, Won, Lost]


def is_terminal(outcome: SessionOutcome) -> bool:
    return isinstance(outcome, (Won, Lost))


# --- Error taxonomies ---
class ValidationError(Enum):
    TOO_SHORT         = "too short"
    TOO_LONG          = "too long"
    INVALID_CHARS     = "letters only"
    NOT_IN_DICTIONARY = "not in word list"
    REPEATING_PATTERN = "repeating letters"
    NO_VOWELS         = "no vowels"


class SubmissionError(Enum):
    INVALID_ROW       = "invalid_row"
    ALREADY_SUBMITTED = "already_submitted"
    GAME_OVER         = "game_over"
    INCOMPLETE_WORD   = "incomplete_word"
    INVALID_WORD      = "invalid_word"


@dataclass(frozen=True)
class SubmissionFailure:
    """
    Why a submit was refused. `reason` is only set for INVALID_WORD.
    """
    kind: SubmissionError
    reason: Optional[ValidationError] = None

    @property
    def message(self) -> str:
        if self.kind is SubmissionError.INVALID_WORD and self.reason is not None:
            return f"Invalid: {_REASON_MESSAGES[self.reason]}"
        return f"Invalid: {_SUBMISSION_MESSAGES[self.kind]}"


_SUBMISSION_MESSAGES = {
    SubmissionError.INVALID_ROW: "you can only submit the active row.",
    SubmissionError.ALREADY_SUBMITTED: "this row was already submitted.",
    SubmissionError.GAME_OVER: "the game is over.",
    SubmissionError.INCOMPLETE_WORD: "not enough letters.",
    SubmissionError.INVALID_WORD: "not a valid word.",
}

_REASON_MESSAGES = {
    ValidationError.TOO_SHORT: "guess must be 5 letters long.",
    ValidationError.TOO_LONG: "guess must be 5 letters long.",
    ValidationError.INVALID_CHARS: "guess must contain letters only.",
    ValidationError.NOT_IN_DICTIONARY: "not in word list.",
    ValidationError.REPEATING_PATTERN: "a single repeated letter is not a word.",
    ValidationError.NO_VOWELS: "a word needs at least one vowel.",
}
