import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Union

from . import board
from . import dictionary as dict_
from .board import Grid, Session
from .dictionary import Dictionary, DictionarySource
from .types import (
    CellRef, CellStatus, Lost, SessionOutcome, SubmissionError, SubmissionFailure,
    ValidationError, Won,
)
from .validator import check_shape

logger = logging.getLogger(__name__)


# --- Input events ---
@dataclass(frozen=True)
class FocusCell:
    ref: CellRef


@dataclass(frozen=True)
class TypeLetter:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class StartNewGame:
    pass


@dataclass(frozen=True)
class EnterWord:
    word: str


@dataclass(frozen=True)
class SubmitWord:
    word: str


@dataclass(frozen=True)
class DismissDiagnostic:
    pass


@dataclass(frozen=True)
class DictionaryLoaded:
    """Result of a dictionary load: the dictionary, or why it couldn't be loaded."""
    dictionary: Optional[Dictionary] = None
    error: Optional[str] = None


Event = Union[
    FocusCell, TypeLetter, Backspace, Submit, StartNewGame, EnterWord, SubmitWord,
    DismissDiagnostic, DictionaryLoaded,
]


@dataclass(frozen=True)
class Projection:
    """Read-only snapshot of everything a view needs after an event."""
    grid: Grid
    active_row: int
    locked_rows: FrozenSet[int]
    outcome: SessionOutcome
    focus: Optional[CellRef]
    letters: Dict[str, CellStatus]
    message: Optional[str]
    diagnostic: Optional[str]
    max_turns: int = board.MAX_TURNS
    word_length: int = board.MAX_WORD_LEN


class SessionController:
    """
    Turns input events into board transitions. Holds the current session, the
    dictionary it validates against and the last user-visible message.
    """

    def __init__(self, dictionary: Optional[Dictionary] = None, rng: Optional[random.Random] = None):
        self.dictionary = dictionary or Dictionary.fallback()
        self.rng = rng or random.Random()
        self.session: Session = board.new_session()
        self.message: Optional[str] = None
        self.last_failure: Optional[SubmissionFailure] = None
        self.diagnostic: Optional[str] = None

    # --- events ---
    def dispatch(self, event: Event) -> Projection:
        if isinstance(event, FocusCell):
            return self.focus_cell(event.ref)
        if isinstance(event, TypeLetter):
            return self.type_letter(event.char)
        if isinstance(event, Backspace):
            return self.backspace()
        if isinstance(event, Submit):
            return self.submit()
        if isinstance(event, StartNewGame):
            return self.start_new_game()
        if isinstance(event, EnterWord):
            return self.enter_word(event.word)
        if isinstance(event, SubmitWord):
            return self.submit_word(event.word)
        if isinstance(event, DismissDiagnostic):
            return self.dismiss_diagnostic()
        if isinstance(event, DictionaryLoaded):
            return self.dictionary_loaded(event)
        raise TypeError(f"Unknown event: {event!r}")

    def focus_cell(self, ref: CellRef) -> Projection:
        self.session = board.focus_cell(self.session, ref)
        return self.projection()

    def type_letter(self, char: str) -> Projection:
        self._clear_message()
        self.session = board.type_letter(self.session, char)
        return self.projection()

    def backspace(self) -> Projection:
        self._clear_message()
        self.session = board.backspace(self.session)
        return self.projection()

    def enter_word(self, word: str) -> Projection:
        """
        Types a word into the active row. Partial words are fine; a word that
        wouldn't fit the row as typed (too long, or not all letters) is reported
        as INVALID_WORD and the row is cleared instead.
        """
        self._clear_message()
        reason = check_shape(word)
        if reason in (ValidationError.TOO_LONG, ValidationError.INVALID_CHARS) and self.session.is_playing:
            self.session = board.enter_word(self.session, "")
            self._report(SubmissionFailure(SubmissionError.INVALID_WORD, reason))
        else:
            self.session = board.enter_word(self.session, word)
        return self.projection()

    def submit(self) -> Projection:
        self.session, failure = board.submit(self.session, self.dictionary)
        self._report(failure)
        return self.projection()

    def submit_word(self, word: str) -> Projection:
        """Enters and submits a whole guess, as the hosts deliver it."""
        self.session, failure = board.submit_word(self.session, self.dictionary, word)
        self._report(failure)
        return self.projection()

    def _report(self, failure: Optional[SubmissionFailure]) -> None:
        self.last_failure = failure
        if failure is not None:
            self.message = failure.message
        elif isinstance(self.session.outcome, Won):
            self.message = f"Result: You won in {self.session.outcome.guess_count} guesses!"
        elif isinstance(self.session.outcome, Lost):
            self.message = f"Result: Game over. The word was {self.session.outcome.target}."
        else:
            self.message = None

    def start_new_game(self) -> Projection:
        """
        Discards the current session and draws a new target from the loaded
        dictionary (the built-in list if it has no targets).
        """
        self._clear_message()
        self.session = board.new_session()
        pool = sorted(self.dictionary.target_words) or sorted(Dictionary.fallback().target_words)
        target = self.rng.choice(pool)
        self.session = board.start(self.session, target)
        logger.info("Started a new game with %d candidate targets", len(pool))
        return self.projection()

    def dictionary_loaded(self, result: DictionaryLoaded) -> Projection:
        if result.dictionary is not None:
            self.dictionary = result.dictionary
            self.diagnostic = None
        else:
            # the fallback (or previously loaded) dictionary stays in force
            self.diagnostic = f"Could not load the word list, using the built-in one. ({result.error})"
        return self.projection()

    def dismiss_diagnostic(self) -> Projection:
        self.diagnostic = None
        return self.projection()

    async def load_dictionary(self, source: DictionarySource) -> Projection:
        """
        Loads a dictionary without blocking the event loop, then applies it as a
        DictionaryLoaded event. Failures never propagate; they become a diagnostic.
        """
        try:
            loaded = await asyncio.to_thread(dict_.load, source)
        except dict_.LOAD_ERRORS as e:
            logger.warning("Dictionary load from %r failed: %s", source, e)
            return self.dictionary_loaded(DictionaryLoaded(error=str(e) or type(e).__name__))
        return self.dictionary_loaded(DictionaryLoaded(dictionary=loaded))

    # --- projection ---
    def projection(self) -> Projection:
        s = self.session
        return Projection(
            grid=s.grid,
            active_row=s.active_row,
            locked_rows=s.locked_rows,
            outcome=s.outcome,
            focus=s.focus,
            letters=dict(s.letters),
            message=self.message,
            diagnostic=self.diagnostic,
        )

    def _clear_message(self) -> None:
        self.message = None
        self.last_failure = None
