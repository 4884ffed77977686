import logging
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional, Tuple

from . import letters as letters_
from .dictionary import Dictionary
from .matcher import score
from .types import (
    Cell, CellRef, CellStatus, Loading, Lost, Playing, SessionOutcome,
    SubmissionError, SubmissionFailure, Won, is_terminal,
)
from .validator import check_shape, validate

logger = logging.getLogger(__name__)

MAX_TURNS = 6
MAX_WORD_LEN = 5

Row = Tuple[Cell, ...]
Grid = Tuple[Row, ...]


def empty_grid() -> Grid:
    return tuple(
        tuple(Cell(CellRef(r, c)) for c in range(MAX_WORD_LEN))
        for r in range(MAX_TURNS)
    )


@dataclass(frozen=True)
class Session:
    """
    One game. Never mutated: every transition below returns a new Session.
    """
    grid: Grid = field(default_factory=empty_grid)
    target: Optional[str] = None
    locked_rows: FrozenSet[int] = frozenset()
    active_row: int = 0
    outcome: SessionOutcome = Loading()
    focus: Optional[CellRef] = None
    letters: Dict[str, CellStatus] = field(default_factory=dict)

    @property
    def is_playing(self) -> bool:
        return isinstance(self.outcome, Playing)

    @property
    def is_over(self) -> bool:
        return is_terminal(self.outcome)

    def row_word(self, row: int) -> str:
        # letters typed so far, empty cells skipped
        return "".join(cell.letter for cell in self.grid[row] if cell.letter)

    def guesses(self) -> Tuple[str, ...]:
        """Submitted words in row order."""
        return tuple(self.row_word(r) for r in sorted(self.locked_rows))


# --- grid helpers ---
def _set_row(grid: Grid, row: int, cells: Row) -> Grid:
    return grid[:row] + (cells,) + grid[row + 1:]


def _set_cell(grid: Grid, ref: CellRef, letter: Optional[str], status: CellStatus = CellStatus.EMPTY) -> Grid:
    cells = list(grid[ref.row])
    cells[ref.col] = Cell(ref, letter, status)
    return _set_row(grid, ref.row, tuple(cells))


def _clear_row(grid: Grid, row: int) -> Grid:
    return _set_row(grid, row, tuple(Cell(CellRef(row, c)) for c in range(MAX_WORD_LEN)))


def _in_active_row(session: Session, ref: Optional[CellRef]) -> bool:
    return ref is not None and session.is_playing and ref.row == session.active_row


# --- transitions ---
def new_session() -> Session:
    """A fresh session waiting for its target word."""
    return Session()


def start(session: Session, target: str) -> Session:
    """Loading -> Playing once the target word is known."""
    if len(target) != MAX_WORD_LEN:
        raise ValueError(f"Target word must be {MAX_WORD_LEN} letters long.")
    return replace(
        session,
        target=target.upper(),
        outcome=Playing(),
        focus=CellRef(session.active_row, 0),
    )


def focus_cell(session: Session, ref: CellRef) -> Session:
    if not _in_active_row(session, ref) or not 0 <= ref.col < MAX_WORD_LEN:
        return session
    return replace(session, focus=CellRef(*ref))


def type_letter(session: Session, char: str) -> Session:
    """
    Writes a letter into the focused cell (clearing any stale status) and
    moves focus to the next cell of the row, if there is one.
    """
    ref = session.focus
    if not _in_active_row(session, ref):
        return session
    if len(char) != 1 or not char.isascii() or not char.isalpha():
        return session

    grid = _set_cell(session.grid, ref, char.upper())
    focus = CellRef(ref.row, ref.col + 1) if ref.col + 1 < MAX_WORD_LEN else ref
    return replace(session, grid=grid, focus=focus)


def backspace(session: Session) -> Session:
    ref = session.focus
    if not _in_active_row(session, ref):
        return session

    if session.grid[ref.row][ref.col].letter:
        return replace(session, grid=_set_cell(session.grid, ref, None))
    if ref.col == 0:
        return session

    # delete back: step to the previous cell and clear it
    prev = CellRef(ref.row, ref.col - 1)
    return replace(session, grid=_set_cell(session.grid, prev, None), focus=prev)


def enter_word(session: Session, word: str) -> Session:
    """
    Replaces the active row's contents with `word`, one typed letter at a time.
    """
    if not session.is_playing:
        return session
    row = session.active_row
    session = replace(session, grid=_clear_row(session.grid, row), focus=CellRef(row, 0))
    for char in word.strip():
        session = type_letter(session, char)
    return session


def submit(session: Session, dictionary: Dictionary) -> Tuple[Session, Optional[SubmissionFailure]]:
    """
    Submits the focused row.

    Returns:
        Tuple[Session, Optional[SubmissionFailure]]: the next session and None on
        success, or the reason the submission was refused. A refused submission
        leaves the session unchanged except for INVALID_WORD, which clears the row.
    """
    if not session.is_playing:
        return session, SubmissionFailure(SubmissionError.GAME_OVER)

    ref = session.focus
    if ref is None or ref.row != session.active_row:
        return session, SubmissionFailure(SubmissionError.INVALID_ROW)
    row = ref.row
    if row in session.locked_rows:
        return session, SubmissionFailure(SubmissionError.ALREADY_SUBMITTED)

    typed = session.row_word(row)
    if len(typed) != MAX_WORD_LEN:
        return session, SubmissionFailure(SubmissionError.INCOMPLETE_WORD)

    word, reason = validate(dictionary, typed)
    if reason is not None:
        # the row stays active and the attempt isn't consumed
        logger.debug("Rejected %s on row %d: %s", typed, row, reason.name)
        cleared = replace(session, grid=_clear_row(session.grid, row), focus=CellRef(row, 0))
        return cleared, SubmissionFailure(SubmissionError.INVALID_WORD, reason)

    statuses = score(word, session.target)
    cells = tuple(Cell(CellRef(row, c), word[c], statuses[c]) for c in range(MAX_WORD_LEN))
    session = replace(
        session,
        grid=_set_row(session.grid, row, cells),
        letters=letters_.merge(session.letters, word, statuses),
        locked_rows=session.locked_rows | {row},
    )
    logger.debug("Row %d scored %s -> %s", row, word, [s.value for s in statuses])

    # a correct guess wins even on the last row
    if word == session.target:
        return replace(session, outcome=Won(row + 1)), None
    if row + 1 >= MAX_TURNS:
        return replace(session, outcome=Lost(session.target)), None

    next_row = row + 1
    return replace(session, active_row=next_row, focus=CellRef(next_row, 0)), None


def submit_word(session: Session, dictionary: Dictionary, word: str) -> Tuple[Session, Optional[SubmissionFailure]]:
    """
    Enters and submits a whole guess. The raw word is shape-checked before any
    letter is typed, so a long or non-letter guess is rejected as INVALID_WORD
    instead of being truncated or filtered into a different word.
    """
    if not session.is_playing:
        return session, SubmissionFailure(SubmissionError.GAME_OVER)

    reason = check_shape(word)
    if reason is not None:
        row = session.active_row
        cleared = replace(session, grid=_clear_row(session.grid, row), focus=CellRef(row, 0))
        return cleared, SubmissionFailure(SubmissionError.INVALID_WORD, reason)
    return submit(enter_word(session, word), dictionary)
