from dataclasses import replace

import pytest

from wordboard import board
from wordboard.dictionary import Dictionary
from wordboard.types import (
    CellRef, CellStatus, Loading, Lost, Playing, SubmissionError, ValidationError, Won,
)

from .conftest import type_word

C, P, A = CellStatus.CORRECT, CellStatus.PRESENT, CellStatus.ABSENT


def submit_word(session, dictionary, word):
    session = type_word(session, word)
    return board.submit(session, dictionary)


def test_new_session_is_loading():
    session = board.new_session()
    assert session.outcome == Loading()
    assert session.target is None
    assert session.focus is None
    assert len(session.grid) == board.MAX_TURNS
    assert all(len(row) == board.MAX_WORD_LEN for row in session.grid)


def test_input_is_ignored_while_loading(dictionary):
    session = board.new_session()
    assert board.type_letter(session, "a") == session
    assert board.submit(session, dictionary)[1].kind is SubmissionError.GAME_OVER


def test_start_moves_to_playing(playing):
    assert playing.outcome == Playing()
    assert playing.target == "LEVEL"
    assert playing.focus == CellRef(0, 0)


def test_start_rejects_wrong_length_target():
    with pytest.raises(ValueError):
        board.start(board.new_session(), "toolong")


def test_typing_advances_focus_and_stops_at_row_end(playing):
    session = type_word(playing, "crane")
    assert session.row_word(0) == "CRANE"
    assert session.focus == CellRef(0, 4)

    # the last cell is overwritten, focus stays put
    session = board.type_letter(session, "s")
    assert session.row_word(0) == "CRANS"
    assert session.focus == CellRef(0, 4)


def test_typing_ignores_non_letters(playing):
    for char in ["1", "", "ab", "-", "é"]:
        assert board.type_letter(playing, char) == playing


def test_focus_only_in_active_row(playing):
    assert board.focus_cell(playing, CellRef(0, 3)).focus == CellRef(0, 3)
    assert board.focus_cell(playing, CellRef(1, 0)) == playing
    assert board.focus_cell(playing, CellRef(0, 7)) == playing


def test_typing_into_focused_cell(playing):
    session = board.focus_cell(playing, CellRef(0, 2))
    session = board.type_letter(session, "v")
    assert session.grid[0][2].letter == "V"
    assert session.row_word(0) == "V"
    assert session.focus == CellRef(0, 3)


def test_backspace_clears_focused_letter_first(playing):
    session = type_word(playing, "crane")
    session = board.backspace(session)
    assert session.row_word(0) == "CRAN"
    assert session.focus == CellRef(0, 4)


def test_backspace_deletes_back(playing):
    session = type_word(playing, "cr")
    assert session.focus == CellRef(0, 2)
    session = board.backspace(session)
    assert session.row_word(0) == "C"
    assert session.focus == CellRef(0, 1)
    session = board.backspace(session)
    assert session.row_word(0) == ""
    assert session.focus == CellRef(0, 0)
    assert board.backspace(session) == session


def test_incomplete_row_is_not_locked(playing, dictionary):
    session, failure = submit_word(playing, dictionary, "cra")
    assert failure.kind is SubmissionError.INCOMPLETE_WORD
    assert session == type_word(playing, "cra")
    assert session.locked_rows == frozenset()


def test_gap_in_row_is_incomplete(playing, dictionary):
    session = type_word(playing, "crane")
    session = board.focus_cell(session, CellRef(0, 2))
    session = board.backspace(session)
    _, failure = board.submit(session, dictionary)
    assert failure.kind is SubmissionError.INCOMPLETE_WORD


def test_invalid_word_clears_row_without_consuming_attempt(playing, dictionary):
    session, failure = submit_word(playing, dictionary, "bcdfg")
    assert failure.kind is SubmissionError.INVALID_WORD
    assert failure.reason is ValidationError.NO_VOWELS
    assert session.row_word(0) == ""
    assert session.focus == CellRef(0, 0)
    assert session.active_row == 0
    assert session.locked_rows == frozenset()

    # and the player can retry right away
    session, failure = submit_word(session, dictionary, "crane")
    assert failure is None
    assert session.active_row == 1


def test_valid_guess_scores_and_advances(playing, dictionary):
    session, failure = submit_word(playing, dictionary, "elves")
    assert failure is None
    assert [cell.status for cell in session.grid[0]] == [P, P, C, C, A]
    assert session.locked_rows == frozenset({0})
    assert session.active_row == 1
    assert session.focus == CellRef(1, 0)
    assert session.outcome == Playing()
    assert session.letters == {"E": C, "L": P, "V": C, "S": A}


def test_locked_row_is_immutable(playing, dictionary):
    session, _ = submit_word(playing, dictionary, "elves")
    assert board.focus_cell(session, CellRef(0, 0)) == session
    assert session.guesses() == ("ELVES",)


def test_submit_from_wrong_row_is_invalid(playing, dictionary):
    session, _ = submit_word(playing, dictionary, "elves")
    # force a stale focus onto the locked row
    stale = replace(session, focus=CellRef(0, 4))
    _, failure = board.submit(stale, dictionary)
    assert failure.kind is SubmissionError.INVALID_ROW


def test_resubmitting_locked_row(playing, dictionary):
    session, _ = submit_word(playing, dictionary, "elves")
    # a locked row that is somehow still the active one
    stale = replace(session, active_row=0, focus=CellRef(0, 0))
    _, failure = board.submit(stale, dictionary)
    assert failure.kind is SubmissionError.ALREADY_SUBMITTED


@pytest.mark.parametrize("row", range(board.MAX_TURNS))
def test_correct_guess_wins_on_row(playing, dictionary, row):
    session = playing
    for _ in range(row):
        session, failure = submit_word(session, dictionary, "crane")
        assert failure is None

    session, failure = submit_word(session, dictionary, "level")
    assert failure is None
    assert session.outcome == Won(row + 1)
    assert row in session.locked_rows
    assert session.is_over


def test_wrong_guess_on_last_row_loses(playing, dictionary):
    session = playing
    for _ in range(board.MAX_TURNS):
        session, failure = submit_word(session, dictionary, "crane")
        assert failure is None
    assert session.outcome == Lost("LEVEL")
    assert session.locked_rows == frozenset(range(board.MAX_TURNS))


def test_terminal_state_ignores_input(playing, dictionary):
    session, _ = submit_word(playing, dictionary, "level")
    assert board.type_letter(session, "a") == session
    assert board.backspace(session) == session
    assert board.enter_word(session, "crane") == session
    _, failure = board.submit(session, dictionary)
    assert failure.kind is SubmissionError.GAME_OVER


def test_win_is_case_insensitive(dictionary):
    session = board.start(board.new_session(), "LeVeL")
    session, _ = submit_word(session, dictionary, "lEvEl")
    assert session.outcome == Won(1)


def test_enter_word_replaces_row(playing):
    session = type_word(playing, "abc")
    session = board.enter_word(session, " crane ")
    assert session.row_word(0) == "CRANE"
    assert session.focus == CellRef(0, 4)


def test_heuristic_words_are_playable():
    # curated list without the guess: falls back to heuristics
    curated = Dictionary(valid_guesses=frozenset({"CRANE"}), target_words=frozenset({"LEVEL"}))
    session = board.start(board.new_session(), "level")
    session, failure = submit_word(session, curated, "plonk")
    assert failure is None
    assert session.active_row == 1


@pytest.mark.parametrize("word, reason", [
    ("cranes", ValidationError.TOO_LONG),
    ("cr4ne", ValidationError.INVALID_CHARS),
])
def test_submit_word_checks_the_raw_word(playing, dictionary, word, reason):
    session = type_word(playing, "ab")
    session, failure = board.submit_word(session, dictionary, word)
    assert failure.kind is SubmissionError.INVALID_WORD
    assert failure.reason is reason
    assert session.row_word(0) == ""
    assert session.focus == CellRef(0, 0)
    assert session.locked_rows == frozenset()


def test_submit_word_after_game_over(playing, dictionary):
    session, _ = board.submit_word(playing, dictionary, "level")
    assert session.outcome == Won(1)
    _, failure = board.submit_word(session, dictionary, "crane")
    assert failure.kind is SubmissionError.GAME_OVER
