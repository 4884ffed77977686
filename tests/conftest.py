import random

import pytest

from wordboard import board
from wordboard.controller import SessionController
from wordboard.dictionary import Dictionary


@pytest.fixture
def dictionary():
    return Dictionary.fallback()


@pytest.fixture
def playing():
    """A session in play with LEVEL as the target."""
    return board.start(board.new_session(), "level")


@pytest.fixture
def controller(dictionary):
    return SessionController(dictionary=dictionary, rng=random.Random(7))


def type_word(session, word):
    for char in word:
        session = board.type_letter(session, char)
    return session


@pytest.fixture
def level_game(dictionary):
    """A controller mid-game, LEVEL being the only possible target."""
    controller = SessionController(dictionary=Dictionary(dictionary.valid_guesses, frozenset({"LEVEL"})))
    controller.start_new_game()
    return controller
