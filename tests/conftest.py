"""
Shared fixtures for the engine and bot tests.

States are built from create_initial_state() with selected fields replaced,
so every test starts from a structurally valid GameState.
"""

import random
from dataclasses import replace

import pytest

from galaxy.state import MicroBoard, create_initial_state


def cells(layout: str) -> tuple[str, ...]:
    """'XOX OXO OX.' -> 9 cells; '.' is empty, spaces are ignored."""
    flat = layout.replace(" ", "")
    assert len(flat) == 9, layout
    return tuple("" if c == "." else c for c in flat)


def build_state(boards=None, **fields):
    state = create_initial_state()
    if boards:
        new_boards = list(state.boards)
        for index, board in boards.items():
            new_boards[index] = board
        state = replace(state, boards=tuple(new_boards))
    return replace(state, **fields)


@pytest.fixture
def fresh():
    return create_initial_state()


@pytest.fixture
def make_state():
    """Factory: make_state({index: MicroBoard}, field=value, ...)."""
    return build_state


@pytest.fixture
def board():
    """Factory: board('XO. ... ...', winner=None, rps=None) -> MicroBoard."""
    def _board(layout: str = ".........", winner=None, rps=None) -> MicroBoard:
        return MicroBoard(cells=cells(layout), winner=winner, rps=rps)
    return _board


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def galaxy_boards(board):
    """
    Boards 0..7 closed so that no macro line can form whoever takes board 8:
        X O X
        X O O
        O X ?
    """
    owners = ["X", "O", "X", "X", "O", "O", "O", "X"]
    return {i: board(winner=w) for i, w in enumerate(owners)}
