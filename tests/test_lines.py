"""Tests for line detection on micro and macro boards."""

import pytest

from galaxy.lines import WIN_LINES, all_filled, detect_line_winner, determine_macro_winner
from galaxy.state import MicroBoard


def cells(layout: str) -> list[str]:
    return ["" if c == "." else c for c in layout.replace(" ", "")]


@pytest.mark.parametrize("line", WIN_LINES)
def test_every_line_wins(line):
    board = ["" for _ in range(9)]
    for i in line:
        board[i] = "O"
    assert detect_line_winner(board) == "O"


def test_no_winner_on_empty_or_drawn_board():
    assert detect_line_winner(cells(".........")) is None
    drawn = cells("XOX OXO OXO")
    assert detect_line_winner(drawn) is None
    assert all_filled(drawn)
    assert not all_filled(cells("XOX OXO OX."))


def test_mixed_line_is_not_a_win():
    assert detect_line_winner(cells("XXO ... ...")) is None


def test_macro_winner_from_three_boards_in_a_line():
    boards = [MicroBoard() for _ in range(9)]
    for i in (2, 4, 6):
        boards[i] = MicroBoard(winner="X")
    assert determine_macro_winner(boards) == "X"


def test_macro_winner_empty_board():
    assert determine_macro_winner([MicroBoard() for _ in range(9)]) is None


def test_cat_boards_do_not_count_for_anyone():
    boards = [MicroBoard() for _ in range(9)]
    boards[0] = MicroBoard(winner="O")
    boards[1] = MicroBoard(winner="CAT")
    boards[2] = MicroBoard(winner="O")
    assert determine_macro_winner(boards) is None
