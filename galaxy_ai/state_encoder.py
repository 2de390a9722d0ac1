"""
Encode a GameState as numpy grids from one player's point of view.
Values: 0 empty, +1 me, -1 opponent.

Row 0..8 are the micro-boards' cells, row 9 is the macro board (board winners,
CAT counted as empty).
"""

import numpy as np

from galaxy.lines import WIN_LINES, macro_cells
from galaxy.state import GameState, Player

MACRO_ROW = 9
GRID_SHAPE = (10, 9)
LINES = np.array(WIN_LINES, dtype=np.intp)  # (8, 3)


def _encode_cells(cells, me: Player) -> list[int]:
    return [1 if c == me else (0 if c == "" else -1) for c in cells]


def encode_grids(state: GameState, me: Player) -> np.ndarray:
    """Return int8 array of shape (10, 9)."""
    rows = [_encode_cells(b.cells, me) for b in state.boards]
    rows.append(_encode_cells(macro_cells(b.winner for b in state.boards), me))
    return np.array(rows, dtype=np.int8)


def line_counts(grids: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Per row and line, how many cells are mine and how many are the opponent's. Shapes (rows, 8)."""
    lines = grids[:, LINES]  # (rows, 8, 3)
    mine = (lines == 1).sum(axis=-1)
    theirs = (lines == -1).sum(axis=-1)
    return mine, theirs
