"""
Line detection shared by micro-boards and the macro (galaxy) board.

Cells are '', 'X' or 'O'. The macro board is built from board winners with
CAT treated as empty, so both levels use the same geometry and line order.
"""

from typing import Iterable, Sequence

# Winning lines for a 3x3 board (indices 0..8)
WIN_LINES = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),              # diags
]

CENTER = 4
CORNERS = (0, 2, 6, 8)


def detect_line_winner(cells: Sequence[str]) -> str | None:
    """Return the player holding a full line, checking lines in WIN_LINES order."""
    for a, b, c in WIN_LINES:
        if cells[a] != "" and cells[a] == cells[b] == cells[c]:
            return cells[a]
    return None


def all_filled(cells: Sequence[str]) -> bool:
    return all(cell != "" for cell in cells)


def macro_cells(winners: Iterable[str | None]) -> tuple[str, ...]:
    """Project board winners onto 9 macro cells; CAT and open boards are empty."""
    return tuple(w if w in ("X", "O") else "" for w in winners)


def determine_macro_winner(boards) -> str | None:
    """Winner of the galaxy board given the nine micro-boards (anything with `.winner`)."""
    return detect_line_winner(macro_cells(b.winner for b in boards))
