"""
Galaxy tic-tac-toe move engine.
Rules: https://en.wikipedia.org/wiki/Ultimate_tic-tac-toe, with two changes:
a micro-board that fills without a line (CAT) is settled by one RPSLS duel,
and a galaxy board that closes without a line goes to a best-of-3 RPSLS.

State is immutable. Use legal_moves(), apply_move() and the tiebreak functions
in galaxy.tiebreak; each returns a new state and never raises on a rule
violation. A rejected action comes back as the unchanged state plus `error`.
"""

import logging
from dataclasses import dataclass, replace
from typing import NamedTuple

from galaxy.lines import all_filled, detect_line_winner, determine_macro_winner
from galaxy.state import CAT, FinalRpsState, GameState, MicroBoard, Phase, RpsState, other

logger = logging.getLogger(__name__)

ERR_RPS_PENDING = "Finish Rock-Paper-Scissors first."
ERR_FINAL_PENDING = "Finish the galaxy tie-breaker first."
ERR_MATCH_OVER = "The match is already decided."
ERR_BOARD_NOT_ALLOWED = "You cannot play in that board right now."
ERR_NO_SUCH_CELL = "There is no such square."
ERR_CELL_TAKEN = "That square is already taken."


class Move(NamedTuple):
    board: int
    cell: int


@dataclass(frozen=True)
class MoveResult:
    state: GameState
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def open_boards(state: GameState) -> list[int]:
    return [i for i, b in enumerate(state.boards) if b.is_open]


def legal_boards(state: GameState) -> list[int]:
    """Boards the current player may play in. Empty while a tiebreak is pending or after the match."""
    if state.phase is not Phase.PLAY:
        return []
    target = state.next_board
    if target is not None and state.boards[target].is_open:
        return [target]
    # No constraint, or the target closed since (send-anywhere)
    return open_boards(state)


def legal_moves(state: GameState) -> list[Move]:
    """Return list of (board, cell) legal moves."""
    moves: list[Move] = []
    for i in legal_boards(state):
        for j, cell in enumerate(state.boards[i].cells):
            if cell == "":
                moves.append(Move(i, j))
    return moves


def settle_galaxy(state: GameState) -> GameState:
    """
    Arm the galaxy tiebreak if every board is closed, nobody holds a macro line
    and no micro-tiebreak is pending. Called after every change that can close a board.
    """
    if state.macro_winner is not None or state.pending_rps_board is not None:
        return state
    if state.pending_final_rps or any(b.is_open for b in state.boards):
        return state
    logger.debug("all boards closed without a macro line; galaxy tiebreak armed")
    return replace(
        state,
        pending_final_rps=True,
        final_rps=state.final_rps or FinalRpsState(),
    )


def _reject(state: GameState, reason: str, board_index: int, cell_index: int) -> MoveResult:
    logger.debug("rejected %s at (%s, %s): %s", state.current_player, board_index, cell_index, reason)
    return MoveResult(state, reason)


def apply_move(state: GameState, board_index: int, cell_index: int) -> MoveResult:
    """Place the current player's mark at (board_index, cell_index)."""
    if state.pending_rps_board is not None:
        return _reject(state, ERR_RPS_PENDING, board_index, cell_index)
    if state.pending_final_rps:
        return _reject(state, ERR_FINAL_PENDING, board_index, cell_index)
    if state.macro_winner is not None:
        return _reject(state, ERR_MATCH_OVER, board_index, cell_index)
    # legal_boards only lists open boards, so this also rejects decided ones
    if not isinstance(board_index, int) or board_index not in legal_boards(state):
        return _reject(state, ERR_BOARD_NOT_ALLOWED, board_index, cell_index)
    board = state.boards[board_index]
    if not isinstance(cell_index, int) or not 0 <= cell_index <= 8:
        return _reject(state, ERR_NO_SUCH_CELL, board_index, cell_index)
    if board.cells[cell_index] != "":
        return _reject(state, ERR_CELL_TAKEN, board_index, cell_index)

    player = state.current_player
    cells = list(board.cells)
    cells[cell_index] = player
    new_cells = tuple(cells)

    pending_rps_board = state.pending_rps_board
    if detect_line_winner(new_cells):
        new_board = MicroBoard(cells=new_cells, winner=player)
    elif all_filled(new_cells):
        # Cat's game: play halts here until the RPSLS duel settles the board
        new_board = MicroBoard(cells=new_cells, winner=CAT, rps=RpsState())
        pending_rps_board = board_index
        logger.debug("board %d is a cat's game; RPSLS pending", board_index)
    else:
        new_board = MicroBoard(cells=new_cells)

    new_boards = list(state.boards)
    new_boards[board_index] = new_board
    new_boards_t = tuple(new_boards)

    # Next board = where we played (cell index), unless it is already closed
    next_board = cell_index if new_boards_t[cell_index].is_open else None

    new_state = replace(
        state,
        boards=new_boards_t,
        macro_winner=determine_macro_winner(new_boards_t),
        current_player=other(player),
        next_board=next_board,
        pending_rps_board=pending_rps_board,
    )
    if new_state.macro_winner is not None:
        logger.debug("%s wins the galaxy board", new_state.macro_winner)
    return MoveResult(settle_galaxy(new_state))


if __name__ == "__main__":
    import random

    from galaxy.rpsls import random_throw
    from galaxy.state import create_initial_state
    from galaxy.tiebreak import submit_final_throw, submit_micro_throw

    state = create_initial_state()
    while state.macro_winner is None:
        if state.pending_rps_board is not None:
            state = submit_micro_throw(state, state.current_player, random_throw()).state
        elif state.pending_final_rps:
            state = submit_final_throw(state, state.current_player, random_throw()).state
        else:
            state = apply_move(state, *random.choice(legal_moves(state))).state
    print("Result:", state.macro_winner)
    print("Legal moves count at start:", len(legal_moves(create_initial_state())))
