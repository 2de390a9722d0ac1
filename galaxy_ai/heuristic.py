"""
Static position score for the search cutoff.

Positive is good for `for_player`. Open lines are worth more the closer they
are to completion; a line holding marks of both players is worth nothing.
Macro lines count 20x. Open micro-boards the opponent is about to be sent to
(or all of them, when the next move is unconstrained) count 1.5x.
"""

from dataclasses import dataclass

import numpy as np

from galaxy.state import CAT, GameState, Player, other
from galaxy_ai.state_encoder import MACRO_ROW, encode_grids, line_counts

WIN_SCORE = 5000.0


@dataclass(frozen=True)
class EvalWeights:
    line_three: float = 100.0
    line_two: float = 15.0
    line_one: float = 3.0
    macro: float = 20.0
    board_won: float = 50.0
    forced_board: float = 1.5

    def line_table(self) -> np.ndarray:
        # indexed by number of marks in a line held by one side only
        return np.array([0.0, self.line_one, self.line_two, self.line_three])


DEFAULT_WEIGHTS = EvalWeights()


def line_potential(grids: np.ndarray, weights: EvalWeights = DEFAULT_WEIGHTS) -> np.ndarray:
    """Line potential per row of an encoded grid stack, shape (rows,)."""
    mine, theirs = line_counts(grids)
    table = weights.line_table()
    # Uncontested lines only: one of the two counts is zero
    own = np.where(theirs == 0, table[mine], 0.0)
    opp = np.where(mine == 0, table[theirs], 0.0)
    return (own - opp).sum(axis=-1)


def evaluate(state: GameState, for_player: Player, weights: EvalWeights = DEFAULT_WEIGHTS) -> float:
    if state.macro_winner is not None:
        return WIN_SCORE if state.macro_winner == for_player else -WIN_SCORE

    opponent = other(for_player)
    potential = line_potential(encode_grids(state, for_player), weights)
    score = float(potential[MACRO_ROW]) * weights.macro

    for i, board in enumerate(state.boards):
        if board.winner == CAT:
            continue
        if board.winner == for_player:
            score += weights.board_won
        elif board.winner == opponent:
            score -= weights.board_won
        else:
            forced = state.next_board is None or state.next_board == i
            score += float(potential[i]) * (weights.forced_board if forced else 1.0)
    return score
