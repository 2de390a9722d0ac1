"""
Move selection for bot seats.

easy:  uniform random legal move.
smart: minimax, 2 plies.
hard:  minimax, 3 plies.

The search walks hypothetical futures through galaxy.game.apply_move, so it can
only ever return a legal move. Positions waiting on an RPSLS tiebreak are
scored as they stand; throws are not searched.
"""

import logging
import math
import random
from dataclasses import replace

from galaxy.game import Move, apply_move, legal_moves
from galaxy.lines import CENTER, CORNERS
from galaxy.state import BotLevel, GameState, Phase, Player, other
from galaxy_ai.heuristic import DEFAULT_WEIGHTS, EvalWeights, evaluate

logger = logging.getLogger(__name__)

SEARCH_DEPTH: dict[str, int] = {"smart": 2, "hard": 3}

# Every score is a multiple of 0.5, so a window this far below the best root
# score keeps tied siblings exact while still pruning worse ones.
_TIE_MARGIN = 0.25


def _minimax(
    state: GameState,
    depth: int,
    alpha: float,
    beta: float,
    me: Player,
    weights: EvalWeights,
) -> float:
    if depth == 0 or state.phase is not Phase.PLAY:
        return evaluate(state, me, weights)
    moves = legal_moves(state)
    if not moves:
        return evaluate(state, me, weights)

    if state.current_player == me:
        best = -math.inf
        for move in moves:
            child = apply_move(state, *move).state
            best = max(best, _minimax(child, depth - 1, alpha, beta, me, weights))
            alpha = max(alpha, best)
            if alpha >= beta:
                break
        return best

    best = math.inf
    for move in moves:
        child = apply_move(state, *move).state
        best = min(best, _minimax(child, depth - 1, alpha, beta, me, weights))
        beta = min(beta, best)
        if alpha >= beta:
            break
    return best


def _wins_macro(state: GameState, move: Move, player: Player) -> bool:
    if state.current_player != player:
        state = replace(state, current_player=player)
    return apply_move(state, *move).state.macro_winner == player


def break_tie(state: GameState, tied: list[Move]) -> Move:
    """
    Pick among equally scored moves: an immediate macro win, then a cell the
    opponent would need for a macro win, then a center, then a corner, then
    the first one.
    """
    me = state.current_player
    for move in tied:
        if _wins_macro(state, move, me):
            return move
    for move in tied:
        if _wins_macro(state, move, other(me)):
            return move
    for move in tied:
        if move.cell == CENTER:
            return move
    for move in tied:
        if move.cell in CORNERS:
            return move
    return tied[0]


def search_move(state: GameState, depth: int, weights: EvalWeights = DEFAULT_WEIGHTS) -> Move | None:
    """Best move for the current player by depth-limited minimax, or None if there is none."""
    moves = legal_moves(state)
    if not moves:
        return None

    me = state.current_player
    best_score = -math.inf
    tied: list[Move] = []
    for move in moves:
        child = apply_move(state, *move).state
        score = _minimax(child, depth - 1, best_score - _TIE_MARGIN, math.inf, me, weights)
        if score > best_score:
            best_score = score
            tied = [move]
        elif score == best_score:
            tied.append(move)

    choice = tied[0] if len(tied) == 1 else break_tie(state, tied)
    logger.debug("depth %d: %s plays %s (score %.1f, %d tied)", depth, me, choice, best_score, len(tied))
    return choice


def choose_move(state: GameState, level: BotLevel, rng: random.Random | None = None) -> Move | None:
    """Pick a move for the current player at the given bot level. None for 'none' or no legal move."""
    if level == "none":
        return None
    if level == "easy":
        moves = legal_moves(state)
        return (rng or random).choice(moves) if moves else None
    if level not in SEARCH_DEPTH:
        raise ValueError(f"unknown bot level: {level!r}")
    return search_move(state, SEARCH_DEPTH[level])
