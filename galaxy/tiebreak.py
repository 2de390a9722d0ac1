"""
RPSLS tiebreaks.

Micro-tiebreak: a CAT board stays pending until one round has a winner, who then
owns the board. Galaxy tiebreak: when all boards close without a macro line,
the first player to win two rounds takes the match.

Both protocols collect one throw per player per round. Throws may arrive in
either order and a player may replace their throw until the other one arrives.
The turn passes to the other player after every throw so a shared device can
be handed over.
"""

import logging
from dataclasses import dataclass, replace

from galaxy.game import settle_galaxy
from galaxy.lines import determine_macro_winner
from galaxy.rpsls import RpsChoice, compare, is_choice, verb
from galaxy.state import NO_PICKS, PLAYERS, GameState, Player, RpsState, other, slot, with_pick

logger = logging.getLogger(__name__)

ERR_NO_RPS = "No RPS pending."
ERR_NO_FINAL = "No final RPSLS pending."
ERR_BAD_THROW = "Unknown throw."
ERR_BAD_PLAYER = "Unknown player."

GALAXY_WINS_NEEDED = 2


@dataclass(frozen=True)
class ResolvedRps:
    """What happened in a decisive micro-tiebreak round, for narration."""

    board_index: int
    winner: Player
    picks: tuple[RpsChoice, RpsChoice]  # (X, O)
    verb: str

    @property
    def loser(self) -> Player:
        return other(self.winner)

    def describe(self) -> str:
        win_throw = self.picks[slot(self.winner)]
        lose_throw = self.picks[slot(self.loser)]
        return f"{win_throw.capitalize()} {self.verb} {lose_throw}. {self.winner} takes board {self.board_index}."


@dataclass(frozen=True)
class MicroThrowResult:
    state: GameState
    resolved: ResolvedRps | None = None
    error: str | None = None


@dataclass(frozen=True)
class FinalThrowResult:
    state: GameState
    final_winner: Player | None = None
    error: str | None = None


def _round_outcome(picks) -> str | None:
    """'X', 'O' or 'tie' once both throws are in, else None."""
    x_pick, o_pick = picks
    if x_pick is None or o_pick is None:
        return None
    result = compare(x_pick, o_pick)
    if result == "tie":
        return "tie"
    return "X" if result == "a" else "O"


def submit_micro_throw(state: GameState, player: Player, choice: RpsChoice) -> MicroThrowResult:
    """Record `player`'s throw for the pending CAT board and settle the round when complete."""
    if state.pending_rps_board is None:
        return MicroThrowResult(state, error=ERR_NO_RPS)
    if player not in PLAYERS:
        return MicroThrowResult(state, error=ERR_BAD_PLAYER)
    if not is_choice(choice):
        return MicroThrowResult(state, error=ERR_BAD_THROW)

    index = state.pending_rps_board
    board = state.boards[index]
    rps = board.rps or RpsState()
    picks = with_pick(rps.picks, player, choice)
    outcome = _round_outcome(picks)

    resolved = None
    if outcome is None:
        new_board = replace(board, rps=replace(rps, picks=picks))
    elif outcome == "tie":
        logger.debug("board %d RPSLS tie (%s); throw again", index, choice)
        new_board = replace(board, rps=RpsState(last_outcome="tie"))
    else:
        winner: Player = outcome
        win_throw, lose_throw = picks[slot(winner)], picks[slot(other(winner))]
        resolved = ResolvedRps(index, winner, picks, verb(win_throw, lose_throw))
        new_board = replace(board, winner=winner, rps=RpsState(last_outcome=winner))
        logger.debug("board %d RPSLS: %s", index, resolved.describe())

    new_boards = list(state.boards)
    new_boards[index] = new_board
    new_boards_t = tuple(new_boards)

    if resolved is None:
        new_state = replace(state, boards=new_boards_t, current_player=other(player))
    else:
        new_state = settle_galaxy(replace(
            state,
            boards=new_boards_t,
            current_player=other(player),
            pending_rps_board=None,
            macro_winner=determine_macro_winner(new_boards_t),
        ))
    return MicroThrowResult(new_state, resolved=resolved)


def submit_final_throw(state: GameState, player: Player, choice: RpsChoice) -> FinalThrowResult:
    """Record `player`'s throw in the best-of-3 galaxy tiebreak."""
    if not state.pending_final_rps or state.final_rps is None:
        return FinalThrowResult(state, error=ERR_NO_FINAL)
    if player not in PLAYERS:
        return FinalThrowResult(state, error=ERR_BAD_PLAYER)
    if not is_choice(choice):
        return FinalThrowResult(state, error=ERR_BAD_THROW)

    final = state.final_rps
    picks = with_pick(final.picks, player, choice)
    outcome = _round_outcome(picks)
    current = other(player)

    if outcome is None:
        final = replace(final, picks=picks)
    elif outcome == "tie":
        logger.debug("galaxy RPSLS tie (%s); throw again", choice)
        final = replace(final, picks=NO_PICKS, last_outcome="tie")
    else:
        score = list(final.score)
        score[slot(outcome)] += 1
        final = replace(
            final,
            picks=NO_PICKS,
            last_outcome=outcome,
            score=tuple(score),
            rounds=final.rounds + 1,
        )
        logger.debug("galaxy RPSLS round %d to %s, score %d-%d", final.rounds, outcome, *final.score)
        if final.score_of(outcome) >= GALAXY_WINS_NEEDED:
            logger.debug("%s wins the galaxy tiebreak", outcome)
            return FinalThrowResult(
                replace(
                    state,
                    final_rps=final,
                    pending_final_rps=False,
                    macro_winner=outcome,
                    current_player=current,
                ),
                final_winner=outcome,
            )

    return FinalThrowResult(replace(state, final_rps=final, current_player=current))
