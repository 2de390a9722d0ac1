"""
Drive bot seats: one action at a time, or a whole match.

bot_step() acts for the current player if that seat is a bot: a random throw
while an RPSLS tiebreak is pending, otherwise a move from choose_move().
Human seats (bot level 'none') are left alone.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Literal

from galaxy.game import Move, apply_move
from galaxy.rpsls import RpsChoice, random_throw
from galaxy.state import GameState, Phase, Player
from galaxy.tiebreak import submit_final_throw, submit_micro_throw
from galaxy_ai.search import choose_move

logger = logging.getLogger(__name__)

ActionKind = Literal["move", "micro_throw", "final_throw"]

# Enough for 81 moves plus a generous number of RPSLS rounds
DEFAULT_MAX_ACTIONS = 1000


@dataclass(frozen=True)
class BotAction:
    player: Player
    kind: ActionKind
    state: GameState
    move: Move | None = None
    throw: RpsChoice | None = None

    def to_dict(self) -> dict:
        data: dict = {"player": self.player, "kind": self.kind}
        if self.move is not None:
            data["board"], data["cell"] = self.move
        if self.throw is not None:
            data["throw"] = self.throw
        return data


@dataclass
class MatchRecord:
    state: GameState
    actions: list[BotAction] = field(default_factory=list)

    @property
    def winner(self) -> Player | None:
        return self.state.macro_winner

    @property
    def went_to_galaxy_tiebreak(self) -> bool:
        return self.state.final_rps is not None


def bot_step(state: GameState, rng: random.Random | None = None) -> BotAction | None:
    """Perform one bot action for the current player. None if it is a human's turn or the match is over."""
    player = state.current_player
    level = state.bot_of(player)
    phase = state.phase
    if level == "none" or phase is Phase.FINISHED:
        return None

    if phase is Phase.MICRO_TIEBREAK:
        throw = random_throw(rng)
        result = submit_micro_throw(state, player, throw)
        if result.resolved is not None:
            logger.info("%s", result.resolved.describe())
        return BotAction(player, "micro_throw", result.state, throw=throw)

    if phase is Phase.GALAXY_TIEBREAK:
        throw = random_throw(rng)
        result = submit_final_throw(state, player, throw)
        if result.final_winner is not None:
            logger.info("%s wins the galaxy tiebreak", result.final_winner)
        return BotAction(player, "final_throw", result.state, throw=throw)

    move = choose_move(state, level, rng)
    if move is None:
        return None
    result = apply_move(state, *move)
    if result.error is not None:
        # choose_move only returns legal moves
        raise RuntimeError(f"bot produced a rejected move {move}: {result.error}")
    return BotAction(player, "move", result.state, move=move)


def play_match(
    state: GameState,
    rng: random.Random | None = None,
    max_actions: int = DEFAULT_MAX_ACTIONS,
) -> MatchRecord:
    """Let bots act until the match ends, a human is to act, or max_actions is reached."""
    record = MatchRecord(state)
    for _ in range(max_actions):
        action = bot_step(record.state, rng)
        if action is None:
            break
        record.actions.append(action)
        record.state = action.state
    else:
        if record.state.phase is not Phase.FINISHED:
            logger.warning("stopped after %d actions without a result", max_actions)
    return record
