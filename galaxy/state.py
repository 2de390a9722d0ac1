"""
Galaxy tic-tac-toe state.

State is immutable. Engine functions in galaxy.game and galaxy.tiebreak take a
GameState and return a new one; nothing here is ever modified in place.

Per-player data (picks, scores, names, bot levels) is stored as an (X, O) pair;
use slot(player) to index it.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

from galaxy.rpsls import RpsChoice, is_choice

Player = Literal["X", "O"]
BoardWinner = Literal["X", "O", "CAT"]
BotLevel = Literal["none", "easy", "smart", "hard"]
RoundOutcome = Literal["X", "O", "tie"]

PLAYERS: tuple[Player, Player] = ("X", "O")
BOT_LEVELS: tuple[BotLevel, ...] = ("none", "easy", "smart", "hard")
DEFAULT_NAMES = ("Player X", "Player O")
CAT = "CAT"

Picks = tuple[RpsChoice | None, RpsChoice | None]
NO_PICKS: Picks = (None, None)


def slot(player: str) -> int:
    return 0 if player == "X" else 1


def other(player: Player) -> Player:
    return "O" if player == "X" else "X"


def _check_picks(picks) -> None:
    if len(picks) != 2 or any(p is not None and not is_choice(p) for p in picks):
        raise ValueError(f"invalid picks: {picks!r}")


def _check_outcome(outcome) -> None:
    if outcome not in (None, "X", "O", "tie"):
        raise ValueError(f"invalid round outcome: {outcome!r}")


@dataclass(frozen=True)
class RpsState:
    """One micro-board's RPSLS tiebreak: throws for the current round only."""

    picks: Picks = NO_PICKS
    last_outcome: RoundOutcome | None = None

    def __post_init__(self) -> None:
        _check_picks(self.picks)
        _check_outcome(self.last_outcome)

    def pick(self, player: Player) -> RpsChoice | None:
        return self.picks[slot(player)]


@dataclass(frozen=True)
class FinalRpsState:
    """Best-of-3 galaxy tiebreak: current round throws plus running score."""

    picks: Picks = NO_PICKS
    last_outcome: RoundOutcome | None = None
    score: tuple[int, int] = (0, 0)
    rounds: int = 0

    def __post_init__(self) -> None:
        _check_picks(self.picks)
        _check_outcome(self.last_outcome)
        if len(self.score) != 2 or any(not isinstance(s, int) or s < 0 for s in self.score):
            raise ValueError(f"invalid score: {self.score!r}")
        if not isinstance(self.rounds, int) or self.rounds < 0:
            raise ValueError(f"invalid rounds: {self.rounds!r}")

    def pick(self, player: Player) -> RpsChoice | None:
        return self.picks[slot(player)]

    def score_of(self, player: Player) -> int:
        return self.score[slot(player)]


@dataclass(frozen=True)
class MicroBoard:
    cells: tuple[str, ...] = ("",) * 9  # '', 'X' or 'O'
    winner: BoardWinner | None = None
    rps: RpsState | None = None

    def __post_init__(self) -> None:
        if len(self.cells) != 9 or any(c not in ("", "X", "O") for c in self.cells):
            raise ValueError(f"invalid cells: {self.cells!r}")
        if self.winner not in (None, "X", "O", CAT):
            raise ValueError(f"invalid board winner: {self.winner!r}")

    @property
    def is_open(self) -> bool:
        return self.winner is None


class Phase(Enum):
    """Which kind of action a state is waiting for. Exactly one applies."""

    PLAY = "play"
    MICRO_TIEBREAK = "micro_tiebreak"
    GALAXY_TIEBREAK = "galaxy_tiebreak"
    FINISHED = "finished"


@dataclass(frozen=True)
class GameState:
    boards: tuple[MicroBoard, ...]
    macro_winner: Player | None
    current_player: Player
    next_board: int | None  # None = any open board
    pending_rps_board: int | None
    pending_final_rps: bool
    final_rps: FinalRpsState | None
    names: tuple[str, str] = DEFAULT_NAMES
    bots: tuple[BotLevel, BotLevel] = ("none", "none")

    def __post_init__(self) -> None:
        if len(self.boards) != 9 or not all(isinstance(b, MicroBoard) for b in self.boards):
            raise ValueError("a game needs exactly 9 micro-boards")
        if self.macro_winner not in (None, "X", "O"):
            raise ValueError(f"invalid macro winner: {self.macro_winner!r}")
        if self.current_player not in PLAYERS:
            raise ValueError(f"invalid current player: {self.current_player!r}")
        for name, value in (("next_board", self.next_board), ("pending_rps_board", self.pending_rps_board)):
            if value is not None and (not isinstance(value, int) or not 0 <= value <= 8):
                raise ValueError(f"invalid {name}: {value!r}")
        if self.pending_final_rps and self.final_rps is None:
            raise ValueError("pending galaxy tiebreak without tiebreak state")
        flags = (self.pending_rps_board is not None, self.pending_final_rps, self.macro_winner is not None)
        if sum(flags) > 1:
            raise ValueError("at most one of pending_rps_board, pending_final_rps, macro_winner may be set")
        if self.pending_rps_board is not None and self.boards[self.pending_rps_board].winner != CAT:
            raise ValueError(f"board {self.pending_rps_board} is not a cat's game")
        if len(self.names) != 2 or not all(isinstance(n, str) for n in self.names):
            raise ValueError(f"invalid names: {self.names!r}")
        if len(self.bots) != 2 or any(b not in BOT_LEVELS for b in self.bots):
            raise ValueError(f"invalid bot levels: {self.bots!r}")

    @property
    def phase(self) -> Phase:
        if self.macro_winner is not None:
            return Phase.FINISHED
        if self.pending_rps_board is not None:
            return Phase.MICRO_TIEBREAK
        if self.pending_final_rps:
            return Phase.GALAXY_TIEBREAK
        return Phase.PLAY

    def name_of(self, player: Player) -> str:
        return self.names[slot(player)]

    def bot_of(self, player: Player) -> BotLevel:
        return self.bots[slot(player)]


def create_initial_state() -> GameState:
    return GameState(
        boards=tuple(MicroBoard() for _ in range(9)),
        macro_winner=None,
        current_player="X",
        next_board=None,
        pending_rps_board=None,
        pending_final_rps=False,
        final_rps=None,
    )


def _set_pair(pair: tuple, player: Player, value) -> tuple:
    items = list(pair)
    items[slot(player)] = value
    return tuple(items)


def with_name(state: GameState, player: Player, name: str) -> GameState:
    return replace(state, names=_set_pair(state.names, player, name))


def with_bot(state: GameState, player: Player, level: BotLevel) -> GameState:
    if level not in BOT_LEVELS:
        raise ValueError(f"unknown bot level: {level!r}")
    return replace(state, bots=_set_pair(state.bots, player, level))


def with_pick(picks: Picks, player: Player, choice: RpsChoice) -> Picks:
    return _set_pair(picks, player, choice)
