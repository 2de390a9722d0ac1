"""
JSON text encoding of GameState.

serialize_state() is lossless: parse_state(serialize_state(s)) == s.
parse_state() never raises. Anything it cannot turn into a complete, valid
state (bad JSON, wrong board count, unknown values, missing fields) gives a
fresh create_initial_state() instead of a partially-valid one.
"""

import json
import logging
from typing import Any

from galaxy.state import (
    DEFAULT_NAMES,
    FinalRpsState,
    GameState,
    MicroBoard,
    RpsState,
    create_initial_state,
)

logger = logging.getLogger(__name__)


def _picks_to_dict(picks) -> dict[str, str | None]:
    return {"X": picks[0], "O": picks[1]}


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Plain-JSON view of a state. Empty cells are null."""
    boards = []
    for b in state.boards:
        rps = None
        if b.rps is not None:
            rps = {"picks": _picks_to_dict(b.rps.picks), "last_outcome": b.rps.last_outcome}
        boards.append({
            "cells": [c or None for c in b.cells],
            "winner": b.winner,
            "rps": rps,
        })
    final = None
    if state.final_rps is not None:
        f = state.final_rps
        final = {
            "picks": _picks_to_dict(f.picks),
            "last_outcome": f.last_outcome,
            "score": {"X": f.score[0], "O": f.score[1]},
            "rounds": f.rounds,
        }
    return {
        "boards": boards,
        "macro_winner": state.macro_winner,
        "current_player": state.current_player,
        "next_board": state.next_board,
        "pending_rps_board": state.pending_rps_board,
        "pending_final_rps": state.pending_final_rps,
        "final_rps": final,
        "names": {"X": state.names[0], "O": state.names[1]},
        "bots": {"X": state.bots[0], "O": state.bots[1]},
    }


def _pair(data: dict) -> tuple:
    return data["X"], data["O"]


def _strict_int(value: Any) -> int:
    # bool is an int subclass; JSON true must not pass as board 1
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    return value


def _optional_index(value: Any) -> int | None:
    return None if value is None else _strict_int(value)


def state_from_dict(data: dict[str, Any]) -> GameState:
    """Inverse of state_to_dict. Raises KeyError/TypeError/ValueError on bad input."""
    raw_boards = data["boards"]
    if not isinstance(raw_boards, list) or len(raw_boards) != 9:
        raise ValueError("expected 9 boards")

    boards = []
    for raw in raw_boards:
        cells = raw["cells"]
        if not isinstance(cells, list):
            raise ValueError("cells must be a list")
        rps = None
        if raw.get("rps") is not None:
            rps = RpsState(
                picks=_pair(raw["rps"]["picks"]),
                last_outcome=raw["rps"].get("last_outcome"),
            )
        boards.append(MicroBoard(
            cells=tuple("" if c is None else c for c in cells),
            winner=raw["winner"],
            rps=rps,
        ))

    final = None
    if data.get("final_rps") is not None:
        f = data["final_rps"]
        final = FinalRpsState(
            picks=_pair(f["picks"]),
            last_outcome=f.get("last_outcome"),
            score=tuple(_strict_int(s) for s in _pair(f["score"])),
            rounds=_strict_int(f["rounds"]),
        )

    pending_final = data["pending_final_rps"]
    if not isinstance(pending_final, bool):
        raise ValueError("pending_final_rps must be a boolean")

    names = _pair(data["names"]) if data.get("names") is not None else DEFAULT_NAMES
    bots = _pair(data["bots"]) if data.get("bots") is not None else ("none", "none")

    return GameState(
        boards=tuple(boards),
        macro_winner=data["macro_winner"],
        current_player=data["current_player"],
        next_board=_optional_index(data["next_board"]),
        pending_rps_board=_optional_index(data["pending_rps_board"]),
        pending_final_rps=pending_final,
        final_rps=final,
        names=names,
        bots=bots,
    )


def serialize_state(state: GameState) -> str:
    return json.dumps(state_to_dict(state), separators=(",", ":"))


def parse_state(raw: str | None) -> GameState:
    if not raw:
        return create_initial_state()
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")
        return state_from_dict(data)
    except (ValueError, KeyError, TypeError, AttributeError, RecursionError) as e:
        # json.JSONDecodeError is a ValueError; deep nesting raises RecursionError
        logger.warning("discarding malformed game state: %s", e)
        return create_initial_state()
