"""Tests for the JSON state encoding."""

import json
import random

import pytest

from galaxy.game import apply_move, legal_moves
from galaxy.serialize import parse_state, serialize_state, state_to_dict
from galaxy.state import FinalRpsState, RpsState, create_initial_state, with_bot, with_name


def test_round_trip_initial(fresh):
    assert parse_state(serialize_state(fresh)) == fresh


def test_round_trip_mid_game(fresh):
    rng = random.Random(5)
    state = with_bot(with_name(fresh, "X", "Ada"), "O", "smart")
    for _ in range(20):
        moves = legal_moves(state)
        if not moves:
            break
        state = apply_move(state, *rng.choice(moves)).state
    assert parse_state(serialize_state(state)) == state


def test_round_trip_with_tiebreak_state(make_state, board, galaxy_boards):
    micro = make_state(
        {0: board("XOX OXO OXO", winner="CAT", rps=RpsState(picks=("rock", None), last_outcome="tie"))},
        pending_rps_board=0,
        next_board=3,
        current_player="O",
    )
    assert parse_state(serialize_state(micro)) == micro

    galaxy = make_state(
        {**galaxy_boards, 8: board(winner="CAT", rps=RpsState(last_outcome="X"))},
        pending_final_rps=True,
        final_rps=FinalRpsState(picks=(None, "spock"), last_outcome="O", score=(1, 1), rounds=2),
    )
    assert parse_state(serialize_state(galaxy)) == galaxy


def test_empty_cells_are_null(fresh):
    data = json.loads(serialize_state(apply_move(fresh, 0, 0).state))
    assert data["boards"][0]["cells"][:2] == ["X", None]
    assert data["current_player"] == "O"
    assert data["names"] == {"X": "Player X", "O": "Player O"}


def test_names_and_bots_are_optional(fresh):
    data = state_to_dict(fresh)
    del data["names"]
    del data["bots"]
    assert parse_state(json.dumps(data)) == fresh


def _mangled(mutate):
    data = state_to_dict(apply_move(create_initial_state(), 4, 4).state)
    mutate(data)
    return json.dumps(data)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "not json at all",
        "[]",
        "42",
        "{}",
        _mangled(lambda d: d["boards"].pop()),
        _mangled(lambda d: d.pop("current_player")),
        _mangled(lambda d: d.pop("boards")),
        _mangled(lambda d: d.update(current_player="Z")),
        _mangled(lambda d: d.update(next_board=True)),
        _mangled(lambda d: d.update(next_board=12)),
        _mangled(lambda d: d["boards"][0].update(cells=["X"] * 8)),
        _mangled(lambda d: d["boards"][0]["cells"].__setitem__(0, "Q")),
        _mangled(lambda d: d["boards"][0].update(winner="DRAW")),
        _mangled(lambda d: d.update(pending_final_rps="yes")),
        _mangled(lambda d: d.update(pending_final_rps=True)),
        _mangled(lambda d: d.update(bots={"X": "godlike", "O": "none"})),
        _mangled(lambda d: d.update(names=["a", "b"])),
        pytest.param("[" * 200000 + "]" * 200000, id="deeply-nested"),
        _mangled(lambda d: d.update(pending_rps_board=3)),
        _mangled(lambda d: d.update(macro_winner="X", pending_final_rps=True, final_rps={
            "picks": {"X": None, "O": None}, "last_outcome": None, "score": {"X": 0, "O": 0}, "rounds": 0,
        })),
    ],
)
def test_malformed_input_falls_back_to_initial_state(raw):
    assert parse_state(raw) == create_initial_state()
