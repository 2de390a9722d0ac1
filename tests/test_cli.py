"""Tests for the arena and replay export scripts."""

import json
import random

import pytest

from galaxy.game import apply_move
from galaxy.serialize import state_from_dict
from galaxy.state import Phase, create_initial_state
from galaxy.tiebreak import submit_final_throw, submit_micro_throw
from galaxy_ai import arena, export_replay


def test_run_pairing_counts_every_game():
    results = arena.run_pairing("easy", "easy", 4, random.Random(0))
    assert results["X"] + results["O"] + results["unfinished"] == 4
    assert results["unfinished"] == 0
    # the winner needs at least 9 marks for three boards, and X moves first
    assert results["moves"] >= 4 * 17


def test_arena_main_prints_both_seatings(capsys):
    arena.main(["--games", "1", "--x", "easy", "--o", "smart", "--seed", "4"])
    out = capsys.readouterr().out
    assert "X=easy vs O=smart:" in out
    assert "X=smart vs O=easy:" in out
    assert "Galaxy tiebreaks:" in out


def test_arena_rejects_human_level():
    with pytest.raises(SystemExit):
        arena.main(["--x", "none"])


def test_export_writes_replays_and_list(tmp_path):
    paths = export_replay.run_and_export(2, "easy", "easy", tmp_path, seed=21)
    assert len(paths) == 2
    entries = json.loads((tmp_path / "list.json").read_text(encoding="utf-8"))
    assert [e["file"] for e in entries] == [p.name for p in paths]

    payload = json.loads(paths[0].read_text(encoding="utf-8"))
    assert payload["bots"] == {"X": "easy", "O": "easy"}
    assert payload["result"] in ("X", "O")
    assert payload["steps"] == len(payload["actions"])
    final = state_from_dict(payload["final_state"])
    assert final.phase is Phase.FINISHED
    assert final.macro_winner == payload["result"]


def test_replay_moves_reproduce_the_final_board(tmp_path):
    path = export_replay.run_and_export(1, "easy", "easy", tmp_path, seed=8)[0]
    payload = json.loads(path.read_text(encoding="utf-8"))
    final = state_from_dict(payload["final_state"])
    state = create_initial_state()
    for action in payload["actions"]:
        if action["kind"] == "move":
            result = apply_move(state, action["board"], action["cell"])
        elif action["kind"] == "micro_throw":
            result = submit_micro_throw(state, action["player"], action["throw"])
        else:
            result = submit_final_throw(state, action["player"], action["throw"])
        assert result.error is None
        state = result.state
    assert state.boards == final.boards
    assert state.macro_winner == final.macro_winner
    assert state.final_rps == final.final_rps


def test_export_appends_to_existing_list(tmp_path):
    (tmp_path / "list.json").write_text("not json", encoding="utf-8")
    export_replay.run_and_export(1, "easy", "easy", tmp_path, seed=1)
    entries = json.loads((tmp_path / "list.json").read_text(encoding="utf-8"))
    assert len(entries) == 1
    export_replay.run_and_export(1, "easy", "easy", tmp_path, seed=2)
    entries = json.loads((tmp_path / "list.json").read_text(encoding="utf-8"))
    assert len(entries) == 2
