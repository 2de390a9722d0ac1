"""
Run bot-vs-bot games and save them to replays/ with list.json for a viewer.
Usage: python -m galaxy_ai.export_replay [--count N] [--x LEVEL] [--o LEVEL] [--out DIR]
Saves replays to <out>/replay_<timestamp>.json and updates <out>/list.json.
"""

import argparse
import json
import logging
import random
from datetime import datetime
from pathlib import Path

from galaxy.serialize import state_to_dict
from galaxy_ai.arena import PLAYABLE_LEVELS, play_game

logger = logging.getLogger(__name__)

REPLAYS_DIR = Path(__file__).resolve().parent.parent / "replays"


def replay_payload(x_level: str, o_level: str, rng: random.Random) -> dict:
    record = play_game(x_level, o_level, rng)
    return {
        "bots": {"X": x_level, "O": o_level},
        "actions": [a.to_dict() for a in record.actions],
        "result": record.winner or "unfinished",
        "galaxy_tiebreak": record.went_to_galaxy_tiebreak,
        "steps": len(record.actions),
        "final_state": state_to_dict(record.state),
    }


def ensure_list(list_file: Path) -> list[dict]:
    if list_file.exists():
        try:
            data = json.loads(list_file.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("%s is not valid JSON; starting a new list", list_file)
            return []
        return data if isinstance(data, list) else []
    return []


def run_and_export(
    count: int = 1,
    x_level: str = "smart",
    o_level: str = "easy",
    out_dir: Path = REPLAYS_DIR,
    seed: int | None = None,
) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    list_file = out_dir / "list.json"
    entries = ensure_list(list_file)
    rng = random.Random(seed)
    written = []
    for idx in range(count):
        payload = replay_payload(x_level, o_level, rng)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        suffix = f"_{idx + 1}" if count > 1 else ""
        filename = f"replay_{ts}{suffix}.json"
        path = out_dir / filename
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        entries.append({
            "file": filename,
            "result": payload["result"],
            "steps": payload["steps"],
            "date": ts,
        })
        written.append(path)
        print("Saved:", path.name, "| actions:", payload["steps"], "| result:", payload["result"])
    list_file.write_text(json.dumps(entries, indent=2), encoding="utf-8")
    print("List:", list_file)
    return written


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--count", type=int, default=1, help="Number of games to export")
    ap.add_argument("--x", choices=PLAYABLE_LEVELS, default="smart", help="Bot level for X")
    ap.add_argument("--o", choices=PLAYABLE_LEVELS, default="easy", help="Bot level for O")
    ap.add_argument("--out", type=Path, default=REPLAYS_DIR, help="Output directory")
    ap.add_argument("--seed", type=int, default=None, help="Random seed")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log tiebreak outcomes")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run_and_export(args.count, args.x, args.o, args.out, args.seed)


if __name__ == "__main__":
    main()
