"""
Pit two bot levels against each other.
Run: python -m galaxy_ai.arena [--games 20] [--x smart] [--o easy] [--seed 1]

Each pairing is played with both seat assignments unless --no-swap is given.
"""

import argparse
import logging
import random

from galaxy.state import BOT_LEVELS, create_initial_state, with_bot
from galaxy_ai.driver import MatchRecord, play_match

PLAYABLE_LEVELS = [level for level in BOT_LEVELS if level != "none"]


def play_game(x_level: str, o_level: str, rng: random.Random) -> MatchRecord:
    state = with_bot(with_bot(create_initial_state(), "X", x_level), "O", o_level)
    return play_match(state, rng)


def run_pairing(x_level: str, o_level: str, games: int, rng: random.Random) -> dict[str, int]:
    """Play `games` matches and count results from the X seat's view."""
    results = {"X": 0, "O": 0, "unfinished": 0, "galaxy": 0, "moves": 0}
    for i in range(games):
        record = play_game(x_level, o_level, rng)
        results[record.winner or "unfinished"] += 1
        results["galaxy"] += record.went_to_galaxy_tiebreak
        results["moves"] += sum(1 for a in record.actions if a.kind == "move")
        if (i + 1) % 10 == 0:
            print(f"  {i + 1}/{games} games")
    return results


def print_results(x_level: str, o_level: str, results: dict[str, int], games: int) -> None:
    total = games or 1
    print(f"\nX={x_level} vs O={o_level}:")
    print(f"  X wins:   {results['X']:4d} ({results['X'] / total * 100:5.1f}%)")
    print(f"  O wins:   {results['O']:4d} ({results['O'] / total * 100:5.1f}%)")
    if results["unfinished"]:
        print(f"  Unfinished: {results['unfinished']:2d}")
    print(f"  Galaxy tiebreaks: {results['galaxy']:4d}")
    print(f"  Avg moves: {results['moves'] / total:6.1f}")


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--games", type=int, default=20, help="Games per seat assignment")
    ap.add_argument("--x", choices=PLAYABLE_LEVELS, default="smart", help="Bot level for X")
    ap.add_argument("--o", choices=PLAYABLE_LEVELS, default="easy", help="Bot level for O")
    ap.add_argument("--no-swap", action="store_true", help="Do not replay with seats swapped")
    ap.add_argument("--seed", type=int, default=None, help="Random seed")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log tiebreak outcomes")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    rng = random.Random(args.seed)

    pairings = [(args.x, args.o)]
    if not args.no_swap and args.x != args.o:
        pairings.append((args.o, args.x))

    print(f"Testing {args.games} games per pairing...")
    for x_level, o_level in pairings:
        print(f"\nX={x_level} vs O={o_level}...")
        results = run_pairing(x_level, o_level, args.games, rng)
        print_results(x_level, o_level, results, args.games)


if __name__ == "__main__":
    main()
