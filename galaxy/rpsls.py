"""
Rock-Paper-Scissors-Lizard-Spock: who beats whom, and how.

Used to break drawn micro-boards and a drawn galaxy board.
"""

import random
from typing import Literal

RpsChoice = Literal["rock", "paper", "scissors", "lizard", "spock"]
Outcome = Literal["a", "b", "tie"]

RPS_CHOICES: tuple[RpsChoice, ...] = ("rock", "paper", "scissors", "lizard", "spock")

# winner -> {loser: verb}
VERBS: dict[str, dict[str, str]] = {
    "rock": {"scissors": "crushes", "lizard": "crushes"},
    "paper": {"rock": "covers", "spock": "disproves"},
    "scissors": {"paper": "cuts", "lizard": "decapitates"},
    "lizard": {"spock": "poisons", "paper": "eats"},
    "spock": {"scissors": "smashes", "rock": "vaporizes"},
}

BEATS: dict[str, frozenset[str]] = {k: frozenset(v) for k, v in VERBS.items()}


def is_choice(value: object) -> bool:
    return value in RPS_CHOICES


def beats(a: str, b: str) -> bool:
    return b in BEATS[a]


def compare(a: RpsChoice, b: RpsChoice) -> Outcome:
    """Return 'a' if a wins, 'b' if b wins, 'tie' for identical throws."""
    if a == b:
        return "tie"
    return "a" if beats(a, b) else "b"


def verb(winner: RpsChoice, loser: RpsChoice) -> str:
    """Narrative verb, e.g. verb('spock', 'scissors') == 'smashes'."""
    return VERBS.get(winner, {}).get(loser, "beats")


def random_throw(rng: random.Random | None = None) -> RpsChoice:
    return (rng or random).choice(RPS_CHOICES)
