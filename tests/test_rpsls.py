"""Tests for Rock-Paper-Scissors-Lizard-Spock resolution."""

import itertools
import random

from galaxy.rpsls import RPS_CHOICES, beats, compare, random_throw, verb


def test_dominance_is_total_for_distinct_throws():
    for a, b in itertools.combinations(RPS_CHOICES, 2):
        assert beats(a, b) != beats(b, a), (a, b)


def test_no_throw_beats_itself():
    for choice in RPS_CHOICES:
        assert not beats(choice, choice)
        assert compare(choice, choice) == "tie"


def test_each_throw_beats_exactly_two():
    for choice in RPS_CHOICES:
        assert sum(beats(choice, other) for other in RPS_CHOICES) == 2


def test_compare_reports_side():
    assert compare("rock", "scissors") == "a"
    assert compare("rock", "paper") == "b"
    assert compare("lizard", "spock") == "a"
    assert compare("spock", "lizard") == "b"


def test_verbs():
    assert verb("spock", "scissors") == "smashes"
    assert verb("rock", "scissors") == "crushes"
    assert verb("scissors", "lizard") == "decapitates"
    assert verb("paper", "spock") == "disproves"
    # not a winning pair
    assert verb("scissors", "rock") == "beats"


def test_random_throw_is_a_valid_choice():
    rng = random.Random(7)
    throws = {random_throw(rng) for _ in range(200)}
    assert throws == set(RPS_CHOICES)
