"""
Pytest configuration for tests at the root level.

Provides helpers for building cards, hands and round results from short
card codes such as "KH" or "10S".
"""

import os

import pytest

from punto.baccarat.result import evaluate_round
from punto.common.card import Card

# Keep round audit output quiet while testing
os.environ.setdefault("PUNTO_DISABLE_LOGGING", "1")


def parse_cards(codes):
    """Turn a space-separated string of card codes into a list of cards."""
    return [Card.from_string(code) for code in codes.split()]


@pytest.fixture
def cards():
    """Factory fixture: cards("KH 6S") -> [Card, Card]."""
    return parse_cards


@pytest.fixture
def make_result():
    """Factory fixture building a RoundResult from banker and player card codes."""
    counter = {"n": 0}

    def _make(banker, player, round_id=None):
        counter["n"] += 1
        return evaluate_round(
            parse_cards(banker),
            parse_cards(player),
            round_id or f"round-{counter['n']}",
        )

    return _make
