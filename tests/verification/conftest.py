"""
Pytest configuration for verification tests.

Provides correctly dealt rounds and a helper for tampering with their records.
"""

from dataclasses import replace

import pytest


@pytest.fixture
def banker_round(make_result):
    """Banker K,3 + 5 (8) against Player A,2 + 9 (2), dealt by the rules."""
    return make_result("KH 3S 5C", "AC 2D 9H", round_id="r-banker")


@pytest.fixture
def tamper():
    """Factory fixture returning a copy of a result with some fields overwritten."""

    def _tamper(result, **changes):
        return replace(result, **changes)

    return _tamper
