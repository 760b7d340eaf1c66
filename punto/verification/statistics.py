"""
Statistical fairness checks for Baccarat round history.

This module compares the observed distribution of outcomes with the
theoretical probabilities of an eight-deck shoe, and provides confidence
intervals for observed win rates.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence

import numpy as np
import scipy.stats as stats

from punto.baccarat.constants import Winner
from punto.baccarat.result import RoundResult

# Eight-deck Punto Banco outcome probabilities
THEORETICAL_PROBABILITIES = {
    Winner.BANKER: 0.458597,
    Winner.PLAYER: 0.446247,
    Winner.TIE: 0.095156,
}


@dataclass
class ConfidenceInterval:
    """
    Represents a confidence interval with lower and upper bounds.

    Attributes:
        lower: The lower bound of the confidence interval
        upper: The upper bound of the confidence interval
        confidence: The confidence level (e.g., 0.95 for 95% confidence)
    """

    lower: float
    upper: float
    confidence: float

    def contains(self, value: float) -> bool:
        """Check if the interval contains a value."""
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        """Convert to a dictionary."""
        return {"lower": self.lower, "upper": self.upper, "confidence": self.confidence}


def outcome_counts(history: Sequence[RoundResult]) -> np.ndarray:
    """Counts of Banker, Player and Tie outcomes, in that order."""
    order = (Winner.BANKER, Winner.PLAYER, Winner.TIE)
    return np.array(
        [sum(1 for result in history if result.winner is winner) for winner in order],
        dtype=float,
    )


def win_rate_interval(
    history: Sequence[RoundResult], winner: Winner, confidence: float = 0.95
) -> ConfidenceInterval:
    """
    Normal-approximation confidence interval for the rate of one outcome.

    Args:
        history: Finalized rounds
        winner: The outcome whose rate is estimated
        confidence: The confidence level

    Returns:
        The interval, clipped to [0, 1]; (0, 0) for an empty history
    """
    if not 0 < confidence < 1:
        raise ValueError("Confidence must be between 0 and 1")
    total = len(history)
    if total == 0:
        return ConfidenceInterval(0.0, 0.0, confidence)

    outcomes = np.array([1.0 if r.winner is winner else 0.0 for r in history])
    rate = float(np.mean(outcomes))
    std_err = math.sqrt(rate * (1 - rate) / total)
    margin = std_err * float(stats.norm.ppf((1 + confidence) / 2))
    return ConfidenceInterval(max(0.0, rate - margin), min(1.0, rate + margin), confidence)


def outcome_distribution_test(
    history: Sequence[RoundResult],
    expected: Mapping[Winner, float] = THEORETICAL_PROBABILITIES,
    significance: float = 0.01,
) -> Dict[str, Any]:
    """
    Chi-square goodness-of-fit test of observed outcomes against expectations.

    A low p-value means the history is unlikely under the expected
    probabilities, which may point at a biased card source.

    Args:
        history: Finalized rounds
        expected: Probability of each outcome; normalised before use
        significance: p-value below which the test fails

    Returns:
        A dictionary with the statistic, p-value, counts and a passed flag
    """
    observed = outcome_counts(history)
    total = observed.sum()
    if total == 0:
        return {
            "sample_size": 0,
            "observed": [0, 0, 0],
            "expected": [0.0, 0.0, 0.0],
            "chi_square": None,
            "p_value": None,
            "passed": True,
        }

    probabilities = np.array(
        [expected[Winner.BANKER], expected[Winner.PLAYER], expected[Winner.TIE]],
        dtype=float,
    )
    if np.any(probabilities <= 0):
        raise ValueError("Expected probabilities must be positive")
    expected_counts = probabilities / probabilities.sum() * total

    chi_square, p_value = stats.chisquare(observed, expected_counts)
    return {
        "sample_size": int(total),
        "observed": [int(count) for count in observed],
        "expected": [float(count) for count in expected_counts],
        "chi_square": float(chi_square),
        "p_value": float(p_value),
        "passed": bool(p_value >= significance),
    }
