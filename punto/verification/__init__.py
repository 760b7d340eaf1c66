"""
Verification of Baccarat results and bets.

Recomputes round records from their cards to catch inconsistent or forged
results, validates bets against table rules and checks outcome statistics.
"""

from punto.verification.verifier import (
    Discrepancy,
    DiscrepancyType,
    ResultValidator,
    ValidationResult,
    validate_bet,
    validate_result,
)
from punto.verification.statistics import (
    THEORETICAL_PROBABILITIES,
    ConfidenceInterval,
    outcome_distribution_test,
    win_rate_interval,
)

__all__ = [
    "ConfidenceInterval",
    "Discrepancy",
    "DiscrepancyType",
    "ResultValidator",
    "THEORETICAL_PROBABILITIES",
    "ValidationResult",
    "outcome_distribution_test",
    "validate_bet",
    "validate_result",
    "win_rate_interval",
]
