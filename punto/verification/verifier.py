"""
Baccarat result and bet verification.

This module recomputes a round from its cards and compares the outcome with
what a result record claims, so that corrupted or forged records are caught
before anything is paid on them. It never modifies the record; the caller
decides whether to reject, log or recompute.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, auto
from typing import List, Optional
import logging

from punto.baccarat.hand import hand_points, is_pair
from punto.baccarat.payout import Bet, to_amount
from punto.baccarat.result import RoundResult, is_big, resolve_winner
from punto.baccarat.rules import BaccaratRules, required_draws
from punto.common.card import Card

logger = logging.getLogger(__name__)


class DiscrepancyType(Enum):
    """Types of verification checks."""

    MALFORMED_CARD = auto()
    HAND_SIZE = auto()
    BANKER_POINTS = auto()
    PLAYER_POINTS = auto()
    WINNER = auto()
    BANKER_PAIR = auto()
    PLAYER_PAIR = auto()
    BIG_SMALL = auto()
    DRAW_RULES = auto()
    BET_TYPE = auto()
    BET_LIMITS = auto()
    BALANCE = auto()


@dataclass(frozen=True)
class Discrepancy:
    """
    A single failed check.

    Attributes:
        discrepancy_type: The check that failed
        description: Human-readable details
    """

    discrepancy_type: DiscrepancyType
    description: str

    def __str__(self) -> str:
        return f"{self.discrepancy_type.name}: {self.description}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a verification: valid only when no discrepancy was found."""

    discrepancies: List[Discrepancy] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.discrepancies

    @property
    def errors(self) -> List[str]:
        """Descriptions of the discrepancies, in the order the checks ran."""
        return [d.description for d in self.discrepancies]

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if self.is_valid:
            return "PASSED"
        return "FAILED - " + "; ".join(self.errors)


class ResultValidator:
    """
    Verifies that a RoundResult is consistent with its own cards.

    Checks that both hands hold cards, then hand sizes, both point values, the
    winner, both pair flags and the Big/Small flag. With `enforce_draw_rules`,
    it also checks that third cards were drawn exactly when the tableau
    requires.
    """

    def __init__(self, enforce_draw_rules: bool = False):
        self.enforce_draw_rules = enforce_draw_rules

    @staticmethod
    def _check_cards(side: str, cards) -> Optional[Discrepancy]:
        if not isinstance(cards, (tuple, list)):
            return Discrepancy(
                DiscrepancyType.MALFORMED_CARD,
                f"{side} hand is {type(cards).__name__}, expected a sequence of cards",
            )
        for position, card in enumerate(cards, 1):
            if not isinstance(card, Card):
                return Discrepancy(
                    DiscrepancyType.MALFORMED_CARD,
                    f"{side} card {position} is {card!r}, not a Card",
                )
        return None

    def validate(self, result: RoundResult) -> ValidationResult:
        """
        Verify a result record.

        A hand that is not a sequence of cards is reported as MALFORMED_CARD
        and nothing is recomputed from it.

        Args:
            result: The record to check

        Returns:
            A ValidationResult listing every discrepancy found
        """
        found: List[Discrepancy] = []
        for side, cards in (("Banker", result.banker_cards), ("Player", result.player_cards)):
            malformed = self._check_cards(side, cards)
            if malformed is not None:
                found.append(malformed)
        if found:
            logger.debug("Round %s has malformed hands: %s", result.round_id, found)
            return ValidationResult(found)

        sizes_ok = True
        for side, cards in (("Banker", result.banker_cards), ("Player", result.player_cards)):
            if len(cards) not in (2, 3):
                sizes_ok = False
                found.append(
                    Discrepancy(
                        DiscrepancyType.HAND_SIZE,
                        f"{side} hand has {len(cards)} cards, expected 2 or 3",
                    )
                )

        banker_points = hand_points(result.banker_cards)
        player_points = hand_points(result.player_cards)
        if result.banker_points != banker_points:
            found.append(
                Discrepancy(
                    DiscrepancyType.BANKER_POINTS,
                    f"Banker points stored as {result.banker_points}, cards give {banker_points}",
                )
            )
        if result.player_points != player_points:
            found.append(
                Discrepancy(
                    DiscrepancyType.PLAYER_POINTS,
                    f"Player points stored as {result.player_points}, cards give {player_points}",
                )
            )

        expected_winner = resolve_winner(banker_points, player_points)
        if result.winner != expected_winner:
            found.append(
                Discrepancy(
                    DiscrepancyType.WINNER,
                    f"Winner stored as {result.winner}, cards give {expected_winner}",
                )
            )

        banker_pair = is_pair(result.banker_cards)
        if result.banker_pair != banker_pair:
            found.append(
                Discrepancy(
                    DiscrepancyType.BANKER_PAIR,
                    f"Banker pair stored as {result.banker_pair}, cards give {banker_pair}",
                )
            )
        player_pair = is_pair(result.player_cards)
        if result.player_pair != player_pair:
            found.append(
                Discrepancy(
                    DiscrepancyType.PLAYER_PAIR,
                    f"Player pair stored as {result.player_pair}, cards give {player_pair}",
                )
            )

        big = is_big(result.total_cards)
        if result.is_big != big:
            found.append(
                Discrepancy(
                    DiscrepancyType.BIG_SMALL,
                    f"Big stored as {result.is_big}, {result.total_cards} cards give {big}",
                )
            )

        if self.enforce_draw_rules and sizes_ok:
            found.extend(self._check_draw_rules(result))

        if found:
            logger.debug("Round %s failed verification: %s", result.round_id, found)
        return ValidationResult(found)

    def _check_draw_rules(self, result: RoundResult) -> List[Discrepancy]:
        player_should, banker_should = required_draws(result.banker_cards, result.player_cards)
        player_drew = len(result.player_cards) == 3
        banker_drew = len(result.banker_cards) == 3
        found = []
        if player_should != player_drew:
            found.append(
                Discrepancy(
                    DiscrepancyType.DRAW_RULES,
                    f"Player {'drew' if player_drew else 'stood'} but the rules require "
                    f"{'a draw' if player_should else 'standing'}",
                )
            )
        if banker_should != banker_drew:
            found.append(
                Discrepancy(
                    DiscrepancyType.DRAW_RULES,
                    f"Banker {'drew' if banker_drew else 'stood'} but the rules require "
                    f"{'a draw' if banker_should else 'standing'}",
                )
            )
        return found


def validate_result(result: RoundResult, enforce_draw_rules: bool = False) -> ValidationResult:
    """Verify a result record; see ResultValidator."""
    return ResultValidator(enforce_draw_rules).validate(result)


def validate_bet(
    bet: Bet, rules: Optional[BaccaratRules] = None, balance: Optional[Decimal] = None
) -> ValidationResult:
    """
    Check a bet against the table rules before it is accepted.

    Args:
        bet: The bet to check
        rules: Table configuration (defaults if not provided)
        balance: Funds available to the bettor, if known

    Returns:
        A ValidationResult; the first failing check ends the validation
    """
    rules = rules if rules else BaccaratRules()
    bet_type = bet.known_type
    if bet_type is None:
        return ValidationResult(
            [Discrepancy(DiscrepancyType.BET_TYPE, f"Unknown bet type: {bet.bet_type!r}")]
        )
    if not rules.is_bet_type_enabled(bet_type):
        return ValidationResult(
            [Discrepancy(DiscrepancyType.BET_TYPE, f"{bet_type.value} bets are not offered at this table")]
        )

    low, high = rules.limits_for(bet_type)
    if bet.stake < low:
        return ValidationResult(
            [Discrepancy(DiscrepancyType.BET_LIMITS, f"Minimum {bet_type.value} bet is {low}")]
        )
    if bet.stake > high:
        return ValidationResult(
            [Discrepancy(DiscrepancyType.BET_LIMITS, f"Maximum {bet_type.value} bet is {high}")]
        )

    if balance is not None and bet.stake > to_amount(balance):
        return ValidationResult(
            [Discrepancy(DiscrepancyType.BALANCE, f"Stake {bet.stake} exceeds balance {balance}")]
        )
    return ValidationResult()
