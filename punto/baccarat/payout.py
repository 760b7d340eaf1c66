"""
Baccarat payout calculation.

Maps a bet and a resolved round to a win/lose decision and payout amount,
using the fixed odds table plus the commission-free override. All amounts are
`Decimal` so payouts are exact; a payout of `Decimal("195.00")` still compares
equal to `195.0`.
"""

import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Optional

from punto.baccarat.constants import (
    COMMISSION_FREE_BANKER_ODDS,
    ODDS_TABLE,
    SUPER_SIX_ODDS,
    SUPER_SIX_POINTS,
    BetType,
    Winner,
)
from punto.baccarat.result import RoundResult

ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """Convert an int, float, str or Decimal amount to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Invalid amount: {value!r}")
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except ArithmeticError as exc:
            raise ValueError(f"Invalid amount: {value!r}") from exc
    raise TypeError(f"Invalid amount: {value!r}")


class BetStatus(Enum):
    """Lifecycle of a bet."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Bet:
    """
    A single wager on a round.

    Attributes:
        bet_type: A BetType, or a raw value from the betting subsystem
        stake: Amount wagered, positive
        round_id: Round the bet belongs to
        bet_id: Unique identifier for this bet
        status: Position in the bet lifecycle
    """
    bet_type: Any
    stake: Decimal
    round_id: str = ""
    bet_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: BetStatus = BetStatus.PENDING

    def __post_init__(self):
        stake = to_amount(self.stake)
        if not stake.is_finite() or stake <= 0:
            raise ValueError(f"Stake must be positive, got {self.stake!r}")
        object.__setattr__(self, "stake", stake)
        parsed = BetType.parse(self.bet_type)
        if parsed is not None:
            object.__setattr__(self, "bet_type", parsed)

    @property
    def known_type(self) -> Optional[BetType]:
        """The bet type, or None when the betting subsystem sent something unknown."""
        return self.bet_type if isinstance(self.bet_type, BetType) else None

    @property
    def is_settled(self) -> bool:
        return self.status in (BetStatus.WON, BetStatus.LOST)

    def confirm(self) -> "Bet":
        """Lock the bet for the round."""
        if self.status is not BetStatus.PENDING:
            raise ValueError(f"Bet {self.bet_id} is {self.status.value}, not pending")
        return replace(self, status=BetStatus.CONFIRMED)

    def settle(self, outcome: "PayoutOutcome") -> "Bet":
        """Mark a confirmed bet won or lost according to a payout outcome."""
        if self.status is not BetStatus.CONFIRMED:
            raise ValueError(f"Bet {self.bet_id} is {self.status.value}, not confirmed")
        return replace(self, status=BetStatus.WON if outcome.is_win else BetStatus.LOST)


@dataclass(frozen=True)
class PayoutOutcome:
    """Result of pricing one bet against a round."""
    bet_id: str
    bet_type: Any
    stake: Decimal
    is_win: bool
    odds: Decimal
    payout_amount: Decimal

    @property
    def profit(self) -> Decimal:
        return self.payout_amount - self.stake


@dataclass(frozen=True)
class SettlementSummary:
    """Per-bet outcomes for one round plus aggregate totals."""
    outcomes: List[PayoutOutcome]
    settled_bets: List[Bet]
    total_staked: Decimal
    total_paid: Decimal

    @property
    def net(self) -> Decimal:
        """Paid minus staked, from the player's point of view."""
        return self.total_paid - self.total_staked

    @property
    def unknown_bets(self) -> List[Bet]:
        return [bet for bet in self.settled_bets if bet.known_type is None]


def bet_wins(bet_type: Any, result: RoundResult) -> bool:
    """
    Check whether a bet type wins against a round result.

    Unknown bet types never win.
    """
    bet_type = BetType.parse(bet_type)
    if bet_type is BetType.BANKER:
        return result.winner is Winner.BANKER
    if bet_type is BetType.PLAYER:
        return result.winner is Winner.PLAYER
    if bet_type is BetType.TIE:
        return result.winner is Winner.TIE
    if bet_type is BetType.BANKER_PAIR:
        return result.banker_pair
    if bet_type is BetType.PLAYER_PAIR:
        return result.player_pair
    if bet_type is BetType.BIG:
        return result.is_big
    if bet_type is BetType.SMALL:
        return not result.is_big
    return False


def bet_odds(bet_type: Any, result: RoundResult, commission_free: bool = False) -> Decimal:
    """
    Odds paid on a winning bet of this type.

    On a commission-free table a Banker win pays even money, or half the
    stake when the Banker wins with six points (Super 6).
    """
    bet_type = BetType.parse(bet_type)
    if bet_type is None:
        return ZERO
    if bet_type is BetType.BANKER and commission_free and result.winner is Winner.BANKER:
        if result.banker_points == SUPER_SIX_POINTS:
            return SUPER_SIX_ODDS
        return COMMISSION_FREE_BANKER_ODDS
    return ODDS_TABLE[bet_type]


def calculate_payout(bet: Bet, result: RoundResult, commission_free: bool = False) -> PayoutOutcome:
    """
    Price a single bet against a round.

    A win pays stake * (1 + odds), returning the stake with the winnings.
    A loss pays nothing and reports odds of 0.

    Args:
        bet: The bet to price
        result: The resolved round
        commission_free: Whether the table runs commission-free Banker bets
    """
    if bet_wins(bet.bet_type, result):
        odds = bet_odds(bet.bet_type, result, commission_free)
        payout = bet.stake * (1 + odds)
        return PayoutOutcome(bet.bet_id, bet.bet_type, bet.stake, True, odds, payout)
    return PayoutOutcome(bet.bet_id, bet.bet_type, bet.stake, False, ZERO, ZERO)


def settle_bets(
    bets: Iterable[Bet], result: RoundResult, commission_free: bool = False
) -> SettlementSummary:
    """
    Price every bet placed on a round.

    Every bet must already be confirmed; settling a pending or settled bet
    raises ValueError. Returns outcomes in the order the bets were given, the bets moved to
    WON/LOST, and the totals staked and paid.
    """
    outcomes = []
    settled = []
    total_staked = ZERO
    total_paid = ZERO
    for bet in bets:
        outcome = calculate_payout(bet, result, commission_free)
        outcomes.append(outcome)
        settled.append(bet.settle(outcome))
        total_staked += bet.stake
        total_paid += outcome.payout_amount
    return SettlementSummary(outcomes, settled, total_staked, total_paid)
