"""
Round resolution for Baccarat.

Compares final point values, classifies Big/Small and assembles the immutable
`RoundResult` record consumed by payouts, validation and trend analysis.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from punto.baccarat.constants import (
    BIG_MIN_TOTAL_CARDS,
    MAIN_BET_BY_WINNER,
    BetType,
    Winner,
)
from punto.baccarat.hand import BaccaratHand, hand_points, is_pair
from punto.common.card import Card


def resolve_winner(banker_points: int, player_points: int) -> Winner:
    """
    Determine the winner of the round from the final point values.

    Returns:
        Winner.BANKER, Winner.PLAYER or Winner.TIE
    """
    if banker_points > player_points:
        return Winner.BANKER
    elif player_points > banker_points:
        return Winner.PLAYER
    else:
        return Winner.TIE


def is_big(total_cards: int) -> bool:
    """A round is Big when five or six cards were dealt, Small with four."""
    return total_cards >= BIG_MIN_TOTAL_CARDS


@dataclass(frozen=True)
class RoundResult:
    """
    Result of a Baccarat round.

    Every derived field must agree with the cards; use
    `punto.verification.validate_result` on records received from outside.
    """
    banker_cards: Tuple[Card, ...]
    player_cards: Tuple[Card, ...]
    banker_points: int
    player_points: int
    winner: Winner
    banker_pair: bool
    player_pair: bool
    is_big: bool
    round_id: str
    timestamp: Optional[datetime] = None

    @property
    def banker_hand(self) -> BaccaratHand:
        return BaccaratHand.from_cards(self.banker_cards)

    @property
    def player_hand(self) -> BaccaratHand:
        return BaccaratHand.from_cards(self.player_cards)

    @property
    def total_cards(self) -> int:
        return len(self.banker_cards) + len(self.player_cards)

    @property
    def winning_categories(self) -> List[BetType]:
        return winning_categories(self)

    @property
    def highlight_areas(self) -> List[int]:
        return highlight_areas(self)

    def __str__(self) -> str:
        banker = ", ".join(str(card) for card in self.banker_cards)
        player = ", ".join(str(card) for card in self.player_cards)
        return (
            f"Round {self.round_id}: Banker [{banker}] = {self.banker_points}, "
            f"Player [{player}] = {self.player_points} -> {self.winner}"
        )


def evaluate_round(
    banker_cards: Iterable[Card],
    player_cards: Iterable[Card],
    round_id: str,
    timestamp: Optional[datetime] = None,
) -> RoundResult:
    """
    Assemble a RoundResult from the final hands.

    Args:
        banker_cards: Banker's cards in deal order
        player_cards: Player's cards in deal order
        round_id: Opaque round identifier supplied by the caller
        timestamp: When the round was resolved, if the caller tracks it

    Raises:
        ValueError: If either side does not hold two or three cards
    """
    banker = tuple(banker_cards)
    player = tuple(player_cards)
    for side, cards in (("Banker", banker), ("Player", player)):
        if len(cards) not in (2, 3):
            raise ValueError(f"{side} hand must hold 2 or 3 cards, got {len(cards)}")

    banker_points = hand_points(banker)
    player_points = hand_points(player)
    return RoundResult(
        banker_cards=banker,
        player_cards=player,
        banker_points=banker_points,
        player_points=player_points,
        winner=resolve_winner(banker_points, player_points),
        banker_pair=is_pair(banker),
        player_pair=is_pair(player),
        is_big=is_big(len(banker) + len(player)),
        round_id=round_id,
        timestamp=timestamp,
    )


def winning_categories(result: RoundResult) -> List[BetType]:
    """
    Bet types that won this round.

    Ordered as: main outcome, Banker pair, Player pair, then Big or Small.
    """
    categories = [MAIN_BET_BY_WINNER[result.winner]]
    if result.banker_pair:
        categories.append(BetType.BANKER_PAIR)
    if result.player_pair:
        categories.append(BetType.PLAYER_PAIR)
    categories.append(BetType.BIG if result.is_big else BetType.SMALL)
    return categories


def highlight_areas(result: RoundResult) -> List[int]:
    """Abstract table-area ids to highlight, one per winning category."""
    return [bet_type.area_id for bet_type in winning_categories(result)]
