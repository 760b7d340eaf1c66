"""
Baccarat hand implementation.

In Baccarat, hand values are calculated differently than blackjack:
- Cards 2-9 are worth face value
- 10, J, Q, K are worth 0
- Aces are worth 1
- Only the rightmost digit of the sum counts (17 = 7, 23 = 3)

The evaluation functions accept any ordered sequence of cards, so they work
equally on a `BaccaratHand`, a tuple stored on a result, or a plain list.
"""

from typing import Iterable, Sequence

from punto.common.card import Card, Rank
from punto.common.hand import AbstractHand


def card_value(card: Card) -> int:
    """
    Get the Baccarat point value of a single card.

    Args:
        card: Card to evaluate

    Returns:
        1 for an Ace, 0 for 10/J/Q/K, face value otherwise
    """
    if card.rank == Rank.ACE:
        return 1
    if card.rank.value >= 10:
        return 0
    return card.rank.value


def hand_points(cards: Iterable[Card]) -> int:
    """
    Calculate the point value of a hand (0-9).

    An empty hand is worth 0, so partially dealt hands can be queried.
    """
    return sum(card_value(card) for card in cards) % 10


def is_natural(cards: Sequence[Card]) -> bool:
    """
    Check whether the first two cards total 8 or 9.

    Any third card is ignored; a natural only matters before the draw decision.
    """
    if len(cards) < 2:
        return False
    return hand_points(cards[:2]) in (8, 9)


def is_pair(cards: Sequence[Card]) -> bool:
    """Check whether the first two cards share a rank (suit is irrelevant)."""
    if len(cards) < 2:
        return False
    return cards[0].rank == cards[1].rank


class BaccaratHand(AbstractHand):
    """Represents one side's hand in Baccarat: two cards, plus an optional third."""

    max_cards = 3

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "BaccaratHand":
        """Build a hand from cards already dealt, in deal order."""
        return cls(cards)

    def value(self) -> int:
        """
        Calculate the value of the hand.

        In Baccarat, only the rightmost digit counts.
        For example: 15 = 5, 20 = 0, 17 = 7

        Returns:
            Hand value (0-9)
        """
        return hand_points(self._cards)

    def is_natural(self) -> bool:
        """Check if the first two cards make a natural 8 or 9."""
        return is_natural(self._cards)

    def is_pair(self) -> bool:
        """Check if the first two cards form a pair."""
        return is_pair(self._cards)

    def is_complete(self) -> bool:
        """A dealt hand holds exactly two or three cards."""
        return len(self._cards) in (2, 3)

    def card_count(self) -> int:
        return len(self._cards)

    def initial_value(self) -> int:
        """Value of the first two cards only, as used by the drawing rules."""
        return hand_points(self._cards[:2])

    def third_card_value(self) -> int:
        """
        Get the value of the third card (used for Banker drawing rules).

        Returns:
            Value of third card, or -1 if no third card
        """
        if len(self._cards) >= 3:
            return card_value(self._cards[2])
        return -1

    def __str__(self) -> str:
        """String representation of the hand."""
        cards_str = ", ".join(str(card) for card in self._cards)
        return f"[{cards_str}] = {self.value()}"

    def __repr__(self) -> str:
        """Detailed representation of the hand."""
        return f"BaccaratHand(cards={self._cards}, value={self.value()})"
