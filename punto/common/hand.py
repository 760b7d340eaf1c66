"""
This module contains the base class for a hand of cards.

A hand is an ordered, append-only sequence of cards. Cards are never removed
or reordered once dealt, because the position of a card (first two, third)
carries meaning in the rules that evaluate it.

Classes:

AbstractHand: An abstract base class for an append-only hand of cards.
"""
from abc import ABC
from typing import Iterable, Optional, Tuple

from punto.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for an append-only hand of cards.

    Subclasses may cap the hand size through `max_cards`.
    """

    max_cards: Optional[int] = None

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards = []
        for card in cards:
            self.add_card(card)

    @property
    def cards(self) -> Tuple[Card, ...]:
        """Returns a snapshot of the cards in the hand, in deal order."""
        return tuple(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Appends a card to the hand.

        Args:
            card: The card to add.

        Raises:
            TypeError: If `card` is not a Card.
            ValueError: If the hand is already at its maximum size.
        """
        if not isinstance(card, Card):
            raise TypeError(f"Expected a Card, got {card!r}")
        if self.max_cards is not None and len(self._cards) >= self.max_cards:
            raise ValueError(
                f"{type(self).__name__} cannot hold more than {self.max_cards} cards"
            )
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(self.cards)

    def __getitem__(self, index):
        return self.cards[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._cards)!r})"

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self._cards)
