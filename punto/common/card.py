"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Spades, Hearts, Clubs, and Diamonds.

- `Rank`: An enum representing the thirteen ranks of a standard deck, Ace
through King, valued by their ordinal 1-13. Every rank is a distinct member,
so a Jack never compares equal to a Ten.

- `Card`: An immutable playing card. A card has a suit and a rank, and
provides parsing from the short codes ("10H", "KS") that card sources emit.

This module is part of the `punto` package, a baccarat rule engine.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    SPADES = "♠"
    HEARTS = "♥"
    CLUBS = "♣"
    DIAMONDS = "♦"

    @property
    def letter(self) -> str:
        """Single-letter code used by card sources (S, H, C, D)."""
        return self.name[0]

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck, valued by ordinal.
    """

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def rank_str(self):
        """A string representation of the rank."""
        if self in (Rank.ACE, Rank.JACK, Rank.QUEEN, Rank.KING):
            return self.name[0]
        return str(self.value)

    def __str__(self) -> str:
        return self.rank_str


_RANKS_BY_CODE = {rank.rank_str: rank for rank in Rank}
_SUITS_BY_CODE = {suit.letter: suit for suit in Suit}
_SUITS_BY_CODE.update({suit.value: suit for suit in Suit})


@dataclass(frozen=True)
class Card:
    """
    Immutable playing card.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of ♥
    >>> Card.from_string("KS")
    Card(Suit.SPADES, Rank.KING)
    """

    suit: Suit
    rank: Rank

    def __post_init__(self):
        if not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit!r}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank!r}")

    @classmethod
    def from_string(cls, code: str) -> "Card":
        """
        Parse a card code of the form <rank><suit>, e.g. "AS", "10H", "Q♦".

        :param code: Rank code (A, 2-10, J, Q, K) followed by a suit letter or symbol.
        :return: The parsed card.
        :raises ValueError: If the code is not a recognised card.
        """
        if not isinstance(code, str) or len(code.strip()) < 2:
            raise ValueError(f"Malformed card code: {code!r}")
        text = code.strip().upper()
        rank = _RANKS_BY_CODE.get(text[:-1])
        suit = _SUITS_BY_CODE.get(text[-1])
        if rank is None:
            raise ValueError(f"Malformed rank in card code: {code!r}")
        if suit is None:
            raise ValueError(f"Malformed suit in card code: {code!r}")
        return cls(suit, rank)

    @property
    def code(self) -> str:
        """Short code for the card, the inverse of `from_string`."""
        return f"{self.rank.rank_str}{self.suit.letter}"

    def __repr__(self) -> str:
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        return f"{self.rank.rank_str} of {self.suit}"
