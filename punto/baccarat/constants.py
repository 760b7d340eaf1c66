"""Baccarat-specific enums, odds and table-area mappings."""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class Winner(Enum):
    """Possible outcomes of a Baccarat round."""
    BANKER = "banker"
    PLAYER = "player"
    TIE = "tie"

    def opposite(self) -> "Winner":
        """The other side; a tie has no opposite and maps to itself."""
        if self is Winner.BANKER:
            return Winner.PLAYER
        if self is Winner.PLAYER:
            return Winner.BANKER
        return Winner.TIE

    def __str__(self) -> str:
        return self.name.capitalize()


class BetType(Enum):
    """Types of bets in Baccarat."""
    BANKER = "banker"
    PLAYER = "player"
    TIE = "tie"
    BANKER_PAIR = "banker_pair"
    PLAYER_PAIR = "player_pair"
    BIG = "big"
    SMALL = "small"

    @property
    def area_id(self) -> int:
        """Abstract table-area identifier used for highlighting winning regions."""
        return AREA_IDS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["BetType"]:
        """
        Resolve a bet type from an enum member, its string value or its area id.

        Returns None for anything unrecognised instead of raising, since an
        unknown bet type is an ordinary losing bet.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        if isinstance(value, int) and not isinstance(value, bool):
            return _BY_AREA_ID.get(value)
        return None


# Payout multiplier paid on top of the returned stake
ODDS_TABLE = {
    BetType.BANKER: Decimal("0.95"),
    BetType.PLAYER: Decimal("1"),
    BetType.TIE: Decimal("8"),
    BetType.BANKER_PAIR: Decimal("11"),
    BetType.PLAYER_PAIR: Decimal("11"),
    BetType.BIG: Decimal("0.54"),
    BetType.SMALL: Decimal("1.5"),
}

# Commission-free table: a Banker win pays even money, except on six points
COMMISSION_FREE_BANKER_ODDS = Decimal("1")
SUPER_SIX_ODDS = Decimal("0.5")
SUPER_SIX_POINTS = 6

AREA_IDS = {
    BetType.BANKER: 1,
    BetType.PLAYER: 2,
    BetType.TIE: 3,
    BetType.BANKER_PAIR: 4,
    BetType.PLAYER_PAIR: 5,
    BetType.BIG: 6,
    BetType.SMALL: 7,
}

_BY_AREA_ID = {area: bet_type for bet_type, area in AREA_IDS.items()}

MAIN_BET_BY_WINNER = {
    Winner.BANKER: BetType.BANKER,
    Winner.PLAYER: BetType.PLAYER,
    Winner.TIE: BetType.TIE,
}

# Big when at least one side drew a third card
BIG_MIN_TOTAL_CARDS = 5
