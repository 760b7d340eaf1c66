"""
Baccarat rules and drawing logic.

Baccarat has fixed drawing rules - no player decisions after betting.
The rules determine when Player and Banker draw a third card.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from punto.baccarat.constants import BetType
from punto.baccarat.hand import card_value, hand_points, is_natural
from punto.common.card import Card

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _default_bet_limits() -> Dict[BetType, Tuple[Decimal, Decimal]]:
    return {
        BetType.BANKER: (Decimal("10"), Decimal("10000")),
        BetType.PLAYER: (Decimal("10"), Decimal("10000")),
        BetType.TIE: (Decimal("10"), Decimal("1000")),
        BetType.BANKER_PAIR: (Decimal("10"), Decimal("500")),
        BetType.PLAYER_PAIR: (Decimal("10"), Decimal("500")),
        BetType.BIG: (Decimal("10"), Decimal("5000")),
        BetType.SMALL: (Decimal("10"), Decimal("5000")),
    }


@dataclass
class BaccaratRules:
    """
    Configuration for a Baccarat table.

    Attributes:
        commission_free: Pay Banker wins at even money, with the Super 6 exception
        enable_pair_bets: Whether Banker/Player pair side bets are accepted
        enable_big_small_bets: Whether Big/Small side bets are accepted
        bet_limits: Minimum and maximum stake per bet type
        min_prediction_history: Rounds required before the predictor uses the history
        streak_reversal_length: Streak length at which the predictor expects a reversal
        max_confidence: Upper bound on the predictor's confidence
    """
    commission_free: bool = False
    enable_pair_bets: bool = True
    enable_big_small_bets: bool = True
    bet_limits: Dict[BetType, Tuple[Decimal, Decimal]] = field(
        default_factory=_default_bet_limits
    )
    min_prediction_history: int = 5
    streak_reversal_length: int = 3
    max_confidence: float = 0.8

    def limits_for(self, bet_type: BetType) -> Tuple[Decimal, Decimal]:
        """Stake limits for a bet type."""
        return self.bet_limits[bet_type]

    def is_bet_type_enabled(self, bet_type: BetType) -> bool:
        if bet_type in (BetType.BANKER_PAIR, BetType.PLAYER_PAIR):
            return self.enable_pair_bets
        if bet_type in (BetType.BIG, BetType.SMALL):
            return self.enable_big_small_bets
        return True

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "commission_free": self.commission_free,
            "enable_pair_bets": self.enable_pair_bets,
            "enable_big_small_bets": self.enable_big_small_bets,
            "bet_limits": {
                bet_type.value: [str(low), str(high)]
                for bet_type, (low, high) in self.bet_limits.items()
            },
            "min_prediction_history": self.min_prediction_history,
            "streak_reversal_length": self.streak_reversal_length,
            "max_confidence": self.max_confidence,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BaccaratRules":
        """
        Build rules from a dictionary produced by `to_dict`.

        Unknown keys raise ValueError so that a typo in a table configuration
        is not silently ignored.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown rule settings: {sorted(unknown)}")

        kwargs = dict(data)
        if "bet_limits" in kwargs:
            limits = _default_bet_limits()
            for key, (low, high) in kwargs["bet_limits"].items():
                bet_type = BetType.parse(key)
                if bet_type is None:
                    raise ValueError(f"Unknown bet type in bet_limits: {key!r}")
                low, high = Decimal(str(low)), Decimal(str(high))
                if low <= 0 or high < low:
                    raise ValueError(
                        f"Invalid limits for {bet_type.value}: {low}..{high}"
                    )
                limits[bet_type] = (low, high)
            kwargs["bet_limits"] = limits
        return cls(**kwargs)

    @classmethod
    def from_env(
        cls, prefix: str = "PUNTO_", environ: Optional[Mapping[str, str]] = None
    ) -> "BaccaratRules":
        """
        Build rules from environment variables, falling back to the defaults.

        Reads <prefix>COMMISSION_FREE, <prefix>ENABLE_PAIR_BETS and
        <prefix>ENABLE_BIG_SMALL_BETS.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        for name in ("commission_free", "enable_pair_bets", "enable_big_small_bets"):
            raw = env.get(prefix + name.upper())
            if raw is None:
                continue
            value = raw.strip().lower()
            if value in _TRUTHY:
                kwargs[name] = True
            elif value in _FALSY:
                kwargs[name] = False
            else:
                raise ValueError(f"Invalid boolean for {prefix}{name.upper()}: {raw!r}")
        rules = cls(**kwargs)
        logger.debug("Loaded rules from environment: %s", kwargs)
        return rules


def player_draws_third_card(player_value: int) -> bool:
    """
    Determine if Player draws a third card.

    Player drawing rules:
    - 0-5: Draw
    - 6-7: Stand
    - 8-9: Natural (no draw)

    Args:
        player_value: Player's two-card total

    Returns:
        True if Player should draw, False otherwise
    """
    return player_value <= 5


def banker_draws_third_card(banker_value: int, player_drew: bool, player_third_card: int) -> bool:
    """
    Determine if Banker draws a third card.

    Banker drawing rules depend on:
    1. Banker's two-card total
    2. Whether Player drew a third card
    3. Value of Player's third card (if drawn)

    Rules:
    - If Player didn't draw: Banker draws on 0-5, stands on 6-7
    - If Player drew:
      - Banker 0-2: Always draw
      - Banker 3: Draw unless Player's 3rd card is 8
      - Banker 4: Draw if Player's 3rd card is 2-7
      - Banker 5: Draw if Player's 3rd card is 4-7
      - Banker 6: Draw if Player's 3rd card is 6-7
      - Banker 7: Stand
      - Banker 8-9: Natural (no draw)

    Args:
        banker_value: Banker's two-card total
        player_drew: Whether Player drew a third card
        player_third_card: Value of Player's third card (0-9, or -1 if no third card)

    Returns:
        True if Banker should draw, False otherwise
    """
    if not player_drew:
        return banker_value <= 5

    if banker_value <= 2:
        return True
    elif banker_value == 3:
        return player_third_card != 8
    elif banker_value == 4:
        return 2 <= player_third_card <= 7
    elif banker_value == 5:
        return 4 <= player_third_card <= 7
    elif banker_value == 6:
        return player_third_card in (6, 7)
    else:
        return False


@dataclass(frozen=True)
class DrawDecision:
    """
    Outcome of consulting the drawing rules.

    Attributes:
        player_draws: Player takes (or has taken) a third card
        banker_draws: Banker takes a third card
        banker_pending: Banker's decision waits on the Player's third card
        reason: Human-readable description of the rules applied
    """
    player_draws: bool
    banker_draws: bool
    banker_pending: bool = False
    reason: str = ""

    @property
    def is_terminal(self) -> bool:
        """No further cards will be dealt."""
        return not (self.player_draws or self.banker_draws or self.banker_pending)


def decide_draws(banker_cards: Sequence[Card], player_cards: Sequence[Card]) -> DrawDecision:
    """
    Decide the third-card draws from the hands dealt so far.

    Only the first two cards of each side form the initial hands. Call this
    once after the four initial cards; if the Player must draw, deal the
    Player's third card and call again to obtain the Banker's decision.

    Args:
        banker_cards: Banker's cards, at least two
        player_cards: Player's cards, two or (after drawing) three

    Returns:
        DrawDecision

    Raises:
        ValueError: If either side has fewer than two cards
    """
    if len(banker_cards) < 2 or len(player_cards) < 2:
        raise ValueError(
            "Drawing rules need two initial cards per side "
            f"(banker={len(banker_cards)}, player={len(player_cards)})"
        )

    if is_natural(banker_cards) or is_natural(player_cards):
        sides = []
        if is_natural(banker_cards):
            sides.append(f"Banker natural {hand_points(banker_cards[:2])}")
        if is_natural(player_cards):
            sides.append(f"Player natural {hand_points(player_cards[:2])}")
        return DrawDecision(False, False, reason="; ".join(sides) + ": no cards drawn")

    banker_value = hand_points(banker_cards[:2])
    player_value = hand_points(player_cards[:2])
    reasons = []

    player_draws = player_draws_third_card(player_value)
    if player_draws:
        reasons.append(f"Player {player_value} draws")
    else:
        reasons.append(f"Player {player_value} stands")

    if not player_draws:
        banker_draws = banker_draws_third_card(banker_value, False, -1)
        verb = "draws" if banker_draws else "stands"
        reasons.append(f"Player stood, Banker {banker_value} {verb}")
        return DrawDecision(False, banker_draws, reason="; ".join(reasons))

    if len(player_cards) < 3:
        reasons.append("Banker waits for Player's third card")
        return DrawDecision(True, False, banker_pending=True, reason="; ".join(reasons))

    third = card_value(player_cards[2])
    banker_draws = banker_draws_third_card(banker_value, True, third)
    verb = "draws" if banker_draws else "stands"
    reasons.append(f"Player's third card is {third}, Banker {banker_value} {verb}")
    return DrawDecision(True, banker_draws, reason="; ".join(reasons))


def required_draws(banker_cards: Sequence[Card], player_cards: Sequence[Card]) -> Tuple[bool, bool]:
    """
    The (player_drew, banker_drew) pair a correctly dealt round must show.

    Uses the Player's third card when one is present; if the Player should
    have drawn but holds only two cards, the Banker's requirement is judged
    as if the Player had stood, which still exposes the missing draw.
    """
    decision = decide_draws(banker_cards, player_cards)
    if decision.banker_pending:
        return True, banker_draws_third_card(hand_points(banker_cards[:2]), False, -1)
    return decision.player_draws, decision.banker_draws
