"""
Baccarat round driver.

Deals one round from an external card source, applies the drawing rules,
resolves the winner and settles the bets placed on it. Shuffling and the
shoe itself belong to the caller; any iterable of cards will do.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, Optional

from punto.baccarat.decision_logger import RoundLogger
from punto.baccarat.hand import BaccaratHand
from punto.baccarat.payout import Bet, BetStatus, SettlementSummary, settle_bets
from punto.baccarat.result import RoundResult, evaluate_round
from punto.baccarat.rules import BaccaratRules, decide_draws
from punto.common.card import Card


@dataclass(frozen=True)
class RoundOutcome:
    """A resolved round together with the settlement of its bets."""
    result: RoundResult
    settlement: SettlementSummary


class BaccaratGame:
    """
    Drives Baccarat rounds.

    The game holds only its configuration, so a single instance can serve
    many tables concurrently.
    """

    def __init__(self, rules: Optional[BaccaratRules] = None, logger: Optional[RoundLogger] = None):
        """
        Initialize a Baccarat game.

        Args:
            rules: Table configuration
            logger: Round audit logger (a default one is created if not provided)
        """
        self.rules = rules if rules else BaccaratRules()
        self.logger = logger if logger else RoundLogger()

    @staticmethod
    def _deal(source: Iterator[Card]) -> Card:
        try:
            return next(source)
        except StopIteration:
            raise ValueError("Card source exhausted before the round was complete") from None

    def deal_hands(self, cards: Iterable[Card]):
        """
        Deal both hands, drawing third cards as the rules require.

        Order: Player, Banker, Player, Banker, then the Player's third card
        and the Banker's third card when drawn.

        Returns:
            Tuple of (banker hand, player hand)
        """
        source = iter(cards)
        player = BaccaratHand()
        banker = BaccaratHand()
        player.add_card(self._deal(source))
        banker.add_card(self._deal(source))
        player.add_card(self._deal(source))
        banker.add_card(self._deal(source))
        self.logger.log_initial_deal(banker, player)

        decision = decide_draws(banker.cards, player.cards)
        self.logger.log_draw_decision(decision)

        if decision.player_draws:
            player.add_card(self._deal(source))
            decision = decide_draws(banker.cards, player.cards)
            self.logger.log_draw_decision(decision)

        if decision.banker_draws:
            banker.add_card(self._deal(source))

        return banker, player

    def play_round(
        self,
        cards: Iterable[Card],
        round_id: str,
        bets: Iterable[Bet] = (),
        timestamp: Optional[datetime] = None,
    ) -> RoundOutcome:
        """
        Play a complete round of Baccarat.

        Args:
            cards: Cards from the shoe, in deal order
            round_id: Identifier of the round, supplied by the caller
            bets: Bets placed on the round; pending bets are confirmed before the deal
            timestamp: Resolution time to record on the result

        Returns:
            RoundOutcome with the result and the settlement

        Raises:
            ValueError: If the card source runs out mid-round, or a bet is already settled
        """
        # Betting closes when the deal starts: pending bets are locked in
        bets = [bet.confirm() if bet.status is BetStatus.PENDING else bet for bet in bets]
        self.logger.log_round_start(round_id, len(bets))

        banker, player = self.deal_hands(cards)
        result = evaluate_round(banker.cards, player.cards, round_id, timestamp)
        self.logger.log_result(result)

        settlement = settle_bets(bets, result, self.rules.commission_free)
        self.logger.log_settlement(round_id, settlement)
        return RoundOutcome(result, settlement)

    def __repr__(self) -> str:
        return f"BaccaratGame(rules={self.rules!r})"
