"""
Audit logging for Baccarat rounds.
Records the draw decisions, final result and settlement of each round.
"""

import logging
import os
from typing import Optional

from punto.baccarat.hand import BaccaratHand
from punto.baccarat.payout import SettlementSummary
from punto.baccarat.result import RoundResult
from punto.baccarat.rules import DrawDecision


class RoundLogger:
    """Logs the progress of Baccarat rounds for later audit."""

    def __init__(self, log_level=logging.INFO, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("punto.rounds")
        # Check environment variable to disable logging in simulation mode
        if os.environ.get("PUNTO_DISABLE_LOGGING", "").lower() in (
            "1",
            "true",
            "yes",
        ):
            self.logger.setLevel(logging.ERROR)
        else:
            self.logger.setLevel(log_level)

        # Add console handler if none exists
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_level(self, level):
        """Set the logging level."""
        self.logger.setLevel(level)

    def log_round_start(self, round_id: str, bet_count: int):
        self.logger.info("=== Round %s starting with %d bets ===", round_id, bet_count)

    def log_initial_deal(self, banker: BaccaratHand, player: BaccaratHand):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("Initial deal: Banker %s, Player %s", banker, player)

    def log_draw_decision(self, decision: DrawDecision):
        """Log the rule evaluation behind a draw decision."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                "Draw decision: player=%s banker=%s pending=%s (%s)",
                decision.player_draws,
                decision.banker_draws,
                decision.banker_pending,
                decision.reason,
            )

    def log_result(self, result: RoundResult):
        self.logger.info(
            "Round %s: Banker %d, Player %d -> %s (banker_pair=%s, player_pair=%s, big=%s)",
            result.round_id,
            result.banker_points,
            result.player_points,
            result.winner,
            result.banker_pair,
            result.player_pair,
            result.is_big,
        )

    def log_settlement(self, round_id: str, summary: SettlementSummary):
        """Log each priced bet, flagging bet types the engine does not know."""
        for bet in summary.unknown_bets:
            self.logger.warning(
                "Round %s: unknown bet type %r on bet %s settled as a loss",
                round_id,
                bet.bet_type,
                bet.bet_id,
            )
        if self.logger.isEnabledFor(logging.DEBUG):
            for outcome in summary.outcomes:
                self.logger.debug(
                    "Bet %s (%s, stake %s): %s, odds %s, paid %s",
                    outcome.bet_id,
                    outcome.bet_type,
                    outcome.stake,
                    "won" if outcome.is_win else "lost",
                    outcome.odds,
                    outcome.payout_amount,
                )
        self.logger.info(
            "=== Round %s settled: staked %s, paid %s, net %s ===",
            round_id,
            summary.total_staked,
            summary.total_paid,
            summary.net,
        )
