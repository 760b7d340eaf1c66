"""
Baccarat rule engine.

This package implements the rules of Punto Banco Baccarat: hand evaluation,
the third-card tableau, winner resolution, payouts (including commission-free
Super 6) and trend analysis over round history.
"""

from punto.baccarat.constants import BetType, Winner, ODDS_TABLE
from punto.baccarat.game import BaccaratGame, RoundOutcome
from punto.baccarat.hand import BaccaratHand, card_value, hand_points, is_natural, is_pair
from punto.baccarat.payout import (
    Bet,
    BetStatus,
    PayoutOutcome,
    SettlementSummary,
    bet_odds,
    bet_wins,
    calculate_payout,
    settle_bets,
)
from punto.baccarat.result import (
    RoundResult,
    evaluate_round,
    highlight_areas,
    is_big,
    resolve_winner,
    winning_categories,
)
from punto.baccarat.rules import (
    BaccaratRules,
    DrawDecision,
    banker_draws_third_card,
    decide_draws,
    player_draws_third_card,
)
from punto.baccarat.trends import (
    Prediction,
    RoadmapBead,
    Streak,
    TrendSnapshot,
    analyze_trend,
    predict_next,
    roadmap_beads,
)

__all__ = [
    "BaccaratGame",
    "BaccaratHand",
    "BaccaratRules",
    "Bet",
    "BetStatus",
    "BetType",
    "DrawDecision",
    "ODDS_TABLE",
    "PayoutOutcome",
    "Prediction",
    "RoadmapBead",
    "RoundOutcome",
    "RoundResult",
    "SettlementSummary",
    "Streak",
    "TrendSnapshot",
    "Winner",
    "analyze_trend",
    "banker_draws_third_card",
    "bet_odds",
    "bet_wins",
    "calculate_payout",
    "card_value",
    "decide_draws",
    "evaluate_round",
    "hand_points",
    "highlight_areas",
    "is_big",
    "is_natural",
    "is_pair",
    "player_draws_third_card",
    "predict_next",
    "resolve_winner",
    "roadmap_beads",
    "settle_bets",
    "winning_categories",
]
