"""
Trend analysis and next-round prediction over a history of Baccarat rounds.

Everything here is a pure function of the ordered history it is given: the
same history always yields the same snapshot and the same prediction.

The predictor is a heuristic for display purposes. It follows the house's
road-reading convention (favour the side with the better record, expect a
long streak to break) and makes no claim of statistical validity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from punto.baccarat.constants import Winner
from punto.baccarat.result import RoundResult
from punto.baccarat.rules import BaccaratRules


@dataclass(frozen=True)
class Streak:
    """A run of identical winners ending at the most recent round."""
    winner: Optional[Winner] = None
    length: int = 0


@dataclass(frozen=True)
class TrendSnapshot:
    """Aggregate statistics over a round history."""
    total_rounds: int = 0
    banker_wins: int = 0
    player_wins: int = 0
    ties: int = 0
    banker_win_rate: float = 0.0
    player_win_rate: float = 0.0
    tie_rate: float = 0.0
    banker_pairs: int = 0
    player_pairs: int = 0
    banker_pair_rate: float = 0.0
    player_pair_rate: float = 0.0
    current_streak: Streak = field(default_factory=Streak)
    longest_banker_streak: int = 0
    longest_player_streak: int = 0

    def to_dict(self) -> dict:
        return {
            "total_rounds": self.total_rounds,
            "banker_wins": self.banker_wins,
            "player_wins": self.player_wins,
            "ties": self.ties,
            "banker_win_rate": self.banker_win_rate,
            "player_win_rate": self.player_win_rate,
            "tie_rate": self.tie_rate,
            "banker_pairs": self.banker_pairs,
            "player_pairs": self.player_pairs,
            "banker_pair_rate": self.banker_pair_rate,
            "player_pair_rate": self.player_pair_rate,
            "current_streak": {
                "winner": self.current_streak.winner.value
                if self.current_streak.winner
                else None,
                "length": self.current_streak.length,
            },
            "longest_banker_streak": self.longest_banker_streak,
            "longest_player_streak": self.longest_player_streak,
        }


@dataclass(frozen=True)
class Prediction:
    """Heuristic guess at the next round's winner."""
    predicted_winner: Winner
    confidence: float
    banker_probability: float = 0.0
    player_probability: float = 0.0
    tie_probability: float = 0.0
    rationale: List[str] = field(default_factory=list)
    method: str = "historical trend"
    streak_likely: bool = True


@dataclass(frozen=True)
class RoadmapBead:
    """One cell of the bead plate road."""
    winner: Winner
    banker_pair: bool
    player_pair: bool
    banker_points: int
    player_points: int
    round_id: str
    timestamp: Optional[datetime] = None


def current_streak(history: Sequence[RoundResult]) -> Streak:
    """
    The streak ending at the most recent round.

    The latest round always counts once; earlier rounds extend the streak
    while they match it and are not ties, so a trailing tie is a streak of 1.
    """
    if not history:
        return Streak()
    winner = history[-1].winner
    length = 1
    for result in reversed(history[:-1]):
        if result.winner is not winner or result.winner is Winner.TIE:
            break
        length += 1
    return Streak(winner, length)


def analyze_trend(history: Sequence[RoundResult]) -> TrendSnapshot:
    """
    Compute win rates, pair rates and streaks in a single pass over the history.

    Args:
        history: Finalized rounds, oldest first

    Returns:
        TrendSnapshot; all zeros for an empty history
    """
    total = len(history)
    if total == 0:
        return TrendSnapshot()

    counts = {Winner.BANKER: 0, Winner.PLAYER: 0, Winner.TIE: 0}
    longest = {Winner.BANKER: 0, Winner.PLAYER: 0}
    banker_pairs = player_pairs = 0
    run_winner = None
    run_length = 0

    for result in history:
        counts[result.winner] += 1
        if result.banker_pair:
            banker_pairs += 1
        if result.player_pair:
            player_pairs += 1

        if result.winner is run_winner:
            run_length += 1
        else:
            run_winner = result.winner
            run_length = 1
        if run_winner in longest and run_length > longest[run_winner]:
            longest[run_winner] = run_length

    return TrendSnapshot(
        total_rounds=total,
        banker_wins=counts[Winner.BANKER],
        player_wins=counts[Winner.PLAYER],
        ties=counts[Winner.TIE],
        banker_win_rate=counts[Winner.BANKER] / total,
        player_win_rate=counts[Winner.PLAYER] / total,
        tie_rate=counts[Winner.TIE] / total,
        banker_pairs=banker_pairs,
        player_pairs=player_pairs,
        banker_pair_rate=banker_pairs / total,
        player_pair_rate=player_pairs / total,
        current_streak=current_streak(history),
        longest_banker_streak=longest[Winner.BANKER],
        longest_player_streak=longest[Winner.PLAYER],
    )


def predict_next(
    history: Sequence[RoundResult], rules: Optional[BaccaratRules] = None
) -> Prediction:
    """
    Predict the next round's winner from the history.

    1. With too little history, predict Banker at confidence 0.5.
    2. Otherwise take the side with the higher win rate (Player on equal rates).
    3. If the current Banker or Player streak has reached the reversal
       length, predict the opposite side instead.

    Confidence is min(max_confidence, 0.5 + |banker_rate - player_rate|).
    """
    rules = rules if rules else BaccaratRules()

    if len(history) < rules.min_prediction_history:
        return Prediction(
            predicted_winner=Winner.BANKER,
            confidence=0.5,
            rationale=[
                f"Insufficient history: {len(history)} of "
                f"{rules.min_prediction_history} rounds, defaulting to Banker"
            ],
        )

    trend = analyze_trend(history)
    rationale = []

    if trend.banker_win_rate > trend.player_win_rate:
        predicted = Winner.BANKER
        rationale.append(f"Banker has the higher win rate: {trend.banker_win_rate:.1%}")
    else:
        predicted = Winner.PLAYER
        rationale.append(f"Player has the higher win rate: {trend.player_win_rate:.1%}")

    streak = trend.current_streak
    streak_likely = True
    if streak.winner in (Winner.BANKER, Winner.PLAYER) and streak.length >= rules.streak_reversal_length:
        predicted = streak.winner.opposite()
        streak_likely = False
        rationale.append(
            f"{streak.winner} streak of {streak.length}, expecting reversal to {predicted}"
        )

    confidence = min(
        rules.max_confidence, 0.5 + abs(trend.banker_win_rate - trend.player_win_rate)
    )

    return Prediction(
        predicted_winner=predicted,
        confidence=confidence,
        banker_probability=trend.banker_win_rate,
        player_probability=trend.player_win_rate,
        tie_probability=trend.tie_rate,
        rationale=rationale,
        streak_likely=streak_likely,
    )


def roadmap_beads(history: Sequence[RoundResult]) -> List[RoadmapBead]:
    """Bead plate entries, one per round in history order."""
    return [
        RoadmapBead(
            winner=result.winner,
            banker_pair=result.banker_pair,
            player_pair=result.player_pair,
            banker_points=result.banker_points,
            player_points=result.player_points,
            round_id=result.round_id,
            timestamp=result.timestamp,
        )
        for result in history
    ]
