"""
Tests for trend analysis and prediction over round history.
"""

import pytest

from punto.baccarat import (
    BaccaratRules,
    Streak,
    TrendSnapshot,
    Winner,
    analyze_trend,
    predict_next,
    roadmap_beads,
)

# Card codes producing each outcome without pairs
BANKER = ("4H 5S", "3C 2D")    # 9 vs 5
PLAYER = ("3C 2D", "4H 5S")    # 5 vs 9
TIE = ("KH 8S", "QC 8D")       # 8 vs 8
BANKER_PAIRS = ("4H 4S", "3C 3D")  # 8 vs 6, both pairs


@pytest.fixture
def history(make_result):
    """Factory building a history from a string such as "BBPT"."""
    outcomes = {"B": BANKER, "P": PLAYER, "T": TIE, "D": BANKER_PAIRS}

    def _build(sequence):
        return [make_result(*outcomes[code]) for code in sequence]

    return _build


class TestAnalyzeTrend:
    """Tests for the trend snapshot."""

    def test_empty_history(self):
        snapshot = analyze_trend([])
        assert snapshot == TrendSnapshot()
        assert snapshot.total_rounds == 0
        assert snapshot.current_streak == Streak(None, 0)
        assert snapshot.banker_win_rate == 0.0

    def test_counts_and_rates(self, history):
        snapshot = analyze_trend(history("BBPTD"))
        assert snapshot.total_rounds == 5
        assert snapshot.banker_wins == 3
        assert snapshot.player_wins == 1
        assert snapshot.ties == 1
        assert snapshot.banker_win_rate == pytest.approx(0.6)
        assert snapshot.player_win_rate == pytest.approx(0.2)
        assert snapshot.tie_rate == pytest.approx(0.2)
        assert snapshot.banker_pairs == 1
        assert snapshot.player_pairs == 1
        assert snapshot.banker_pair_rate == pytest.approx(0.2)

    def test_current_streak(self, history):
        assert analyze_trend(history("PBBB")).current_streak == Streak(Winner.BANKER, 3)
        assert analyze_trend(history("BPP")).current_streak == Streak(Winner.PLAYER, 2)

    def test_trailing_tie_is_streak_of_one(self, history):
        assert analyze_trend(history("BBBT")).current_streak == Streak(Winner.TIE, 1)
        assert analyze_trend(history("TT")).current_streak == Streak(Winner.TIE, 1)

    def test_tie_breaks_streak(self, history):
        assert analyze_trend(history("BBTB")).current_streak == Streak(Winner.BANKER, 1)

    def test_longest_streaks(self, history):
        snapshot = analyze_trend(history("BBBPPTPPPPB"))
        assert snapshot.longest_banker_streak == 3
        assert snapshot.longest_player_streak == 4

    def test_to_dict(self, history):
        data = analyze_trend(history("BB")).to_dict()
        assert data["current_streak"] == {"winner": "banker", "length": 2}
        assert data["total_rounds"] == 2

    def test_input_not_modified_and_repeatable(self, history):
        rounds = history("BPBBTPD")
        before = list(rounds)
        assert analyze_trend(rounds) == analyze_trend(rounds)
        assert rounds == before


class TestPredictNext:
    """Tests for the heuristic predictor."""

    def test_insufficient_history(self, history):
        prediction = predict_next(history("BPPP"))
        assert prediction.predicted_winner is Winner.BANKER
        assert prediction.confidence == 0.5
        assert len(prediction.rationale) == 1
        assert "Insufficient history" in prediction.rationale[0]

    def test_empty_history(self):
        prediction = predict_next([])
        assert prediction.predicted_winner is Winner.BANKER
        assert prediction.confidence == 0.5

    def test_higher_win_rate(self, history):
        prediction = predict_next(history("BBPBP"))
        assert prediction.predicted_winner is Winner.BANKER
        assert prediction.confidence == pytest.approx(0.7)
        assert prediction.banker_probability == pytest.approx(0.6)
        assert prediction.player_probability == pytest.approx(0.4)
        assert prediction.tie_probability == 0.0
        assert prediction.streak_likely
        assert len(prediction.rationale) == 1
        assert "Banker" in prediction.rationale[0]

    def test_equal_rates_favour_player(self, history):
        prediction = predict_next(history("BPBPT"))
        assert prediction.predicted_winner is Winner.PLAYER
        assert prediction.confidence == pytest.approx(0.5)

    def test_streak_reversal(self, history):
        prediction = predict_next(history("PBBBB"))
        assert prediction.predicted_winner is Winner.PLAYER
        assert not prediction.streak_likely
        assert len(prediction.rationale) == 2
        assert "streak of 4" in prediction.rationale[1]
        assert prediction.confidence == pytest.approx(0.8)

    def test_confidence_capped(self, history):
        prediction = predict_next(history("BBBBBBP"))
        assert prediction.confidence == 0.8

    def test_tie_run_does_not_reverse(self, history):
        prediction = predict_next(history("BBPTT"))
        assert prediction.predicted_winner is Winner.BANKER
        assert prediction.streak_likely

    def test_rules_thresholds(self, history):
        rules = BaccaratRules(min_prediction_history=3, streak_reversal_length=2)
        prediction = predict_next(history("PBB"), rules)
        assert prediction.predicted_winner is Winner.PLAYER

    def test_deterministic(self, history):
        rounds = history("BPBBBPPTB")
        assert predict_next(rounds) == predict_next(rounds)


def test_roadmap_beads(history):
    rounds = history("BTD")
    beads = roadmap_beads(rounds)
    assert [bead.winner for bead in beads] == [Winner.BANKER, Winner.TIE, Winner.BANKER]
    assert beads[2].banker_pair and beads[2].player_pair
    assert beads[0].banker_points == 9
    assert beads[0].player_points == 5
    assert [bead.round_id for bead in beads] == [r.round_id for r in rounds]
