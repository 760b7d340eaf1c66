"""
Tests for the Baccarat round driver, table configuration and round logging.
"""

import logging
from decimal import Decimal

import pytest

from punto.baccarat import (
    BaccaratGame,
    BaccaratRules,
    Bet,
    BetStatus,
    BetType,
    Winner,
    calculate_payout,
)
from punto.baccarat.decision_logger import RoundLogger
from punto.verification import validate_result


@pytest.fixture
def game():
    return BaccaratGame(logger=RoundLogger(logger=logging.getLogger("punto.rounds.test")))


class TestPlayRound:
    """Tests for dealing complete rounds from a card source."""

    def test_deal_order_and_no_draws(self, game, cards):
        """Cards are dealt Player, Banker, Player, Banker."""
        outcome = game.play_round(cards("5C KH 2D 6S"), "r-1")
        result = outcome.result
        assert [c.code for c in result.player_cards] == ["5C", "2D"]
        assert [c.code for c in result.banker_cards] == ["KH", "6S"]
        assert result.winner is Winner.PLAYER
        assert not result.is_big

    def test_natural_leaves_cards_in_source(self, game, cards):
        source = iter(cards("4C 2H 5D 3S 9H"))
        outcome = game.play_round(source, "r-2")
        assert outcome.result.player_points == 9
        assert outcome.result.total_cards == 4
        assert next(source).code == "9H"

    def test_player_draws_then_banker_draws(self, game, cards):
        # Player A,2 (3) draws a 9; Banker K,3 (3) draws against a 9
        outcome = game.play_round(cards("AC KH 2D 3S 9H 5C"), "r-3")
        result = outcome.result
        assert [c.code for c in result.player_cards] == ["AC", "2D", "9H"]
        assert [c.code for c in result.banker_cards] == ["KH", "3S", "5C"]
        assert result.player_points == 2
        assert result.banker_points == 8
        assert result.winner is Winner.BANKER
        assert result.is_big

    def test_player_draws_banker_stands(self, game, cards):
        # Banker 3 stands against a Player third card of 8
        outcome = game.play_round(cards("AC KH 2D 3S 8H 5C"), "r-4")
        assert len(outcome.result.banker_cards) == 2
        assert len(outcome.result.player_cards) == 3

    def test_player_stands_banker_draws(self, game, cards):
        outcome = game.play_round(cards("3C 2H 4D 3S 9H"), "r-5")
        assert len(outcome.result.player_cards) == 2
        assert [c.code for c in outcome.result.banker_cards] == ["2H", "3S", "9H"]

    def test_results_follow_drawing_rules(self, game, cards):
        sequences = [
            "AC KH 2D 3S 9H 5C",
            "AC KH 2D 3S 8H 5C",
            "3C 2H 4D 3S 9H",
            "10C 10H 10D 10S 10C 10H",
            "7C 6H QD KS",
        ]
        for i, codes in enumerate(sequences):
            result = game.play_round(cards(codes), f"r-{i}").result
            assert validate_result(result, enforce_draw_rules=True).is_valid

    def test_exhausted_source(self, game, cards):
        with pytest.raises(ValueError):
            game.play_round(cards("AC KH 2D"), "r-6")
        with pytest.raises(ValueError):
            game.play_round(cards("AC KH 2D 3S"), "r-7")

    def test_settles_bets(self, game, cards):
        bets = [Bet(BetType.PLAYER, 100, "r-8"), Bet(BetType.SMALL, 10, "r-8")]
        outcome = game.play_round(cards("5C KH 2D 6S"), "r-8", bets)
        assert outcome.settlement.total_paid == Decimal("225")
        assert all(b.status is BetStatus.WON for b in outcome.settlement.settled_bets)
        assert all(b.status is BetStatus.PENDING for b in bets)

    def test_accepts_confirmed_bets(self, game, cards):
        bet = Bet(BetType.BANKER, 100).confirm()
        outcome = game.play_round(cards("5C KH 2D 6S"), "r-12", [bet])
        assert outcome.settlement.settled_bets[0].status is BetStatus.LOST
        assert outcome.settlement.settled_bets[0].bet_id == bet.bet_id

    def test_rejects_settled_bets(self, game, cards, make_result):
        bet = Bet(BetType.PLAYER, 100).confirm()
        settled = bet.settle(calculate_payout(bet, make_result("KH 6S", "5C 2D")))
        with pytest.raises(ValueError):
            game.play_round(cards("5C KH 2D 6S"), "r-13", [settled])

    def test_commission_free_rules(self, cards):
        game = BaccaratGame(BaccaratRules(commission_free=True))
        # Banker K,6 against Player 3,2 + Q: Banker wins on six
        outcome = game.play_round(cards("3C KH 2D 6S QH"), "r-9", [Bet(BetType.BANKER, 100)])
        assert outcome.result.banker_points == 6
        assert outcome.settlement.total_paid == 150

    def test_unknown_bet_logged(self, game, cards, caplog):
        with caplog.at_level(logging.WARNING, logger="punto.rounds.test"):
            outcome = game.play_round(cards("5C KH 2D 6S"), "r-10", [Bet("dragon", 10)])
        assert outcome.settlement.total_paid == 0
        assert "unknown bet type" in caplog.text


class TestBaccaratRules:
    """Tests for table configuration."""

    def test_defaults(self):
        rules = BaccaratRules()
        assert not rules.commission_free
        assert rules.limits_for(BetType.TIE) == (Decimal("10"), Decimal("1000"))
        assert rules.min_prediction_history == 5

    def test_round_trip(self):
        rules = BaccaratRules(commission_free=True, enable_pair_bets=False)
        assert BaccaratRules.from_dict(rules.to_dict()) == rules

    def test_from_dict_overrides_limits(self):
        rules = BaccaratRules.from_dict({"bet_limits": {"tie": ["5", "50"]}})
        assert rules.limits_for(BetType.TIE) == (Decimal("5"), Decimal("50"))
        assert rules.limits_for(BetType.BANKER) == (Decimal("10"), Decimal("10000"))

    @pytest.mark.parametrize(
        "data",
        [
            {"house_edge": 1},
            {"bet_limits": {"dragon": [1, 2]}},
            {"bet_limits": {"tie": [50, 5]}},
        ],
    )
    def test_from_dict_rejects_bad_settings(self, data):
        with pytest.raises(ValueError):
            BaccaratRules.from_dict(data)

    def test_from_env(self):
        env = {"PUNTO_COMMISSION_FREE": "yes", "PUNTO_ENABLE_PAIR_BETS": "0"}
        rules = BaccaratRules.from_env(environ=env)
        assert rules.commission_free
        assert not rules.enable_pair_bets
        assert rules.enable_big_small_bets

    def test_from_env_rejects_bad_boolean(self):
        with pytest.raises(ValueError):
            BaccaratRules.from_env(environ={"PUNTO_COMMISSION_FREE": "maybe"})


class TestRoundLogger:
    """Tests for round audit logging."""

    def test_disable_logging_env(self, monkeypatch):
        monkeypatch.setenv("PUNTO_DISABLE_LOGGING", "true")
        logger = RoundLogger(logger=logging.getLogger("punto.rounds.quiet"))
        assert logger.logger.level == logging.ERROR

    def test_log_level(self, monkeypatch):
        monkeypatch.delenv("PUNTO_DISABLE_LOGGING", raising=False)
        logger = RoundLogger(log_level=logging.DEBUG, logger=logging.getLogger("punto.rounds.loud"))
        assert logger.logger.level == logging.DEBUG
        assert logger.logger.handlers

    def test_logs_draw_decisions(self, monkeypatch, cards, caplog):
        monkeypatch.delenv("PUNTO_DISABLE_LOGGING", raising=False)
        logger = RoundLogger(log_level=logging.DEBUG, logger=logging.getLogger("punto.rounds.debug"))
        game = BaccaratGame(logger=logger)
        with caplog.at_level(logging.DEBUG, logger="punto.rounds.debug"):
            game.play_round(cards("AC KH 2D 3S 9H 5C"), "r-11")
        assert "Banker waits for Player's third card" in caplog.text
        assert "Round r-11 settled" in caplog.text
