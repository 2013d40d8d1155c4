"""
Tests for the stateful calculator sessions
Run with: pytest tests/test_calculator.py -v
"""

import logging
from dataclasses import replace
from decimal import Decimal

import pytest

from backend.core.calculator_config import CalculatorConfig
from backend.core.limitation import Editing
from backend.services.calculator import DutchingSession, LimitationSession


@pytest.fixture
def config():
    return CalculatorConfig()


@pytest.fixture
def dutching(config):
    session = DutchingSession(config)
    session.set_odds(0, "200")
    session.set_odds(1, "300")
    return session


class TestDutchingSessionBasics:
    """Test initial state and odds edits"""

    def test_initial_state(self, config):
        session = DutchingSession(config)

        assert session.total_stake == Decimal("100.00")
        assert len(session.bets) == 2
        assert all(bet.odds == 0 and bet.stake == 0 for bet in session.bets)

    def test_configured_default_stake(self, config):
        session = DutchingSession(replace(config, default_total_stake=Decimal("40")))

        assert session.total_stake == Decimal("40")

    def test_set_odds_recomputes(self, dutching):
        assert [bet.stake for bet in dutching.bets] == [Decimal("60.00"), Decimal("40.00")]

    def test_set_odds_returns_field_text(self, config):
        session = DutchingSession(config)

        assert session.set_odds(0, "1.85") == "1.85"
        assert session.set_odds(1, "210") == "2.10"

    def test_set_odds_bad_index(self, dutching):
        with pytest.raises(ValueError):
            dutching.set_odds(5, "200")

    def test_summary(self, dutching):
        summary = dutching.summary

        assert summary.total_return == Decimal("120.00")
        assert summary.profit == Decimal("20.00")

    def test_implied_margin(self, dutching):
        assert float(dutching.implied_margin) == pytest.approx(5 / 6)

    def test_clearing_all_odds_zeroes_stakes(self, dutching):
        dutching.set_odds(0, "")
        assert [bet.stake for bet in dutching.bets] == [Decimal("0"), Decimal("100.00")]

        dutching.set_odds(1, "")
        assert [bet.stake for bet in dutching.bets] == [Decimal("0"), Decimal("0")]


class TestDutchingSessionTotalStake:
    """Test total stake edits"""

    def test_set_total_stake_recomputes(self, dutching):
        dutching.set_total_stake("50")

        assert [bet.stake for bet in dutching.bets] == [Decimal("30.00"), Decimal("20.00")]

    def test_empty_total_is_zero(self, dutching):
        assert dutching.set_total_stake("") == 0
        assert all(bet.stake == 0 for bet in dutching.bets)

    def test_float_total_from_widget(self, dutching):
        dutching.set_total_stake(250.0)

        assert sum(bet.stake for bet in dutching.bets) == Decimal("250.00")


class TestDutchingSessionRows:
    """Test adding, removing and resetting rows"""

    def test_remove_at_floor_is_noop(self, dutching):
        assert dutching.remove_bet(0) is False
        assert len(dutching.bets) == 2
        assert not dutching.can_remove

    def test_add_then_remove(self, dutching):
        dutching.add_bet()
        assert len(dutching.bets) == 3
        assert dutching.can_remove

        dutching.set_odds(2, "400")
        assert dutching.remove_bet(0) is True
        assert [bet.odds for bet in dutching.bets] == [Decimal("3.00"), Decimal("4.00")]
        assert sum(bet.stake for bet in dutching.bets) == Decimal("100.00")

    def test_remove_missing_row_is_noop(self, dutching):
        dutching.add_bet()

        assert dutching.remove_bet(7) is False
        assert len(dutching.bets) == 3

    def test_new_row_is_inactive(self, dutching):
        dutching.add_bet()

        assert dutching.bets[-1].stake == 0
        assert [bet.stake for bet in dutching.bets[:2]] == [Decimal("60.00"), Decimal("40.00")]

    def test_reset(self, dutching):
        dutching.add_bet()
        dutching.reset()

        assert dutching.total_stake == 0
        assert len(dutching.bets) == 2
        assert all(bet.odds == 0 and bet.stake == 0 for bet in dutching.bets)

    def test_bets_replaced_not_mutated(self, dutching):
        before = dutching.bets
        dutching.set_odds(0, "150")

        assert before[0].odds == Decimal("2.00")
        assert dutching.bets is not before


class TestLimitationSession:
    """Test two-leg editing and derived stakes"""

    @pytest.fixture
    def limitation(self, config):
        session = LimitationSession(config)
        session.set_odds(0, "200")
        session.set_odds(1, "400")
        return session

    def test_initial_state(self, config):
        session = LimitationSession(config)

        assert session.pair.editing is None
        assert session.total_stake == 0

    def test_stake_edit_balances_other_leg(self, limitation):
        limitation.set_stake(0, "50")

        assert limitation.pair.editing is Editing.FIRST
        assert limitation.bets[1].stake == Decimal("25.00")
        assert limitation.total_stake == Decimal("75.00")
        assert limitation.summary.profit == Decimal("25.00")

    def test_editing_moves_to_second_leg(self, limitation):
        limitation.set_stake(0, "50")
        limitation.set_stake(1, "40")

        assert limitation.pair.editing is Editing.SECOND
        assert limitation.bets[0].stake == Decimal("80.00")

    def test_odds_edit_keeps_editing_leg(self, limitation):
        limitation.set_stake(1, "40")
        limitation.set_odds(0, "400")

        assert limitation.pair.editing is Editing.SECOND
        assert limitation.bets[0].stake == Decimal("40.00")

    def test_zero_odds_skips_recompute(self, config):
        session = LimitationSession(config)
        session.set_odds(0, "200")
        session.set_stake(0, "50")

        assert session.pair.editing is Editing.FIRST
        assert session.bets[1].stake == 0

    def test_bad_index(self, limitation):
        with pytest.raises(ValueError):
            limitation.set_stake(2, "10")

    def test_reset(self, limitation):
        limitation.set_stake(0, "50")
        limitation.reset()

        assert limitation.pair.editing is None
        assert all(bet.odds == 0 and bet.stake == 0 for bet in limitation.bets)

    def test_reset_recomputes(self, limitation, caplog):
        limitation.set_stake(0, "50")
        with caplog.at_level(logging.DEBUG, logger="backend.services.calculator"):
            limitation.reset()

        assert "Limitation recomputed" in caplog.text
        assert limitation.total_stake == 0


class TestOversizedInput:
    """Test that absurdly long user input is absorbed, not raised"""

    def test_long_odds_in_dutching(self, dutching):
        dutching.set_odds(0, "9" * 32)

        assert sum(bet.stake for bet in dutching.bets) == Decimal("100.00")
        assert dutching.summary.total_return > 0

    def test_huge_total_stake_becomes_zero(self, dutching):
        assert dutching.set_total_stake("1e30") == 0
        assert all(bet.stake == 0 for bet in dutching.bets)

    def test_long_odds_in_limitation(self, config):
        session = LimitationSession(config)
        session.set_odds(0, "1" * 32)
        session.set_odds(1, "200")
        session.set_stake(0, "50")

        assert session.bets[1].stake > Decimal("1e30")
        assert session.summary.profit > 0
