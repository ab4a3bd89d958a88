"""Tests for the trade result calculator."""

import logging
from types import SimpleNamespace

import pytest

from journal.services.calculator import (
    Outcome,
    ZERO_FIGURES,
    calculate_trade_result,
    pip_distance,
    round_half_up,
)
from journal.services.instruments import STATIC_SPECS, InstrumentSpec

EURUSD = STATIC_SPECS["EURUSD"]
US30 = STATIC_SPECS["US30"]


def _trade(**overrides) -> SimpleNamespace:
    fields = dict(
        instrument_symbol="EURUSD",
        direction="BUY",
        entry_price=1.1000,
        exit_price=1.1050,
        lot_size=0.1,
        risk_pips=25.0,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


# ---------------------------------------------------------------------------
# 1. Basic figures
# ---------------------------------------------------------------------------

class TestFigures:
    def test_buy_winner(self):
        calc = calculate_trade_result(_trade(), EURUSD)
        assert calc.outcome is Outcome.OK
        assert calc.ok
        assert calc.figures.pips == pytest.approx(50.0)
        assert calc.figures.profit == pytest.approx(50.0)
        assert calc.figures.risk_reward_ratio == pytest.approx(2.0)
        assert calc.figures.result == 50.0

    def test_sell_winner(self):
        calc = calculate_trade_result(_trade(direction="SELL", exit_price=1.0950), EURUSD)
        assert calc.figures.pips == pytest.approx(50.0)
        assert calc.figures.profit == pytest.approx(50.0)

    def test_indices_use_pip_value_in_general_profit(self):
        trade = _trade(instrument_symbol="US30", entry_price=35000.0, exit_price=35100.0, lot_size=0.1)
        calc = calculate_trade_result(trade, US30)
        assert calc.figures.pips == pytest.approx(50.0)
        assert calc.figures.profit == pytest.approx(10.0)

    def test_display_multiplier_only_scales_result(self):
        spec = InstrumentSpec(
            symbol="USDJPY", category="forex", pip_size=0.01, pip_value=10.0, pip_display_multiplier=10.0,
        )
        trade = _trade(instrument_symbol="USDJPY", entry_price=150.00, exit_price=150.25, risk_pips=0.0)
        calc = calculate_trade_result(trade, spec)
        assert calc.figures.pips == pytest.approx(25.0)
        assert calc.figures.result == 250.0
        assert calc.figures.profit == pytest.approx(25.0)

    def test_calculation_is_traced_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="journal.services.calculator"):
            calculate_trade_result(_trade(), EURUSD)
        assert "EURUSD" in caplog.text


# ---------------------------------------------------------------------------
# 2. Sign and symmetry properties
# ---------------------------------------------------------------------------

class TestSymmetry:
    @pytest.mark.parametrize("direction", ["BUY", "SELL"])
    @pytest.mark.parametrize("exit_price", [1.0900, 1.1000, 1.1234])
    def test_pips_and_profit_share_sign(self, direction, exit_price):
        figures = calculate_trade_result(_trade(direction=direction, exit_price=exit_price), EURUSD).figures
        assert (figures.pips > 0) == (figures.profit > 0)
        assert (figures.pips < 0) == (figures.profit < 0)

    def test_swapping_prices_negates_pips_and_profit(self):
        a = calculate_trade_result(_trade(entry_price=1.1000, exit_price=1.1050), EURUSD).figures
        b = calculate_trade_result(_trade(entry_price=1.1050, exit_price=1.1000), EURUSD).figures
        assert b.pips == pytest.approx(-a.pips)
        assert b.profit == pytest.approx(-a.profit)

    def test_sell_mirrors_buy(self):
        buy = calculate_trade_result(_trade(direction="BUY"), EURUSD).figures
        sell = calculate_trade_result(_trade(direction="SELL"), EURUSD).figures
        assert sell.pips == pytest.approx(-buy.pips)

    def test_pip_distance_direction(self):
        assert pip_distance("BUY", 100.0, 101.0, 1.0) == 1.0
        assert pip_distance("SELL", 100.0, 101.0, 1.0) == -1.0


# ---------------------------------------------------------------------------
# 3. Risk:reward and rounding
# ---------------------------------------------------------------------------

class TestRiskReward:
    def test_zero_risk_gives_zero_ratio(self):
        figures = calculate_trade_result(_trade(risk_pips=0.0), EURUSD).figures
        assert figures.risk_reward_ratio == 0.0

    def test_ratio_is_never_negative_for_losers(self):
        figures = calculate_trade_result(_trade(exit_price=1.0950, risk_pips=25.0), EURUSD).figures
        assert figures.risk_reward_ratio == pytest.approx(2.0)

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3.0
        assert round_half_up(-2.5) == -2.0
        assert round_half_up(2.4) == 2.0
        assert round_half_up(-2.6) == -3.0


class TestIdempotence:
    def test_identical_inputs_identical_outputs(self):
        trade = _trade(exit_price=1.10437)
        assert calculate_trade_result(trade, EURUSD) == calculate_trade_result(trade, EURUSD)


# ---------------------------------------------------------------------------
# 4. Incomplete and unresolved input
# ---------------------------------------------------------------------------

class TestFallbacks:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"exit_price": None},
            {"entry_price": None},
            {"entry_price": 0.0},
            {"exit_price": -1.0},
            {"instrument_symbol": ""},
        ],
    )
    def test_incomplete_input_returns_zeros(self, overrides):
        calc = calculate_trade_result(_trade(**overrides), EURUSD)
        assert calc.outcome is Outcome.INCOMPLETE
        assert calc.figures == ZERO_FIGURES
        assert not calc.ok

    def test_unresolved_instrument_returns_zeros(self):
        calc = calculate_trade_result(_trade(instrument_symbol="FOOBAR"), None)
        assert calc.outcome is Outcome.NOT_FOUND
        assert calc.figures == ZERO_FIGURES

    def test_incomplete_wins_over_missing_instrument(self):
        calc = calculate_trade_result(_trade(exit_price=None), None)
        assert calc.outcome is Outcome.INCOMPLETE
