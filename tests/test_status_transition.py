"""Tests for trade status transitions."""

from types import SimpleNamespace

import pytest

from journal.models.trade import Trade
from journal.services.errors import InstrumentNotFoundError, TradeNotFoundError
from journal.services.instruments import STATIC_SPECS
from journal.services.status_transition import (
    TradeStatus,
    apply_status_change,
    change_trade_status,
)

EURUSD = STATIC_SPECS["EURUSD"]
US30 = STATIC_SPECS["US30"]


def _trade(**overrides) -> SimpleNamespace:
    fields = dict(
        instrument_symbol="EURUSD",
        direction="BUY",
        entry_price=1.1000,
        exit_price=1.1050,
        lot_size=0.1,
        risk_pips=20.0,
        pips=12.0,
        result=12.0,
        profit=99.0,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _stored_trade(session, **overrides) -> Trade:
    fields = dict(
        owner_id="owner-1",
        instrument_symbol="EURUSD",
        direction="BUY",
        entry_price=1.1000,
        exit_price=1.1050,
        lot_size=0.1,
        risk_pips=20.0,
        date="2024-03-01",
        time="09:30",
    )
    fields.update(overrides)
    trade = Trade(**fields)
    session.add(trade)
    session.commit()
    session.refresh(trade)
    return trade


# ---------------------------------------------------------------------------
# 1. Pure transition rules
# ---------------------------------------------------------------------------

class TestApplyStatusChange:
    @pytest.mark.parametrize("prior", [{}, {"exit_price": 1.0}, {"risk_pips": 0.0, "pips": -40.0}])
    def test_breakeven_zeroes_everything(self, prior):
        change = apply_status_change(_trade(**prior), "BREAKEVEN", EURUSD)
        assert change.status is TradeStatus.BREAKEVEN
        assert change.pips == change.result == change.profit == 0.0

    @pytest.mark.parametrize("exit_price", [1.2000, 1.1000, 1.0500, None])
    def test_loss_uses_risk_regardless_of_prices(self, exit_price):
        change = apply_status_change(_trade(exit_price=exit_price), TradeStatus.LOSS, EURUSD)
        assert change.pips == -20.0
        assert change.result == -20.0
        assert change.profit == pytest.approx(-20.0)

    def test_loss_on_indices_uses_one_per_point(self):
        trade = _trade(instrument_symbol="US30", entry_price=35000.0, exit_price=35100.0, risk_pips=30.0, lot_size=0.5)
        change = apply_status_change(trade, "LOSS", US30)
        assert change.result == -30.0
        assert change.profit == pytest.approx(-15.0)

    def test_open_keeps_pips_but_realises_nothing(self):
        change = apply_status_change(_trade(), "OPEN", EURUSD)
        assert change.pips == pytest.approx(50.0)
        assert change.result == 0.0
        assert change.profit == 0.0

    def test_closed_recomputes_from_prices(self):
        change = apply_status_change(_trade(), "CLOSED", EURUSD)
        assert change.pips == pytest.approx(50.0)
        assert change.result == change.pips
        assert change.profit == pytest.approx(50.0)

    def test_closed_with_missing_exit_is_zero(self):
        change = apply_status_change(_trade(exit_price=None), "CLOSED", EURUSD)
        assert change.pips == change.result == change.profit == 0.0

    def test_input_trade_is_not_modified(self):
        trade = _trade()
        apply_status_change(trade, "BREAKEVEN", EURUSD)
        assert trade.profit == 99.0

    def test_as_update_payload(self):
        change = apply_status_change(_trade(), "BREAKEVEN", EURUSD)
        assert change.as_update() == {"status": "BREAKEVEN", "pips": 0.0, "result": 0.0, "profit": 0.0}


class TestTradeStatusParse:
    def test_legacy_close_alias(self):
        assert TradeStatus.parse("CLOSE") is TradeStatus.CLOSED
        assert TradeStatus.parse(" close ") is TradeStatus.CLOSED

    def test_case_insensitive(self):
        assert TradeStatus.parse("loss") is TradeStatus.LOSS

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            TradeStatus.parse("PENDING")


# ---------------------------------------------------------------------------
# 2. Persisted transitions
# ---------------------------------------------------------------------------

class TestChangeTradeStatus:
    def test_persists_breakeven(self, session, provider):
        trade = _stored_trade(session, pips=50.0, result=50.0, profit=50.0)
        updated = change_trade_status(session, trade.id, "BREAKEVEN", provider)
        assert updated.status == "BREAKEVEN"
        session.refresh(trade)
        assert trade.pips == trade.result == trade.profit == 0.0

    def test_persists_loss(self, session, provider):
        trade = _stored_trade(session)
        change_trade_status(session, trade.id, "LOSS", provider)
        session.refresh(trade)
        assert trade.status == "LOSS"
        assert trade.result == -20.0
        assert trade.profit == pytest.approx(-20.0)

    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_id_rejected(self, session, provider, blank):
        with pytest.raises(TradeNotFoundError, match="blank"):
            change_trade_status(session, blank, "LOSS", provider)

    def test_unknown_id_rejected_without_writes(self, session, provider):
        trade = _stored_trade(session)
        with pytest.raises(TradeNotFoundError):
            change_trade_status(session, "missing", "LOSS", provider)
        session.refresh(trade)
        assert trade.status == "OPEN"

    def test_unknown_instrument_rejected_without_writes(self, session, provider):
        trade = _stored_trade(session, instrument_symbol="FOOBAR")
        with pytest.raises(InstrumentNotFoundError):
            change_trade_status(session, trade.id, "CLOSED", provider)
        session.refresh(trade)
        assert trade.status == "OPEN"
        assert trade.profit == 0.0

    def test_logs_transition(self, session, provider, caplog):
        trade = _stored_trade(session)
        with caplog.at_level("INFO", logger="journal.services.status_transition"):
            change_trade_status(session, trade.id, "CLOSED", provider)
        assert "OPEN -> CLOSED" in caplog.text
