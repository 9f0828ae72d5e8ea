# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Tests for position metrics: partial exits, fee proration, unrealized PnL, R-multiple, days held."""

from __future__ import annotations

from datetime import date

import pytest

from tradejournal.core.journal.metrics import (
    compute_exit_pnl,
    compute_position_metrics,
    exit_r_multiple,
    proportional_entry_fee,
)
from tradejournal.core.journal.models import Direction, Exit, Position, PositionValidationError


def _position(
    direction: Direction = Direction.LONG,
    entry_price: float = 100.0,
    total_shares: int = 100,
    entry_fee: float = 10.0,
    stop_price: float = 95.0,
    current_price: float | None = None,
    entry_date: date = date(2026, 1, 5),
) -> Position:
    return Position(
        position_id="p1",
        ticker="AAPL",
        direction=direction,
        entry_date=entry_date,
        entry_price=entry_price,
        total_shares=total_shares,
        stop_price=stop_price,
        setup_type="Breakout",
        entry_fee=entry_fee,
        current_price=current_price,
    )


def _exit(shares: int, price: float, fee: float = 0.0, on: date = date(2026, 1, 15), exit_id: str = "e1") -> Exit:
    return Exit(exit_id, "p1", on, price, shares, fee)


# -----------------------------------------------------------------------------
# Worked scenarios
# -----------------------------------------------------------------------------


def test_long_partial_exit_scenario() -> None:
    """100 @ $100, fee $10, stop $95; sell 50 @ $110 fee $5 -> realized 490, 0.98R."""
    p = _position()
    p.exits.append(_exit(50, 110.0, 5.0))
    m = compute_position_metrics(p)

    assert m.realized_pnl == pytest.approx(490.0)
    assert m.shares_sold == 50
    assert m.shares_remaining == 50
    assert m.is_open is True
    assert m.risk_per_share == pytest.approx(5.0)
    assert m.total_risk == pytest.approx(500.0)
    assert m.unrealized_pnl == 0.0
    assert m.total_pnl == pytest.approx(490.0)
    assert m.r_multiple == pytest.approx(0.98)
    assert m.average_exit_price == pytest.approx(110.0)
    assert m.total_exit_fees == pytest.approx(5.0)
    assert m.exit_count == 1
    assert m.days_held == 10
    assert m.last_exit_date == date(2026, 1, 15)


def test_short_full_exit_scenario() -> None:
    """Short 200 @ $50, stop $55, covered at $40, no fees -> 2000, 2.0R."""
    p = _position(Direction.SHORT, entry_price=50.0, total_shares=200, entry_fee=0.0, stop_price=55.0)
    p.exits.append(_exit(200, 40.0))
    m = compute_position_metrics(p)

    assert m.realized_pnl == pytest.approx(2000.0)
    assert m.total_risk == pytest.approx(1000.0)
    assert m.r_multiple == pytest.approx(2.0)
    assert m.is_open is False
    assert m.shares_remaining == 0


def test_multiple_partial_exits_average_and_fees() -> None:
    """Two partial exits: VWAP exit price, summed fees, each slice carries its share of entry fee."""
    p = _position()
    p.exits.extend([
        _exit(40, 110.0, 2.0, date(2026, 1, 10), "e1"),
        _exit(60, 120.0, 3.0, date(2026, 1, 20), "e2"),
    ])
    m = compute_position_metrics(p)

    # (10*40 - 2 - 4) + (20*60 - 3 - 6) = 394 + 1191
    assert m.realized_pnl == pytest.approx(1585.0)
    assert m.average_exit_price == pytest.approx((110 * 40 + 120 * 60) / 100)
    assert m.total_exit_fees == pytest.approx(5.0)
    assert m.last_exit_date == date(2026, 1, 20)
    assert m.days_held == 15
    assert m.is_open is False


# -----------------------------------------------------------------------------
# Invariants and degenerate inputs
# -----------------------------------------------------------------------------


def test_no_exits_defaults() -> None:
    p = _position()
    m = compute_position_metrics(p, today=date(2026, 2, 4))

    assert m.shares_remaining == p.total_shares
    assert m.is_open is True
    assert m.realized_pnl == 0.0
    assert m.average_exit_price is None
    assert m.last_exit_date is None
    assert m.exit_count == 0
    assert m.days_held == 30  # measured against today while no exits


def test_closed_position_ignores_current_price() -> None:
    p = _position(current_price=150.0)
    p.exits.append(_exit(100, 105.0))
    m = compute_position_metrics(p)

    assert m.is_open is False
    assert m.unrealized_pnl == 0.0
    assert m.total_pnl == m.realized_pnl


def test_unrealized_uses_remaining_shares_and_their_entry_fee() -> None:
    """Open 60 shares marked at $104: 4*60 - 0.6*10 = 234."""
    p = _position(current_price=104.0)
    p.exits.append(_exit(40, 110.0))
    m = compute_position_metrics(p)

    assert m.unrealized_pnl == pytest.approx(234.0)
    assert m.total_pnl == pytest.approx(m.realized_pnl + m.unrealized_pnl)


def test_short_unrealized_is_directional() -> None:
    p = _position(Direction.SHORT, entry_price=50.0, total_shares=10, entry_fee=0.0, stop_price=52.0,
                  current_price=53.0)
    m = compute_position_metrics(p, today=date(2026, 1, 6))

    assert m.unrealized_pnl == pytest.approx(-30.0)
    assert m.r_multiple == pytest.approx(-1.5)


def test_zero_stop_distance_reports_zero_r() -> None:
    p = _position(stop_price=100.0)
    p.exits.append(_exit(100, 120.0))
    m = compute_position_metrics(p)

    assert m.total_risk == 0.0
    assert m.r_multiple == 0.0
    assert m.total_pnl > 0


def test_r_sign_matches_pnl_sign() -> None:
    for price in (90.0, 99.0, 101.0, 130.0):
        p = _position(entry_fee=0.0)
        p.exits.append(_exit(100, price))
        m = compute_position_metrics(p)
        assert (m.r_multiple > 0) == (m.total_pnl > 0)


def test_total_risk_not_reduced_by_exits() -> None:
    p = _position()
    before = compute_position_metrics(p, today=date(2026, 1, 6))
    p.exits.append(_exit(70, 101.0))
    after = compute_position_metrics(p)

    assert before.total_risk == after.total_risk == pytest.approx(500.0)


def test_oversold_exits_raise() -> None:
    p = _position()
    p.exits.extend([_exit(60, 110.0, exit_id="e1"), _exit(50, 111.0, exit_id="e2")])

    with pytest.raises(PositionValidationError, match="110"):
        compute_position_metrics(p)


def test_explicit_exits_override_position_exits() -> None:
    p = _position()
    p.exits.append(_exit(100, 110.0))
    m = compute_position_metrics(p, [], today=date(2026, 1, 6))

    assert m.exit_count == 0
    assert m.is_open is True


# -----------------------------------------------------------------------------
# Single exit PnL
# -----------------------------------------------------------------------------


def test_exit_pnl_uses_passed_fee() -> None:
    p = _position()
    e = _exit(50, 110.0, 5.0)

    assert proportional_entry_fee(p, 50) == pytest.approx(5.0)
    assert compute_exit_pnl(p, e, proportional_entry_fee(p, 50)) == pytest.approx(490.0)
    assert compute_exit_pnl(p, e, 0.0) == pytest.approx(495.0)


def test_exit_r_multiple_is_against_exit_shares() -> None:
    p = _position()
    e = _exit(50, 110.0, 5.0)

    # 490 / (5 * 50)
    assert exit_r_multiple(p, e, 490.0) == pytest.approx(1.96)
    assert exit_r_multiple(_position(stop_price=100.0), e, 490.0) == 0.0


def test_metrics_to_dict_is_json_safe() -> None:
    p = _position()
    p.exits.append(_exit(50, 110.0, 5.0))
    d = compute_position_metrics(p).to_dict()

    assert d["last_exit_date"] == "2026-01-15"
    assert d["average_exit_price"] == pytest.approx(110.0)
    assert set(d) >= {"realized_pnl", "unrealized_pnl", "total_pnl", "r_multiple", "days_held"}
