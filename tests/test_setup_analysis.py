# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Tests for setup cohort analysis: grouping, win rate over closed positions, extremes, unknown labels."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from tradejournal.core.journal.models import Direction, Exit, Position, SetupType
from tradejournal.core.performance.setups import (
    UNCATEGORIZED_COLOR,
    UNCATEGORIZED_SETUP,
    analyze_by_setup,
    lookup_setup,
)

TODAY = date(2026, 3, 1)

CATALOG = [
    SetupType("Breakout", "#22c55e"),
    SetupType("Pullback", "#3b82f6"),
    SetupType("Reversal", "#ef4444"),
]


def _position(pid: str, setup: str, exit_price: float | None, shares_sold: int = 100) -> Position:
    """Long 100 @ $50, stop $48 (total risk $200), entered Feb 1; one exit on Feb 11 if exit_price."""
    p = Position(
        position_id=pid,
        ticker=pid.upper(),
        direction=Direction.LONG,
        entry_date=date(2026, 2, 1),
        entry_price=50.0,
        total_shares=100,
        stop_price=48.0,
        setup_type=setup,
    )
    if exit_price is not None:
        p.exits.append(Exit(f"{pid}-e", pid, date(2026, 2, 11), exit_price, shares_sold))
    return p


def test_cohort_stats() -> None:
    positions = [
        _position("w1", "Breakout", 54.0),   # +400, 2R
        _position("l1", "Breakout", 49.0),   # -100, -0.5R
        _position("o1", "Breakout", None),   # open, 0 pnl, 28 days
    ]
    [row] = analyze_by_setup(positions, CATALOG, today=TODAY)

    assert row.name == "Breakout"
    assert row.color == "#22c55e"
    assert row.count == 3
    assert row.closed_count == 2
    assert row.win_rate == pytest.approx(50.0)
    assert row.total_pnl == pytest.approx(300.0)
    assert row.avg_r == pytest.approx((2.0 - 0.5 + 0.0) / 3)
    assert row.avg_days_held == pytest.approx((10 + 10 + 28) / 3)
    assert row.largest_winner == pytest.approx(400.0)
    assert row.largest_loser == pytest.approx(-100.0)


def test_open_only_cohort_has_zero_extremes_and_win_rate() -> None:
    p = _position("o1", "Pullback", 60.0, shares_sold=50)  # partially closed, still open
    [row] = analyze_by_setup([p], CATALOG, today=TODAY)

    assert row.closed_count == 0
    assert row.win_rate == 0.0
    assert row.largest_winner == 0.0
    assert row.largest_loser == 0.0
    assert row.total_pnl == pytest.approx(500.0)


def test_sorted_by_total_pnl_and_empty_cohorts_omitted() -> None:
    positions = [
        _position("a", "Breakout", 49.0),
        _position("b", "Pullback", 55.0),
    ]
    rows = analyze_by_setup(positions, CATALOG, today=TODAY)

    assert [r.name for r in rows] == ["Pullback", "Breakout"]
    assert "Reversal" not in {r.name for r in rows}


def test_break_even_is_not_a_winner() -> None:
    [row] = analyze_by_setup([_position("a", "Breakout", 50.0)], CATALOG, today=TODAY)
    assert row.closed_count == 1
    assert row.win_rate == 0.0


def test_unknown_labels_dropped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    positions = [_position("a", "Breakout", 55.0), _position("b", "Old Setup", 60.0)]
    with caplog.at_level(logging.WARNING, logger="tradejournal.core.performance.setups"):
        rows = analyze_by_setup(positions, CATALOG, today=TODAY)

    assert [r.name for r in rows] == ["Breakout"]
    assert "Old Setup" in caplog.text


def test_unknown_labels_grouped_as_uncategorized() -> None:
    positions = [_position("a", "Breakout", 55.0), _position("b", "Old Setup", 60.0), _position("c", "", 49.0)]
    rows = analyze_by_setup(positions, CATALOG, include_uncategorized=True, today=TODAY)

    by_name = {r.name: r for r in rows}
    assert set(by_name) == {"Breakout", UNCATEGORIZED_SETUP}
    assert by_name[UNCATEGORIZED_SETUP].count == 2
    assert by_name[UNCATEGORIZED_SETUP].color == UNCATEGORIZED_COLOR
    assert by_name[UNCATEGORIZED_SETUP].total_pnl == pytest.approx(900.0)


def test_catalog_as_mapping() -> None:
    rows = analyze_by_setup([_position("a", "Swing", 55.0)], {"Swing": "#000000"}, today=TODAY)
    assert rows[0].name == "Swing"
    assert rows[0].color == "#000000"


def test_lookup_setup() -> None:
    assert lookup_setup(CATALOG, "Pullback") == SetupType("Pullback", "#3b82f6")
    assert lookup_setup(CATALOG, "Missing") is None
    assert lookup_setup({"A": "#fff"}, "A") == SetupType("A", "#fff")


def test_cohorts_agree_with_lookup() -> None:
    labels = ["Breakout", "breakout", "Pullback ", "Reversal", "Missing"]
    positions = [_position(f"p{i}", label, 55.0) for i, label in enumerate(labels)]
    rows = analyze_by_setup(positions, CATALOG, include_uncategorized=True, today=TODAY)

    by_name = {r.name: r for r in rows}
    matched = [label for label in labels if lookup_setup(CATALOG, label) is not None]
    assert matched == ["Breakout", "Reversal"]
    assert set(by_name) == {"Breakout", "Reversal", UNCATEGORIZED_SETUP}
    assert by_name[UNCATEGORIZED_SETUP].count == len(labels) - len(matched)
    for name in matched:
        assert by_name[name].color == lookup_setup(CATALOG, name).color


def test_no_positions() -> None:
    assert analyze_by_setup([], CATALOG, today=TODAY) == []
