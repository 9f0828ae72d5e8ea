# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Portfolio summary: journal-wide totals, win rate, current streak and portfolio heat."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tradejournal.core.journal.metrics import compute_position_metrics
from tradejournal.core.journal.models import Position, PositionMetrics


class HeatLevel(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


@dataclass(frozen=True)
class PortfolioSummary:
    total_net_pnl: float
    total_fees: float
    total_realized_pnl: float
    total_unrealized_pnl: float
    win_rate: float
    avg_r: float
    return_pct: float
    num_positions: int
    num_closed_positions: int
    num_open_positions: int
    streak: int
    is_win_streak: bool
    portfolio_heat: float  # dollars at risk on open positions
    portfolio_heat_pct: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_net_pnl": self.total_net_pnl,
            "total_fees": self.total_fees,
            "total_realized_pnl": self.total_realized_pnl,
            "total_unrealized_pnl": self.total_unrealized_pnl,
            "win_rate": self.win_rate,
            "avg_r": self.avg_r,
            "return_pct": self.return_pct,
            "num_positions": self.num_positions,
            "num_closed_positions": self.num_closed_positions,
            "num_open_positions": self.num_open_positions,
            "streak": self.streak,
            "is_win_streak": self.is_win_streak,
            "portfolio_heat": self.portfolio_heat,
            "portfolio_heat_pct": self.portfolio_heat_pct,
        }


def current_streak(closed: List[PositionMetrics]) -> Tuple[int, bool]:
    """
    Length and kind of the latest run of wins or losses among closed positions.

    Positions are ordered by last exit date, newest first; the run ends at the
    first position whose outcome differs from the newest one.
    """
    ordered = sorted(
        (m for m in closed if m.last_exit_date is not None),
        key=lambda m: m.last_exit_date,
        reverse=True,
    )
    if not ordered:
        return 0, True
    is_win = ordered[0].total_pnl > 0
    streak = 0
    for m in ordered:
        if (m.total_pnl > 0) != is_win:
            break
        streak += 1
    return streak, is_win


def _open_risk(metrics: Iterable[PositionMetrics]) -> float:
    return sum((m.risk_per_share * m.shares_remaining for m in metrics if m.is_open), 0.0)


def portfolio_heat(positions: Iterable[Position], *, today: Optional[date] = None) -> float:
    """Sum of stop-distance risk on the remaining shares of open positions."""
    return _open_risk(compute_position_metrics(p, today=today) for p in positions)


def heat_level(heat_pct: float, low: float = 3.0, high: float = 6.0) -> HeatLevel:
    if heat_pct < low:
        return HeatLevel.LOW
    if heat_pct <= high:
        return HeatLevel.MODERATE
    return HeatLevel.HIGH


def summarize_portfolio(
    positions: Iterable[Position],
    starting_capital: float,
    *,
    today: Optional[date] = None,
) -> PortfolioSummary:
    positions = list(positions)
    metrics = [compute_position_metrics(p, today=today) for p in positions]
    closed = [m for m in metrics if not m.is_open]
    winners = sum(1 for m in closed if m.total_pnl > 0)

    total_net = sum(m.total_pnl for m in metrics)
    total_fees = sum(p.entry_fee + m.total_exit_fees for p, m in zip(positions, metrics))
    heat = _open_risk(metrics)
    streak, is_win_streak = current_streak(closed)
    has_capital = starting_capital > 0

    return PortfolioSummary(
        total_net_pnl=total_net,
        total_fees=total_fees,
        total_realized_pnl=sum(m.realized_pnl for m in metrics),
        total_unrealized_pnl=sum(m.unrealized_pnl for m in metrics),
        win_rate=winners / len(closed) * 100 if closed else 0.0,
        avg_r=sum(m.r_multiple for m in metrics) / len(metrics) if metrics else 0.0,
        return_pct=total_net / starting_capital * 100 if has_capital else 0.0,
        num_positions=len(metrics),
        num_closed_positions=len(closed),
        num_open_positions=len(metrics) - len(closed),
        streak=streak,
        is_win_streak=is_win_streak,
        portfolio_heat=heat,
        portfolio_heat_pct=heat / starting_capital * 100 if has_capital else 0.0,
    )
