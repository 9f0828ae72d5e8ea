# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Monthly returns for one calendar year and the compounded annual return.

Compounding multiplies (1 + r) only over months that had at least one exit.
A month with no trades is skipped entirely rather than counted as a 0% month,
so empty months never dilute the annual figure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from tradejournal.core.journal.models import Position
from tradejournal.core.performance.equity_curve import build_exit_events

logger = logging.getLogger(__name__)

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class MonthlyBucket:
    month: int  # 1..12
    name: str
    trades: int = 0
    net_pnl: float = 0.0
    return_pct: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "name": self.name,
            "trades": self.trades,
            "net_pnl": self.net_pnl,
            "return_pct": self.return_pct,
        }


@dataclass
class MonthlyReturns:
    year: int
    starting_capital: float
    months: List[MonthlyBucket]
    compound_return: float  # fraction, 0.10 == 10%

    @property
    def compound_return_pct(self) -> float:
        return self.compound_return * 100

    @property
    def total_trades(self) -> int:
        return sum(m.trades for m in self.months)

    @property
    def net_pnl(self) -> float:
        return sum(m.net_pnl for m in self.months)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "starting_capital": self.starting_capital,
            "months": [m.to_dict() for m in self.months],
            "compound_return": self.compound_return,
            "compound_return_pct": self.compound_return_pct,
            "total_trades": self.total_trades,
            "net_pnl": self.net_pnl,
        }


def compound_return(months: Sequence[MonthlyBucket]) -> float:
    """prod(1 + return_pct/100) - 1 over months with trades."""
    acc = 1.0
    for m in months:
        if m.trades > 0:
            acc *= 1 + m.return_pct / 100
    return acc - 1


def monthly_returns(
    positions: Iterable[Position],
    year: int,
    starting_capital: float,
) -> MonthlyReturns:
    """Bucket every exit dated in `year` into its month; return % is against starting capital."""
    months = [MonthlyBucket(month=i + 1, name=name) for i, name in enumerate(MONTH_NAMES)]
    for event in build_exit_events(positions):
        if event.date.year != year:
            continue
        bucket = months[event.date.month - 1]
        bucket.trades += 1
        bucket.net_pnl += event.pnl

    for m in months:
        m.return_pct = m.net_pnl / starting_capital * 100 if starting_capital > 0 else 0.0

    result = MonthlyReturns(
        year=year,
        starting_capital=starting_capital,
        months=months,
        compound_return=compound_return(months),
    )
    logger.debug(
        "[MONTHLY] %d: %d exits, compound %.4f", year, result.total_trades, result.compound_return
    )
    return result


def available_years(positions: Iterable[Position]) -> List[int]:
    """Years with at least one exit, newest first."""
    years = {e.exit_date.year for p in positions for e in p.exits}
    return sorted(years, reverse=True)


def select_year(available: Sequence[int], requested: int, today: Optional[date] = None) -> int:
    """Keep `requested` if it has exits; else the current year if it does; else the newest year."""
    if not available or requested in available:
        return requested
    current = (today or date.today()).year
    return current if current in available else available[0]
