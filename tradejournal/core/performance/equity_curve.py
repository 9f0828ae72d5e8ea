# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Equity curve: cumulative PnL and R across every exit of every position.

Each exit is one event. Its R is measured against that exit's own share count,
unlike the whole-position R-multiple in PositionMetrics. The curve is rebuilt
from scratch on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from tradejournal.core.journal.metrics import (
    compute_exit_pnl,
    exit_r_multiple,
    proportional_entry_fee,
)
from tradejournal.core.journal.models import Position

logger = logging.getLogger(__name__)


class CurveMode(str, Enum):
    PERCENT = "percent"
    R_MULTIPLE = "r"


@dataclass(frozen=True)
class ExitEvent:
    """One exit flattened out of its position."""
    date: date
    pnl: float
    r: float
    ticker: str = ""
    position_id: str = ""


@dataclass(frozen=True)
class CurvePoint:
    """One point of the equity curve, emitted per exit event."""
    date: date
    pnl: float
    r: float
    cumulative_pnl: float
    cumulative_r: float
    value: float
    value_is_percent: bool  # False: value is R, or raw dollars when capital is 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "pnl": self.pnl,
            "r": self.r,
            "cumulative_pnl": self.cumulative_pnl,
            "cumulative_r": self.cumulative_r,
            "value": self.value,
            "value_is_percent": self.value_is_percent,
        }


def build_exit_events(
    positions: Iterable[Position],
    period_cutoff: Optional[date] = None,
) -> List[ExitEvent]:
    """Flatten exits into events; events strictly before `period_cutoff` are dropped. Unsorted."""
    events: List[ExitEvent] = []
    for position in positions:
        for exit in position.exits:
            if period_cutoff is not None and exit.exit_date < period_cutoff:
                continue
            fee = proportional_entry_fee(position, exit.shares_sold)
            pnl = compute_exit_pnl(position, exit, fee)
            events.append(ExitEvent(
                date=exit.exit_date,
                pnl=pnl,
                r=exit_r_multiple(position, exit, pnl),
                ticker=position.ticker,
                position_id=position.position_id,
            ))
    return events


def build_curve(
    positions: Iterable[Position],
    starting_capital: float,
    period_cutoff: Optional[date] = None,
    *,
    mode: CurveMode | str = CurveMode.PERCENT,
) -> List[CurvePoint]:
    """
    Cumulative curve ordered by exit date (same-day order unspecified).

    PERCENT mode: value = cumulative_pnl / starting_capital * 100. With no
    capital the value falls back to the raw cumulative_pnl and
    value_is_percent is False, so the caller can label it as dollars.
    R_MULTIPLE mode: value = cumulative_r.
    """
    mode = CurveMode(mode)
    events = sorted(build_exit_events(positions, period_cutoff), key=lambda e: e.date)

    has_capital = starting_capital > 0
    cumulative_pnl = 0.0
    cumulative_r = 0.0
    points: List[CurvePoint] = []
    for event in events:
        cumulative_pnl += event.pnl
        cumulative_r += event.r
        if mode == CurveMode.R_MULTIPLE:
            value, is_percent = cumulative_r, False
        elif has_capital:
            value, is_percent = cumulative_pnl / starting_capital * 100, True
        else:
            value, is_percent = cumulative_pnl, False
        points.append(CurvePoint(
            date=event.date,
            pnl=event.pnl,
            r=event.r,
            cumulative_pnl=cumulative_pnl,
            cumulative_r=cumulative_r,
            value=value,
            value_is_percent=is_percent,
        ))

    logger.debug(
        "[CURVE] %d points (cutoff=%s, mode=%s, capital=%.2f)",
        len(points), period_cutoff, mode.value, starting_capital,
    )
    return points
