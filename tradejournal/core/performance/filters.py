# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Position list filters (status, result, setup, market cycle)."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from tradejournal.core.journal.metrics import compute_position_metrics
from tradejournal.core.journal.models import Position

_STATUSES = ("all", "open", "closed")
_RESULTS = ("all", "win", "loss")


def filter_positions(
    positions: Iterable[Position],
    *,
    status: str = "all",
    result: str = "all",
    setup_type: str = "all",
    market_cycle: str = "all",
    today: Optional[date] = None,
) -> List[Position]:
    """Keep positions matching every filter. 'loss' includes break-even (total_pnl <= 0)."""
    if status not in _STATUSES:
        raise ValueError(f"Unknown status filter: {status!r}")
    if result not in _RESULTS:
        raise ValueError(f"Unknown result filter: {result!r}")

    out: List[Position] = []
    for p in positions:
        if setup_type != "all" and p.setup_type != setup_type:
            continue
        if market_cycle != "all":
            cycle = p.market_cycle.value if p.market_cycle else None
            if cycle != market_cycle.lower():
                continue
        if status != "all" or result != "all":
            m = compute_position_metrics(p, today=today)
            if status == "open" and not m.is_open:
                continue
            if status == "closed" and m.is_open:
                continue
            if result == "win" and m.total_pnl <= 0:
                continue
            if result == "loss" and m.total_pnl > 0:
                continue
        out.append(p)
    return out
