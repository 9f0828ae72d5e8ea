# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""CSV export for journal positions with their metrics. Stable column order for tests."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from tradejournal.core.journal.metrics import compute_position_metrics
from tradejournal.core.journal.models import Position


# Stable column order for CSV
POSITION_CSV_COLUMNS = [
    "position_id",
    "ticker",
    "direction",
    "setup_type",
    "market_cycle",
    "entry_date",
    "entry_price",
    "total_shares",
    "entry_fee",
    "stop_price",
    "current_price",
    "status",
    "shares_sold",
    "shares_remaining",
    "exit_count",
    "average_exit_price",
    "last_exit_date",
    "total_exit_fees",
    "realized_pnl",
    "unrealized_pnl",
    "total_pnl",
    "risk_per_share",
    "total_risk",
    "r_multiple",
    "days_held",
    "notes",
]


def _money(v: Optional[float]) -> str:
    return f"{v:.2f}" if v is not None else ""


def _position_row(p: Position, today: Optional[date] = None) -> List[str]:
    """One position as a list of string values in POSITION_CSV_COLUMNS order."""
    m = compute_position_metrics(p, today=today)
    return [
        p.position_id,
        p.ticker,
        p.direction.value,
        p.setup_type,
        p.market_cycle.value if p.market_cycle else "",
        p.entry_date.isoformat(),
        str(p.entry_price),
        str(p.total_shares),
        _money(p.entry_fee),
        str(p.stop_price),
        str(p.current_price) if p.current_price is not None else "",
        "OPEN" if m.is_open else "CLOSED",
        str(m.shares_sold),
        str(m.shares_remaining),
        str(m.exit_count),
        _money(m.average_exit_price),
        m.last_exit_date.isoformat() if m.last_exit_date else "",
        _money(m.total_exit_fees),
        _money(m.realized_pnl),
        _money(m.unrealized_pnl),
        _money(m.total_pnl),
        _money(m.risk_per_share),
        _money(m.total_risk),
        f"{m.r_multiple:.4f}",
        str(m.days_held),
        (p.notes or "").replace("\r", " ").replace("\n", " "),
    ]


def export_positions_csv(positions: Iterable[Position], *, today: Optional[date] = None) -> str:
    """Export positions to CSV string. Columns in POSITION_CSV_COLUMNS order."""
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(POSITION_CSV_COLUMNS)
    for p in positions:
        w.writerow(_position_row(p, today))
    return buf.getvalue()
