# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Setup cohort analysis: per-setup win rate, average R and PnL extremes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from tradejournal.core.journal.metrics import compute_position_metrics
from tradejournal.core.journal.models import Position, PositionMetrics, SetupType

logger = logging.getLogger(__name__)

UNCATEGORIZED_SETUP = "Uncategorized"
UNCATEGORIZED_COLOR = "#6b7280"

SetupCatalog = Union[Sequence[SetupType], Mapping[str, str]]


@dataclass(frozen=True)
class SetupAnalysis:
    name: str
    color: str
    count: int
    closed_count: int
    win_rate: float  # 0-100, over closed positions
    total_pnl: float
    avg_r: float
    avg_days_held: float
    largest_winner: float
    largest_loser: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color,
            "count": self.count,
            "closed_count": self.closed_count,
            "win_rate": self.win_rate,
            "total_pnl": self.total_pnl,
            "avg_r": self.avg_r,
            "avg_days_held": self.avg_days_held,
            "largest_winner": self.largest_winner,
            "largest_loser": self.largest_loser,
        }


def _catalog_colors(setup_catalog: SetupCatalog) -> Dict[str, str]:
    if isinstance(setup_catalog, Mapping):
        return dict(setup_catalog)
    return {st.name: st.color for st in setup_catalog}


def lookup_setup(setup_catalog: SetupCatalog, label: str) -> Optional[SetupType]:
    """Catalog entry for `label`, or None when the label is not in the catalog."""
    colors = _catalog_colors(setup_catalog)
    if label in colors:
        return SetupType(name=label, color=colors[label])
    return None


def _analyze_cohort(name: str, color: str, metrics: List[PositionMetrics]) -> SetupAnalysis:
    count = len(metrics)
    closed = [m.total_pnl for m in metrics if not m.is_open]
    winners = sum(1 for pnl in closed if pnl > 0)
    return SetupAnalysis(
        name=name,
        color=color,
        count=count,
        closed_count=len(closed),
        win_rate=winners / len(closed) * 100 if closed else 0.0,
        total_pnl=sum(m.total_pnl for m in metrics),
        avg_r=sum(m.r_multiple for m in metrics) / count,
        avg_days_held=sum(m.days_held for m in metrics) / count,
        largest_winner=max(closed) if closed else 0.0,
        largest_loser=min(closed) if closed else 0.0,
    )


def analyze_by_setup(
    positions: Iterable[Position],
    setup_catalog: SetupCatalog,
    *,
    include_uncategorized: bool = False,
    today: Optional[date] = None,
) -> List[SetupAnalysis]:
    """
    Group positions by setup label and aggregate each cohort.

    Only labels present in the catalog form cohorts. Positions with any other
    label are left out and counted in a warning, unless include_uncategorized
    is set, in which case they form one extra "Uncategorized" cohort.
    Empty cohorts are omitted; result is sorted by total_pnl, best first.
    """
    colors = _catalog_colors(setup_catalog)
    cohorts: Dict[str, List[PositionMetrics]] = {name: [] for name in colors}
    unmatched: List[PositionMetrics] = []
    unmatched_labels = set()

    for position in positions:
        metrics = compute_position_metrics(position, today=today)
        setup = lookup_setup(colors, position.setup_type)
        if setup is not None:
            cohorts[setup.name].append(metrics)
        else:
            unmatched.append(metrics)
            unmatched_labels.add(position.setup_type)

    if unmatched:
        if include_uncategorized:
            colors.setdefault(UNCATEGORIZED_SETUP, UNCATEGORIZED_COLOR)
            cohorts.setdefault(UNCATEGORIZED_SETUP, []).extend(unmatched)
        else:
            logger.warning(
                "[SETUPS] %d position(s) with unknown setup labels left out of cohorts: %s",
                len(unmatched), ", ".join(sorted(repr(s) for s in unmatched_labels)),
            )

    results = [
        _analyze_cohort(name, colors[name], members)
        for name, members in cohorts.items()
        if members
    ]

    results.sort(key=lambda a: a.total_pnl, reverse=True)
    return results
