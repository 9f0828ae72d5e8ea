# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Trade journal: positions, exits, position metrics, snapshots and CSV export."""

from tradejournal.core.journal.models import (
    Account,
    Direction,
    Exit,
    MarketCycle,
    Position,
    PositionMetrics,
    PositionValidationError,
    SetupType,
)
from tradejournal.core.journal.metrics import (
    compute_exit_pnl,
    compute_position_metrics,
    exit_r_multiple,
    proportional_entry_fee,
)
from tradejournal.core.journal.snapshot import JournalSnapshot, capital_for_year, load_snapshot, load_snapshot_file
from tradejournal.core.journal.export import POSITION_CSV_COLUMNS, export_positions_csv

__all__ = [
    "Account",
    "Direction",
    "Exit",
    "MarketCycle",
    "Position",
    "PositionMetrics",
    "PositionValidationError",
    "SetupType",
    "compute_exit_pnl",
    "compute_position_metrics",
    "exit_r_multiple",
    "proportional_entry_fee",
    "JournalSnapshot",
    "capital_for_year",
    "load_snapshot",
    "load_snapshot_file",
    "POSITION_CSV_COLUMNS",
    "export_positions_csv",
]
