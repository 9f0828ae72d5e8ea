# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Journal snapshot: positions with exits, setup catalog and per-year capital, loaded from plain data.

A snapshot is read once per analysis request and never mutated by the
performance engine. Exits may be nested under their position ("exits") or
listed top-level with a position_id.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from tradejournal.core.journal.models import (
    Account,
    Exit,
    Position,
    PositionValidationError,
    SetupType,
)

logger = logging.getLogger(__name__)


def capital_for_year(accounts: Iterable[Account], year: int) -> float:
    """Starting capital for `year`, 0.0 when no account exists for it."""
    for a in accounts:
        if a.year == year:
            return a.starting_capital
    return 0.0


@dataclass
class JournalSnapshot:
    positions: List[Position] = field(default_factory=list)
    setup_types: List[SetupType] = field(default_factory=list)
    accounts: List[Account] = field(default_factory=list)

    def capital_for_year(self, year: int) -> float:
        return capital_for_year(self.accounts, year)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positions": [p.to_dict() for p in self.positions],
            "setup_types": [s.to_dict() for s in self.setup_types],
            "accounts": [a.to_dict() for a in self.accounts],
        }


def load_snapshot(data: Dict[str, Any]) -> JournalSnapshot:
    """Build a snapshot from a dict. Raises PositionValidationError on bad records or orphan exits."""
    positions = [Position.from_dict(p) for p in data.get("positions") or []]
    by_id = {p.position_id: p for p in positions}

    for raw in data.get("exits") or []:
        e = Exit.from_dict(raw)
        owner = by_id.get(e.position_id)
        if owner is None:
            raise PositionValidationError(
                f"Exit {e.exit_id} references unknown position {e.position_id!r}"
            )
        owner.exits.append(e)

    snapshot = JournalSnapshot(
        positions=positions,
        setup_types=[SetupType.from_dict(s) for s in data.get("setup_types") or []],
        accounts=[Account.from_dict(a) for a in data.get("accounts") or []],
    )
    logger.info(
        "[SNAPSHOT] Loaded %d positions, %d exits, %d setup types, %d accounts",
        len(snapshot.positions),
        sum(len(p.exits) for p in snapshot.positions),
        len(snapshot.setup_types),
        len(snapshot.accounts),
    )
    return snapshot


def load_snapshot_file(path: Union[str, Path]) -> JournalSnapshot:
    """Load a snapshot from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise PositionValidationError(f"{path}: snapshot must be a JSON object")
    return load_snapshot(data)
