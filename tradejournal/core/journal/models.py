# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Journal data models: Position, Exit, setup catalog, accounts and derived metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import math
import uuid


class PositionValidationError(ValueError):
    """Raised when a position or exit breaks a journal invariant (e.g. oversold exits)."""


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


class MarketCycle(str, Enum):
    GREEN = "green"
    RED = "red"


def parse_date(value: Any) -> date:
    """Accept date, datetime or ISO string (YYYY-MM-DD or full timestamp)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        return date.fromisoformat(value.strip()[:10])
    raise PositionValidationError(f"Invalid date: {value!r}")


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _whole_shares(value: Any, name: str) -> int:
    """Share counts must be whole numbers; 100.0 is accepted, 100.5 is not."""
    if value is None or isinstance(value, bool):
        raise PositionValidationError(f"{name} is required")
    shares = float(value)
    if not math.isfinite(shares) or shares != int(shares):
        raise PositionValidationError(f"{name} must be a whole number, got {value!r}")
    return int(shares)


def _required_ticker(value: Any) -> str:
    ticker = str(value).strip().upper() if value is not None else ""
    if not ticker:
        raise PositionValidationError("ticker is required")
    return ticker


@dataclass(frozen=True)
class Exit:
    """Partial or full sale of a position. Immutable once recorded."""
    exit_id: str
    position_id: str
    exit_date: date
    exit_price: float
    shares_sold: int
    exit_fee: float = 0.0
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exit_id": self.exit_id,
            "position_id": self.position_id,
            "exit_date": self.exit_date.isoformat(),
            "exit_price": self.exit_price,
            "shares_sold": self.shares_sold,
            "exit_fee": self.exit_fee,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any], position_id: Optional[str] = None) -> "Exit":
        try:
            e = cls(
                exit_id=d.get("exit_id") or d.get("id") or generate_exit_id(),
                position_id=d.get("position_id") or position_id or "",
                exit_date=parse_date(d["exit_date"]),
                exit_price=float(d["exit_price"]),
                shares_sold=_whole_shares(d["shares_sold"], "shares_sold"),
                exit_fee=float(d.get("exit_fee") or 0),
                notes=d.get("notes"),
            )
        except PositionValidationError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise PositionValidationError(f"Invalid exit record {d!r}: {exc}") from exc
        validate_exit(e)
        return e


@dataclass
class Position:
    """Journal position: entry terms, stop, setup label and its exits."""
    position_id: str
    ticker: str
    direction: Direction
    entry_date: date
    entry_price: float
    total_shares: int
    stop_price: float
    setup_type: str = ""
    entry_fee: float = 0.0
    current_price: Optional[float] = None  # only meaningful while open
    notes: Optional[str] = None
    ncfd_reading: Optional[float] = None
    market_cycle: Optional[MarketCycle] = None
    exits: List[Exit] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position_id": self.position_id,
            "ticker": self.ticker,
            "direction": self.direction.value,
            "entry_date": self.entry_date.isoformat(),
            "entry_price": self.entry_price,
            "total_shares": self.total_shares,
            "stop_price": self.stop_price,
            "setup_type": self.setup_type,
            "entry_fee": self.entry_fee,
            "current_price": self.current_price,
            "notes": self.notes,
            "ncfd_reading": self.ncfd_reading,
            "market_cycle": self.market_cycle.value if self.market_cycle else None,
            "exits": [e.to_dict() for e in self.exits],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Position":
        position_id = d.get("position_id") or d.get("id") or generate_position_id()
        try:
            cycle = d.get("market_cycle")
            p = cls(
                position_id=position_id,
                ticker=_required_ticker(d["ticker"]),
                direction=Direction(str(d.get("direction", "long")).lower()),
                entry_date=parse_date(d["entry_date"]),
                entry_price=float(d["entry_price"]),
                total_shares=_whole_shares(d["total_shares"], "total_shares"),
                stop_price=float(d["stop_price"]),
                setup_type=d.get("setup_type") or "",
                entry_fee=float(d.get("entry_fee") or 0),
                current_price=_optional_float(d.get("current_price")),
                notes=d.get("notes"),
                ncfd_reading=_optional_float(d.get("ncfd_reading")),
                market_cycle=MarketCycle(str(cycle).lower()) if cycle else None,
                exits=[Exit.from_dict(e, position_id) for e in d.get("exits") or []],
            )
        except PositionValidationError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise PositionValidationError(f"Invalid position record: {exc}") from exc
        validate_position(p)
        return p


@dataclass(frozen=True)
class SetupType:
    """Setup catalog entry: name plus display color."""
    name: str
    color: str = "#6b7280"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SetupType":
        return cls(name=str(d["name"]), color=str(d.get("color") or "#6b7280"))


@dataclass(frozen=True)
class Account:
    """Starting capital for one calendar year."""
    year: int
    starting_capital: float

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, "starting_capital": self.starting_capital}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Account":
        return cls(year=int(d["year"]), starting_capital=float(d.get("starting_capital") or 0))


@dataclass(frozen=True)
class PositionMetrics:
    """Derived metrics for one position. Recomputed on demand, never persisted."""
    shares_remaining: int
    shares_sold: int
    is_open: bool
    realized_pnl: float
    unrealized_pnl: float
    total_pnl: float
    average_exit_price: Optional[float]
    total_exit_fees: float
    risk_per_share: float
    total_risk: float
    r_multiple: float
    exit_count: int
    days_held: int
    last_exit_date: Optional[date]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shares_remaining": self.shares_remaining,
            "shares_sold": self.shares_sold,
            "is_open": self.is_open,
            "realized_pnl": self.realized_pnl,
            "unrealized_pnl": self.unrealized_pnl,
            "total_pnl": self.total_pnl,
            "average_exit_price": self.average_exit_price,
            "total_exit_fees": self.total_exit_fees,
            "risk_per_share": self.risk_per_share,
            "total_risk": self.total_risk,
            "r_multiple": self.r_multiple,
            "exit_count": self.exit_count,
            "days_held": self.days_held,
            "last_exit_date": self.last_exit_date.isoformat() if self.last_exit_date else None,
        }


def validate_position(p: Position) -> None:
    """Field-level checks. Raises PositionValidationError on the first violation."""
    if not p.ticker:
        raise PositionValidationError(f"Position {p.position_id}: ticker is required")
    if not (math.isfinite(p.entry_price) and p.entry_price > 0):
        raise PositionValidationError(f"Position {p.position_id}: entry_price must be > 0")
    if not (math.isfinite(p.stop_price) and p.stop_price > 0):
        raise PositionValidationError(f"Position {p.position_id}: stop_price must be > 0")
    if p.total_shares <= 0:
        raise PositionValidationError(f"Position {p.position_id}: total_shares must be > 0")
    if not (math.isfinite(p.entry_fee) and p.entry_fee >= 0):
        raise PositionValidationError(f"Position {p.position_id}: entry_fee must be >= 0")
    if p.current_price is not None and not (math.isfinite(p.current_price) and p.current_price > 0):
        raise PositionValidationError(f"Position {p.position_id}: current_price must be > 0")
    for e in p.exits:
        if e.position_id and e.position_id != p.position_id:
            raise PositionValidationError(
                f"Exit {e.exit_id} belongs to {e.position_id}, not {p.position_id}"
            )
        validate_exit(e)


def validate_exit(e: Exit) -> None:
    if not (math.isfinite(e.exit_price) and e.exit_price > 0):
        raise PositionValidationError(f"Exit {e.exit_id}: exit_price must be > 0")
    if e.shares_sold <= 0:
        raise PositionValidationError(f"Exit {e.exit_id}: shares_sold must be > 0")
    if not (math.isfinite(e.exit_fee) and e.exit_fee >= 0):
        raise PositionValidationError(f"Exit {e.exit_id}: exit_fee must be >= 0")


def generate_position_id() -> str:
    """Generate a unique position ID."""
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"pos_{ts}_{uuid.uuid4().hex[:8]}"


def generate_exit_id() -> str:
    """Generate a unique exit ID."""
    return f"exit_{uuid.uuid4().hex[:12]}"
