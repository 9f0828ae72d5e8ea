# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Position metrics: realized/unrealized PnL, R-multiple and days held from a position and its exits.

Conventions (all amounts in total dollars, not per share):
- Gross PnL is directional: LONG (exit - entry) * shares, SHORT (entry - exit) * shares.
- Entry fee is prorated linearly by share count: (n / total_shares) * entry_fee.
  Every exit slice and the still-open remainder carry their own share of it.
- total_risk is measured against the original full size and is never reduced
  as shares are sold, so R-multiples across a position's life share one denominator.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from tradejournal.core.journal.models import (
    Direction,
    Exit,
    Position,
    PositionMetrics,
    PositionValidationError,
)

logger = logging.getLogger(__name__)


def directional_pnl(position: Position, price: float, shares: int) -> float:
    """Gross PnL of `shares` closed (or marked) at `price`, before any fees."""
    if position.direction == Direction.SHORT:
        return (position.entry_price - price) * shares
    return (price - position.entry_price) * shares


def proportional_entry_fee(position: Position, shares: int) -> float:
    """Entry fee allocated to `shares` of the position."""
    if position.total_shares <= 0:
        return 0.0
    return (shares / position.total_shares) * position.entry_fee


def risk_per_share(position: Position) -> float:
    return abs(position.entry_price - position.stop_price)


def compute_exit_pnl(position: Position, exit: Exit, proportional_fee: float) -> float:
    """
    Net PnL of a single exit: directional gross - exit fee - proportional entry fee.

    The entry fee slice is passed in by the caller, so this never needs the
    rest of the exit history.
    """
    gross = directional_pnl(position, exit.exit_price, exit.shares_sold)
    return gross - exit.exit_fee - proportional_fee


def exit_r_multiple(position: Position, exit: Exit, pnl: float) -> float:
    """R of one exit against that exit's own share count. 0.0 when there is no stop distance."""
    risk = risk_per_share(position) * exit.shares_sold
    return pnl / risk if risk > 0 else 0.0


def compute_position_metrics(
    position: Position,
    exits: Optional[Sequence[Exit]] = None,
    *,
    today: Optional[date] = None,
) -> PositionMetrics:
    """
    Compute the full metrics record for one position.

    - exits defaults to position.exits.
    - days_held runs to the last exit date, or to `today` (default: date.today())
      while there are no exits; for such positions the value changes daily.
    - Raises PositionValidationError if exits sell more shares than the position holds.
    """
    exits = list(position.exits if exits is None else exits)

    shares_sold = sum(e.shares_sold for e in exits)
    if shares_sold > position.total_shares:
        raise PositionValidationError(
            f"Position {position.position_id} ({position.ticker}): exits sell {shares_sold} "
            f"shares but only {position.total_shares} were bought"
        )
    shares_remaining = position.total_shares - shares_sold
    is_open = shares_remaining > 0

    total_exit_fees = sum(e.exit_fee for e in exits)
    last_exit_date = max((e.exit_date for e in exits), default=None)

    end = last_exit_date or today or date.today()
    days_held = (end - position.entry_date).days

    realized = 0.0
    weighted_exit_sum = 0.0
    for e in exits:
        realized += compute_exit_pnl(position, e, proportional_entry_fee(position, e.shares_sold))
        weighted_exit_sum += e.exit_price * e.shares_sold

    average_exit_price = weighted_exit_sum / shares_sold if shares_sold > 0 else None

    unrealized = 0.0
    if is_open and position.current_price is not None:
        unrealized = directional_pnl(position, position.current_price, shares_remaining)
        unrealized -= proportional_entry_fee(position, shares_remaining)

    total_pnl = realized + unrealized

    rps = risk_per_share(position)
    total_risk = rps * position.total_shares
    r_multiple = total_pnl / total_risk if total_risk > 0 else 0.0

    logger.debug(
        "[METRICS] %s: exits=%d sold=%d remaining=%d total_pnl=%.2f R=%.2f",
        position.ticker, len(exits), shares_sold, shares_remaining, total_pnl, r_multiple,
    )

    return PositionMetrics(
        shares_remaining=shares_remaining,
        shares_sold=shares_sold,
        is_open=is_open,
        realized_pnl=realized,
        unrealized_pnl=unrealized,
        total_pnl=total_pnl,
        average_exit_price=average_exit_price,
        total_exit_fees=total_exit_fees,
        risk_per_share=rps,
        total_risk=total_risk,
        r_multiple=r_multiple,
        exit_count=len(exits),
        days_held=days_held,
        last_exit_date=last_exit_date,
    )
