# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Position size calculator: shares to buy so a stop-out loses a fixed % of capital."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PositionSize:
    risk_amount: float
    risk_per_share: float
    shares: int
    position_value: float
    position_pct: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_amount": self.risk_amount,
            "risk_per_share": self.risk_per_share,
            "shares": self.shares,
            "position_value": self.position_value,
            "position_pct": self.position_pct,
        }


def size_position(
    entry_price: float,
    stop_price: float,
    risk_percent: float,
    capital: float,
) -> PositionSize:
    """
    shares = floor(capital * risk_percent / 100 / |entry - stop|).

    Zero stop distance or zero capital size to 0 shares / 0%, not an error.
    Negative inputs raise ValueError.
    """
    if min(entry_price, stop_price, risk_percent, capital) < 0:
        raise ValueError("entry_price, stop_price, risk_percent and capital must be >= 0")
    risk_amount = capital * (risk_percent / 100)
    rps = abs(entry_price - stop_price)
    shares = math.floor(risk_amount / rps) if rps > 0 else 0
    position_value = shares * entry_price
    return PositionSize(
        risk_amount=risk_amount,
        risk_per_share=rps,
        shares=shares,
        position_value=position_value,
        position_pct=position_value / capital * 100 if capital > 0 else 0.0,
    )
