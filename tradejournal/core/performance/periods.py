# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Report periods and their start-date cutoffs."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional


class TimePeriod(str, Enum):
    MTD = "mtd"
    QTD = "qtd"
    YTD = "ytd"
    ONE_YEAR = "1y"
    ALL = "all"


def period_start(period: TimePeriod | str, today: Optional[date] = None) -> Optional[date]:
    """
    First date included in `period`, or None for ALL.

    MTD: 1st of the current month. QTD: 1st of Jan/Apr/Jul/Oct.
    YTD: Jan 1. ONE_YEAR: same calendar day twelve months back (Feb 29 -> Mar 1).
    """
    period = TimePeriod(period)
    today = today or date.today()
    if period == TimePeriod.MTD:
        return today.replace(day=1)
    if period == TimePeriod.QTD:
        quarter_start_month = ((today.month - 1) // 3) * 3 + 1
        return date(today.year, quarter_start_month, 1)
    if period == TimePeriod.YTD:
        return date(today.year, 1, 1)
    if period == TimePeriod.ONE_YEAR:
        try:
            return today.replace(year=today.year - 1)
        except ValueError:
            return date(today.year - 1, 3, 1)
    return None
