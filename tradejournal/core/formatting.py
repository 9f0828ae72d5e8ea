# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Display formatting for money, percentages and R-multiples."""

from __future__ import annotations


def format_currency(value: float) -> str:
    """+$12.50 / -$3.00."""
    sign = "+" if value >= 0 else "-"
    return f"{sign}${abs(value):.2f}"


def format_percent(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def format_r_multiple(value: float) -> str:
    return f"{value:.2f}R"
