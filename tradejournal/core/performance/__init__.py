# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Performance analytics: equity curve, monthly returns, setup cohorts, portfolio summary."""

from tradejournal.core.performance.periods import TimePeriod, period_start
from tradejournal.core.performance.equity_curve import CurveMode, CurvePoint, ExitEvent, build_curve, build_exit_events
from tradejournal.core.performance.monthly import MonthlyBucket, MonthlyReturns, available_years, compound_return, monthly_returns, select_year
from tradejournal.core.performance.setups import SetupAnalysis, analyze_by_setup, lookup_setup
from tradejournal.core.performance.summary import HeatLevel, PortfolioSummary, heat_level, portfolio_heat, summarize_portfolio
from tradejournal.core.performance.sizing import PositionSize, size_position
from tradejournal.core.performance.filters import filter_positions

__all__ = [
    "TimePeriod",
    "period_start",
    "CurveMode",
    "CurvePoint",
    "ExitEvent",
    "build_curve",
    "build_exit_events",
    "MonthlyBucket",
    "MonthlyReturns",
    "available_years",
    "compound_return",
    "monthly_returns",
    "select_year",
    "SetupAnalysis",
    "analyze_by_setup",
    "lookup_setup",
    "HeatLevel",
    "PortfolioSummary",
    "heat_level",
    "portfolio_heat",
    "summarize_portfolio",
    "PositionSize",
    "size_position",
    "filter_positions",
]
