#!/usr/bin/env python3
# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""
TradeJournal performance report CLI.

Usage:
    python scripts/journal_report.py snapshot.json
    python scripts/journal_report.py snapshot.json --year 2025 --period all --mode r
    python scripts/journal_report.py snapshot.json --csv out/positions.csv
    python scripts/journal_report.py snapshot.json --size 50 47.5 --risk-percent 0.5

Environment variables:
    TRADEJOURNAL_DEFAULT_PERIOD         - Curve period when --period is omitted (mtd, qtd, ytd, 1y, all)
    TRADEJOURNAL_CURVE_MODE             - Curve mode when --mode is omitted (percent, r)
    TRADEJOURNAL_INCLUDE_UNCATEGORIZED  - Group unknown setup labels into "Uncategorized"
    TRADEJOURNAL_DEFAULT_RISK_PERCENT   - Risk percent for --size when --risk-percent is omitted
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from tradejournal.core.config import load_config
from tradejournal.core.journal.export import export_positions_csv
from tradejournal.core.journal.models import PositionValidationError
from tradejournal.core.journal.snapshot import load_snapshot_file
from tradejournal.core.performance.equity_curve import build_curve
from tradejournal.core.performance.monthly import available_years, monthly_returns, select_year
from tradejournal.core.performance.periods import TimePeriod, period_start
from tradejournal.core.performance.setups import analyze_by_setup
from tradejournal.core.performance.sizing import size_position
from tradejournal.core.performance.summary import heat_level, summarize_portfolio

logger = logging.getLogger("journal_report")


def build_report(snapshot, *, year: int, period: str, mode: str, include_uncategorized: bool,
                 today: date) -> dict:
    """Run every aggregation over one snapshot."""
    config = load_config()
    capital = snapshot.capital_for_year(year)
    cutoff = period_start(TimePeriod(period), today)

    summary = summarize_portfolio(snapshot.positions, snapshot.capital_for_year(today.year), today=today)
    curve = build_curve(snapshot.positions, capital, cutoff, mode=mode)
    monthly = monthly_returns(snapshot.positions, year, capital)
    setups = analyze_by_setup(
        snapshot.positions,
        snapshot.setup_types,
        include_uncategorized=include_uncategorized,
        today=today,
    )
    return {
        "as_of": today.isoformat(),
        "year": year,
        "starting_capital": capital,
        "summary": {
            **summary.to_dict(),
            "heat_level": heat_level(
                summary.portfolio_heat_pct, config.risk.heat_low_pct, config.risk.heat_high_pct
            ).value,
        },
        "curve": {
            "period": period,
            "cutoff": cutoff.isoformat() if cutoff else None,
            "mode": mode,
            "points": [p.to_dict() for p in curve],
        },
        "monthly": monthly.to_dict(),
        "setups": [s.to_dict() for s in setups],
    }


def build_sizing(snapshot, *, entry_price: float, stop_price: float, risk_percent: float,
                 today: date) -> dict:
    """Size a planned entry against this year's starting capital."""
    risk = load_config().risk
    if risk_percent not in risk.risk_percent_choices:
        choices = ", ".join(f"{c:g}" for c in risk.risk_percent_choices)
        raise ValueError(f"risk percent {risk_percent:g} is not one of the configured choices ({choices})")
    capital = snapshot.capital_for_year(today.year)
    size = size_position(entry_price, stop_price, risk_percent, capital)
    logger.debug("Sized %s/%s at %g%% of %.2f: %d shares", entry_price, stop_price, risk_percent, capital, size.shares)
    return {
        "entry_price": entry_price,
        "stop_price": stop_price,
        "risk_percent": risk_percent,
        "capital": capital,
        **size.to_dict(),
    }


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="TradeJournal performance report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("snapshot", type=Path, help="Journal snapshot JSON file")
    parser.add_argument("--year", type=int, default=None, help="Year for monthly returns (default: current or newest)")
    parser.add_argument("--period", choices=[p.value for p in TimePeriod], default=None,
                        help="Equity curve period (default: from config)")
    parser.add_argument("--mode", choices=["percent", "r"], default=None,
                        help="Equity curve value mode (default: from config)")
    parser.add_argument("--include-uncategorized", action="store_true",
                        help="Report positions with unknown setup labels as 'Uncategorized'")
    parser.add_argument("--csv", type=Path, default=None, help="Also write positions CSV to this path")
    parser.add_argument("--size", nargs=2, type=float, metavar=("ENTRY", "STOP"), default=None,
                        help="Add a position size for this entry and stop price")
    parser.add_argument("--risk-percent", type=float, default=None,
                        help="Percent of capital to risk with --size (default: from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    config = load_config()
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or config.debug) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    today = date.today()
    try:
        snapshot = load_snapshot_file(args.snapshot)
        year = args.year or select_year(available_years(snapshot.positions), today.year, today)
        report = build_report(
            snapshot,
            year=year,
            period=args.period or config.report.default_period,
            mode=args.mode or config.report.curve_mode,
            include_uncategorized=args.include_uncategorized or config.setups.include_uncategorized,
            today=today,
        )
    except FileNotFoundError:
        logger.error("Snapshot not found: %s", args.snapshot)
        return 1
    except (PositionValidationError, json.JSONDecodeError) as e:
        logger.error("Invalid journal snapshot %s: %s", args.snapshot, e)
        return 1

    if args.size:
        entry_price, stop_price = args.size
        risk_percent = args.risk_percent if args.risk_percent is not None else config.risk.default_risk_percent
        try:
            report["sizing"] = build_sizing(
                snapshot, entry_price=entry_price, stop_price=stop_price,
                risk_percent=risk_percent, today=today,
            )
        except ValueError as e:
            logger.error("Cannot size position: %s", e)
            return 1

    if args.csv:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        args.csv.write_text(export_positions_csv(snapshot.positions, today=today), encoding="utf-8")
        logger.info("Wrote %s", args.csv)

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
