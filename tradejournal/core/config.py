# Copyright 2026 TradeJournal
# SPDX-License-Identifier: MIT
"""Centralized configuration loader for TradeJournal reports.

Loads config.yaml from the repository root and provides typed access to settings.
Falls back to sensible defaults if config.yaml is missing or incomplete.
Environment variables override config.yaml values.

Only callers (CLI, report builders) read this; the performance engine takes
every input as an explicit argument.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

_CONFIG_CACHE: Optional["TradeJournalConfig"] = None

_PERIODS = ("mtd", "qtd", "ytd", "1y", "all")
_CURVE_MODES = ("percent", "r")
_DEFAULT_RISK_CHOICES = (0.25, 0.3, 0.5, 0.75, 1.0, 1.5, 2.0)


def _repo_root() -> Path:
    """Return the repository root."""
    # tradejournal/core/config.py -> repo root
    return Path(__file__).resolve().parents[2]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "")
    if raw.lower() in ("true", "1", "yes"):
        return True
    if raw.lower() in ("false", "0", "no"):
        return False
    return bool(default)


@dataclass(frozen=True)
class ReportConfig:
    """Default report period and equity-curve mode."""
    default_period: str  # mtd, qtd, ytd, 1y, all
    curve_mode: str  # percent or r


@dataclass(frozen=True)
class SetupsConfig:
    """Setup cohort analysis options."""
    include_uncategorized: bool


@dataclass(frozen=True)
class RiskConfig:
    """Portfolio heat thresholds and position sizing defaults."""
    heat_low_pct: float
    heat_high_pct: float
    default_risk_percent: float
    risk_percent_choices: Tuple[float, ...]


@dataclass(frozen=True)
class TradeJournalConfig:
    """Root configuration object."""
    report: ReportConfig
    setups: SetupsConfig
    risk: RiskConfig
    debug: bool


def _load_yaml_config(path: Optional[Path] = None) -> dict:
    """Load config.yaml (repo root by default). Returns empty dict if not found."""
    config_path = path or _repo_root() / "config.yaml"
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}


def load_config(*, reload: bool = False, path: Optional[Path] = None) -> TradeJournalConfig:
    """Load and return the TradeJournal configuration.

    Priority order (highest to lowest):
    1. Environment variables (TRADEJOURNAL_DEFAULT_PERIOD, TRADEJOURNAL_CURVE_MODE, etc.)
    2. config.yaml values
    3. Built-in defaults

    Parameters
    ----------
    reload : bool
        If True, force reload from disk. Otherwise use cached config.
    path : Path, optional
        Explicit config file; implies a reload.

    Returns
    -------
    TradeJournalConfig
        The loaded configuration.
    """
    global _CONFIG_CACHE

    if _CONFIG_CACHE is not None and not reload and path is None:
        return _CONFIG_CACHE

    raw = _load_yaml_config(path)

    # Report configuration
    report_raw = raw.get("report", {}) or {}
    default_period = os.getenv(
        "TRADEJOURNAL_DEFAULT_PERIOD",
        str(report_raw.get("default_period", "ytd"))
    ).lower()
    if default_period not in _PERIODS:
        default_period = "ytd"
    curve_mode = os.getenv(
        "TRADEJOURNAL_CURVE_MODE",
        str(report_raw.get("curve_mode", "percent"))
    ).lower()
    if curve_mode not in _CURVE_MODES:
        curve_mode = "percent"

    report_config = ReportConfig(default_period=default_period, curve_mode=curve_mode)

    # Setup cohorts
    setups_raw = raw.get("setups", {}) or {}
    setups_config = SetupsConfig(
        include_uncategorized=_env_flag(
            "TRADEJOURNAL_INCLUDE_UNCATEGORIZED",
            setups_raw.get("include_uncategorized", False),
        ),
    )

    # Risk: heat thresholds (% of capital) and sizing defaults
    risk_raw = raw.get("risk", {}) or {}
    heat_low = float(os.getenv("TRADEJOURNAL_HEAT_LOW_PCT", str(risk_raw.get("heat_low_pct", 3.0))))
    heat_high = float(os.getenv("TRADEJOURNAL_HEAT_HIGH_PCT", str(risk_raw.get("heat_high_pct", 6.0))))
    if heat_high < heat_low:
        heat_low, heat_high = 3.0, 6.0
    default_risk = float(os.getenv(
        "TRADEJOURNAL_DEFAULT_RISK_PERCENT",
        str(risk_raw.get("default_risk_percent", 1.0))
    ))
    choices = risk_raw.get("risk_percent_choices") or _DEFAULT_RISK_CHOICES
    risk_choices = tuple(sorted(float(c) for c in choices))

    risk_config = RiskConfig(
        heat_low_pct=heat_low,
        heat_high_pct=heat_high,
        default_risk_percent=default_risk,
        risk_percent_choices=risk_choices,
    )

    # App-level settings
    app_raw = raw.get("app", {}) or {}
    debug = _env_flag("TRADEJOURNAL_DEBUG", app_raw.get("debug", False))

    config = TradeJournalConfig(
        report=report_config,
        setups=setups_config,
        risk=risk_config,
        debug=debug,
    )

    _CONFIG_CACHE = config
    return config


def get_default_period() -> str:
    """Convenience: return the default report period from config."""
    return load_config().report.default_period


def get_curve_mode() -> str:
    """Convenience: return the equity-curve mode from config."""
    return load_config().report.curve_mode


def get_heat_thresholds() -> Tuple[float, float]:
    """Convenience: return (low, high) portfolio heat thresholds in % of capital."""
    risk = load_config().risk
    return risk.heat_low_pct, risk.heat_high_pct


__all__ = [
    "TradeJournalConfig",
    "ReportConfig",
    "SetupsConfig",
    "RiskConfig",
    "load_config",
    "get_default_period",
    "get_curve_mode",
    "get_heat_thresholds",
]
