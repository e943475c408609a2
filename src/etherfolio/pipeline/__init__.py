from __future__ import annotations

from .preflight import PreflightError, run_preflight
from .run import build_aggregator, run_portfolio

__all__ = ["PreflightError", "build_aggregator", "run_portfolio", "run_preflight"]
