from __future__ import annotations

from .formatter import build_snapshot_table, format_snapshot_table
from .generator import format_balance, format_fiat, snapshot_to_dict

__all__ = [
    "build_snapshot_table",
    "format_balance",
    "format_fiat",
    "format_snapshot_table",
    "snapshot_to_dict",
]
