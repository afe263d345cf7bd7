"""Simple reporting utilities for console output."""

from __future__ import annotations

from datetime import timedelta
from typing import Mapping


def format_duration(value: timedelta) -> str:
    """Render as HH:MM:SS.t; segments at the poll cadence are sub-second."""
    tenths = int(round(value.total_seconds() * 10))
    total_seconds, fraction = divmod(tenths, 10)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{fraction}"


def render_ledger(ledger: Mapping[str, timedelta]) -> str:
    """Render session totals, longest first."""
    if not ledger:
        return "No usage recorded yet."
    items = sorted(ledger.items(), key=lambda item: item[1], reverse=True)
    return "\n".join(f"  {app:<30} {format_duration(total)}" for app, total in items)


def print_ledger(ledger: Mapping[str, timedelta]) -> None:
    print("-" * 40)
    print(render_ledger(ledger))
