"""Number formatting for the terminal views."""
from __future__ import annotations

EMPTY_CELL = "—"


def fmt_currency(value: float) -> str:
    """1234567.891 -> '1,234,567.89' (no currency symbol; amounts may be native or USD)."""
    return f"{value:,.2f}"


def fmt_change(value: float | None) -> str:
    if value is None:
        return EMPTY_CELL
    return f"{value:+,.2f}"


def fmt_pct(value: float | None) -> str:
    if value is None:
        return EMPTY_CELL
    return f"{value:+.2f}%"


def color_for_pnl(value: float | None) -> str:
    if value is None:
        return "white"
    if value > 0:
        return "green"
    elif value < 0:
        return "red"
    return "white"
