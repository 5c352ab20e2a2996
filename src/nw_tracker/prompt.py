"""
Interactive input for snapshot rates and values.

Pressing Enter keeps the existing value when editing. For asset values with
nothing to keep, Enter omits the asset from the snapshot.
"""
from __future__ import annotations

import math
from typing import Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from nw_tracker.model import Asset
from nw_tracker.utils.logging import console as default_console


def _to_float(raw: str) -> float | None:
    try:
        value = float(raw.replace(",", ""))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _ask(c: Console, label: str, existing: float | None) -> str:
    suffix = f" [{existing}]" if existing is not None else ""
    return Prompt.ask(f"{label}{suffix}", default="", show_default=False, console=c).strip()


def prompt_rates(
    currencies: Sequence[str],
    existing_rates: Mapping[str, float] | None = None,
    console: Console | None = None,
) -> dict[str, float]:
    c = console or default_console
    rates: dict[str, float] = {}
    if not currencies:
        return rates

    c.print("[bold]--- Exchange Rates ---[/bold]")
    for currency in currencies:
        existing = (existing_rates or {}).get(currency)
        while True:
            raw = _ask(c, f"{currency} rate (1 USD = ? {currency})", existing)
            if not raw:
                if existing is not None:
                    rates[currency] = existing
                    break
                c.print("  [yellow]Rate is required.[/yellow]")
                continue
            value = _to_float(raw)
            if value is None:
                c.print("  [yellow]Invalid number. Please try again.[/yellow]")
            elif value <= 0:
                c.print("  [yellow]Rate must be a positive number.[/yellow]")
            else:
                rates[currency] = value
                break
    return rates


def prompt_asset_values(
    assets: Sequence[Asset],
    existing_entries: Mapping[str, float] | None = None,
    console: Console | None = None,
) -> list[tuple[str, float]]:
    c = console or default_console
    entries: list[tuple[str, float]] = []
    if not assets:
        return entries

    c.print("[bold]--- Asset Values (press Enter to omit) ---[/bold]")
    for asset in assets:
        existing = (existing_entries or {}).get(asset.id)
        label = f"{escape(asset.name)} ({escape(asset.category.upper())}, {asset.currency})"
        while True:
            raw = _ask(c, label, existing)
            if not raw:
                if existing is not None:
                    entries.append((asset.id, existing))
                break
            value = _to_float(raw)
            if value is None:
                c.print("  [yellow]Invalid number. Please try again.[/yellow]")
            elif value < 0:
                c.print("  [yellow]Value must be non-negative.[/yellow]")
            else:
                entries.append((asset.id, value))
                break
    return entries


def confirm(message: str, console: Console | None = None) -> bool:
    """Yes/no question, defaulting to No."""
    return Confirm.ask(message, default=False, console=console or default_console)
