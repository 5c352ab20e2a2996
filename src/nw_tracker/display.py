from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nw_tracker.model import Asset, HistoryReport, ShowReport, ShowRow, Snapshot
from nw_tracker.utils.formatting import color_for_pnl, fmt_change, fmt_currency, fmt_pct
from nw_tracker.utils.logging import console as default_console


def print_show(report: ShowReport, console: Console | None = None) -> None:
    c = console or default_console
    title = "NET WORTH" if report.category else "CURRENT NET WORTH"
    c.print(f"[bold]{title} — {report.date}[/bold]")

    by_category: dict[str, list[ShowRow]] = {}
    for row in report.rows:
        by_category.setdefault(row.category, []).append(row)

    for category in sorted(by_category):
        tbl = Table(title=category.upper(), title_justify="left", box=None, pad_edge=False)
        tbl.add_column("Name")
        tbl.add_column("Currency")
        tbl.add_column("Value (native)", justify="right")
        tbl.add_column("Value (USD)", justify="right")
        subtotal = 0.0
        for row in by_category[category]:
            subtotal += row.usd_value
            tbl.add_row(escape(row.asset_name), row.currency, fmt_currency(row.native_value), fmt_currency(row.usd_value))
        tbl.add_row("[dim]Subtotal[/dim]", "", "", fmt_currency(subtotal))
        c.print()
        c.print(tbl)

    c.print()
    c.print(f"[bold]TOTAL[/bold]  {fmt_currency(report.grand_total)}")

    if report.category is None and report.allocation:
        c.print()
        c.print("[bold]ALLOCATION[/bold]")
        for category, pct in report.allocation:
            c.print(f"  {category.upper():<12} {pct:>6.1f}%")


def print_history(report: HistoryReport, console: Console | None = None) -> None:
    c = console or default_console
    c.print(f"[bold]NET WORTH HISTORY — {report.range}[/bold]")
    c.print()

    tbl = Table(box=None, pad_edge=False)
    tbl.add_column("Date")
    tbl.add_column("Total (USD)", justify="right")
    tbl.add_column("Change (USD)", justify="right")
    tbl.add_column("Change %", justify="right")
    for row in report.rows:
        color = color_for_pnl(row.change_usd)
        tbl.add_row(
            row.date,
            fmt_currency(row.total_usd),
            f"[{color}]{fmt_change(row.change_usd)}[/{color}]",
            f"[{color}]{fmt_pct(row.change_pct)}[/{color}]",
        )
    c.print(tbl)


def print_asset_list(assets: Sequence[Asset], console: Console | None = None) -> None:
    c = console or default_console
    if not assets:
        c.print("No assets yet.")
        return

    tbl = Table(box=None, pad_edge=False)
    tbl.add_column("ID", style="bold")
    tbl.add_column("Name")
    tbl.add_column("Category")
    tbl.add_column("Currency")
    for a in assets:
        tbl.add_row(escape(a.id), escape(a.name), escape(a.category), a.currency)
    c.print(tbl)


def currencies_label(snapshot: Snapshot) -> str:
    if not snapshot.rates:
        return "USD only"
    return "USD, " + ", ".join(sorted(snapshot.rates))


def print_snapshot_list(snapshots: Sequence[Snapshot], console: Console | None = None) -> None:
    c = console or default_console
    if not snapshots:
        c.print("No snapshots yet.")
        return

    tbl = Table(box=None, pad_edge=False)
    tbl.add_column("Date")
    tbl.add_column("Entries", justify="right")
    tbl.add_column("Currencies")
    for s in snapshots:
        tbl.add_row(s.date, str(len(s.entries)), currencies_label(s))
    c.print(tbl)
