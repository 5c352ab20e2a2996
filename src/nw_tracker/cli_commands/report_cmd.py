from __future__ import annotations

from typing import Optional

import typer

from nw_tracker.cli_commands.common import get_context, reporting_errors


def register(app: typer.Typer) -> None:
    @app.command("show")
    def show(
        ctx: typer.Context,
        date: Optional[str] = typer.Option(None, "--date", help="Snapshot date (default: latest)."),
        category: Optional[str] = typer.Option(None, "--category", help="Only this category."),
    ):
        """Show net worth for the latest (or a given) snapshot."""
        from nw_tracker.display import print_show
        from nw_tracker.reports import build_show_report
        from nw_tracker.store import load_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            portfolio = load_portfolio(path=get_context(ctx).path())
            report = build_show_report(portfolio, date=date, category=category)
        if report is None:
            console.print("No snapshots yet.")
            return
        print_show(report)

    @app.command("history")
    def history(
        ctx: typer.Context,
        range_token: str = typer.Option(..., "--range", help="Time range: 1M, 6M, 1Y, 5Y, ALL."),
    ):
        """Show net worth history over a time range."""
        from nw_tracker.display import print_history
        from nw_tracker.reports import build_history_report
        from nw_tracker.store import load_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            portfolio = load_portfolio(path=get_context(ctx).path())
            report = build_history_report(portfolio, range_token)
        if not report.rows:
            console.print("No snapshots in range.")
            return
        print_history(report)
