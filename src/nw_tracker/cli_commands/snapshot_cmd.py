from __future__ import annotations

import typer

from nw_tracker.cli_commands.common import get_context, reporting_errors


def register(snapshot_app: typer.Typer) -> None:
    @snapshot_app.command("add")
    def snapshot_add(
        ctx: typer.Context,
        date: str = typer.Option(..., "--date", help="Snapshot date, YYYY-MM-DD."),
    ):
        """Record a new snapshot: one rate per non-USD currency, then a value per asset."""
        from nw_tracker.errors import SnapshotAlreadyExists
        from nw_tracker.portfolio import add_snapshot, non_usd_currencies, validate_date
        from nw_tracker.prompt import prompt_asset_values, prompt_rates
        from nw_tracker.store import load_portfolio, save_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            path = get_context(ctx).path()
            portfolio = load_portfolio(path=path)
            validate_date(date)
            if portfolio.find_snapshot(date) is not None:
                raise SnapshotAlreadyExists(date)
            rates = prompt_rates(non_usd_currencies(portfolio))
            values = prompt_asset_values(portfolio.assets)
            add_snapshot(portfolio, date, rates, values)
            save_portfolio(portfolio, path=path)
        console.print("Snapshot saved.")

    @snapshot_app.command("edit")
    def snapshot_edit(
        ctx: typer.Context,
        date: str = typer.Option(..., "--date", help="Snapshot date, YYYY-MM-DD."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip the overwrite confirmation."),
    ):
        """Re-enter rates and values for an existing snapshot (Enter keeps the old value)."""
        from nw_tracker.portfolio import edit_snapshot, existing_values, get_snapshot, non_usd_currencies
        from nw_tracker.prompt import confirm, prompt_asset_values, prompt_rates
        from nw_tracker.store import load_portfolio, save_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            path = get_context(ctx).path()
            portfolio = load_portfolio(path=path)
            existing = get_snapshot(portfolio, date)
            if not yes and not confirm(f"Overwrite snapshot for {date}?"):
                console.print("Aborted.")
                raise typer.Exit(code=0)
            rates = prompt_rates(non_usd_currencies(portfolio), existing.rates)
            values = prompt_asset_values(portfolio.assets, existing_values(existing))
            edit_snapshot(portfolio, date, rates, values)
            save_portfolio(portfolio, path=path)
        console.print("Snapshot updated.")

    @snapshot_app.command("list")
    def snapshot_list(ctx: typer.Context):
        """List all snapshots."""
        from nw_tracker.display import print_snapshot_list
        from nw_tracker.store import load_portfolio

        with reporting_errors():
            portfolio = load_portfolio(path=get_context(ctx).path())
        print_snapshot_list(portfolio.snapshots)
