from __future__ import annotations

from typing import Optional

import typer

from nw_tracker.cli_commands.common import get_context, reporting_errors


def register(asset_app: typer.Typer) -> None:
    @asset_app.command("add")
    def asset_add(
        ctx: typer.Context,
        asset_id: str = typer.Option(..., "--id", help="Stable identifier, e.g. 'vti'."),
        name: str = typer.Option(..., "--name", help="Display name."),
        category: str = typer.Option(..., "--category", help="Category, e.g. etf, bank, crypto."),
        currency: str = typer.Option(..., "--currency", help="Currency code, e.g. USD, EUR."),
    ):
        """Add a new asset."""
        from nw_tracker.portfolio import add_asset
        from nw_tracker.store import load_portfolio, save_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            path = get_context(ctx).path()
            portfolio = load_portfolio(path=path)
            add_asset(portfolio, asset_id, name, category, currency)
            save_portfolio(portfolio, path=path)
        console.print("Asset added.")

    @asset_app.command("edit")
    def asset_edit(
        ctx: typer.Context,
        asset_id: str = typer.Option(..., "--id", help="Asset to edit."),
        name: Optional[str] = typer.Option(None, "--name"),
        category: Optional[str] = typer.Option(None, "--category"),
        currency: Optional[str] = typer.Option(None, "--currency"),
    ):
        """Edit an existing asset."""
        from nw_tracker.portfolio import edit_asset
        from nw_tracker.store import load_portfolio, save_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            path = get_context(ctx).path()
            portfolio = load_portfolio(path=path)
            changed = edit_asset(portfolio, asset_id, name=name, category=category, currency=currency)
            if changed:
                save_portfolio(portfolio, path=path)
        console.print("Asset updated." if changed else "Nothing to update.")

    @asset_app.command("remove")
    def asset_remove(
        ctx: typer.Context,
        asset_id: str = typer.Option(..., "--id", help="Asset to remove."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    ):
        """Remove an asset. Past snapshots keep their entries but stop counting them."""
        from nw_tracker.errors import AssetNotFound
        from nw_tracker.portfolio import count_asset_references, remove_asset
        from nw_tracker.prompt import confirm
        from nw_tracker.store import load_portfolio, save_portfolio
        from nw_tracker.utils.logging import console

        with reporting_errors():
            path = get_context(ctx).path()
            portfolio = load_portfolio(path=path)
            if portfolio.find_asset(asset_id) is None:
                raise AssetNotFound(asset_id)
            count = count_asset_references(portfolio, asset_id)
            if not yes and not confirm(f"This asset appears in {count} snapshot(s). Are you sure?"):
                console.print("Aborted.")
                raise typer.Exit(code=0)
            remove_asset(portfolio, asset_id)
            save_portfolio(portfolio, path=path)
        console.print("Asset removed.")

    @asset_app.command("list")
    def asset_list(ctx: typer.Context):
        """List all assets."""
        from nw_tracker.display import print_asset_list
        from nw_tracker.store import load_portfolio

        with reporting_errors():
            portfolio = load_portfolio(path=get_context(ctx).path())
        print_asset_list(portfolio.assets)
