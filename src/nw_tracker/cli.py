from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from nw_tracker.cli_commands.common import CliContext

app = typer.Typer(add_completion=False, help="Net worth tracker CLI")
asset_app = typer.Typer(add_completion=False, help="Manage assets")
app.add_typer(asset_app, name="asset")
snapshot_app = typer.Typer(add_completion=False, help="Manage snapshots")
app.add_typer(snapshot_app, name="snapshot")

_COMMANDS_REGISTERED = False


@app.callback()
def root(
    ctx: typer.Context,
    portfolio: Optional[Path] = typer.Option(
        None, "--portfolio", help="Portfolio JSON file (overrides NW_TRACKER_PORTFOLIO and the config dir)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
):
    from nw_tracker.config import load_settings
    from nw_tracker.utils.logging import setup_logging

    settings = load_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = CliContext(settings=settings, path_override=portfolio)


def _register_commands() -> None:
    global _COMMANDS_REGISTERED
    if _COMMANDS_REGISTERED:
        return
    from nw_tracker.cli_commands.asset_cmd import register as register_asset
    from nw_tracker.cli_commands.report_cmd import register as register_report
    from nw_tracker.cli_commands.snapshot_cmd import register as register_snapshot

    register_asset(asset_app)
    register_snapshot(snapshot_app)
    register_report(app)
    _COMMANDS_REGISTERED = True


def main():
    _register_commands()
    app()


# Console-script entrypoint is `nw_tracker.cli:main`; tests import `app` directly.
_register_commands()


if __name__ == "__main__":
    main()
