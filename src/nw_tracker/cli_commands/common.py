from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import typer
from rich.markup import escape

from nw_tracker.config import Settings, portfolio_path
from nw_tracker.errors import NwError
from nw_tracker.utils.logging import err_console


@dataclass
class CliContext:
    """Per-invocation state handed to every command through typer's ctx.obj."""

    settings: Settings
    path_override: Path | None = None

    def path(self) -> Path:
        if self.path_override is not None:
            return self.path_override
        return portfolio_path(self.settings)


def get_context(ctx: typer.Context) -> CliContext:
    obj = ctx.find_root().obj
    if not isinstance(obj, CliContext):
        raise RuntimeError("CLI context not initialised")
    return obj


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Print tracker errors in red and exit 1; anything else propagates."""
    try:
        yield
    except NwError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
