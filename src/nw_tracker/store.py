from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from nw_tracker.config import portfolio_path
from nw_tracker.errors import MalformedDocumentError, ReadFileError, SerializeError, WriteFileError
from nw_tracker.model import Portfolio

logger = logging.getLogger(__name__)


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def load_portfolio(*, path: str | Path | None = None) -> Portfolio:
    """
    Read the portfolio document.

    A missing file is a first run and yields an empty Portfolio. Unreadable or
    malformed files raise ReadFileError / MalformedDocumentError with the path.
    """
    path = Path(path) if path is not None else portfolio_path()
    if not path.exists():
        logger.debug("No portfolio file at %s; starting empty", path)
        return Portfolio()

    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadFileError(str(path), exc) from exc

    try:
        portfolio = Portfolio.model_validate_json(contents)
    except ValidationError as exc:
        raise MalformedDocumentError(str(path), exc) from exc

    logger.debug(
        "Loaded %s: %d asset(s), %d snapshot(s)", path, len(portfolio.assets), len(portfolio.snapshots)
    )
    return portfolio


def save_portfolio(portfolio: Portfolio, *, path: str | Path | None = None) -> Path:
    """
    Write the portfolio document atomically.

    Snapshots are sorted ascending by date here and nowhere else. The document
    is written to a sibling ``.tmp`` file and renamed over the target, so the
    target always holds either the previous or the new complete document.
    """
    path = Path(path) if path is not None else portfolio_path()

    portfolio.sort_snapshots()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteFileError(str(path.parent), exc) from exc

    try:
        contents = portfolio.model_dump_json(indent=2)
    except (ValueError, TypeError) as exc:
        raise SerializeError(str(path), exc) from exc

    tmp = _tmp_path(path)
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(contents)
            f.flush()
            os.fsync(f.fileno())
    except OSError as exc:
        _discard(tmp)
        raise WriteFileError(str(tmp), exc) from exc

    try:
        os.replace(tmp, path)
    except OSError as exc:
        _discard(tmp)
        raise WriteFileError(str(path), exc) from exc

    logger.debug("Saved %s: %d snapshot(s)", path, len(portfolio.snapshots))
    return path


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink()
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", tmp, exc)
