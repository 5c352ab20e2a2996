"""
Valuation, allocation, range filtering and history aggregation.

All amounts are reported in USD. A snapshot's rate table stores
"1 USD = rate units of currency", so converting native units to USD
divides by the rate (see `to_usd`).
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from nw_tracker.errors import RateMissing
from nw_tracker.model import (
    REPORTING_CURRENCY,
    HistoryRange,
    HistoryRow,
    Portfolio,
    ShowRow,
    Snapshot,
)
from nw_tracker.utils.dates import format_ymd, parse_ymd, subtract_months, subtract_years

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conversion & valuation
# ---------------------------------------------------------------------------


def to_usd(value: float, currency: str, rates: Mapping[str, float]) -> float:
    """Convert `value` in `currency` to USD. Raises RateMissing if no rate is known."""
    if currency == REPORTING_CURRENCY:
        return value
    rate = rates.get(currency)
    if rate is None:
        raise RateMissing(currency)
    return value / rate


def compute_show_rows(
    snapshot: Snapshot,
    portfolio: Portfolio,
    category_filter: str | None = None,
) -> tuple[float, list[ShowRow]]:
    """
    Value every entry of `snapshot` in USD.

    Entries whose asset no longer exists are skipped. When `category_filter`
    is set, only matching assets contribute to the rows and to the total.
    """
    assets = {a.id: a for a in portfolio.assets}
    rows: list[ShowRow] = []
    grand_total = 0.0

    for entry in snapshot.entries:
        asset = assets.get(entry.asset_id)
        if asset is None:
            continue
        if category_filter is not None and asset.category != category_filter:
            continue

        usd_value = to_usd(entry.value, asset.currency, snapshot.rates)
        grand_total += usd_value
        rows.append(
            ShowRow(
                asset_name=asset.name,
                currency=asset.currency,
                native_value=entry.value,
                usd_value=usd_value,
                category=asset.category,
            )
        )

    return grand_total, rows


def category_totals(rows: Iterable[ShowRow]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for row in rows:
        totals[row.category] = totals.get(row.category, 0.0) + row.usd_value
    return totals


def compute_allocation(category_totals: Mapping[str, float], grand_total: float) -> list[tuple[str, float]]:
    """Category share of `grand_total` in percent, largest first."""
    if grand_total == 0:
        return []
    result = [(cat, total / grand_total * 100.0) for cat, total in category_totals.items()]
    result.sort(key=lambda x: x[1], reverse=True)
    return result


def snapshot_total_usd(snapshot: Snapshot, portfolio: Portfolio) -> float:
    total, _ = compute_show_rows(snapshot, portfolio)
    return total


# ---------------------------------------------------------------------------
# Range filter
# ---------------------------------------------------------------------------


def range_cutoff(range: HistoryRange, today: str) -> str | None:
    """Earliest in-range date (inclusive) for `range`, or None when nothing is cut."""
    if range == HistoryRange.ALL:
        return None
    try:
        anchor = parse_ymd(today)
    except ValueError:
        logger.warning("Cannot parse anchor date %r; showing all snapshots", today)
        return None

    if range == HistoryRange.ONE_MONTH:
        cutoff = subtract_months(anchor, 1)
    elif range == HistoryRange.SIX_MONTHS:
        cutoff = subtract_months(anchor, 6)
    elif range == HistoryRange.ONE_YEAR:
        cutoff = subtract_years(anchor, 1)
    else:
        cutoff = subtract_years(anchor, 5)

    cutoff_str = format_ymd(cutoff)
    logger.debug("History range %s from %s: cutoff %s", range, today, cutoff_str)
    return cutoff_str


def filter_by_range(snapshots: Sequence[Snapshot], range: HistoryRange, today: str) -> list[Snapshot]:
    """Snapshots dated on or after the range cutoff, in their original order."""
    cutoff = range_cutoff(range, today)
    if cutoff is None:
        return list(snapshots)
    return [s for s in snapshots if s.date >= cutoff]


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


def compute_change(prev: float, current: float) -> tuple[float, float]:
    """(change_usd, change_pct); the percentage is 0.0 when `prev` is zero."""
    change_usd = current - prev
    change_pct = 0.0 if prev == 0 else (change_usd / prev) * 100.0
    return change_usd, change_pct


def compute_history_rows(snapshots: Sequence[Snapshot], portfolio: Portfolio) -> list[HistoryRow]:
    """Per-snapshot totals with change vs. the previous row. Expects ascending dates."""
    rows: list[HistoryRow] = []
    prev_total: float | None = None

    for snapshot in snapshots:
        total_usd = snapshot_total_usd(snapshot, portfolio)
        if prev_total is None:
            rows.append(HistoryRow(date=snapshot.date, total_usd=total_usd))
        else:
            change_usd, change_pct = compute_change(prev_total, total_usd)
            rows.append(
                HistoryRow(
                    date=snapshot.date,
                    total_usd=total_usd,
                    change_usd=change_usd,
                    change_pct=change_pct,
                )
            )
        prev_total = total_usd

    return rows
