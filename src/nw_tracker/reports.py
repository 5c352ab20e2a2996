from __future__ import annotations

from nw_tracker.compute import (
    category_totals,
    compute_allocation,
    compute_history_rows,
    compute_show_rows,
    filter_by_range,
)
from nw_tracker.model import HistoryRange, HistoryReport, Portfolio, ShowReport
from nw_tracker.portfolio import get_snapshot
from nw_tracker.utils.dates import today_iso


def build_show_report(
    portfolio: Portfolio,
    *,
    date: str | None = None,
    category: str | None = None,
) -> ShowReport | None:
    """Valuation of one snapshot (the latest unless `date` is given). None if there are no snapshots."""
    if not portfolio.snapshots:
        return None

    if date is not None:
        snapshot = get_snapshot(portfolio, date)
    else:
        snapshot = portfolio.latest_snapshot()

    category_filter = category.strip().lower() if category else None
    grand_total, rows = compute_show_rows(snapshot, portfolio, category_filter)
    allocation = compute_allocation(category_totals(rows), grand_total)
    return ShowReport(
        date=snapshot.date,
        grand_total=grand_total,
        rows=rows,
        allocation=allocation,
        category=category_filter,
    )


def build_history_report(portfolio: Portfolio, range_token: str, *, today: str | None = None) -> HistoryReport:
    range = HistoryRange.parse(range_token)
    today = today or today_iso()
    snapshots = filter_by_range(portfolio.snapshots, range, today)
    return HistoryReport(range=range, today=today, rows=compute_history_rows(snapshots, portfolio))
