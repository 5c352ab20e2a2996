from __future__ import annotations

import pytest

from nw_tracker.compute import compute_change, compute_history_rows
from nw_tracker.errors import RateMissing
from nw_tracker.model import Asset, Portfolio, Snapshot, SnapshotEntry


def test_compute_change_positive():
    change, pct = compute_change(42300.0, 45100.0)
    assert change == pytest.approx(2800.0)
    assert pct == pytest.approx(6.62, abs=0.01)


def test_compute_change_negative():
    change, pct = compute_change(45100.0, 43800.0)
    assert change == pytest.approx(-1300.0)
    assert pct == pytest.approx(-2.88, abs=0.01)


def test_compute_change_from_zero():
    change, pct = compute_change(0.0, 100.0)
    assert change == pytest.approx(100.0)
    assert pct == 0.0


def test_history_rows(sample_portfolio: Portfolio):
    rows = compute_history_rows(sample_portfolio.snapshots, sample_portfolio)
    assert [r.date for r in rows] == ["2025-01-01", "2025-02-01"]

    first, second = rows
    assert first.total_usd == pytest.approx(14000.0)
    assert first.change_usd is None
    assert first.change_pct is None

    expected = 12500.0 + 3200.0 + 2_500_000.0 / 387.5
    assert second.total_usd == pytest.approx(expected)
    assert second.change_usd == pytest.approx(expected - 14000.0)
    assert second.change_pct == pytest.approx((expected - 14000.0) / 14000.0 * 100.0)


def test_history_zero_previous_total():
    p = Portfolio(assets=[Asset(id="cash", name="Cash", category="bank", currency="USD")])
    snaps = [
        Snapshot(date="2025-01-01"),
        Snapshot(date="2025-02-01", entries=[SnapshotEntry(asset_id="cash", value=50.0)]),
    ]
    rows = compute_history_rows(snaps, p)
    assert rows[0].total_usd == 0.0
    assert rows[1].change_usd == 50.0
    assert rows[1].change_pct == 0.0


def test_history_missing_rate_aborts():
    p = Portfolio(assets=[Asset(id="eur", name="Euro", category="bank", currency="EUR")])
    snaps = [
        Snapshot(date="2025-01-01", rates={"EUR": 0.9}, entries=[SnapshotEntry(asset_id="eur", value=9.0)]),
        Snapshot(date="2025-02-01", entries=[SnapshotEntry(asset_id="eur", value=9.0)]),
    ]
    with pytest.raises(RateMissing):
        compute_history_rows(snaps, p)


def test_history_empty():
    assert compute_history_rows([], Portfolio()) == []
