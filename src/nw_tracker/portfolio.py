"""Mutations on the Portfolio aggregate (assets and snapshots)."""

from __future__ import annotations

from typing import Iterable, Mapping

from nw_tracker.errors import (
    AssetNotFound,
    DuplicateAssetId,
    InvalidDate,
    InvalidRate,
    InvalidValue,
    SnapshotAlreadyExists,
    SnapshotNotFound,
    UsdRateRejected,
)
from nw_tracker.model import REPORTING_CURRENCY, Asset, Portfolio, Snapshot, SnapshotEntry
from nw_tracker.utils.dates import parse_ymd


def validate_date(value: str) -> str:
    try:
        parse_ymd(value)
    except ValueError:
        raise InvalidDate(value) from None
    return value


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


def add_asset(portfolio: Portfolio, asset_id: str, name: str, category: str, currency: str) -> Asset:
    if portfolio.find_asset(asset_id) is not None:
        raise DuplicateAssetId(asset_id)
    asset = Asset(id=asset_id, name=name, category=category, currency=currency)
    portfolio.assets.append(asset)
    return asset


def edit_asset(
    portfolio: Portfolio,
    asset_id: str,
    *,
    name: str | None = None,
    category: str | None = None,
    currency: str | None = None,
) -> bool:
    """Apply the given fields in place. Returns False when no field was given."""
    asset = portfolio.find_asset(asset_id)
    if asset is None:
        raise AssetNotFound(asset_id)

    changed = False
    if name is not None:
        asset.name = name
        changed = True
    if category is not None:
        asset.category = category
        changed = True
    if currency is not None:
        asset.currency = currency
        changed = True
    return changed


def count_asset_references(portfolio: Portfolio, asset_id: str) -> int:
    return sum(1 for s in portfolio.snapshots if any(e.asset_id == asset_id for e in s.entries))


def remove_asset(portfolio: Portfolio, asset_id: str) -> None:
    # Snapshot entries for the asset stay put; valuation skips them.
    if portfolio.find_asset(asset_id) is None:
        raise AssetNotFound(asset_id)
    portfolio.assets = [a for a in portfolio.assets if a.id != asset_id]


def non_usd_currencies(portfolio: Portfolio) -> list[str]:
    return sorted({a.currency for a in portfolio.assets if a.currency != REPORTING_CURRENCY})


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


def build_rates(rates: Mapping[str, float]) -> dict[str, float]:
    out: dict[str, float] = {}
    for currency, rate in rates.items():
        code = currency.strip().upper()
        if code == REPORTING_CURRENCY:
            raise UsdRateRejected()
        rate = float(rate)
        if not rate > 0:
            raise InvalidRate(code, rate)
        out[code] = rate
    return out


def build_entries(values: Iterable[tuple[str, float]]) -> list[SnapshotEntry]:
    entries: list[SnapshotEntry] = []
    for asset_id, value in values:
        value = float(value)
        if not value >= 0:
            raise InvalidValue(asset_id, value)
        entries.append(SnapshotEntry(asset_id=asset_id, value=value))
    return entries


def existing_values(snapshot: Snapshot) -> dict[str, float]:
    return {e.asset_id: e.value for e in snapshot.entries}


def get_snapshot(portfolio: Portfolio, date: str) -> Snapshot:
    validate_date(date)
    snapshot = portfolio.find_snapshot(date)
    if snapshot is None:
        raise SnapshotNotFound(date)
    return snapshot


def add_snapshot(
    portfolio: Portfolio,
    date: str,
    rates: Mapping[str, float],
    values: Iterable[tuple[str, float]],
) -> Snapshot:
    validate_date(date)
    if portfolio.find_snapshot(date) is not None:
        raise SnapshotAlreadyExists(date)
    snapshot = Snapshot(date=date, rates=build_rates(rates), entries=build_entries(values))
    portfolio.snapshots.append(snapshot)
    return snapshot


def edit_snapshot(
    portfolio: Portfolio,
    date: str,
    rates: Mapping[str, float],
    values: Iterable[tuple[str, float]],
) -> Snapshot:
    snapshot = get_snapshot(portfolio, date)
    snapshot.rates = build_rates(rates)
    snapshot.entries = build_entries(values)
    return snapshot
