from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nw_tracker.errors import InvalidHistoryRange

REPORTING_CURRENCY = "USD"


class Asset(BaseModel):
    # Edits assign fields in place; re-run the normalizers on assignment.
    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    category: str
    currency: str

    @field_validator("category")
    @classmethod
    def _lower_category(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: str) -> str:
        return v.strip().upper()


class SnapshotEntry(BaseModel):
    asset_id: str
    value: float = Field(ge=0.0)


class Snapshot(BaseModel):
    date: str
    # 1 USD = rate units of the keyed currency.
    rates: dict[str, float] = Field(default_factory=dict)
    entries: list[SnapshotEntry] = Field(default_factory=list)

    @field_validator("rates")
    @classmethod
    def _valid_rates(cls, v: dict[str, float]) -> dict[str, float]:
        if REPORTING_CURRENCY in v:
            raise ValueError(f"{REPORTING_CURRENCY} is the base currency and cannot have a rate")
        for currency, rate in v.items():
            if not rate > 0:
                raise ValueError(f"rate for {currency} must be positive")
        return v


class Portfolio(BaseModel):
    """Aggregate root: the whole document is loaded and saved as one unit."""

    assets: list[Asset] = Field(default_factory=list)
    snapshots: list[Snapshot] = Field(default_factory=list)

    def find_asset(self, asset_id: str) -> Asset | None:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None

    def find_snapshot(self, date: str) -> Snapshot | None:
        for snapshot in self.snapshots:
            if snapshot.date == date:
                return snapshot
        return None

    def latest_snapshot(self) -> Snapshot | None:
        if not self.snapshots:
            return None
        return max(self.snapshots, key=lambda s: s.date)

    def sort_snapshots(self) -> None:
        self.snapshots.sort(key=lambda s: s.date)


# ---------------------------------------------------------------------------
# View rows (never persisted)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShowRow:
    asset_name: str
    currency: str
    native_value: float
    usd_value: float
    category: str


@dataclass(frozen=True)
class HistoryRow:
    date: str
    total_usd: float
    change_usd: float | None = None
    change_pct: float | None = None


@dataclass(frozen=True)
class ShowReport:
    date: str
    grand_total: float
    rows: list[ShowRow] = field(default_factory=list)
    allocation: list[tuple[str, float]] = field(default_factory=list)
    category: str | None = None


@dataclass(frozen=True)
class HistoryReport:
    range: HistoryRange
    today: str
    rows: list[HistoryRow] = field(default_factory=list)


class HistoryRange(str, Enum):
    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    ALL = "ALL"

    @classmethod
    def parse(cls, token: str) -> HistoryRange:
        try:
            return cls(str(token).strip().upper())
        except ValueError:
            raise InvalidHistoryRange(token) from None

    def __str__(self) -> str:
        return self.value
