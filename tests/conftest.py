"""
Pytest configuration and shared fixtures for nw_tracker tests.

Usage:
    @pytest.fixture functions are automatically available to all tests.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure():
    """
    Ensure `src/` is on sys.path for the src-layout package import (`nw_tracker`).
    This keeps tests runnable without requiring an editable install.
    """
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if src.exists():
        sys.path.insert(0, str(src))


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_portfolio():
    """Three assets across USD/AMD and two snapshots, plus one dangling entry."""
    from nw_tracker.model import Asset, Portfolio, Snapshot, SnapshotEntry

    return Portfolio(
        assets=[
            Asset(id="vti", name="VTI", category="etf", currency="USD"),
            Asset(id="btc", name="Bitcoin", category="crypto", currency="USD"),
            Asset(id="amd-bank", name="Ameriabank", category="bank", currency="AMD"),
        ],
        snapshots=[
            Snapshot(
                date="2025-01-01",
                rates={"AMD": 400.0},
                entries=[
                    SnapshotEntry(asset_id="vti", value=10000.0),
                    SnapshotEntry(asset_id="btc", value=2000.0),
                    SnapshotEntry(asset_id="amd-bank", value=800000.0),
                ],
            ),
            Snapshot(
                date="2025-02-01",
                rates={"AMD": 387.5},
                entries=[
                    SnapshotEntry(asset_id="vti", value=12500.0),
                    SnapshotEntry(asset_id="btc", value=3200.0),
                    SnapshotEntry(asset_id="amd-bank", value=2_500_000.0),
                    SnapshotEntry(asset_id="sold-car", value=5000.0),
                ],
            ),
        ],
    )


@pytest.fixture
def portfolio_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point NW_TRACKER_PORTFOLIO at a fresh file under tmp_path."""
    path = tmp_path / "nw-tracker" / "portfolio.json"
    monkeypatch.setenv("NW_TRACKER_PORTFOLIO", str(path))
    return path


# =============================================================================
# Test Data Helpers
# =============================================================================

def make_snapshot(date: str, **kwargs):
    """
    Bare snapshot for date-only tests.

    Usage:
        snap = make_snapshot("2025-02-28", rates={"EUR": 0.92})
    """
    from nw_tracker.model import Snapshot

    return Snapshot(date=date, **kwargs)
