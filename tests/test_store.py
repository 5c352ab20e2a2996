from __future__ import annotations

import json
from pathlib import Path

import pytest

from nw_tracker import store
from nw_tracker.errors import MalformedDocumentError, ReadFileError, WriteFileError
from nw_tracker.model import Asset, Portfolio, Snapshot, SnapshotEntry
from nw_tracker.store import load_portfolio, save_portfolio


def test_load_missing_file_is_empty(tmp_path: Path):
    p = load_portfolio(path=tmp_path / "nope" / "portfolio.json")
    assert p.assets == []
    assert p.snapshots == []


def test_save_creates_parent_dirs_and_roundtrips(tmp_path: Path, sample_portfolio: Portfolio):
    path = tmp_path / "a" / "b" / "portfolio.json"
    save_portfolio(sample_portfolio, path=path)
    assert path.exists()

    loaded = load_portfolio(path=path)
    assert loaded == sample_portfolio


def test_save_sorts_snapshots(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    p = Portfolio(snapshots=[Snapshot(date="2025-06-01"), Snapshot(date="2024-01-01"), Snapshot(date="2025-01-15")])
    save_portfolio(p, path=path)

    loaded = load_portfolio(path=path)
    assert [s.date for s in loaded.snapshots] == ["2024-01-01", "2025-01-15", "2025-06-01"]
    # The in-memory portfolio is sorted too.
    assert [s.date for s in p.snapshots] == ["2024-01-01", "2025-01-15", "2025-06-01"]


def test_saved_document_schema(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    p = Portfolio(
        assets=[Asset(id="eur", name="Euro acct", category="Bank", currency="eur")],
        snapshots=[Snapshot(date="2025-01-01", rates={"EUR": 0.92}, entries=[SnapshotEntry(asset_id="eur", value=5.0)])],
    )
    save_portfolio(p, path=path)

    doc = json.loads(path.read_text())
    assert doc == {
        "assets": [{"id": "eur", "name": "Euro acct", "category": "bank", "currency": "EUR"}],
        "snapshots": [{"date": "2025-01-01", "rates": {"EUR": 0.92}, "entries": [{"asset_id": "eur", "value": 5.0}]}],
    }
    # pretty-printed
    assert "\n  " in path.read_text()


def test_save_leaves_no_temp_file(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    save_portfolio(Portfolio(), path=path)
    assert sorted(x.name for x in tmp_path.iterdir()) == ["portfolio.json"]


def test_failed_rename_leaves_previous_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "portfolio.json"
    save_portfolio(Portfolio(assets=[Asset(id="old", name="Old", category="x", currency="USD")]), path=path)
    before = path.read_text()

    seen = {}

    def crash(src, dst):
        # The new document is complete in the temp file; the target is untouched.
        seen["tmp"] = Path(src).read_text()
        seen["target"] = Path(dst).read_text()
        raise OSError("simulated crash")

    monkeypatch.setattr(store.os, "replace", crash)
    new = Portfolio(assets=[Asset(id="new", name="New", category="x", currency="USD")])
    with pytest.raises(WriteFileError) as exc:
        save_portfolio(new, path=path)

    assert exc.value.path == str(path)
    assert seen["target"] == before
    assert '"new"' in seen["tmp"]
    assert path.read_text() == before
    assert not (tmp_path / "portfolio.json.tmp").exists()


def test_failed_temp_write_leaves_previous_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = tmp_path / "portfolio.json"
    save_portfolio(Portfolio(), path=path)
    before = path.read_text()

    def broken_fsync(fd):
        raise OSError("disk full")

    monkeypatch.setattr(store.os, "fsync", broken_fsync)
    with pytest.raises(WriteFileError) as exc:
        save_portfolio(Portfolio(assets=[Asset(id="a", name="A", category="x", currency="USD")]), path=path)

    assert exc.value.path.endswith("portfolio.json.tmp")
    assert path.read_text() == before
    assert not (tmp_path / "portfolio.json.tmp").exists()


def test_parent_is_a_file(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    with pytest.raises(WriteFileError) as exc:
        save_portfolio(Portfolio(), path=blocker / "portfolio.json")
    assert exc.value.path == str(blocker)


def test_load_malformed_json(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    path.write_text("{not json")
    with pytest.raises(MalformedDocumentError) as exc:
        load_portfolio(path=path)
    assert exc.value.path == str(path)
    assert str(path) in str(exc.value)


def test_load_wrong_shape(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    path.write_text(json.dumps({"assets": 5, "snapshots": []}))
    with pytest.raises(MalformedDocumentError):
        load_portfolio(path=path)


def test_load_rejects_negative_values(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    doc = {"assets": [], "snapshots": [{"date": "2025-01-01", "rates": {}, "entries": [{"asset_id": "a", "value": -1}]}]}
    path.write_text(json.dumps(doc))
    with pytest.raises(MalformedDocumentError):
        load_portfolio(path=path)


def test_load_unreadable_path(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    path.mkdir()
    with pytest.raises(ReadFileError) as exc:
        load_portfolio(path=path)
    assert exc.value.path == str(path)


def test_default_path_comes_from_environment(portfolio_file: Path):
    save_portfolio(Portfolio(assets=[Asset(id="a", name="A", category="x", currency="USD")]))
    assert portfolio_file.exists()
    assert load_portfolio().assets[0].id == "a"


def test_load_non_utf8_file(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(ReadFileError) as exc:
        load_portfolio(path=path)
    assert exc.value.path == str(path)


def test_load_rejects_usd_rate(tmp_path: Path):
    path = tmp_path / "portfolio.json"
    doc = {"snapshots": [{"date": "2025-01-01", "rates": {"USD": 2.0}, "entries": []}]}
    path.write_text(json.dumps(doc))
    with pytest.raises(MalformedDocumentError):
        load_portfolio(path=path)
