from __future__ import annotations

from pathlib import Path

import pytest

from printer_trap_triage.core.store import (
    TRAPS_TABLE,
    MemoryRecordStore,
    SqliteRecordStore,
    open_store,
)
from printer_trap_triage.core.traps import TrapManager


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, tmp_path: Path):
    if request.param == "memory":
        yield MemoryRecordStore()
        return
    s = SqliteRecordStore(tmp_path / "data" / "traps.db")
    yield s
    s.close()


def test_store_operations(any_store) -> None:
    any_store.insert(TRAPS_TABLE, {"id": "a", "sourceIp": "10.0.0.1", "processed": "0"})
    any_store.insert(TRAPS_TABLE, {"id": "b", "sourceIp": "10.0.0.2", "processed": "0"})

    row = any_store.get(TRAPS_TABLE, "a")
    assert row is not None
    assert row["sourceIp"] == "10.0.0.1"
    assert row["resolvedAt"] == ""

    any_store.update_field(TRAPS_TABLE, "a", "processed", "1")
    assert any_store.get(TRAPS_TABLE, "a")["processed"] == "1"
    assert [r["id"] for r in any_store.list_by_column(TRAPS_TABLE, "sourceIp", "10.0.0.2")] == ["b"]
    assert any_store.count(TRAPS_TABLE) == 2
    assert any_store.get(TRAPS_TABLE, "zzz") is None

    any_store.clear(TRAPS_TABLE)
    assert any_store.count(TRAPS_TABLE) == 0
    assert any_store.list_all(TRAPS_TABLE) == []


def test_store_rejects_unknown_names(any_store) -> None:
    with pytest.raises(ValueError):
        any_store.update_field(TRAPS_TABLE, "a", 'x" = 1; --', "1")
    with pytest.raises(ValueError):
        any_store.list_all("users")


def test_memory_store_returns_copies() -> None:
    store = MemoryRecordStore()
    store.insert(TRAPS_TABLE, {"id": "a", "parsedMessage": "Paper Jam"})
    row = store.get(TRAPS_TABLE, "a")
    row["parsedMessage"] = "changed"
    assert store.get(TRAPS_TABLE, "a")["parsedMessage"] == "Paper Jam"


def test_sqlite_store_persists(tmp_path: Path) -> None:
    path = tmp_path / "traps.db"
    s1 = SqliteRecordStore(path)
    trap_id = TrapManager(s1).ingest("10.0.0.5", {"alertCode": 8})
    s1.close()

    s2 = SqliteRecordStore(path)
    rec = TrapManager(s2).get(trap_id)
    s2.close()
    assert rec.parsed_message == "Paper Jam"
    assert rec.raw_payload == {"alertCode": 8}


def test_open_store(tmp_path: Path) -> None:
    assert isinstance(open_store(None), MemoryRecordStore)
    assert isinstance(open_store(":memory:"), MemoryRecordStore)
    s = open_store(str(tmp_path / "t.db"))
    assert isinstance(s, SqliteRecordStore)
    s.close()
