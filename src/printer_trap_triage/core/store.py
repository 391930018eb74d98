"""Record store backends.

The lifecycle manager only needs a handful of table operations over flat
rows of strings; any backend implementing ``RecordStore`` will do.
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

Row = dict[str, str]

TRAPS_TABLE = "snmp_traps"
TRAP_COLUMNS: tuple[str, ...] = (
    "id",
    "sourceIp",
    "trapData",
    "parsedMessage",
    "severity",
    "receivedAt",
    "processed",
    "resolvedAt",
    "resolvedBy",
    "assignedTo",
    "assignedAt",
)

_TABLES: Mapping[str, Sequence[str]] = {TRAPS_TABLE: TRAP_COLUMNS}


class RecordStore(Protocol):
    """Minimal table store used by the trap lifecycle manager."""

    def get(self, table: str, record_id: str) -> Row | None: ...

    def insert(self, table: str, record: Mapping[str, str]) -> None: ...

    def update_field(self, table: str, record_id: str, field: str, value: str) -> None: ...

    def list_by_column(self, table: str, column: str, value: str) -> list[Row]: ...

    def list_all(self, table: str) -> list[Row]: ...

    def count(self, table: str) -> int: ...

    def clear(self, table: str) -> None: ...


def _columns(table: str) -> Sequence[str]:
    try:
        return _TABLES[table]
    except KeyError as e:
        raise ValueError(f"Unknown table '{table}'") from e


def _check_column(table: str, column: str) -> None:
    if column not in _columns(table):
        raise ValueError(f"Unknown column '{column}' for table '{table}'")


class MemoryRecordStore:
    """In-process store; rows are copied on the way in and out."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, Row]] = {name: {} for name in _TABLES}
        self._lock = threading.Lock()

    def _table(self, table: str) -> dict[str, Row]:
        _columns(table)
        return self._tables[table]

    def get(self, table: str, record_id: str) -> Row | None:
        with self._lock:
            row = self._table(table).get(record_id)
            return dict(row) if row is not None else None

    def insert(self, table: str, record: Mapping[str, str]) -> None:
        cols = _columns(table)
        row = {c: str(record.get(c, "")) for c in cols}
        with self._lock:
            self._table(table)[row["id"]] = row

    def update_field(self, table: str, record_id: str, field: str, value: str) -> None:
        _check_column(table, field)
        with self._lock:
            row = self._table(table).get(record_id)
            if row is not None:
                row[field] = value

    def list_by_column(self, table: str, column: str, value: str) -> list[Row]:
        _check_column(table, column)
        with self._lock:
            return [dict(r) for r in self._table(table).values() if r.get(column) == value]

    def list_all(self, table: str) -> list[Row]:
        with self._lock:
            return [dict(r) for r in self._table(table).values()]

    def count(self, table: str) -> int:
        with self._lock:
            return len(self._table(table))

    def clear(self, table: str) -> None:
        with self._lock:
            self._table(table).clear()


class SqliteRecordStore:
    """SQLite-backed store using the ``snmp_traps`` column layout."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        if self.path != ":memory:":
            self._conn.execute("PRAGMA journal_mode = WAL")
        with self._lock, self._conn:
            for table, cols in _TABLES.items():
                defs = ", ".join(
                    f'"{c}" TEXT PRIMARY KEY' if c == "id" else f"\"{c}\" TEXT DEFAULT ''"
                    for c in cols
                )
                self._conn.execute(f'CREATE TABLE IF NOT EXISTS "{table}" ({defs})')

    def close(self) -> None:
        self._conn.close()

    def _query(self, sql: str, params: Sequence[str] = ()) -> list[Row]:
        with self._lock:
            cur = self._conn.execute(sql, params)
            return [dict(r) for r in cur.fetchall()]

    def _execute(self, sql: str, params: Sequence[str] = ()) -> None:
        with self._lock, self._conn:
            self._conn.execute(sql, params)

    def get(self, table: str, record_id: str) -> Row | None:
        _columns(table)
        rows = self._query(f'SELECT * FROM "{table}" WHERE id = ?', (record_id,))
        return rows[0] if rows else None

    def insert(self, table: str, record: Mapping[str, str]) -> None:
        cols = _columns(table)
        names = ", ".join(f'"{c}"' for c in cols)
        marks = ", ".join("?" for _ in cols)
        values = [str(record.get(c, "")) for c in cols]
        self._execute(f'INSERT OR REPLACE INTO "{table}" ({names}) VALUES ({marks})', values)

    def update_field(self, table: str, record_id: str, field: str, value: str) -> None:
        _check_column(table, field)
        self._execute(f'UPDATE "{table}" SET "{field}" = ? WHERE id = ?', (value, record_id))

    def list_by_column(self, table: str, column: str, value: str) -> list[Row]:
        _check_column(table, column)
        return self._query(f'SELECT * FROM "{table}" WHERE "{column}" = ?', (value,))

    def list_all(self, table: str) -> list[Row]:
        _columns(table)
        return self._query(f'SELECT * FROM "{table}"')

    def count(self, table: str) -> int:
        _columns(table)
        with self._lock:
            return int(self._conn.execute(f'SELECT COUNT(*) FROM "{table}"').fetchone()[0])

    def clear(self, table: str) -> None:
        _columns(table)
        self._execute(f'DELETE FROM "{table}"')


def open_store(db_path: str | None) -> RecordStore:
    """Open the configured store; no path (or ``:memory:``) means in-memory."""
    if not db_path or db_path == ":memory:":
        return MemoryRecordStore()
    return SqliteRecordStore(db_path)
