from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from printer_trap_triage.core.store import MemoryRecordStore
from printer_trap_triage.core.traps import TrapManager

ALERT = "1.3.6.1.2.1.43.18.1.1"
SUPPLY_NAME = "1.3.6.1.2.1.43.11.1.1.6"
SUPPLY_LEVEL = "1.3.6.1.2.1.43.11.1.1.9"


@pytest.fixture
def alert_varbinds() -> Callable[..., dict[str, Any]]:
    """Build a decodedVarbinds payload from per-row alert columns."""

    def _build(*rows: dict[str, Any], supply: tuple[str, int] | None = None) -> dict[str, Any]:
        vb: dict[str, Any] = {}
        for index, row in enumerate(rows, start=1):
            for field, value in row.items():
                vb[f"{ALERT}.{field}.{index}"] = value
        if supply is not None:
            name, level = supply
            vb[f"{SUPPLY_NAME}.1.1"] = name
            vb[f"{SUPPLY_LEVEL}.1.1"] = level
        return {"decodedVarbinds": vb}

    return _build


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Deterministic clock that advances one minute per call."""
    start = datetime(2026, 3, 2, 8, 0, 0, tzinfo=UTC)
    ticks = itertools.count()
    return lambda: start + timedelta(minutes=next(ticks))


@pytest.fixture
def store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def manager(store: MemoryRecordStore, clock: Callable[[], datetime]) -> TrapManager:
    return TrapManager(store, clock=clock)
