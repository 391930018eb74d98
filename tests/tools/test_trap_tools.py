from __future__ import annotations

import pytest

from printer_trap_triage.core.errors import TrapNotFoundError
from printer_trap_triage.core.traps import TrapManager
from printer_trap_triage.tools.traps import (
    HARD_LIMIT,
    assign_trap_impl,
    assign_traps_by_source_impl,
    clear_traps_impl,
    decode_trap_impl,
    ingest_trap_impl,
    list_traps_impl,
    reprocess_traps_impl,
    resolve_trap_impl,
    resolve_traps_by_source_impl,
)


def _ingest(manager: TrapManager, source_ip: str = "10.0.0.5", **extra) -> str:
    envelope = {"sourceIp": source_ip, "trapData": {"alertCode": 8}, **extra}
    return ingest_trap_impl(envelope=envelope, manager=manager)["trapId"]


def test_decode_trap_impl() -> None:
    assert decode_trap_impl(trap_data={"message": "Toner low"}) == {
        "message": "Toner low",
        "severity": "warning",
    }


def test_ingest_and_list(manager: TrapManager) -> None:
    out = ingest_trap_impl(
        envelope={"sourceIp": "10.0.0.5", "trapData": {"alertCode": 11}}, manager=manager
    )
    assert out["parsedMessage"] == "Toner Low"
    assert out["severity"] == "warning"

    listed = list_traps_impl(limit=10, include_payload=True, manager=manager)
    assert listed["count"] == 1
    trap = listed["traps"][0]
    assert trap["id"] == out["trapId"]
    assert trap["processed"] is False
    assert trap["resolvedAt"] is None
    assert trap["trapData"] == {"alertCode": 11}


def test_ingest_rejects_bad_envelope(manager: TrapManager) -> None:
    with pytest.raises(ValueError):
        ingest_trap_impl(envelope={"sourceIp": "10.0.0.5", "severity": "urgent"}, manager=manager)
    with pytest.raises(ValueError):
        ingest_trap_impl(envelope={"trapData": "not an object"}, manager=manager)


def test_ingest_accepts_any_severity_case(manager: TrapManager) -> None:
    out = ingest_trap_impl(
        envelope={
            "sourceIp": "10.0.0.5",
            "trapData": {},
            "parsedMessage": "Fuser failure",
            "severity": " CRITICAL ",
        },
        manager=manager,
    )
    assert out["parsedMessage"] == "Fuser failure"
    assert out["severity"] == "critical"


def test_list_limits(manager: TrapManager) -> None:
    for _ in range(3):
        _ingest(manager)
    assert list_traps_impl(limit=2, manager=manager)["count"] == 2
    assert list_traps_impl(limit=HARD_LIMIT * 10, manager=manager)["count"] == 3
    with pytest.raises(ValueError):
        list_traps_impl(limit=0, manager=manager)


def test_resolve_and_assign(manager: TrapManager) -> None:
    a = _ingest(manager)
    _ingest(manager)
    _ingest(manager, source_ip="10.0.0.6")

    assert resolve_trap_impl(trap_id=a, actor="Sam", manager=manager) == {"resolved": 1}
    assert resolve_traps_by_source_impl(source_ip="10.0.0.5", manager=manager) == {"resolved": 1}
    assert assign_trap_impl(trap_id=a, technician="Dana", manager=manager)["assigned"] == 1

    out = assign_traps_by_source_impl(source_ip="10.0.0.6", technician="Dana", manager=manager)
    assert out == {"assigned": 1, "message": "1 trap(s) assigned to Dana"}

    with pytest.raises(TrapNotFoundError):
        resolve_trap_impl(trap_id="missing", manager=manager)


def test_reprocess_and_clear(manager: TrapManager) -> None:
    _ingest(manager)
    assert reprocess_traps_impl(manager=manager) == {"updated": 0, "total": 1, "failed": 0}
    assert clear_traps_impl(manager=manager) == {"cleared": 1}
