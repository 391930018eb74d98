"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import threading
from typing import Any

from printer_trap_triage.core.decoder import decode
from printer_trap_triage.core.envelope import TrapEnvelope
from printer_trap_triage.core.models import TrapRecord
from printer_trap_triage.core.settings import resolve_settings
from printer_trap_triage.core.store import open_store
from printer_trap_triage.core.traps import TrapManager

HARD_LIMIT = 5000

_manager: TrapManager | None = None
_manager_lock = threading.Lock()


def default_manager() -> TrapManager:
    """Return the process-wide manager, opening the configured store on first use."""
    global _manager
    with _manager_lock:
        if _manager is None:
            settings = resolve_settings()
            _manager = TrapManager(
                open_store(settings.db_path),
                default_actor=settings.default_actor,
            )
        return _manager


def _resolve_limit(limit: int | None) -> int:
    if limit is None:
        limit = resolve_settings().default_limit
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return min(limit, HARD_LIMIT)


def record_to_dict(record: TrapRecord, *, include_payload: bool = False) -> dict[str, Any]:
    """Convert a TrapRecord into a JSON-serializable dict."""
    d: dict[str, Any] = {
        "id": record.id,
        "sourceIp": record.source_ip,
        "parsedMessage": record.parsed_message,
        "severity": record.severity.value,
        "receivedAt": record.received_at.isoformat(),
        "processed": record.processed,
        "resolvedAt": record.resolved_at.isoformat() if record.resolved_at else None,
        "resolvedBy": record.resolved_by,
        "assignedTo": record.assigned_to,
        "assignedAt": record.assigned_at.isoformat() if record.assigned_at else None,
    }
    if include_payload:
        d["trapData"] = record.raw_payload
    return d


def decode_trap_impl(*, trap_data: Any) -> dict[str, str]:
    """Implementation for the `decode_trap` MCP tool."""
    return decode(trap_data).as_dict()


def ingest_trap_impl(
    *,
    envelope: dict[str, Any],
    manager: TrapManager | None = None,
) -> dict[str, Any]:
    """Implementation for the `ingest_trap` MCP tool.

    Raises pydantic's ValidationError (a ValueError) for malformed envelopes.
    """
    env = TrapEnvelope.model_validate(envelope)
    mgr = manager or default_manager()
    trap_id = mgr.ingest(
        env.source_ip,
        env.trap_data,
        message=env.parsed_message,
        severity=env.severity,
    )
    rec = mgr.get(trap_id)
    return {"trapId": trap_id, "parsedMessage": rec.parsed_message, "severity": rec.severity.value}


def list_traps_impl(
    *,
    limit: int | None = None,
    include_payload: bool = False,
    manager: TrapManager | None = None,
) -> dict[str, Any]:
    """Implementation for the `list_traps` MCP tool (newest first)."""
    mgr = manager or default_manager()
    traps = mgr.list_traps(_resolve_limit(limit))
    return {
        "count": len(traps),
        "traps": [record_to_dict(t, include_payload=include_payload) for t in traps],
    }


def resolve_trap_impl(
    *, trap_id: str, actor: str | None = None, manager: TrapManager | None = None
) -> dict[str, Any]:
    (manager or default_manager()).resolve(trap_id, actor)
    return {"resolved": 1}


def resolve_traps_by_source_impl(
    *, source_ip: str, actor: str | None = None, manager: TrapManager | None = None
) -> dict[str, Any]:
    return {"resolved": (manager or default_manager()).resolve_by_source(source_ip, actor)}


def assign_trap_impl(
    *, trap_id: str, technician: str, manager: TrapManager | None = None
) -> dict[str, Any]:
    (manager or default_manager()).assign(trap_id, technician)
    return {"assigned": 1, "message": f"Trap assigned to {technician}"}


def assign_traps_by_source_impl(
    *, source_ip: str, technician: str, manager: TrapManager | None = None
) -> dict[str, Any]:
    count = (manager or default_manager()).assign_by_source(source_ip, technician)
    return {"assigned": count, "message": f"{count} trap(s) assigned to {technician}"}


def reprocess_traps_impl(*, manager: TrapManager | None = None) -> dict[str, Any]:
    summary = (manager or default_manager()).reprocess_all()
    return {"updated": summary.updated, "total": summary.total, "failed": summary.failed}


def clear_traps_impl(*, manager: TrapManager | None = None) -> dict[str, Any]:
    return {"cleared": (manager or default_manager()).clear_all()}
