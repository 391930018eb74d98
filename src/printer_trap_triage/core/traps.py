"""Trap lifecycle: ingest, resolve, assign, reprocess and clear stored traps.

A trap moves independently along two axes. Resolution sets ``processed`` with
``resolvedAt``/``resolvedBy``; assignment sets ``assignedTo``/``assignedAt``.
Neither touches the other, and a resolved trap may still be reassigned.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .codes import FALLBACK_MESSAGE, is_generic
from .decoder import decode
from .errors import TrapNotFoundError
from .models import DecodeResult, Severity, TrapRecord
from .store import TRAPS_TABLE, RecordStore, Row

logger = logging.getLogger(__name__)

DEFAULT_ACTOR = "User"
UNKNOWN_SOURCE = "unknown"
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


def _fmt_ts(ts: datetime | None) -> str:
    return ts.isoformat() if ts is not None else ""


def _parse_ts(value: str | None) -> datetime | None:
    """Parse a stored ISO8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def _load_payload(trap_id: str, raw: str | None) -> Any:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Bad JSON in trapData for trap %s: %s", trap_id, e)
        return {}


def record_from_row(row: Mapping[str, str]) -> TrapRecord:
    """Convert a stored row into a TrapRecord."""
    trap_id = row.get("id", "")
    return TrapRecord(
        id=trap_id,
        source_ip=row.get("sourceIp") or UNKNOWN_SOURCE,
        raw_payload=_load_payload(trap_id, row.get("trapData")),
        parsed_message=row.get("parsedMessage") or "",
        severity=Severity.parse(row.get("severity"), Severity.INFO),
        received_at=_parse_ts(row.get("receivedAt")) or _EPOCH,
        processed=row.get("processed") == "1",
        resolved_at=_parse_ts(row.get("resolvedAt")),
        resolved_by=row.get("resolvedBy") or None,
        assigned_to=row.get("assignedTo") or None,
        assigned_at=_parse_ts(row.get("assignedAt")),
    )


def record_to_row(record: TrapRecord) -> Row:
    """Convert a TrapRecord into a flat row of strings."""
    return {
        "id": record.id,
        "sourceIp": record.source_ip,
        "trapData": json.dumps(record.raw_payload if record.raw_payload is not None else {}),
        "parsedMessage": record.parsed_message,
        "severity": record.severity.value,
        "receivedAt": _fmt_ts(record.received_at),
        "processed": "1" if record.processed else "0",
        "resolvedAt": _fmt_ts(record.resolved_at),
        "resolvedBy": record.resolved_by or "",
        "assignedTo": record.assigned_to or "",
        "assignedAt": _fmt_ts(record.assigned_at),
    }


@dataclass(frozen=True, slots=True)
class ReprocessSummary:
    updated: int
    total: int
    failed: int = 0


class TrapManager:
    """Owns stored trap records and their resolution/assignment lifecycle."""

    def __init__(
        self,
        store: RecordStore,
        *,
        decoder: Callable[[Any], DecodeResult] = decode,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
        default_actor: str = DEFAULT_ACTOR,
    ) -> None:
        self.store = store
        self._decode = decoder
        self._clock = clock
        self._new_id = id_factory
        self.default_actor = default_actor

    def _canonical(
        self,
        payload: Any,
        message: str | None,
        severity: Severity | None,
    ) -> tuple[str, Severity]:
        """Keep a caller's pre-decoded result unless it is generic or incomplete."""
        if message and not is_generic(message) and severity is not None:
            return message, severity

        parsed = self._decode(payload)
        if parsed.message and parsed.message != FALLBACK_MESSAGE:
            message = parsed.message
        return message or parsed.message, severity or parsed.severity

    def ingest(
        self,
        source_ip: str | None,
        payload: Any,
        *,
        message: str | None = None,
        severity: Severity | str | None = None,
    ) -> str:
        """Decode and store a new unprocessed trap; return its id."""
        parsed_message, parsed_severity = self._canonical(
            payload, message, Severity.parse(severity)
        )
        record = TrapRecord(
            id=self._new_id(),
            source_ip=source_ip or UNKNOWN_SOURCE,
            raw_payload=payload if payload is not None else {},
            parsed_message=parsed_message,
            severity=parsed_severity,
            received_at=self._clock(),
        )
        self.store.insert(TRAPS_TABLE, record_to_row(record))
        logger.info(
            "Added trap %s - %s (%s)", record.id, record.parsed_message, record.severity.value
        )
        return record.id

    def get(self, trap_id: str) -> TrapRecord:
        row = self.store.get(TRAPS_TABLE, trap_id)
        if row is None:
            raise TrapNotFoundError(trap_id)
        return record_from_row(row)

    def list_traps(self, limit: int = 100) -> list[TrapRecord]:
        """Return up to ``limit`` traps, newest first."""
        if limit <= 0:
            raise ValueError("limit must be > 0")
        records = [record_from_row(r) for r in self.store.list_all(TRAPS_TABLE)]
        records.sort(key=lambda r: r.received_at, reverse=True)
        return records[:limit]

    def _mark_resolved(self, trap_id: str, actor: str, now: datetime) -> None:
        self.store.update_field(TRAPS_TABLE, trap_id, "processed", "1")
        self.store.update_field(TRAPS_TABLE, trap_id, "resolvedAt", _fmt_ts(now))
        self.store.update_field(TRAPS_TABLE, trap_id, "resolvedBy", actor)

    def _mark_assigned(self, trap_id: str, technician: str, now: datetime) -> None:
        self.store.update_field(TRAPS_TABLE, trap_id, "assignedTo", technician)
        self.store.update_field(TRAPS_TABLE, trap_id, "assignedAt", _fmt_ts(now))

    def _unresolved_for(self, source_ip: str) -> list[Row]:
        rows = self.store.list_by_column(TRAPS_TABLE, "sourceIp", source_ip)
        return [r for r in rows if r.get("processed") != "1"]

    def resolve(self, trap_id: str, actor: str | None = None) -> None:
        """Mark one trap resolved; raises TrapNotFoundError for unknown ids."""
        if self.store.get(TRAPS_TABLE, trap_id) is None:
            raise TrapNotFoundError(trap_id)
        self._mark_resolved(trap_id, actor or self.default_actor, self._clock())

    def resolve_by_source(self, source_ip: str, actor: str | None = None) -> int:
        """Resolve every unresolved trap from a source; return how many were resolved."""
        now = self._clock()
        rows = self._unresolved_for(source_ip)
        for row in rows:
            self._mark_resolved(row["id"], actor or self.default_actor, now)
        return len(rows)

    def assign(self, trap_id: str, technician: str) -> None:
        """Assign one trap to a technician; raises TrapNotFoundError for unknown ids."""
        if self.store.get(TRAPS_TABLE, trap_id) is None:
            raise TrapNotFoundError(trap_id)
        self._mark_assigned(trap_id, technician, self._clock())

    def assign_by_source(self, source_ip: str, technician: str) -> int:
        """Assign every unresolved trap from a source; return how many were assigned."""
        now = self._clock()
        rows = self._unresolved_for(source_ip)
        for row in rows:
            self._mark_assigned(row["id"], technician, now)
        return len(rows)

    def reprocess_all(self) -> ReprocessSummary:
        """Re-decode traps whose stored message is empty or generic.

        The message is replaced by any non-generic decode. Severity is replaced
        only when the new one is not info, so a stored critical can drop to warning
        but never to info.
        """
        rows = self.store.list_all(TRAPS_TABLE)
        updated = 0
        failed = 0

        for row in rows:
            if not is_generic(row.get("parsedMessage")):
                continue
            trap_id = row.get("id", "")
            try:
                parsed = self._decode(record_from_row(row).raw_payload)
            except Exception as e:
                failed += 1
                logger.warning("Error processing trap %s: %s", trap_id, e)
                continue

            if is_generic(parsed.message):
                continue
            self.store.update_field(TRAPS_TABLE, trap_id, "parsedMessage", parsed.message)
            if parsed.severity is not Severity.INFO:
                self.store.update_field(TRAPS_TABLE, trap_id, "severity", parsed.severity.value)
            updated += 1
            logger.info(
                "Updated trap %s: %s (%s)", trap_id, parsed.message, parsed.severity.value
            )

        return ReprocessSummary(updated=updated, total=len(rows), failed=failed)

    def clear_all(self) -> int:
        """Delete every trap; return how many there were."""
        total = self.store.count(TRAPS_TABLE)
        self.store.clear(TRAPS_TABLE)
        logger.info("Cleared %d trap(s)", total)
        return total
