"""Core data models for trap triage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Normalized alert severities, ordered info < warning < critical."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]

    @classmethod
    def parse(cls, value: Any, default: Severity | None = None) -> Severity | None:
        """Parse a severity name (case-insensitive); return default when unknown."""
        if isinstance(value, Severity):
            return value
        if not isinstance(value, str):
            return default
        try:
            return cls(value.strip().lower())
        except ValueError:
            return default


SEVERITY_RANK = {
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.CRITICAL: 3,
}


@dataclass(frozen=True, slots=True)
class AlertEntry:
    """One row of a device alert table, as reported in a single trap."""

    index: str
    std_code: int = 0
    vendor_code: int = 0
    alert_group: int = 0
    description: str = ""


@dataclass(frozen=True, slots=True)
class SupplyReading:
    """Remaining level (percent) of one consumable."""

    name: str
    level: int


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Canonical decode output: human-readable message plus severity."""

    message: str
    severity: Severity = Severity.INFO
    ignore: bool = False  # non-actionable device state; never reported

    def as_dict(self) -> dict[str, str]:
        return {"message": self.message, "severity": self.severity.value}


@dataclass(frozen=True, slots=True)
class TrapRecord:
    """A stored trap and its resolution/assignment state."""

    id: str
    source_ip: str
    raw_payload: Any
    parsed_message: str
    severity: Severity
    received_at: datetime
    processed: bool = False
    resolved_at: datetime | None = None
    resolved_by: str | None = None
    assigned_to: str | None = None
    assigned_at: datetime | None = None

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None
