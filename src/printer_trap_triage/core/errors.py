"""Package exceptions."""

from __future__ import annotations


class TrapTriageError(Exception):
    """Base class for trap triage errors."""


class TrapNotFoundError(TrapTriageError, LookupError):
    """Raised when a single-record operation names an unknown trap id."""

    def __init__(self, trap_id: str) -> None:
        super().__init__(f"Trap not found: {trap_id}")
        self.trap_id = trap_id
