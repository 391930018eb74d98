"""Core trap decoding and lifecycle."""

from __future__ import annotations

from .decoder import TrapDecoder, decode, default_strategies
from .errors import TrapNotFoundError, TrapTriageError
from .models import AlertEntry, DecodeResult, Severity, SupplyReading, TrapRecord
from .store import MemoryRecordStore, RecordStore, SqliteRecordStore, open_store
from .traps import ReprocessSummary, TrapManager

__all__ = [
    "AlertEntry",
    "DecodeResult",
    "MemoryRecordStore",
    "RecordStore",
    "ReprocessSummary",
    "Severity",
    "SqliteRecordStore",
    "SupplyReading",
    "TrapDecoder",
    "TrapManager",
    "TrapNotFoundError",
    "TrapRecord",
    "TrapTriageError",
    "decode",
    "default_strategies",
    "open_store",
]
