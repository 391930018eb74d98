"""Printer trap triage: decode printer/copier SNMP traps and track them to resolution."""

from __future__ import annotations

from printer_trap_triage.core.decoder import decode
from printer_trap_triage.core.models import DecodeResult, Severity, TrapRecord
from printer_trap_triage.core.traps import TrapManager

__all__ = ["DecodeResult", "Severity", "TrapManager", "TrapRecord", "decode"]
