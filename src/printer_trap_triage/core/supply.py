"""Supply-level thresholds, applied after the alert-code cascade."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .entries import SUPPLY_LEVEL_OID, group_varbinds, iter_varbinds
from .models import DecodeResult, Severity, SupplyReading
from .values import to_int, to_text

EMPTY_THRESHOLD = 5
LOW_THRESHOLD = 20

GROUPED_SUPPLY_NAME = "Toner/Supply"
DEFAULT_SUPPLY_NAME = "Supply"


def evaluate_supply(name: str, level: int) -> DecodeResult | None:
    """Return an Empty/Low alert for a supply level, or None above the low threshold.

    Negative levels are the Printer MIB "unknown"/"some remaining" markers and never alert.
    """
    if level < 0 or level > LOW_THRESHOLD:
        return None
    if level <= EMPTY_THRESHOLD:
        return DecodeResult(message=f"{name} Empty ({level}%)", severity=Severity.CRITICAL)
    return DecodeResult(message=f"{name} Low ({level}%)", severity=Severity.WARNING)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _grouped_reading(payload: Mapping[str, Any]) -> SupplyReading | None:
    vb = payload.get("decodedVarbinds")
    if vb is None:
        return None
    reading = group_varbinds(vb).supply
    if reading is None:
        return None
    return SupplyReading(name=reading.name or GROUPED_SUPPLY_NAME, level=reading.level)


def _pdu_reading(payload: Mapping[str, Any]) -> SupplyReading | None:
    pdu = payload.get("pdu")
    if not isinstance(pdu, Mapping):
        return None
    varbinds = pdu.get("varbinds")
    if not isinstance(varbinds, list):
        return None
    for oid, value in iter_varbinds(varbinds):
        if SUPPLY_LEVEL_OID in oid and _is_number(value):
            return SupplyReading(name=DEFAULT_SUPPLY_NAME, level=int(value))
    return None


def _polled_reading(payload: Mapping[str, Any]) -> SupplyReading | None:
    if payload.get("type") != "polled_alert":
        return None
    supply = payload.get("supply")
    if not isinstance(supply, Mapping):
        return None
    name = to_text(supply.get("name")) or DEFAULT_SUPPLY_NAME
    return SupplyReading(name=name, level=to_int(supply.get("percentage")))


def extract_supply(payload: Mapping[str, Any]) -> SupplyReading | None:
    """Find the first supply reading carried by any supported payload shape."""
    for reader in (_grouped_reading, _pdu_reading, _polled_reading):
        reading = reader(payload)
        if reading is not None:
            return reading
    return None
