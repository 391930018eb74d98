"""Group alert-table varbinds into per-row alert entries.

Printer MIB alert rows arrive as ``1.3.6.1.2.1.43.18.1.1.<field>.<index>``
varbinds. The field number selects the column; the trailing index names the
row (``"0"`` when absent). Supply levels live in a separate table.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .models import AlertEntry, SupplyReading
from .values import to_int, to_text

ALERT_TABLE_OID = "1.3.6.1.2.1.43.18.1.1"

# prtAlertTable columns.
FIELD_ALERT_GROUP = 4
FIELD_VENDOR_CODE = 6  # prtAlertLocation; vendors report their own alert codes here
FIELD_STD_CODE = 7
FIELD_DESCRIPTION = 8

STD_CODE_OID = f"{ALERT_TABLE_OID}.{FIELD_STD_CODE}"
VENDOR_CODE_OID = f"{ALERT_TABLE_OID}.{FIELD_VENDOR_CODE}"
ALERT_GROUP_OID = f"{ALERT_TABLE_OID}.{FIELD_ALERT_GROUP}"
DESCRIPTION_OID = f"{ALERT_TABLE_OID}.{FIELD_DESCRIPTION}"

# prtMarkerSuppliesTable columns.
SUPPLY_NAME_OID = "1.3.6.1.2.1.43.11.1.1.6"
SUPPLY_LEVEL_OID = "1.3.6.1.2.1.43.11.1.1.9"

ALERT_TABLE_MARKER = "43.18"
SUPPLY_TABLE_MARKER = "43.11"
PRINTER_STATUS_MARKER = "25.3.5"

_ALERT_ROW_RE = re.compile(r"43\.18\.1\.1\.(\d+)(?:\.(\d+))?$")

DEFAULT_INDEX = "0"


@dataclass(frozen=True, slots=True)
class GroupedVarbinds:
    """Alert rows keyed by index, plus the supply reading picked from them."""

    entries: dict[str, AlertEntry]
    supply: SupplyReading | None = None


def iter_varbinds(varbinds: Any) -> Iterator[tuple[str, Any]]:
    """Yield (oid, value) pairs from a mapping or an array of {oid, value} objects."""
    if isinstance(varbinds, Mapping):
        for oid, value in varbinds.items():
            if isinstance(oid, str) and oid:
                yield oid, value
        return
    if isinstance(varbinds, Iterable) and not isinstance(varbinds, (str, bytes)):
        for vb in varbinds:
            if not isinstance(vb, Mapping):
                continue
            oid = vb.get("oid")
            if isinstance(oid, str) and oid:
                yield oid, vb.get("value")


def _build_entry(index: str, fields: Mapping[int, Any]) -> AlertEntry:
    return AlertEntry(
        index=index,
        std_code=to_int(fields.get(FIELD_STD_CODE)),
        vendor_code=to_int(fields.get(FIELD_VENDOR_CODE)),
        alert_group=to_int(fields.get(FIELD_ALERT_GROUP)),
        description=to_text(fields.get(FIELD_DESCRIPTION)),
    )


def _index_key(index: str) -> tuple[int, str]:
    return (int(index), index) if index.isdigit() else (-1, index)


def _supply_row(oid: str, prefix: str) -> str:
    return oid.partition(prefix)[2].lstrip(".")


def _pick_supply(levels: Mapping[str, int], names: Mapping[str, str]) -> SupplyReading | None:
    """First supply row carrying both a name and a level, else the first level seen."""
    for row, level in levels.items():
        if names.get(row):
            return SupplyReading(name=names[row], level=level)
    for level in levels.values():
        return SupplyReading(name="", level=level)
    return None


def group_varbinds(varbinds: Any) -> GroupedVarbinds:
    """Group alert-table varbinds by row index and pick up the supply reading.

    Unrecognized identifiers are ignored. Supply names and levels are paired by
    their supply-table row, and the first complete pair wins.
    """
    rows: dict[str, dict[int, Any]] = {}
    levels: dict[str, int] = {}
    names: dict[str, str] = {}

    for oid, value in iter_varbinds(varbinds):
        m = _ALERT_ROW_RE.search(oid)
        if m:
            index = m.group(2) or DEFAULT_INDEX
            rows.setdefault(index, {})[int(m.group(1))] = value
        if SUPPLY_LEVEL_OID in oid:
            levels.setdefault(_supply_row(oid, SUPPLY_LEVEL_OID), to_int(value))
        if SUPPLY_NAME_OID in oid:
            row = _supply_row(oid, SUPPLY_NAME_OID)
            if not names.get(row):
                names[row] = to_text(value)

    entries = {idx: _build_entry(idx, rows[idx]) for idx in sorted(rows, key=_index_key)}
    return GroupedVarbinds(entries=entries, supply=_pick_supply(levels, names))


def flat_entry(varbinds: Any) -> AlertEntry:
    """Collapse alert-table varbinds of any index shape into one entry."""
    fields: dict[int, Any] = {}
    for oid, value in iter_varbinds(varbinds):
        for field, prefix in (
            (FIELD_STD_CODE, STD_CODE_OID),
            (FIELD_VENDOR_CODE, VENDOR_CODE_OID),
            (FIELD_ALERT_GROUP, ALERT_GROUP_OID),
            (FIELD_DESCRIPTION, DESCRIPTION_OID),
        ):
            if prefix in oid and (field != FIELD_DESCRIPTION or value):
                fields[field] = value
    return _build_entry(DEFAULT_INDEX, fields)


def has_alert_oid(varbinds: Any) -> bool:
    return any(ALERT_TABLE_MARKER in oid for oid, _ in iter_varbinds(varbinds))
