"""Strategies for gateway-decoded varbind maps (``decodedVarbinds``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..arbiter import pick_best, resolve_entries
from ..entries import flat_entry, group_varbinds, has_alert_oid
from ..models import DecodeResult, Severity
from ..resolver import resolve_entry

UNRECOGNIZED_ALERT = "Printer Alert (unrecognized code)"


@dataclass(frozen=True, slots=True)
class GroupedVarbindStrategy:
    """Group alert-table rows by index, resolve each row and keep the most severe."""

    field: str = "decodedVarbinds"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        vb = payload.get(self.field)
        if not vb:
            return None
        grouped = group_varbinds(vb)
        if grouped.entries:
            return pick_best(resolve_entries(grouped.entries.values()))

        # Legacy shape: alert columns without a recognizable row index.
        result = resolve_entry(flat_entry(vb))
        if result.message and not result.ignore:
            return result
        return None


@dataclass(frozen=True, slots=True)
class UnrecognizedAlertStrategy:
    """Alert-table varbinds are present but no code or text could be read from them.

    Rows that resolved to a non-actionable vendor state carry no alert at all,
    so they do not count as unrecognized.
    """

    field: str = "decodedVarbinds"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        vb = payload.get(self.field)
        if not vb or not has_alert_oid(vb):
            return None
        grouped = group_varbinds(vb)
        results = resolve_entries(grouped.entries.values()) or [resolve_entry(flat_entry(vb))]
        if any(r.ignore for r in results):
            return None
        return DecodeResult(message=UNRECOGNIZED_ALERT, severity=Severity.WARNING)
