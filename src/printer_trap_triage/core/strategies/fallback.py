"""Last-resort strategies: raw text, bare trap OID and varbind summaries."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..codes import ALERT_GROUP_CONTEXT, VENDOR_ALERT_CODES, match_problem
from ..entries import ALERT_TABLE_MARKER, PRINTER_STATUS_MARKER, SUPPLY_TABLE_MARKER
from ..models import DecodeResult, Severity

_ALERT_GROUP_TOKEN_RE = re.compile(r"alertGroup=(\d+)")
_VENDOR_CODE_TOKEN_RE = re.compile(r"vendorCode=(\d+)")

# (marker, message, severity); first marker found in the OID wins.
OID_CATEGORIES: tuple[tuple[str, str, Severity], ...] = (
    (ALERT_TABLE_MARKER, "Printer Alert", Severity.WARNING),
    (SUPPLY_TABLE_MARKER, "Supply Status Change", Severity.INFO),
    (PRINTER_STATUS_MARKER, "Printer Status Change", Severity.INFO),
)


@dataclass(frozen=True, slots=True)
class RawTextStrategy:
    """Gateway ``rawData`` text scanned against problem patterns."""

    field: str = "rawData"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        raw = payload.get(self.field)
        if not isinstance(raw, str):
            return None
        prob = match_problem(raw)
        if prob is None:
            return None
        return DecodeResult(message=prob.message, severity=prob.severity)


@dataclass(frozen=True, slots=True)
class BareOidStrategy:
    """Trap OID alone, mapped to a coarse category."""

    field: str = "oid"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        oid = payload.get(self.field)
        if not isinstance(oid, str) or not oid:
            return None
        for marker, message, severity in OID_CATEGORIES:
            if marker in oid:
                return DecodeResult(message=message, severity=severity)
        return None


@dataclass(frozen=True, slots=True)
class SummaryStrategy:
    """``varbindSummary`` string with embedded ``alertGroup=N`` / ``vendorCode=N`` tokens."""

    field: str = "varbindSummary"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        summary = payload.get(self.field)
        if not isinstance(summary, str):
            return None

        m = _ALERT_GROUP_TOKEN_RE.search(summary)
        if m:
            ctx = ALERT_GROUP_CONTEXT.get(int(m.group(1)))
            if ctx is not None:
                return DecodeResult(message=ctx.message, severity=ctx.severity)

        m = _VENDOR_CODE_TOKEN_RE.search(summary)
        if m:
            vendor = VENDOR_ALERT_CODES.get(int(m.group(1)))
            if vendor is not None and not vendor.ignore:
                return DecodeResult(message=vendor.message, severity=vendor.severity)
        return None
