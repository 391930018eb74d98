"""Strategies for varbind arrays (``pdu.varbinds`` and bare ``varbinds``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..codes import STANDARD_ALERT_CODES, standard_severity
from ..entries import DESCRIPTION_OID, STD_CODE_OID, iter_varbinds
from ..models import DecodeResult
from ..values import to_int, to_text
from .base import adopt_description, scan_values


@dataclass(frozen=True, slots=True)
class PduVarbindStrategy:
    """Scan ``pdu.varbinds`` for alert codes, descriptions and problem text.

    Later varbinds override earlier ones.
    """

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        pdu = payload.get("pdu")
        if not isinstance(pdu, Mapping):
            return None
        varbinds = pdu.get("varbinds")
        if not isinstance(varbinds, list):
            return None

        out: DecodeResult | None = None
        for oid, value in iter_varbinds(varbinds):
            if STD_CODE_OID in oid:
                code = to_int(value)
                if code in STANDARD_ALERT_CODES:
                    out = DecodeResult(
                        message=STANDARD_ALERT_CODES[code], severity=standard_severity(code)
                    )
            if DESCRIPTION_OID in oid and value:
                out = adopt_description(out, to_text(value))
            out = scan_values([value], out)

        if out is None or not out.message:
            return None
        return out


@dataclass(frozen=True, slots=True)
class FlatVarbindStrategy:
    """Scan a top-level ``varbinds`` array for problem text only."""

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        varbinds = payload.get("varbinds")
        if not isinstance(varbinds, list):
            return None
        values = [vb.get("value") for vb in varbinds if isinstance(vb, Mapping)]
        out = scan_values(values)
        if out is None or not out.message:
            return None
        return out
