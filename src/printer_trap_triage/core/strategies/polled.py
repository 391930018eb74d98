"""Strategy for alerts produced by device polling rather than traps."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..models import DecodeResult, Severity
from ..values import to_text

POLLED_ALERT_TYPE = "polled_alert"


@dataclass(frozen=True, slots=True)
class PolledAlertStrategy:
    """``{"type": "polled_alert", "alert": {"text", "severity"}}``.

    The ``supply`` sub-object is handled by the supply thresholds.
    """

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        if payload.get("type") != POLLED_ALERT_TYPE:
            return None
        alert = payload.get("alert")
        if not isinstance(alert, Mapping):
            return None
        text = to_text(alert.get("text"))
        if not text:
            return None
        severity = Severity.parse(alert.get("severity"), Severity.WARNING)
        return DecodeResult(message=text, severity=severity)
