"""Strategies for payloads that name the alert directly."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..codes import STANDARD_ALERT_CODES, match_problem, standard_severity
from ..models import DecodeResult, Severity
from ..values import to_int


@dataclass(frozen=True, slots=True)
class AlertCodeStrategy:
    """Explicit ``alertCode`` field holding a standard alert code."""

    field: str = "alertCode"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        raw = payload.get(self.field)
        if raw is None or raw == "" or raw is False:
            return None
        code = to_int(raw)
        message = STANDARD_ALERT_CODES.get(code)
        if message is None:
            return None
        return DecodeResult(message=message, severity=standard_severity(code))


@dataclass(frozen=True, slots=True)
class MessageFieldStrategy:
    """Explicit ``message`` text; the text is kept and scored against problem patterns."""

    field: str = "message"

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        raw = payload.get(self.field)
        if not isinstance(raw, str) or not raw.strip():
            return None
        message = raw.strip()
        prob = match_problem(message)
        severity = prob.severity if prob is not None else Severity.INFO
        return DecodeResult(message=message, severity=severity)
