"""Trap payload decoding.

This module is the main integration point that turns a gateway payload into one
canonical ``DecodeResult``. Decoding is pure: it never mutates the payload and
never raises.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .codes import FALLBACK_MESSAGE, is_generic
from .models import DecodeResult, Severity
from .strategies import (
    AlertCodeStrategy,
    BareOidStrategy,
    DecodeStrategy,
    FlatVarbindStrategy,
    GroupedVarbindStrategy,
    MessageFieldStrategy,
    PduVarbindStrategy,
    PolledAlertStrategy,
    RawTextStrategy,
    SummaryStrategy,
    UnrecognizedAlertStrategy,
)
from .supply import evaluate_supply, extract_supply

logger = logging.getLogger(__name__)

FALLBACK = DecodeResult(message=FALLBACK_MESSAGE, severity=Severity.INFO)


def default_strategies() -> list[DecodeStrategy]:
    """Default strategy chain (first non-generic result wins)."""
    return [
        AlertCodeStrategy(),
        MessageFieldStrategy(),
        GroupedVarbindStrategy(),
        PduVarbindStrategy(),
        FlatVarbindStrategy(),
        PolledAlertStrategy(),
        RawTextStrategy(),
        BareOidStrategy(),
        UnrecognizedAlertStrategy(),
        SummaryStrategy(),
    ]


def _as_mapping(payload: Any) -> Mapping[str, Any] | None:
    """Accept a payload mapping or its JSON text."""
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, (str, bytes)):
        try:
            obj = json.loads(payload)
        except (ValueError, RecursionError):
            return None
        return obj if isinstance(obj, Mapping) else None
    return None


@dataclass(frozen=True, slots=True)
class TrapDecoder:
    """Try strategies in order, then let supply thresholds override the result."""

    strategies: Sequence[DecodeStrategy]

    def _cascade(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        tentative: DecodeResult | None = None
        for strategy in self.strategies:
            try:
                out = strategy.decode(payload)
            except Exception:
                logger.debug("%s failed on payload", type(strategy).__name__, exc_info=True)
                continue
            if out is None or not out.message or out.ignore:
                continue
            if not is_generic(out.message):
                return out
            if tentative is None:
                tentative = out
        return tentative

    def _supply_override(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        try:
            reading = extract_supply(payload)
        except Exception:
            logger.debug("Supply extraction failed on payload", exc_info=True)
            return None
        if reading is None:
            return None
        return evaluate_supply(reading.name, reading.level)

    def decode(self, payload: Any) -> DecodeResult:
        """Decode a payload into a message and severity; unknown shapes yield the fallback."""
        data = _as_mapping(payload)
        if data is None:
            return FALLBACK

        result = self._cascade(data)
        override = self._supply_override(data)
        if override is not None:
            result = override
        if result is None:
            return FALLBACK
        return DecodeResult(message=result.message, severity=result.severity)


_DEFAULT_DECODER = TrapDecoder(strategies=tuple(default_strategies()))


def decode(payload: Any) -> DecodeResult:
    """Decode a trap payload with the default strategy chain."""
    return _DEFAULT_DECODER.decode(payload)
