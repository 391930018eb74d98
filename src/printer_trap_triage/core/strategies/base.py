"""Decode strategy interface and shared text scanning."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from ..codes import is_placeholder, match_problem
from ..models import DecodeResult, Severity
from ..values import is_opaque_value

MIN_TEXT_LEN = 4
FREEFORM_MIN_LEN = 5
FREEFORM_MAX_LEN = 100
FREEFORM_KEEP = 80


class DecodeStrategy(Protocol):
    """Strategy interface: return a DecodeResult if the payload shape matches, else None."""

    def decode(self, payload: Mapping[str, Any]) -> DecodeResult | None:
        """Decode one payload shape."""
        ...


def scan_values(values: Iterable[Any], current: DecodeResult | None = None) -> DecodeResult | None:
    """Scan varbind string values for known problems.

    A problem pattern always replaces the current result. Otherwise the first
    plausible free-text value becomes the message when nothing set one yet.
    """
    out = current
    for value in values:
        if not isinstance(value, str) or len(value) < MIN_TEXT_LEN:
            continue
        text = value.strip()
        if is_opaque_value(text):
            continue
        prob = match_problem(text)
        if prob is not None:
            out = DecodeResult(message=prob.message, severity=prob.severity)
        elif (out is None or not out.message) and FREEFORM_MIN_LEN <= len(text) <= FREEFORM_MAX_LEN:
            out = DecodeResult(message=text[:FREEFORM_KEEP], severity=Severity.INFO)
    return out


def adopt_description(current: DecodeResult | None, text: str) -> DecodeResult | None:
    """Use an alert description as the message when nothing specific is known."""
    if len(text) < MIN_TEXT_LEN:
        return current
    if current is None:
        return DecodeResult(message=text)
    if is_placeholder(current.message):
        return DecodeResult(message=text, severity=current.severity)
    return current
