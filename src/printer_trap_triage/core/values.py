"""Lenient coercion of loosely-typed varbind values."""

from __future__ import annotations

import re
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")
_NUMERIC_RE = re.compile(r"^[\d.]+$")
_HEX_RE = re.compile(r"^[0-9a-f]+$", re.IGNORECASE)


def to_int(value: Any, default: int = 0) -> int:
    """Read an integer from a varbind value; return default when there is none."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else default  # NaN
    if isinstance(value, (str, bytes)):
        text = value.decode("ascii", errors="ignore") if isinstance(value, bytes) else value
        m = _LEADING_INT_RE.match(text)
        if m:
            return int(m.group(1))
    return default


def to_text(value: Any) -> str:
    """Stringify a varbind value, dropping surrounding whitespace."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").strip()
    return str(value).strip()


def is_opaque_value(text: str) -> bool:
    """True for bare numbers, dotted identifiers and hex strings."""
    return bool(_NUMERIC_RE.match(text) or _HEX_RE.match(text))


def is_hex_dump(text: str) -> bool:
    return text.startswith("0x")
