"""Resolve a single alert-table row into a candidate alert."""

from __future__ import annotations

import re

from .codes import (
    ALERT_GROUP_CONTEXT,
    ENTRY_CODE_RANGE,
    STANDARD_ALERT_CODES,
    VENDOR_ALERT_CODES,
    is_placeholder,
    standard_severity,
)
from .models import AlertEntry, DecodeResult, Severity
from .values import is_hex_dump

_COUNTER_SUFFIX_RE = re.compile(r"\s*\{\d+\}\s*$")
MIN_DESCRIPTION_LEN = 4


def clean_description(text: str) -> str:
    """Strip a trailing ``{N}`` counter some devices append to descriptions."""
    return _COUNTER_SUFFIX_RE.sub("", text).strip()


def resolve_entry(entry: AlertEntry) -> DecodeResult:
    """Resolve one alert entry: standard code, vendor code, description, then group."""
    message = ""
    severity = Severity.INFO

    if entry.std_code in ENTRY_CODE_RANGE and entry.std_code in STANDARD_ALERT_CODES:
        message = STANDARD_ALERT_CODES[entry.std_code]
        severity = standard_severity(entry.std_code)

    vendor = VENDOR_ALERT_CODES.get(entry.vendor_code) if entry.vendor_code > 0 else None
    if vendor is not None:
        if vendor.ignore:
            return DecodeResult(message=vendor.message, severity=Severity.INFO, ignore=True)
        message = vendor.message
        severity = vendor.severity

    desc = entry.description
    if len(desc) >= MIN_DESCRIPTION_LEN and not is_hex_dump(desc) and is_placeholder(message):
        cleaned = clean_description(desc)
        if len(cleaned) >= MIN_DESCRIPTION_LEN:
            message = cleaned

    if is_placeholder(message) and entry.alert_group > 0:
        ctx = ALERT_GROUP_CONTEXT.get(entry.alert_group)
        if ctx is not None:
            message = ctx.message
            # never downgrade a severity a specific code already set
            if severity is Severity.INFO:
                severity = ctx.severity

    return DecodeResult(message=message, severity=severity)
