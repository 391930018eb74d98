"""Reference code tables for printer alerts.

Standard codes follow the Printer MIB (RFC 3805) ``prtAlertCode`` numbering.
Vendor codes cover Sharp BP-series and Ricoh devices. All tables are
read-only and shared by every decode call.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .models import Severity

OTHER_ALERT = "Other Alert"
DEVICE_ALERT = "Device Alert"
FALLBACK_MESSAGE = "SNMP Alert"

# Messages that carry no specific information about the device state.
PLACEHOLDER_MESSAGES = frozenset({OTHER_ALERT, DEVICE_ALERT})
GENERIC_MESSAGES = frozenset({DEVICE_ALERT, FALLBACK_MESSAGE})

STANDARD_ALERT_CODES: Mapping[int, str] = MappingProxyType(
    {
        1: OTHER_ALERT,
        3: "Cover Open",
        4: "Cover Closed",
        5: "Interlock Open",
        6: "Interlock Closed",
        7: "Configuration Change",
        8: "Paper Jam",
        9: "Paper Jam Cleared",
        10: "Toner Empty",
        11: "Toner Low",
        12: "Waste Toner Full",
        13: "Paper Empty",
        14: "Paper Low",
        15: "Paper Added",
        16: "Door Open",
        17: "Door Closed",
        18: "Power Up",
        19: "Power Down",
        20: "Device Offline",
        21: "Device Online",
        22: "Input Tray Missing",
        23: "Output Tray Missing",
        24: "Marker Supply Missing",
        25: "Output Tray Full",
        26: "Output Almost Full",
        27: "Marker Supply Empty",
        28: "Marker Supply Low",
        29: "OPC Drum Near End",
        30: "OPC Drum End of Life",
        31: "Developer Low",
        32: "Developer Empty",
        41: "Service Required",
        42: "Multi-Feed Jam",
        43: "Fuser Over Temperature",
        44: "Fuser Under Temperature",
        45: "Toner Low (Replace Soon)",
        46: "Misfeed",
        # tray-specific
        501: "Tray 1 Paper Low",
        502: "Tray 2 Paper Low",
        503: "Tray 3 Paper Low",
        504: "Tray 4 Paper Low",
        # colorant-specific
        1001: "Black Toner Low",
        1002: "Cyan Toner Low",
        1003: "Magenta Toner Low",
        1004: "Yellow Toner Low",
    }
)

# Codes accepted from an alert-table row; tray/colorant codes only arrive as explicit codes.
ENTRY_CODE_RANGE = range(2, 47)

CRITICAL_CODES = frozenset({8, 10, 12, 13, 20, 27, 30, 32, 42, 43, 44, 46})
WARNING_CODES = frozenset({11, 14, 25, 26, 28, 29, 31, 41, 45})


@dataclass(frozen=True, slots=True)
class VendorCode:
    message: str
    severity: Severity
    ignore: bool = False


@dataclass(frozen=True, slots=True)
class GroupContext:
    message: str
    severity: Severity


@dataclass(frozen=True, slots=True)
class ProblemPattern:
    """Free-text pattern mapped to a canonical message."""

    pattern: re.Pattern[str]
    message: str
    severity: Severity

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _vendor(message: str, severity: Severity, ignore: bool = False) -> VendorCode:
    return VendorCode(message=message, severity=severity, ignore=ignore)


_INFO, _WARN, _CRIT = Severity.INFO, Severity.WARNING, Severity.CRITICAL

VENDOR_ALERT_CODES: Mapping[int, VendorCode] = MappingProxyType(
    {
        # Sharp (BP-series copiers)
        800: _vendor("Normal Operation", _INFO, ignore=True),
        801: _vendor("Ready", _INFO, ignore=True),
        802: _vendor("Warming Up", _INFO, ignore=True),
        803: _vendor("Energy Saver Mode", _INFO, ignore=True),
        804: _vendor("Sleep Mode", _INFO, ignore=True),
        805: _vendor("Paper Jam", _CRIT),
        806: _vendor("Cover Open", _WARN),
        807: _vendor("Paper Low", _WARN),
        808: _vendor("Input Tray Empty", _WARN),
        809: _vendor("Toner Low", _WARN),
        810: _vendor("Toner Empty", _CRIT),
        811: _vendor("Waste Toner Almost Full", _WARN),
        812: _vendor("Waste Toner Full", _CRIT),
        813: _vendor("Drum Near End", _WARN),
        814: _vendor("Drum End of Life", _CRIT),
        815: _vendor("Developer Low", _WARN),
        816: _vendor("Fuser Error", _CRIT),
        817: _vendor("Service Required", _CRIT),
        818: _vendor("Multi-Feed Jam", _CRIT),
        819: _vendor("Output Tray Full", _WARN),
        820: _vendor("Staple Empty", _WARN),
        821: _vendor("Staple Jam", _CRIT),
        822: _vendor("Punch Waste Full", _WARN),
        823: _vendor("Door Open", _WARN),
        824: _vendor("Misfeed", _CRIT),
        825: _vendor("Communication Error", _CRIT),
        # Ricoh
        10003: _vendor("Normal Operation", _INFO, ignore=True),
        10033: _vendor("Energy Saver Mode", _INFO, ignore=True),
        10034: _vendor("Sleep Mode", _INFO, ignore=True),
        13100: _vendor("Toner OK", _INFO, ignore=True),
        13200: _vendor("Drum OK", _INFO, ignore=True),
        13300: _vendor("Fuser OK", _INFO, ignore=True),
        13400: _vendor("Paper Feed OK", _INFO, ignore=True),
        13500: _vendor("Output OK", _INFO, ignore=True),
    }
)

# prtAlertGroup classifiers (RFC 3805), used only when nothing more specific is known.
ALERT_GROUP_CONTEXT: Mapping[int, GroupContext] = MappingProxyType(
    {
        5: GroupContext("General Printer Alert", _WARN),
        6: GroupContext("Cover/Door Alert", _WARN),
        8: GroupContext("Input/Paper Tray Alert", _WARN),
        9: GroupContext("Output Tray Alert", _WARN),
        10: GroupContext("Marker Alert", _WARN),
        11: GroupContext("Toner/Supply Alert", _WARN),
        12: GroupContext("Colorant Alert", _WARN),
        13: GroupContext("Paper Path Alert", _WARN),
        14: GroupContext("Channel Alert", _INFO),
        15: GroupContext("Interpreter Alert", _INFO),
        30: GroupContext("Finisher Alert", _WARN),
        31: GroupContext("Finisher Supply Alert", _WARN),
        32: GroupContext("Finisher Media Input Alert", _WARN),
    }
)


def _pattern(regex: str, message: str, severity: Severity) -> ProblemPattern:
    return ProblemPattern(re.compile(regex, re.IGNORECASE), message, severity)


# Order matters: first match wins, so specific phrases precede the catch-alls.
PROBLEM_PATTERNS: tuple[ProblemPattern, ...] = (
    _pattern(r"paper\s*jam", "Paper Jam", _CRIT),
    _pattern(r"misfeed", "Misfeed", _CRIT),
    _pattern(r"toner\s*(empty|out)", "Toner Empty", _CRIT),
    _pattern(r"toner\s*low", "Toner Low", _WARN),
    _pattern(r"ink\s*(empty|out)", "Ink Empty", _CRIT),
    _pattern(r"ink\s*low", "Ink Low", _WARN),
    _pattern(r"paper\s*(empty|out)", "Paper Empty", _CRIT),
    _pattern(r"paper\s*low", "Paper Low", _WARN),
    _pattern(r"cover\s*open", "Cover Open", _WARN),
    _pattern(r"door\s*open", "Door Open", _WARN),
    _pattern(r"drum\s*(empty|end|life)", "Drum End of Life", _CRIT),
    _pattern(r"drum\s*low", "Drum Near End of Life", _WARN),
    _pattern(r"waste\s*toner", "Waste Toner Full", _CRIT),
    _pattern(r"fuser", "Fuser Error", _CRIT),
    _pattern(r"offline", "Device Offline", _CRIT),
    _pattern(r"service\s*(call|required|request)", "Service Required", _CRIT),
    _pattern(r"staple", "Staples Low/Empty", _WARN),
    _pattern(r"output\s*full", "Output Tray Full", _WARN),
    _pattern(r"warming", "Warming Up", _INFO),
    _pattern(r"ready", "Ready", _INFO),
    _pattern(r"error", "Device Error", _WARN),
    _pattern(r"alert", DEVICE_ALERT, _INFO),
)


def standard_severity(code: int) -> Severity:
    """Severity class of a standard alert code (info unless listed)."""
    if code in CRITICAL_CODES:
        return Severity.CRITICAL
    if code in WARNING_CODES:
        return Severity.WARNING
    return Severity.INFO


def match_problem(text: str) -> ProblemPattern | None:
    """Return the first problem pattern found in text."""
    for prob in PROBLEM_PATTERNS:
        if prob.matches(text):
            return prob
    return None


def is_placeholder(message: str | None) -> bool:
    """True for empty messages and the non-specific alert placeholders."""
    return not message or message in PLACEHOLDER_MESSAGES


def is_generic(message: str | None) -> bool:
    """True for empty messages and messages that should trigger a re-decode."""
    return not message or not message.strip() or message in GENERIC_MESSAGES
