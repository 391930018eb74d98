"""Payload decode strategies, one per supported trap payload shape."""

from __future__ import annotations

from .base import DecodeStrategy, scan_values
from .explicit import AlertCodeStrategy, MessageFieldStrategy
from .fallback import BareOidStrategy, RawTextStrategy, SummaryStrategy
from .grouped import UNRECOGNIZED_ALERT, GroupedVarbindStrategy, UnrecognizedAlertStrategy
from .pdu import FlatVarbindStrategy, PduVarbindStrategy
from .polled import PolledAlertStrategy

__all__ = [
    "UNRECOGNIZED_ALERT",
    "AlertCodeStrategy",
    "BareOidStrategy",
    "DecodeStrategy",
    "FlatVarbindStrategy",
    "GroupedVarbindStrategy",
    "MessageFieldStrategy",
    "PduVarbindStrategy",
    "PolledAlertStrategy",
    "RawTextStrategy",
    "SummaryStrategy",
    "UnrecognizedAlertStrategy",
    "scan_values",
]
