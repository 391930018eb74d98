"""Pick the single most important alert among the rows of one trap."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .codes import DEVICE_ALERT
from .models import AlertEntry, DecodeResult
from .resolver import resolve_entry

logger = logging.getLogger(__name__)


def _rank_key(result: DecodeResult) -> tuple[int, bool]:
    """Severity first, then prefer a specific message over the placeholder."""
    specific = bool(result.message) and result.message != DEVICE_ALERT
    return result.severity.rank, specific


def pick_best(results: Iterable[DecodeResult]) -> DecodeResult | None:
    """Return the highest-ranked non-ignored result, or None.

    Earlier results win exact ties.
    """
    best: DecodeResult | None = None
    for result in results:
        if result.ignore:
            continue
        if best is None or _rank_key(result) > _rank_key(best):
            best = result
    if best is None or not best.message:
        return None
    return best


def resolve_entries(entries: Iterable[AlertEntry]) -> list[DecodeResult]:
    """Resolve every entry; a row that fails to resolve is skipped."""
    out: list[DecodeResult] = []
    for entry in entries:
        try:
            out.append(resolve_entry(entry))
        except Exception:
            logger.debug("Skipping unresolvable alert entry %r", entry, exc_info=True)
    return out
