"""Replay captured trap files into the store.

A capture is a JSON-lines file (optionally gzipped); each line is one gateway
envelope. Bad lines are skipped and counted, never fatal.
"""

from __future__ import annotations

import gzip
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap
from pydantic import ValidationError

from .envelope import TrapEnvelope
from .traps import TrapManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReplaySummary:
    ingested: int
    skipped: int
    trap_ids: tuple[str, ...] = ()


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str):
    """Open a capture file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors="replace")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors="replace") as f:
            yield f


async def iter_envelopes(
    path: str | Path,
    *,
    encoding: str = "utf-8",
) -> AsyncIterator[tuple[int, TrapEnvelope | None]]:
    """Yield (line_no, envelope) per non-blank line; envelope is None for bad lines."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Trap capture not found: {p}")

    async with _open_text(p, encoding=encoding) as f:
        line_no = 0
        async for line in f:
            line_no += 1
            s = line.strip()
            if not s:
                continue
            try:
                yield line_no, TrapEnvelope.model_validate(json.loads(s))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning("Skipping line %d of %s: %s", line_no, p.name, e)
                yield line_no, None


async def replay_file(path: str | Path, manager: TrapManager) -> ReplaySummary:
    """Ingest every valid envelope from a capture file."""
    ids: list[str] = []
    skipped = 0
    async for _, env in iter_envelopes(path):
        if env is None:
            skipped += 1
            continue
        ids.append(
            manager.ingest(
                env.source_ip,
                env.trap_data,
                message=env.parsed_message,
                severity=env.severity,
            )
        )
    logger.info("Replayed %s: %d ingested, %d skipped", path, len(ids), skipped)
    return ReplaySummary(ingested=len(ids), skipped=skipped, trap_ids=tuple(ids))
