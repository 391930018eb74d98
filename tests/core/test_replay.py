from __future__ import annotations

import gzip
import json
from pathlib import Path

import pytest

from printer_trap_triage.core.replay import replay_file
from printer_trap_triage.core.traps import TrapManager


def _capture_lines() -> list[str]:
    return [
        json.dumps({"sourceIp": "10.0.0.5", "trapData": {"alertCode": 8}}),
        "",
        "{not json",
        json.dumps({"sourceIp": "10.0.0.6", "trapData": {}, "severity": "urgent"}),
        json.dumps(
            {
                "sourceIp": "10.0.0.7",
                "trapData": {"rawData": "toner low"},
                "parsedMessage": "Staple Jam",
                "severity": "critical",
            }
        ),
    ]


@pytest.mark.asyncio
async def test_replay_jsonl(tmp_path: Path, manager: TrapManager) -> None:
    path = tmp_path / "capture.jsonl"
    path.write_text("\n".join(_capture_lines()) + "\n", encoding="utf-8")

    summary = await replay_file(path, manager)

    assert (summary.ingested, summary.skipped) == (2, 2)
    traps = {t.source_ip: t for t in manager.list_traps()}
    assert traps["10.0.0.5"].parsed_message == "Paper Jam"
    assert traps["10.0.0.7"].parsed_message == "Staple Jam"


@pytest.mark.asyncio
async def test_replay_gzip(tmp_path: Path, manager: TrapManager) -> None:
    path = tmp_path / "capture.jsonl.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("\n".join(_capture_lines()) + "\n")

    summary = await replay_file(path, manager)
    assert summary.ingested == 2
    assert len(summary.trap_ids) == 2


@pytest.mark.asyncio
async def test_replay_missing_file(tmp_path: Path, manager: TrapManager) -> None:
    with pytest.raises(FileNotFoundError):
        await replay_file(tmp_path / "nope.jsonl", manager)
