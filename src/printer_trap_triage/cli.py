from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from printer_trap_triage.core.decoder import decode
from printer_trap_triage.core.replay import replay_file
from printer_trap_triage.core.settings import resolve_settings
from printer_trap_triage.core.store import open_store
from printer_trap_triage.core.traps import TrapManager


def _load_json(path: Path) -> object:
    """Read a JSON payload from a file, or stdin for '-'."""
    text = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
    return json.loads(text)


def _cmd_decode(args: argparse.Namespace, manager: TrapManager) -> int:
    result = decode(_load_json(Path(args.payload)))
    print(json.dumps(result.as_dict()))
    return 0


def _cmd_replay(args: argparse.Namespace, manager: TrapManager) -> int:
    summary = asyncio.run(replay_file(args.capture, manager))
    print(f"Ingested {summary.ingested} trap(s), skipped {summary.skipped}.")
    return 0


def _cmd_list(args: argparse.Namespace, manager: TrapManager) -> int:
    traps = manager.list_traps(args.limit)
    for t in traps:
        state = "resolved" if t.processed else "open"
        who = f" -> {t.assigned_to}" if t.assigned_to else ""
        print(
            f"{t.id} {t.received_at.isoformat()} {t.source_ip} "
            f"[{t.severity.value}] {t.parsed_message} ({state}){who}"
        )
    print(f"\n{len(traps)} trap(s).")
    return 0


def _cmd_reprocess(args: argparse.Namespace, manager: TrapManager) -> int:
    s = manager.reprocess_all()
    print(f"Updated {s.updated} of {s.total} trap(s); {s.failed} failed.")
    return 0


def _cmd_clear(args: argparse.Namespace, manager: TrapManager) -> int:
    print(f"Cleared {manager.clear_all()} trap(s).")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for local use against the configured store."""
    p = argparse.ArgumentParser(description="Decode and manage printer SNMP traps.")
    p.add_argument("--db", default=None, help="SQLite path (defaults to TRAP_TRIAGE_DB_PATH)")
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("decode", help="Decode one JSON payload (file or '-')")
    d.add_argument("payload")
    d.set_defaults(func=_cmd_decode)

    r = sub.add_parser("replay", help="Ingest a JSON-lines trap capture (.jsonl or .gz)")
    r.add_argument("capture")
    r.set_defaults(func=_cmd_replay)

    ls = sub.add_parser("list", help="List stored traps, newest first")
    ls.add_argument("--limit", type=int, default=None)
    ls.set_defaults(func=_cmd_list)

    sub.add_parser("reprocess", help="Re-decode traps with generic messages").set_defaults(
        func=_cmd_reprocess
    )
    sub.add_parser("clear", help="Delete every stored trap").set_defaults(func=_cmd_clear)

    args = p.parse_args(argv)

    try:
        settings = resolve_settings()
        logging.basicConfig(
            level=getattr(logging, settings.log_level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if getattr(args, "limit", 0) is None:
            args.limit = settings.default_limit
        manager = TrapManager(
            open_store(args.db or settings.db_path),
            default_actor=settings.default_actor,
        )
        code = args.func(args, manager)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (ValueError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    raise SystemExit(code)


if __name__ == "__main__":
    main()
