"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: decode, ingest and lifecycle actions on stored traps
- Resources: the reference code tables and individual traps via URI
- Prompts: reusable triage conversation templates

Run locally (stdio):
    python -m printer_trap_triage.server.trap_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from printer_trap_triage.core.settings import resolve_settings
from printer_trap_triage.prompts.registry import register_prompts
from printer_trap_triage.resources.registry import register_resources
from printer_trap_triage.tools.traps import (
    assign_trap_impl,
    assign_traps_by_source_impl,
    clear_traps_impl,
    decode_trap_impl,
    ingest_trap_impl,
    list_traps_impl,
    reprocess_traps_impl,
    resolve_trap_impl,
    resolve_traps_by_source_impl,
)

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure logging on stderr; stdout carries the MCP transport."""
    level_name = resolve_settings().log_level
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


mcp = FastMCP("printer-trap-triage", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def decode_trap(trap_data: dict[str, Any]) -> dict[str, str]:
    """Decode a trap payload into {"message", "severity"} without storing it."""
    return decode_trap_impl(trap_data=trap_data)


@mcp.tool()
def ingest_trap(
    source_ip: str,
    trap_data: dict[str, Any],
    parsed_message: str | None = None,
    severity: str | None = None,
) -> dict[str, Any]:
    """Store a trap forwarded by the gateway.

    Parameters
    ----------
    source_ip:
        Address of the device that sent the trap.
    trap_data:
        Gateway payload (decodedVarbinds, pdu, varbinds, message, ...).
    parsed_message/severity:
        The gateway's own decode. Kept unless generic or incomplete.
    """
    return ingest_trap_impl(
        envelope={
            "sourceIp": source_ip,
            "trapData": trap_data,
            "parsedMessage": parsed_message,
            "severity": severity,
        }
    )


@mcp.tool()
def list_traps(limit: int | None = None, include_payload: bool = False) -> dict[str, Any]:
    """Return stored traps, newest first."""
    return list_traps_impl(limit=limit, include_payload=include_payload)


@mcp.tool()
def resolve_trap(trap_id: str, actor: str | None = None) -> dict[str, Any]:
    """Mark one trap resolved."""
    return resolve_trap_impl(trap_id=trap_id, actor=actor)


@mcp.tool()
def resolve_traps_by_source(source_ip: str, actor: str | None = None) -> dict[str, Any]:
    """Resolve every unresolved trap from one device."""
    return resolve_traps_by_source_impl(source_ip=source_ip, actor=actor)


@mcp.tool()
def assign_trap(trap_id: str, technician: str) -> dict[str, Any]:
    """Assign one trap to a technician."""
    return assign_trap_impl(trap_id=trap_id, technician=technician)


@mcp.tool()
def assign_traps_by_source(source_ip: str, technician: str) -> dict[str, Any]:
    """Assign every unresolved trap from one device to a technician."""
    return assign_traps_by_source_impl(source_ip=source_ip, technician=technician)


@mcp.tool()
def reprocess_traps() -> dict[str, Any]:
    """Re-decode stored traps that still carry a generic message."""
    return reprocess_traps_impl()


@mcp.tool()
def clear_traps() -> dict[str, Any]:
    """Delete every stored trap."""
    return clear_traps_impl()


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
