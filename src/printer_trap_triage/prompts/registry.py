"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def triage_open_traps(source_ip: str | None = None, limit: int = 100) -> list[dict[str, Any]]:
        """Build a prompt that walks through unresolved printer traps."""
        scope = f"from device {source_ip}" if source_ip else "across all devices"
        return [
            {
                "role": "system",
                "content": (
                    "You are a helpdesk assistant for office printers and copiers. "
                    "Group related alerts per device, put critical ones first, and "
                    "suggest who should handle each group. Do not invent alerts that "
                    "are not in the tool output."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Call list_traps with limit={limit} and review the unresolved traps "
                    f"{scope}. Then:\n"
                    "1) Summarize open problems per sourceIp, most severe first.\n"
                    "2) Flag traps still showing a generic message (\"SNMP Alert\", "
                    "\"Device Alert\") and suggest running reprocess_traps.\n"
                    "3) Propose assignments (assign_traps_by_source) for devices with "
                    "critical alerts."
                ),
            },
        ]
