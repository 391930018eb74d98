"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from printer_trap_triage.core.codes import (
    ALERT_GROUP_CONTEXT,
    CRITICAL_CODES,
    PROBLEM_PATTERNS,
    STANDARD_ALERT_CODES,
    VENDOR_ALERT_CODES,
    WARNING_CODES,
    standard_severity,
)
from printer_trap_triage.core.envelope import TrapEnvelope
from printer_trap_triage.tools.traps import default_manager, record_to_dict


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://trap-triage/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://trap-triage/help\n"
            "- app://trap-triage/codes/standard\n"
            "- app://trap-triage/codes/vendor\n"
            "- app://trap-triage/codes/groups\n"
            "- app://trap-triage/codes/patterns\n"
            "- app://trap-triage/codes/severity-classes\n"
            "- app://trap-triage/schemas/envelope\n"
            "- trap://{trap_id} (one stored trap, including its raw payload)\n"
        )

    @mcp.resource("app://trap-triage/codes/standard")
    def standard_codes() -> dict[str, dict[str, str]]:
        """Return standard alert codes with their severity class."""
        return {
            str(code): {"message": msg, "severity": standard_severity(code).value}
            for code, msg in STANDARD_ALERT_CODES.items()
        }

    @mcp.resource("app://trap-triage/codes/vendor")
    def vendor_codes() -> dict[str, dict[str, Any]]:
        """Return vendor alert codes, including the non-actionable ones."""
        return {
            str(code): {"message": v.message, "severity": v.severity.value, "ignore": v.ignore}
            for code, v in VENDOR_ALERT_CODES.items()
        }

    @mcp.resource("app://trap-triage/codes/groups")
    def group_codes() -> dict[str, dict[str, str]]:
        """Return alert-group fallbacks."""
        return {
            str(grp): {"message": ctx.message, "severity": ctx.severity.value}
            for grp, ctx in ALERT_GROUP_CONTEXT.items()
        }

    @mcp.resource("app://trap-triage/codes/patterns")
    def problem_patterns() -> list[dict[str, str]]:
        """Return free-text problem patterns in evaluation order."""
        return [
            {"pattern": p.pattern.pattern, "message": p.message, "severity": p.severity.value}
            for p in PROBLEM_PATTERNS
        ]

    @mcp.resource("app://trap-triage/codes/severity-classes")
    def severity_classes() -> dict[str, list[int]]:
        """Return the standard codes classed as critical or warning; all others are info."""
        return {"critical": sorted(CRITICAL_CODES), "warning": sorted(WARNING_CODES)}

    @mcp.resource("app://trap-triage/schemas/envelope")
    def envelope_schema() -> dict[str, Any]:
        """Return the JSON schema for gateway ingest envelopes."""
        return TrapEnvelope.model_json_schema(by_alias=True)

    @mcp.resource("trap://{trap_id}")
    def trap_record(trap_id: str) -> dict[str, Any]:
        """Return one stored trap."""
        return record_to_dict(default_manager().get(trap_id), include_payload=True)
