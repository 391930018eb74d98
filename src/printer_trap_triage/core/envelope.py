"""Gateway ingest envelope."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrapEnvelope(BaseModel):
    """One trap as forwarded by the SNMP gateway."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    source_ip: str = Field(default="unknown", alias="sourceIp", description="Device address.")
    trap_data: dict[str, Any] = Field(
        default_factory=dict,
        alias="trapData",
        description="Partially decoded trap payload, stored verbatim.",
    )
    parsed_message: str | None = Field(
        default=None, alias="parsedMessage", description="Gateway's own decode, if any."
    )
    severity: Literal["info", "warning", "critical"] | None = Field(
        default=None, description="Gateway's own severity, if any."
    )

    @field_validator("severity", mode="before")
    @classmethod
    def _lower_severity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value
