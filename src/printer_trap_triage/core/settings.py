"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DB_PATH_ENV = "TRAP_TRIAGE_DB_PATH"
LOG_LEVEL_ENV = "TRAP_TRIAGE_LOG_LEVEL"
DEFAULT_LIMIT_ENV = "TRAP_TRIAGE_DEFAULT_LIMIT"
DEFAULT_ACTOR_ENV = "TRAP_TRIAGE_DEFAULT_ACTOR"


@dataclass(frozen=True, slots=True)
class TriageSettings:
    db_path: str | None = None
    log_level: str = "INFO"
    default_limit: int = 100
    default_actor: str = "User"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def resolve_settings() -> TriageSettings:
    """Build settings from TRAP_TRIAGE_* environment variables."""
    defaults = TriageSettings()
    return TriageSettings(
        db_path=os.getenv(DB_PATH_ENV) or None,
        log_level=(os.getenv(LOG_LEVEL_ENV) or defaults.log_level).upper(),
        default_limit=_env_int(DEFAULT_LIMIT_ENV, defaults.default_limit),
        default_actor=os.getenv(DEFAULT_ACTOR_ENV) or defaults.default_actor,
    )
