from __future__ import annotations

import pytest

from printer_trap_triage.core.settings import TriageSettings, resolve_settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "TRAP_TRIAGE_DB_PATH",
        "TRAP_TRIAGE_LOG_LEVEL",
        "TRAP_TRIAGE_DEFAULT_LIMIT",
        "TRAP_TRIAGE_DEFAULT_ACTOR",
    ):
        monkeypatch.delenv(name, raising=False)
    assert resolve_settings() == TriageSettings()


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TRAP_TRIAGE_DB_PATH", "/tmp/traps.db")
    monkeypatch.setenv("TRAP_TRIAGE_LOG_LEVEL", "debug")
    monkeypatch.setenv("TRAP_TRIAGE_DEFAULT_LIMIT", "25")
    monkeypatch.setenv("TRAP_TRIAGE_DEFAULT_ACTOR", "Helpdesk")

    s = resolve_settings()
    assert s.db_path == "/tmp/traps.db"
    assert s.log_level == "DEBUG"
    assert s.default_limit == 25
    assert s.default_actor == "Helpdesk"


@pytest.mark.parametrize("value", ["abc", "0", "-4"])
def test_invalid_limit(monkeypatch, value: str) -> None:
    monkeypatch.setenv("TRAP_TRIAGE_DEFAULT_LIMIT", value)
    with pytest.raises(ValueError):
        resolve_settings()
