from __future__ import annotations

from printer_trap_triage.core.arbiter import pick_best, resolve_entries
from printer_trap_triage.core.codes import (
    CRITICAL_CODES,
    PROBLEM_PATTERNS,
    WARNING_CODES,
    match_problem,
)
from printer_trap_triage.core.models import AlertEntry, DecodeResult, Severity
from printer_trap_triage.core.resolver import clean_description, resolve_entry
from printer_trap_triage.core.supply import evaluate_supply


def test_severity_classes_are_disjoint() -> None:
    assert not CRITICAL_CODES & WARNING_CODES


def test_problem_patterns_specific_before_catch_all() -> None:
    messages = [p.message for p in PROBLEM_PATTERNS]
    assert messages.index("Paper Jam") < messages.index("Device Error")
    assert messages[-1] == "Device Alert"
    prob = match_problem("Error: paper jam in tray 2")
    assert prob is not None
    assert prob.message == "Paper Jam"


def test_standard_code_severity() -> None:
    assert resolve_entry(AlertEntry(index="1", std_code=8)) == DecodeResult(
        "Paper Jam", Severity.CRITICAL
    )
    assert resolve_entry(AlertEntry(index="1", std_code=11)) == DecodeResult(
        "Toner Low", Severity.WARNING
    )
    assert resolve_entry(AlertEntry(index="1", std_code=18)) == DecodeResult(
        "Power Up", Severity.INFO
    )


def test_tray_codes_not_accepted_from_alert_rows() -> None:
    assert resolve_entry(AlertEntry(index="1", std_code=501)).message == ""


def test_vendor_code_overrides_standard_code() -> None:
    out = resolve_entry(AlertEntry(index="1", std_code=11, vendor_code=810))
    assert out == DecodeResult("Toner Empty", Severity.CRITICAL)


def test_ignored_vendor_code_wins_over_everything() -> None:
    out = resolve_entry(
        AlertEntry(index="1", std_code=8, vendor_code=800, description="Paper jam", alert_group=13)
    )
    assert out.ignore
    assert out.severity is Severity.INFO


def test_description_replaces_placeholder() -> None:
    out = resolve_entry(AlertEntry(index="1", std_code=1, description="Close front door {12}"))
    assert out == DecodeResult("Close front door", Severity.INFO)


def test_description_does_not_replace_specific_message() -> None:
    out = resolve_entry(AlertEntry(index="1", std_code=8, description="Something else"))
    assert out.message == "Paper Jam"


def test_description_rejects_hex_and_short_text() -> None:
    assert resolve_entry(AlertEntry(index="1", description="0x0a1b2c3d")).message == ""
    assert resolve_entry(AlertEntry(index="1", description="abc")).message == ""
    assert resolve_entry(AlertEntry(index="1", description="abc {7}")).message == ""


def test_alert_group_fallback() -> None:
    out = resolve_entry(AlertEntry(index="1", alert_group=6))
    assert out == DecodeResult("Cover/Door Alert", Severity.WARNING)

    out = resolve_entry(AlertEntry(index="1", std_code=1, alert_group=14))
    assert out == DecodeResult("Channel Alert", Severity.INFO)

    out = resolve_entry(AlertEntry(index="1", std_code=1, alert_group=99))
    assert out == DecodeResult("", Severity.INFO)


def test_clean_description() -> None:
    assert clean_description("Load paper {104} ") == "Load paper"
    assert clean_description("Load paper") == "Load paper"


def test_pick_best_by_severity() -> None:
    best = pick_best(
        [
            DecodeResult("Toner Low", Severity.WARNING),
            DecodeResult("Paper Jam", Severity.CRITICAL),
            DecodeResult("Power Up", Severity.INFO),
        ]
    )
    assert best == DecodeResult("Paper Jam", Severity.CRITICAL)


def test_pick_best_prefers_specific_message_on_tie() -> None:
    best = pick_best(
        [
            DecodeResult("Device Alert", Severity.WARNING),
            DecodeResult("Cover Open", Severity.WARNING),
        ]
    )
    assert best is not None
    assert best.message == "Cover Open"


def test_pick_best_keeps_first_on_exact_tie() -> None:
    best = pick_best(
        [DecodeResult("Door Open", Severity.WARNING), DecodeResult("Cover Open", Severity.WARNING)]
    )
    assert best is not None
    assert best.message == "Door Open"


def test_pick_best_skips_ignored_and_empty() -> None:
    assert pick_best([DecodeResult("Ready", ignore=True)]) is None
    assert pick_best([DecodeResult("")]) is None
    assert pick_best([]) is None
    best = pick_best([DecodeResult("Sleep Mode", ignore=True), DecodeResult("Power Up")])
    assert best == DecodeResult("Power Up", Severity.INFO)


def test_resolve_entries_keeps_order() -> None:
    out = resolve_entries([AlertEntry(index="1", std_code=8), AlertEntry(index="2", std_code=11)])
    assert [r.message for r in out] == ["Paper Jam", "Toner Low"]


def test_supply_thresholds() -> None:
    assert evaluate_supply("Black Toner", 3) == DecodeResult(
        "Black Toner Empty (3%)", Severity.CRITICAL
    )
    assert evaluate_supply("Black Toner", 5) == DecodeResult(
        "Black Toner Empty (5%)", Severity.CRITICAL
    )
    assert evaluate_supply("Black Toner", 15) == DecodeResult(
        "Black Toner Low (15%)", Severity.WARNING
    )
    assert evaluate_supply("Black Toner", 20) == DecodeResult(
        "Black Toner Low (20%)", Severity.WARNING
    )
    assert evaluate_supply("Black Toner", 21) is None
    assert evaluate_supply("Black Toner", 45) is None
    assert evaluate_supply("Black Toner", -3) is None
