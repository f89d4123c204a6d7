from __future__ import annotations

import pytest

from status_schema import CoverageLedger, SchemaChecker, SchemaError


def test_checker_registers_requirements(schema, read_events):
    checker = SchemaChecker(schema)
    events = read_events()
    assert events == [
        {"event": "schema_registered", "label": "status", "new_paths": 13, "required_paths": 13}
    ]
    assert not checker.coverage_complete()
    assert len(checker.uncovered_paths()) == 13


def test_conforming_document_logs_nothing(schema, read_events):
    checker = SchemaChecker(schema)
    read_events()
    result = checker.check({"apple": 4})
    assert result.ok
    assert read_events() == []
    assert (checker.checked, checker.failed) == (1, 0)


def test_mismatches_are_logged_not_raised(schema, read_events):
    checker = SchemaChecker(schema)
    read_events()
    result = checker.check({"extrathingy": 1, "apple": "x"})
    assert not result.ok
    events = read_events()
    assert [event["event"] for event in events] == [
        "schema_mismatch",
        "schema_mismatch",
        "schema_validation_failed",
    ]
    assert events[0]["path"] == ".extrathingy"
    assert events[0]["severity"] == "error"
    assert events[2]["mismatches"] == 2
    assert events[2]["document"] == '{"apple":"x","extrathingy":1}'
    assert (checker.checked, checker.failed) == (1, 1)


def test_per_call_overrides(schema, read_events):
    checker = SchemaChecker(schema, severity="warning")
    result = checker.check({"a": 1, "b": 2}, severity="info", stop_on_first=True)
    assert [d.severity for d in result.diagnostics] == ["info"]
    result = checker.check({"a": 1, "b": 2})
    assert [d.severity for d in result.diagnostics] == ["warning", "warning"]


def test_malformed_schema_is_fatal(read_events):
    with pytest.raises(SchemaError):
        SchemaChecker({"arr": [{"a": 1}, {"b": 2}]})
    events = read_events()
    assert events[0]["event"] == "schema_invalid"
    assert events[0]["path"] == ".arr"


def test_unknown_severity_rejected(schema):
    with pytest.raises(ValueError):
        SchemaChecker(schema, severity="loud")


def test_shared_ledger_pools_coverage(schema, read_events):
    ledger = CoverageLedger()
    first = SchemaChecker(schema, ledger, label="first")
    second = SchemaChecker(schema, ledger, label="second")
    first.check({"en": "foo"})
    second.check({"en": "bar"})
    assert ledger.is_covered(".en.$enum.foo")
    assert ledger.is_covered(".en.$enum.bar")
    assert len(ledger) == 13


def test_report_coverage(schema, read_events):
    checker = SchemaChecker({"en": {"$enum": ["foo", "bar"]}})
    checker.check({"en": "foo"})
    read_events()
    assert checker.report_coverage() is False
    events = read_events()
    assert events[0] == {
        "event": "schema_coverage",
        "label": "status",
        "covered": 2,
        "required": 3,
        "checked": 1,
        "failed": 0,
    }
    assert events[1] == {"event": "schema_coverage_missing", "label": "status", "schema_path": ".en.$enum.bar"}

    checker.check({"en": "bar"})
    assert checker.report_coverage() is True


def test_totals_count_only_registered_paths(read_events):
    ledger = CoverageLedger()
    ledger.merge({".gone": True})
    checker = SchemaChecker({"a": 1}, ledger)
    assert len(ledger) == 1
    checker.check({"a": 2})
    read_events()
    assert checker.report_coverage() is True
    assert read_events()[0]["required"] == 1
