from __future__ import annotations

from typing import Any, Optional, Set

from ._common import SchemaError, render_value
from .coverage import CoverageLedger
from .json_schema import DEFAULT_SEVERITY, SEVERITIES, MatchResult, match
from .logging_util import log_event, truncate_text


class SchemaChecker:
    """One schema bound to one coverage ledger.

    Building the checker validates the schema and registers its coverage
    requirements up front, so a long run can later assert that every branch
    was exercised. Pass the same ledger to several checkers to pool coverage.
    """

    def __init__(
        self,
        schema: Any,
        ledger: Optional[CoverageLedger] = None,
        *,
        severity: str = DEFAULT_SEVERITY,
        stop_on_first: bool = False,
        label: str = "status",
    ) -> None:
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity!r}")
        self.schema = schema
        self.ledger = ledger if ledger is not None else CoverageLedger()
        self.severity = severity
        self.stop_on_first = stop_on_first
        self.label = label
        self.checked = 0
        self.failed = 0
        try:
            added = self.ledger.register_required_paths(schema)
        except SchemaError as exc:
            log_event("schema_invalid", label=label, path=exc.path, reason=exc.reason)
            raise
        log_event("schema_registered", label=label, new_paths=added, required_paths=len(self.ledger))

    def check(
        self,
        document: Any,
        *,
        severity: Optional[str] = None,
        stop_on_first: Optional[bool] = None,
    ) -> MatchResult:
        result = match(
            self.schema,
            document,
            severity=severity or self.severity,
            ledger=self.ledger,
            stop_on_first=self.stop_on_first if stop_on_first is None else stop_on_first,
        )
        self.checked += 1
        for diagnostic in result.diagnostics:
            log_event(
                "schema_mismatch",
                label=self.label,
                severity=diagnostic.severity,
                path=diagnostic.path,
                schema_path=diagnostic.schema_path,
                message=diagnostic.message,
            )
        if not result.ok:
            self.failed += 1
            log_event(
                "schema_validation_failed",
                label=self.label,
                severity=result.diagnostics[0].severity,
                mismatches=len(result.diagnostics),
                document=truncate_text(render_value(document)),
            )
        return result

    def coverage_complete(self) -> bool:
        return self.ledger.all_covered()

    def uncovered_paths(self) -> Set[str]:
        return self.ledger.uncovered_paths()

    def report_coverage(self) -> bool:
        uncovered = sorted(self.ledger.uncovered_paths())
        required = len(self.ledger)
        log_event(
            "schema_coverage",
            label=self.label,
            covered=required - len(uncovered),
            required=required,
            checked=self.checked,
            failed=self.failed,
        )
        for path in uncovered:
            log_event("schema_coverage_missing", label=self.label, schema_path=path)
        return not uncovered
