from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from ._common import SchemaError, load_json
from .config import load_config
from .conformance import SchemaChecker
from .coverage import CoverageLedger, load_ledger, save_ledger
from .json_schema import MatchResult
from .logging_util import log_event
from .summary import format_summary


def main() -> int:
    try:
        cfg = load_config()
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    schema = load_json(cfg.schema_path, "schema")
    ledger = load_ledger(cfg.coverage_path) if cfg.coverage_path else CoverageLedger()
    try:
        checker = SchemaChecker(
            schema,
            ledger,
            severity=cfg.severity,
            stop_on_first=cfg.stop_on_first,
            label=Path(cfg.schema_path).name,
        )
    except SchemaError as exc:
        raise SystemExit(f"Schema is malformed: {exc}") from exc

    results: List[Tuple[str, MatchResult]] = []
    for document_path in cfg.document_paths:
        document = load_json(document_path, "document")
        result = checker.check(document)
        log_event("document_checked", document=document_path, ok=result.ok, mismatches=len(result.diagnostics))
        results.append((document_path, result))

    covered = checker.report_coverage()
    if cfg.coverage_path:
        save_ledger(cfg.coverage_path, ledger)

    output = Path(cfg.output_path)
    output.write_text(format_summary(results, ledger), encoding="utf-8")
    print(output.as_posix())

    if any(not result.ok for _, result in results):
        return 1
    if cfg.require_coverage and not covered:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
