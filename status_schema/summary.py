from __future__ import annotations

from typing import List, Sequence, Tuple

from .coverage import CoverageLedger
from .json_schema import MatchResult


def format_summary(results: Sequence[Tuple[str, MatchResult]], ledger: CoverageLedger) -> str:
    lines: List[str] = []
    lines.append("# Schema conformance summary")
    lines.append("")
    lines.append("## Documents")
    if not results:
        lines.append("- No documents checked.")
    failed = 0
    for label, result in results:
        status = "pass" if result.ok else "fail"
        lines.append(f"- **{label}**: {status}")
        if not result.ok:
            failed += 1
        for diagnostic in result.diagnostics:
            lines.append(f"  - `{diagnostic.path or '<root>'}`: {diagnostic}")
    if results:
        lines.append("")
        lines.append(f"Checked {len(results)}, failed {failed}.")
    lines.append("")
    lines.append("## Coverage")
    uncovered = sorted(ledger.uncovered_paths())
    required = len(ledger)
    lines.append(f"- Covered: {required - len(uncovered)}/{required}")
    if not uncovered:
        lines.append("- Every schema path was covered.")
        return "\n".join(lines) + "\n"
    lines.append("- Uncovered paths:")
    for path in uncovered:
        lines.append(f"  - `{path}`")
    return "\n".join(lines) + "\n"
