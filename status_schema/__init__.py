from ._common import SchemaError, json_kind
from .conformance import SchemaChecker
from .coverage import CoverageLedger, load_ledger, save_ledger
from .json_schema import SEVERITIES, Diagnostic, MatchResult, match
from .schema_paths import check_schema, required_paths

__all__ = [
    "CoverageLedger",
    "Diagnostic",
    "MatchResult",
    "SEVERITIES",
    "SchemaChecker",
    "SchemaError",
    "check_schema",
    "json_kind",
    "load_ledger",
    "match",
    "required_paths",
    "save_ledger",
]
