from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from ._common import (
    ENUM_KEY,
    MAP_KEY,
    element_path,
    enum_path,
    json_kind,
    key_path,
    map_path,
    render_value,
)
from .coverage import CoverageLedger
from .schema_paths import check_schema

SEVERITIES = ("error", "warning", "info")
DEFAULT_SEVERITY = "error"

_ARTICLES = {"object": "an object", "array": "an array"}


@dataclass(frozen=True)
class Diagnostic:
    path: str
    schema_path: str
    message: str
    severity: str = DEFAULT_SEVERITY

    def __str__(self) -> str:
        return f"{self.severity.upper()}: {self.message}"


@dataclass
class MatchResult:
    ok: bool
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok

    @property
    def error_text(self) -> str:
        return "\n".join(str(item) for item in self.diagnostics)


class _StopMatch(Exception):
    pass


def _where(path: str) -> str:
    return path or "<root>"


class _Traversal:
    def __init__(self, severity: str, ledger: Optional[CoverageLedger], stop_on_first: bool) -> None:
        self._severity = severity
        self._ledger = ledger
        self._stop_on_first = stop_on_first
        self.diagnostics: List[Diagnostic] = []

    def _mark(self, schema_path: str) -> None:
        if self._ledger is not None:
            self._ledger.mark_covered(schema_path)

    def _mismatch(self, path: str, schema_path: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(path=path, schema_path=schema_path, message=message, severity=self._severity)
        )
        if self._stop_on_first:
            raise _StopMatch()

    def _expect(self, expected: str, document: Any, path: str, schema_path: str) -> bool:
        actual = json_kind(document)
        if actual == expected:
            return True
        if expected in _ARTICLES:
            message = f"Expected {_ARTICLES[expected]} for key `{_where(path)}' (got {actual})"
        else:
            message = f"Incorrect value type for key `{_where(path)}' (expected {expected}, got {actual})"
        self._mismatch(path, schema_path, message)
        return False

    def value(self, schema: Any, document: Any, path: str, schema_path: str) -> bool:
        """Match one position. True when the document has the expected shape here."""
        if schema is None:
            return True
        if isinstance(schema, dict):
            if ENUM_KEY in schema:
                return self._enum(schema[ENUM_KEY], document, path, schema_path)
            if MAP_KEY in schema:
                return self._map(schema[MAP_KEY], document, path, schema_path)
            return self._object(schema, document, path, schema_path)
        if isinstance(schema, list):
            return self._array(schema[0], document, path, schema_path)
        return self._expect(json_kind(schema), document, path, schema_path)

    def _object(self, schema: Mapping[str, Any], document: Any, path: str, schema_path: str) -> bool:
        if not self._expect("object", document, path, schema_path):
            return False
        for key, item in document.items():
            child = key_path(path, key)
            child_schema_path = key_path(schema_path, key)
            if key not in schema:
                self._mismatch(child, child_schema_path, f"Unknown key `{child}'")
                continue
            if self.value(schema[key], item, child, child_schema_path):
                self._mark(child_schema_path)
        return True

    def _array(self, element_schema: Any, document: Any, path: str, schema_path: str) -> bool:
        if not self._expect("array", document, path, schema_path):
            return False
        element_schema_path = element_path(schema_path)
        for index, item in enumerate(document):
            self.value(element_schema, item, element_path(path, index), element_schema_path)
        return True

    def _enum(self, members: List[str], document: Any, path: str, schema_path: str) -> bool:
        if isinstance(document, str) and document in members:
            self._mark(enum_path(schema_path, document))
            return True
        self._mismatch(
            path,
            schema_path,
            f"Unknown value `{render_value(document)}' for key `{_where(path)}'",
        )
        return False

    def _map(self, value_schema: Any, document: Any, path: str, schema_path: str) -> bool:
        if json_kind(document) != "object":
            self._mismatch(path, schema_path, f"Expected an object as the value for key `{_where(path)}'")
            return False
        value_schema_path = map_path(schema_path)
        for key, item in document.items():
            if self.value(value_schema, item, element_path(path, key), value_schema_path):
                self._mark(value_schema_path)
        return True


def match(
    schema: Any,
    document: Any,
    path_prefix: str = "",
    *,
    severity: str = DEFAULT_SEVERITY,
    ledger: Optional[CoverageLedger] = None,
    stop_on_first: bool = False,
) -> MatchResult:
    """Check that everything in ``document`` is permitted by ``schema``.

    Mismatches come back as diagnostics; a malformed schema raises
    ``SchemaError`` instead. When ``ledger`` is given, every schema path the
    document exercises is marked covered in it.
    """
    if severity not in SEVERITIES:
        raise ValueError(f"Unknown severity: {severity!r} (expected one of {', '.join(SEVERITIES)})")
    check_schema(schema, path_prefix)

    traversal = _Traversal(severity, ledger, stop_on_first)
    try:
        traversal.value(schema, document, path_prefix, path_prefix)
    except _StopMatch:
        pass
    return MatchResult(ok=not traversal.diagnostics, diagnostics=traversal.diagnostics)
