from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .json_schema import DEFAULT_SEVERITY, SEVERITIES


@dataclass(frozen=True)
class ValidationConfig:
    schema_path: str
    document_paths: Tuple[str, ...]
    severity: str
    stop_on_first: bool
    require_coverage: bool
    coverage_path: Optional[str]
    output_path: str


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}
_SPLIT = re.compile(r"[,\n]")


def _get_env(name: str) -> str:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        raise ValueError(f"Missing required env var: {name}")
    return value.strip()


def _optional_env(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be true or false, got {raw!r}")


def _get_severity(name: str) -> str:
    value = (_optional_env(name) or DEFAULT_SEVERITY).lower()
    if value not in SEVERITIES:
        raise ValueError(f"{name} must be one of {', '.join(SEVERITIES)}, got {value!r}")
    return value


def _parse_paths(value: str, name: str) -> Tuple[str, ...]:
    items = [item.strip() for item in _SPLIT.split(value) if item.strip()]
    if not items:
        raise ValueError(f"Missing {name} entries")
    if len(set(items)) != len(items):
        raise ValueError(f"Duplicate {name} entries")
    return tuple(items)


def load_config() -> ValidationConfig:
    return ValidationConfig(
        schema_path=_get_env("SCHEMA_PATH"),
        document_paths=_parse_paths(_get_env("DOCUMENT_PATHS"), "DOCUMENT_PATHS"),
        severity=_get_severity("SCHEMA_SEVERITY"),
        stop_on_first=_get_bool("SCHEMA_STOP_ON_FIRST"),
        require_coverage=_get_bool("SCHEMA_REQUIRE_COVERAGE"),
        coverage_path=_optional_env("COVERAGE_PATH"),
        output_path=_optional_env("OUTPUT_PATH") or "summary.md",
    )
