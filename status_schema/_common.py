from __future__ import annotations

import json
from pathlib import Path
from typing import Any

ENUM_KEY = "$enum"
MAP_KEY = "$map"


class SchemaError(ValueError):
    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{message} (at {path or 'schema root'})")
        self.path = path
        self.reason = message


def load_json(path: str, label: str = "JSON") -> Any:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SystemExit(f"{label} file not found: {path}") from exc
    except OSError as exc:
        raise SystemExit(f"Unable to read {label} file: {path}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SystemExit(
            f"{label} file is not valid JSON ({exc.msg}) at line {exc.lineno} column {exc.colno}"
        ) from exc


def json_kind(value: Any) -> str:
    # bool before number: bool is an int subclass
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "unknown"


def key_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}"


def element_path(prefix: str, index: Any = 0) -> str:
    return f"{prefix}[{index}]"


def enum_path(prefix: str, member: str) -> str:
    return f"{prefix}.{ENUM_KEY}.{member}"


def map_path(prefix: str) -> str:
    return f"{prefix}.{MAP_KEY}"


def render_value(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)
