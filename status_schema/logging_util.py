from __future__ import annotations

import json
from typing import Any, Dict

MAX_FIELD_CHARS = 2000
_TRUNCATED = "...(truncated)"


def truncate_text(text: str, limit: int = MAX_FIELD_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + _TRUNCATED


def compact_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    compacted: Dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, str):
            compacted[key] = truncate_text(value)
        else:
            compacted[key] = value
    return compacted


def log_event(event: str, **fields: Any) -> None:
    payload = {"event": event, **compact_fields(fields)}
    print(json.dumps(payload, separators=(",", ":"), default=str))
