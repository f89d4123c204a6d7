"""Shared fixtures; keeps the source tree importable without an install."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

BASIC_SCHEMA: Dict[str, Any] = {
    "apple": 3,
    "banana": "foo",
    "sub": {"thing": True},
    "arr": [{"a": 1, "b": 2}],
    "en": {"$enum": ["foo", "bar"]},
    "mapped": {"$map": {"x": True}},
}


@pytest.fixture
def schema() -> Dict[str, Any]:
    return json.loads(json.dumps(BASIC_SCHEMA))


@pytest.fixture
def read_events(capsys):
    def _read() -> List[Dict[str, Any]]:
        out = capsys.readouterr().out
        events = []
        for line in out.splitlines():
            line = line.strip()
            if line.startswith("{"):
                events.append(json.loads(line))
        return events

    return _read
