"""Process-wide record of which schema paths real documents have exercised.

A ledger is created once per run, shared by every validation call, and read
at the end of the run. Paths only ever move from uncovered to covered.
"""

from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, Iterable, Mapping, Set

from .schema_paths import check_schema, required_paths

MAX_LEDGER_BYTES = 10 * 1024 * 1024
LEDGER_VERSION = 1


class CoverageLedger:
    """Required paths and covered marks, kept apart.

    Only ``register_required_paths`` makes a path required; marks restored
    from an earlier run or recorded for unregistered paths never count
    towards the totals.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._required: Set[str] = set(paths)
        self._covered: Set[str] = set()

    def register_required_paths(self, schema: Any, prefix: str = "") -> int:
        """Register every path ``schema`` can produce; returns how many were new."""
        check_schema(schema, prefix)
        added = 0
        with self._lock:
            for path in required_paths(schema, prefix):
                if path not in self._required:
                    self._required.add(path)
                    added += 1
        return added

    def mark_covered(self, path: str) -> None:
        with self._lock:
            self._covered.add(path)

    def is_covered(self, path: str) -> bool:
        with self._lock:
            return path in self._covered

    def all_covered(self) -> bool:
        with self._lock:
            return self._required <= self._covered

    def uncovered_paths(self) -> Set[str]:
        with self._lock:
            return self._required - self._covered

    def covered_paths(self) -> Set[str]:
        with self._lock:
            return self._required & self._covered

    def snapshot(self) -> Dict[str, bool]:
        with self._lock:
            return {path: path in self._covered for path in self._required | self._covered}

    def merge(self, paths: Mapping[str, bool]) -> None:
        """Restore covered marks; false entries are ignored."""
        with self._lock:
            self._covered.update(path for path, covered in paths.items() if covered is True)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._required

    def __len__(self) -> int:
        with self._lock:
            return len(self._required)


def _read_paths(path: str) -> Dict[str, bool]:
    if not path or not os.path.exists(path):
        return {}
    if os.path.getsize(path) > MAX_LEDGER_BYTES:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError):
        return {}
    if not isinstance(data, dict) or data.get("version") != LEDGER_VERSION:
        return {}
    paths = data.get("paths")
    if not isinstance(paths, dict):
        return {}
    return {key: value for key, value in paths.items() if isinstance(value, bool)}


def load_ledger(path: str) -> CoverageLedger:
    ledger = CoverageLedger()
    ledger.merge(_read_paths(path))
    return ledger


def save_ledger(path: str, ledger: CoverageLedger) -> None:
    if not path:
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as handle:
        json.dump(
            {"version": LEDGER_VERSION, "paths": ledger.snapshot()},
            handle,
            separators=(",", ":"),
            sort_keys=True,
        )
    os.replace(tmp_path, path)
