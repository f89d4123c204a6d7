"""Schema well-formedness checks and schema-only coverage path enumeration.

Both walks follow the same addressing rules as the matcher, so every path a
document can ever cover is known before any document is seen.
"""

from __future__ import annotations

from typing import Any, Iterator, Set

from ._common import (
    ENUM_KEY,
    MAP_KEY,
    SchemaError,
    element_path,
    enum_path,
    json_kind,
    key_path,
    map_path,
)


def check_schema(schema: Any, path: str = "") -> None:
    try:
        _check(schema, path)
    except RecursionError as exc:
        raise SchemaError("Schema nesting too deep", path) from exc


def _check(schema: Any, path: str) -> None:
    kind = json_kind(schema)
    if kind == "unknown":
        raise SchemaError(f"Unsupported schema value of type {type(schema).__name__}", path)
    if kind == "array":
        if len(schema) != 1:
            raise SchemaError(
                f"Array schema must hold exactly one representative element, found {len(schema)}",
                path,
            )
        _check(schema[0], element_path(path))
        return
    if kind != "object":
        return

    for key in schema:
        if not isinstance(key, str):
            raise SchemaError(f"Schema keys must be strings, found {key!r}", path)
    if ENUM_KEY in schema and MAP_KEY in schema:
        raise SchemaError(f"{ENUM_KEY} and {MAP_KEY} cannot appear in the same object", path)

    if ENUM_KEY in schema:
        members = schema[ENUM_KEY]
        if not isinstance(members, list) or not all(isinstance(item, str) for item in members):
            raise SchemaError(f"{ENUM_KEY} must be a list of strings", path)
        return
    if MAP_KEY in schema:
        value_schema = schema[MAP_KEY]
        if value_schema is None:
            raise SchemaError(f"{MAP_KEY} requires a value schema", path)
        _check(value_schema, map_path(path))
        return
    for key, value in schema.items():
        _check(value, key_path(path, key))


def required_paths(schema: Any, prefix: str = "") -> Iterator[str]:
    """Yield every coverage path of a well-formed schema, in schema order."""
    seen: Set[str] = set()
    for path in _walk(schema, prefix):
        if path not in seen:
            seen.add(path)
            yield path


def _walk(schema: Any, prefix: str) -> Iterator[str]:
    if isinstance(schema, list):
        if schema:
            yield from _walk(schema[0], element_path(prefix))
        return
    if not isinstance(schema, dict):
        return
    if ENUM_KEY in schema:
        for member in schema[ENUM_KEY]:
            yield enum_path(prefix, member)
        return
    if MAP_KEY in schema:
        value_prefix = map_path(prefix)
        yield value_prefix
        yield from _walk(schema[MAP_KEY], value_prefix)
        return
    for key, value in schema.items():
        child = key_path(prefix, key)
        yield child
        yield from _walk(value, child)
