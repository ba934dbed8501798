"""Helpers for safely working with parsed JSON documents.

Use these at boundaries where we ingest ``package.json`` or
``.release-package.json``. They provide runtime checks and static type
narrowing without raising.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def is_str_map(obj: object) -> TypeGuard[dict[str, str]]:
    """Return True if obj is a dict mapping strings to strings."""
    if not is_str_dict(obj):
        return False
    return all(isinstance(v, str) for v in obj.values())


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    """Return True if obj is a list containing only strings."""
    if not isinstance(obj, list):
        return False
    items = cast(list[object], obj)
    return all(isinstance(item, str) for item in items)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested object (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def json_type_name(value: object) -> str:
    """Name a parsed JSON value the way validation messages report it."""
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
    return type(value).__name__
