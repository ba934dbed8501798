"""JSON Schema (draft-07) export of the release configuration model.

The document is derived from the ``FieldSpec`` tables in
``relpkg.model.release_config``, so editor validation and runtime validation
share one set of declarations. Output is deterministic: no timestamps, fixed
key order.
"""

from __future__ import annotations

import copy
from pathlib import Path

from relpkg.core.result import Err, Ok, Result
from relpkg.core.structured import StrDict
from relpkg.model.release_config import (
    ACCESS_LEVELS,
    GIT_FIELDS,
    GITHUB_FIELDS,
    HOOK_FIELDS,
    NPM_FIELDS,
    PUBLISH_CONFIG_FIELDS,
    TOP_FIELDS,
    FieldSpec,
)
from relpkg.model.semver import SEMVER_PATTERN
from relpkg.platform.files import render_json, write_json

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "DEFAULT_TITLE",
    "DRAFT_07",
    "render_schema",
    "to_json_schema_document",
    "write_schema",
]

DRAFT_07 = "http://json-schema.org/draft-07/schema#"
DEFAULT_TITLE = "ReleasePackage"
DEFAULT_SCHEMA_PATH = Path("dist") / "schema.json"


def _property(spec: FieldSpec) -> StrDict:
    prop: StrDict
    match spec.kind:
        case "boolean":
            prop = {"type": "boolean"}
        case "string":
            prop = {"type": "string"}
            if spec.min_message is not None:
                prop["minLength"] = 1
        case "url":
            prop = {"type": "string", "format": "uri"}
        case "semver":
            prop = {"type": "string", "pattern": SEMVER_PATTERN}
        case "access":
            prop = {"type": "string", "enum": list(ACCESS_LEVELS)}
        case "string_list":
            prop = {"type": "array", "items": {"type": "string"}}
    if spec.has_default:
        prop["default"] = copy.deepcopy(spec.default)
    return prop


def _object(
    fields: tuple[FieldSpec, ...],
    *,
    closed: bool = False,
    extra: StrDict | None = None,
) -> StrDict:
    properties: StrDict = {spec.key: _property(spec) for spec in fields}
    if extra:
        properties.update(extra)
    schema: StrDict = {"type": "object", "properties": properties}
    if closed:
        schema["additionalProperties"] = False
    return schema


def to_json_schema_document(title: str = DEFAULT_TITLE) -> StrDict:
    """Build the JSON Schema document for ``.release-package.json``.

    ``additionalProperties: false`` is set on ``platforms.npm`` and ``git``
    only; every other object stays open.
    """
    npm = _object(
        NPM_FIELDS,
        closed=True,
        extra={"publishConfig": _object(PUBLISH_CONFIG_FIELDS)},
    )
    properties: StrDict = {spec.key: _property(spec) for spec in TOP_FIELDS}
    properties["platforms"] = {
        "type": "object",
        "properties": {
            "npm": npm,
            "github": _object(GITHUB_FIELDS),
        },
    }
    properties["git"] = _object(GIT_FIELDS, closed=True)
    properties["hooks"] = _object(HOOK_FIELDS)

    return {
        "$schema": DRAFT_07,
        "type": "object",
        "properties": properties,
        "definitions": {},
        "required": [spec.key for spec in TOP_FIELDS if spec.required],
        "title": title or DEFAULT_TITLE,
    }


def render_schema(document: StrDict) -> str:
    return render_json(document)


def write_schema(path: Path, title: str = DEFAULT_TITLE) -> Result[Path, str]:
    """Generate the schema and write it to ``path`` (parent directories created)."""
    try:
        write_json(path, to_json_schema_document(title))
    except OSError as e:
        return Err(f"failed to write {path}: {e}")
    return Ok(path)
