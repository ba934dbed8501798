"""Build-time JSON Schema export for ``.release-package.json``."""

from .json_schema import (
    DEFAULT_SCHEMA_PATH,
    DEFAULT_TITLE,
    DRAFT_07,
    render_schema,
    to_json_schema_document,
    write_schema,
)

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "DEFAULT_TITLE",
    "DRAFT_07",
    "render_schema",
    "to_json_schema_document",
    "write_schema",
]
