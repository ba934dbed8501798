"""Filesystem helpers for JSON documents."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

__all__ = ["atomic_write_text", "render_json", "write_json"]


def render_json(document: Mapping[str, object]) -> str:
    """Render a document the way npm tooling writes JSON files.

    Two-space indent, key order preserved, non-ASCII kept as is, trailing
    newline.
    """
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``content`` via a sibling temp file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def write_json(path: Path, document: Mapping[str, object]) -> None:
    """Write ``document`` to ``path`` atomically.

    Raises:
        OSError: If the directory cannot be created or the file replaced.
    """
    atomic_write_text(path, render_json(document))
