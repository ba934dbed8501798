"""Tests for relpkg.platform.files module."""

from __future__ import annotations

import json
from pathlib import Path

from relpkg.platform.files import atomic_write_text, render_json, write_json


def test_render_json_two_space_indent_and_newline() -> None:
    text = render_json({"name": "x", "version": "1.0.0"})
    assert text == '{\n  "name": "x",\n  "version": "1.0.0"\n}\n'


def test_render_json_keeps_key_order_and_unicode() -> None:
    text = render_json({"z": 1, "a": "héllo"})
    assert text.index('"z"') < text.index('"a"')
    assert "héllo" in text


def test_atomic_write_creates_parent_and_replaces(tmp_path: Path) -> None:
    target = tmp_path / "dist" / "schema.json"
    atomic_write_text(target, "one")
    atomic_write_text(target, "two")

    assert target.read_text(encoding="utf-8") == "two"
    leftovers = [p.name for p in target.parent.iterdir() if p.name != "schema.json"]
    assert leftovers == []


def test_write_json_round_trips(tmp_path: Path) -> None:
    target = tmp_path / "package.json"
    doc = {"name": "x", "version": "1.1.0", "scripts": {"build": "tsc"}}
    write_json(target, doc)

    assert json.loads(target.read_text(encoding="utf-8")) == doc
    assert target.read_text(encoding="utf-8").endswith("}\n")
