from __future__ import annotations

from pathlib import Path

import typer

from relpkg.cli.commands._helpers import exit_on_error
from relpkg.output.console import RichConsole
from relpkg.schema import DEFAULT_SCHEMA_PATH, DEFAULT_TITLE, write_schema


def schema(
    output: Path = typer.Option(
        DEFAULT_SCHEMA_PATH,
        "--output",
        "-o",
        help="Where to write the JSON Schema document.",
    ),
    title: str = typer.Option(DEFAULT_TITLE, "--title", help="Schema title."),
) -> None:
    """Generate the JSON Schema for .release-package.json."""
    console = RichConsole()
    written = exit_on_error(write_schema(output, title), console)
    console.success(f"Wrote {written}")
