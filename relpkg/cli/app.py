from __future__ import annotations

import typer

from relpkg.cli.commands.release_cmd import release
from relpkg.cli.commands.schema_cmd import schema

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
app.command()(release)

schema_app = typer.Typer(add_completion=False, rich_markup_mode="rich")
schema_app.command()(schema)


def main() -> None:
    app()


def schema_main() -> None:
    schema_app()
