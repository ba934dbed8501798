from __future__ import annotations

import sys
from typing import cast

import typer

from relpkg.cli.selector import (
    SelectorOption,
    SelectorResult,
    confirm_yn,
    is_interactive_terminal,
    select_one,
)
from relpkg.model.semver import BUMP_KINDS, ReleaseBump
from relpkg.output.console import ConsoleProtocol, Style
from relpkg.release.notes import release_notes_problem

BUMP_OPTIONS: tuple[SelectorOption[ReleaseBump], ...] = (
    SelectorOption(value="patch", label="Patch", detail="Bug fixes"),
    SelectorOption(value="minor", label="Minor", detail="New features"),
    SelectorOption(value="major", label="Major", detail="Breaking changes"),
)


class TerminalPrompter:
    """Prompts for the release run.

    Uses the arrow-key selector when both stdin and stdout are terminals and
    numbered ``typer.prompt`` questions when only stdin is. Ctrl-C or EOF on a
    prompt counts as cancelling the release.
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self.console = console

    def available(self) -> bool:
        return sys.stdin.isatty()

    def select_bump(self, current_version: str) -> ReleaseBump | None:
        if is_interactive_terminal():
            chosen = cast(
                SelectorResult[ReleaseBump],
                select_one(
                    title="Select version type:",
                    subtitle=f"Current version: {current_version}",
                    options=list(BUMP_OPTIONS),
                ),
            )
            if chosen.action == "cancel":
                return None
            return chosen.value
        return self._select_bump_numbered()

    def _select_bump_numbered(self) -> ReleaseBump | None:
        for i, opt in enumerate(BUMP_OPTIONS, start=1):
            self.console.print(f"{i}. {opt.label} ({opt.detail})", Style.DIM)

        while True:
            try:
                raw = typer.prompt("Select version type", default="1")
            except typer.Abort:
                return None
            raw = raw.strip().lower()
            if raw in BUMP_KINDS:
                return cast(ReleaseBump, raw)
            try:
                idx = int(raw)
            except ValueError:
                self.console.error("invalid choice")
                continue
            if idx < 1 or idx > len(BUMP_OPTIONS):
                self.console.error("out of range")
                continue
            return BUMP_OPTIONS[idx - 1].value

    def confirm_release(self, new_version: str) -> bool:
        question = f"Release version {new_version}?"
        if is_interactive_terminal():
            return confirm_yn(prompt=question)
        try:
            return typer.confirm(question, default=False)
        except typer.Abort:
            return False

    def release_notes(self) -> str | None:
        while True:
            try:
                text = typer.prompt(
                    "Release notes (optional)", default="", show_default=False
                )
            except typer.Abort:
                return None
            problem = release_notes_problem(text)
            if problem is None:
                return text
            self.console.error(problem)
