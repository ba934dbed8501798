from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relpkg.cli.prompter import TerminalPrompter
from relpkg.clients import GitClient, GithubCli, NpmRegistry, ReleaseItTool
from relpkg.core.errors import ErrorCode
from relpkg.output.console import ConsoleProtocol, RichConsole
from relpkg.release.config import ROOT_ENV_VAR
from relpkg.release.flow import ReleaseDeps


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    console: ConsoleProtocol

    def release_deps(self) -> ReleaseDeps:
        """Wire the real npm, git, release-it and gh clients for ``root``."""
        return ReleaseDeps(
            root=self.root,
            console=self.console,
            prompter=TerminalPrompter(self.console),
            registry=NpmRegistry(self.root),
            vcs=GitClient(self.root),
            release_tool=ReleaseItTool(self.root),
            hosting=GithubCli(self.root),
        )


def resolve_root() -> Path:
    """Package directory to release: ``$RELEASE_PACKAGE_ROOT`` or the cwd."""
    env = os.environ.get(ROOT_ENV_VAR)
    if not env:
        return Path.cwd()

    root = Path(env).expanduser().resolve()
    if not root.is_dir():
        typer.echo(f"error: {ROOT_ENV_VAR}={env} is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    return root


def build_context() -> CLIContext:
    return CLIContext(root=resolve_root(), console=RichConsole())
