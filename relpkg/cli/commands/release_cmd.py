from __future__ import annotations

from relpkg.cli.commands._helpers import exit_on_error
from relpkg.cli.context import build_context
from relpkg.release.flow import run_release


def release() -> None:
    """Bump, publish, commit and tag the package in the current directory.

    A release the operator cancels exits with status 0.
    """
    ctx = build_context()
    exit_on_error(run_release(ctx.release_deps()), ctx.console)
