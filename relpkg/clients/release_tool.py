"""Release automation helper (release-it via npx).

The helper receives the new version and the release notes through the
environment. It runs with ``--no-git --no-npm``: git history and the registry
are handled by the release run itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relpkg.core.result import Result
from relpkg.platform.process import ProcessError, merged_env, run_silent
from relpkg.release.config import RELEASE_NOTES_ENV, RELEASE_TOOL_COMMAND, RELEASE_VERSION_ENV

__all__ = ["ReleaseItTool", "ReleaseTool", "release_env"]


class ReleaseTool(Protocol):
    def run(self, version: str, notes: str) -> Result[None, ProcessError]: ...


def release_env(version: str, notes: str) -> dict[str, str]:
    return {RELEASE_VERSION_ENV: version, RELEASE_NOTES_ENV: notes}


class ReleaseItTool:
    def __init__(self, root: Path) -> None:
        self.root = root

    def run(self, version: str, notes: str) -> Result[None, ProcessError]:
        return run_silent(
            list(RELEASE_TOOL_COMMAND),
            cwd=self.root,
            env=merged_env(release_env(version, notes)),
        )
