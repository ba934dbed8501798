"""Source hosting client (GitHub CLI) for remote releases."""

from __future__ import annotations

import glob
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relpkg.core.result import Err, Result
from relpkg.model.release_config import GithubPlatform, render_template
from relpkg.platform.process import ProcessError, is_available, run_silent

__all__ = [
    "GithubCli",
    "HostingClient",
    "RemoteReleaseRequest",
    "expand_assets",
    "remote_release_request",
]


@dataclass(frozen=True, slots=True)
class RemoteReleaseRequest:
    repository: str
    tag: str
    target: str
    title: str
    notes: str
    generate_notes: bool
    draft: bool
    prerelease: bool
    assets: tuple[str, ...]

    def args(self) -> list[str]:
        cmd = [
            "release",
            "create",
            self.tag,
            "--repo",
            self.repository,
            "--target",
            self.target,
            "--title",
            self.title,
        ]
        if self.notes:
            cmd += ["--notes", self.notes]
        elif self.generate_notes:
            cmd.append("--generate-notes")
        else:
            cmd += ["--notes", ""]
        if self.draft:
            cmd.append("--draft")
        if self.prerelease:
            cmd.append("--prerelease")
        cmd += list(self.assets)
        return cmd


def expand_assets(root: Path, patterns: tuple[str, ...]) -> tuple[str, ...]:
    """Resolve asset globs to existing files relative to ``root``, de-duplicated in order."""
    found: list[str] = []
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, root_dir=root, recursive=True)):
            if (root / match).is_file() and match not in found:
                found.append(match)
    return tuple(found)


def remote_release_request(
    *, root: Path, github: GithubPlatform, tag: str, version: str, notes: str
) -> RemoteReleaseRequest:
    return RemoteReleaseRequest(
        repository=github.repository,
        tag=tag,
        target=github.branch,
        title=render_template(github.release_name, version),
        notes=notes,
        generate_notes=github.generate_notes,
        draft=github.draft,
        prerelease=github.prerelease,
        assets=expand_assets(root, github.assets),
    )


class HostingClient(Protocol):
    def create_release(self, request: RemoteReleaseRequest) -> Result[None, ProcessError]: ...


class GithubCli:
    def __init__(self, root: Path) -> None:
        self.root = root

    def create_release(self, request: RemoteReleaseRequest) -> Result[None, ProcessError]:
        if not is_available("gh"):
            return Err(
                ProcessError(
                    command=("gh", "release", "create"),
                    returncode=-1,
                    stdout="",
                    stderr="gh: missing (install GitHub CLI: https://cli.github.com/)",
                )
            )
        return run_silent(["gh", *request.args()], cwd=self.root)
