"""Recording a release in version control.

``commit_and_tag`` prefers the release helper and falls back to plain git
commands. The helper runs with ``--no-git``, so when the configuration has a
``git`` section the commit and tag are still made with git after it succeeds.
``push_changes`` then pushes what git recorded, as configured by ``git.push``
and ``git.pushTags``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from relpkg.clients.hosting import HostingClient, remote_release_request
from relpkg.clients.release_tool import ReleaseTool
from relpkg.clients.vcs import VersionControlClient
from relpkg.core.result import Err, Ok, Result
from relpkg.model.release_config import GitConfig, ReleaseConfig
from relpkg.output.console import ConsoleProtocol, Style
from relpkg.release.config import GIT_REMOTE, MANIFEST_FILE
from relpkg.release.errors import ReleaseError

# Who recorded the release: release-it alone, git alone (fallback), or
# release-it followed by git for a configured ``git`` section.
CommitPath = Literal["release_tool", "git", "release_tool+git"]


@dataclass(frozen=True, slots=True)
class ReleaseNames:
    commit_message: str
    tag: str


def release_names(git: GitConfig | None, version: str) -> ReleaseNames:
    """Commit message and tag for ``version``; unset ``git`` means the stock defaults."""
    cfg = git if git is not None else GitConfig()
    return ReleaseNames(commit_message=cfg.commit_message_for(version), tag=cfg.tag_for(version))


def commit_and_tag(
    *,
    tool: ReleaseTool,
    vcs: VersionControlClient,
    names: ReleaseNames,
    version: str,
    notes: str,
    git: GitConfig | None,
    console: ConsoleProtocol,
) -> Result[CommitPath, ReleaseError]:
    primary = tool.run(version, notes)
    if isinstance(primary, Err):
        console.warning("release-it not available, using git commands...")
        recorded = record_in_git(vcs=vcs, names=names)
        if isinstance(recorded, Err):
            return recorded
        return Ok("git")

    if git is None:
        return Ok("release_tool")

    recorded = record_in_git(vcs=vcs, names=names)
    if isinstance(recorded, Err):
        return recorded
    return Ok("release_tool+git")


def record_in_git(
    *, vcs: VersionControlClient, names: ReleaseNames
) -> Result[None, ReleaseError]:
    """``git add package.json``, ``git commit`` and ``git tag``; stops at the first failure."""
    steps = (
        (lambda: vcs.add(MANIFEST_FILE), f"git add {MANIFEST_FILE}"),
        (lambda: vcs.commit(names.commit_message), "git commit"),
        (lambda: vcs.tag(names.tag), f"git tag {names.tag}"),
    )
    for step, label in steps:
        result = step()
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="commit_failed",
                    message=f"{label} failed",
                    hint=result.error.message,
                )
            )
    return Ok(None)


def push_changes(
    *,
    vcs: VersionControlClient,
    git: GitConfig | None,
    tag: str,
    console: ConsoleProtocol,
) -> Result[bool, ReleaseError]:
    """Push the release commit and/or tag as configured.

    Returns:
        Ok(True) if anything was pushed, Ok(False) when pushing is not
        configured (no ``git`` section, or both flags off).
    """
    if git is None or not (git.push or git.push_tags):
        return Ok(False)

    if git.push:
        pushed = vcs.push()
        if isinstance(pushed, Err):
            return Err(
                ReleaseError(
                    kind="push_failed",
                    message="git push failed",
                    hint=pushed.error.message,
                )
            )
        console.success("Pushed release commit")

    if git.push_tags:
        pushed_tag = vcs.push_tag(GIT_REMOTE, tag)
        if isinstance(pushed_tag, Err):
            return Err(
                ReleaseError(
                    kind="push_failed",
                    message=f"git push {GIT_REMOTE} {tag} failed",
                    hint=pushed_tag.error.message,
                )
            )
        console.success(f"Pushed tag {tag}")

    return Ok(True)


def create_remote_release(
    *,
    hosting: HostingClient,
    config: ReleaseConfig,
    root: Path,
    tag: str,
    version: str,
    notes: str,
    console: ConsoleProtocol,
) -> bool:
    """Create the GitHub release when configured. Failure is reported, not fatal."""
    github = config.github
    if github is None or not (github.publish and github.create_release):
        return False

    request = remote_release_request(
        root=root, github=github, tag=tag, version=version, notes=notes
    )
    result = hosting.create_release(request)
    if isinstance(result, Err):
        console.warning(f"GitHub: failed to create release {tag} on {github.repository}")
        if result.error.stderr.strip():
            console.print(result.error.stderr.strip(), Style.DIM)
        return False

    console.success(f"GitHub: Created release {request.title}")
    return True
