"""Version control client (git).

All operations return Result types. ``GitClient`` runs ``git -C <root>``
so it works regardless of the process working directory.

Usage:
    git = GitClient(Path("."))
    match git.commit("chore: release 1.2.0"):
        case Ok(_):
            ...
        case Err(e):
            print(f"commit failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relpkg.core.result import Err, Ok, Result
from relpkg.platform.process import ProcessError, run, run_silent

__all__ = ["GitClient", "GitError", "VersionControlClient"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. ``commit``).
        message: Error message.
        returncode: Process return code (-1 when git could not be started).
    """

    command: str
    message: str
    returncode: int = 1


class VersionControlClient(Protocol):
    def is_repository(self) -> bool: ...

    def remotes(self) -> Result[str, GitError]: ...

    def is_clean(self) -> bool: ...

    def add(self, path: str) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[None, GitError]: ...

    def tag(self, name: str) -> Result[None, GitError]: ...

    def push(self) -> Result[None, GitError]: ...

    def push_tag(self, remote: str, name: str) -> Result[None, GitError]: ...


class GitClient:
    """git CLI backed client for the repository containing ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def is_repository(self) -> bool:
        return isinstance(self._run(["rev-parse", "--git-dir"]), Ok)

    def remotes(self) -> Result[str, GitError]:
        """Output of ``git remote -v``."""
        result = self._run(["remote", "-v"])
        match result:
            case Err(e):
                return Err(_git_error("remote", e, "git remote failed"))
            case Ok(stdout):
                return Ok(stdout)

    def is_clean(self) -> bool:
        """True if the working tree has no changes.

        Returns False if status cannot be determined.
        """
        result = self._run(["status", "--porcelain"])
        match result:
            case Ok(stdout):
                return stdout.strip() == ""
            case Err(_):
                return False

    def add(self, path: str) -> Result[None, GitError]:
        return self._run_visible("add", [path])

    def commit(self, message: str) -> Result[None, GitError]:
        return self._run_visible("commit", ["-m", message])

    def tag(self, name: str) -> Result[None, GitError]:
        return self._run_visible("tag", [name])

    def push(self) -> Result[None, GitError]:
        return self._run_visible("push", [])

    def push_tag(self, remote: str, name: str) -> Result[None, GitError]:
        return self._run_visible("push", [remote, name])

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run(["git", "-C", str(self.root), *args], cwd=self.root)

    def _run_visible(self, command: str, args: list[str]) -> Result[None, GitError]:
        result = run_silent(["git", "-C", str(self.root), command, *args], cwd=self.root)
        match result:
            case Err(e):
                return Err(_git_error(command, e, f"git {command} failed"))
            case Ok(_):
                return Ok(None)


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    detail = error.stderr.strip() or error.stdout.strip()
    if error.not_found:
        detail = detail or "git is not installed"
    if not detail:
        detail = f"{fallback} (exit {error.returncode})"
    return GitError(command=command, message=detail, returncode=error.returncode)
