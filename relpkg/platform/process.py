"""Subprocess execution with Result-based error handling.

All external tools (npm, bun, git, npx, gh) are invoked through this module.
No timeouts are applied: a release waits for each tool to finish, and the
operator interrupts it if needed.

Usage:
    result = run(["npm", "view", "pkg@1.0.0", "version"], cwd=root)
    match result:
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"npm failed: {error.stderr}")
"""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relpkg.core.result import Err, Ok, Result

__all__ = ["ProcessError", "is_available", "merged_env", "run", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process, -1 if it could not be started.
        stdout: Standard output (empty when output was not captured).
        stderr: Standard error, or the OS error when the command is missing.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def not_found(self) -> bool:
        return self.returncode == -1

    def display_command(self) -> str:
        return shlex.join(self.command)

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.not_found:
            return f"{cmd_str} could not be started"
        return f"{cmd_str} failed (exit {self.returncode})"


def merged_env(extra: Mapping[str, str]) -> dict[str, str]:
    """Current environment plus ``extra`` (which wins on conflicts)."""
    env = dict(os.environ)
    env.update(extra)
    return env


def is_available(tool: str) -> bool:
    """True if ``tool`` resolves on PATH."""
    return shutil.which(tool) is not None


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command capturing its output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Full environment (inherits the current one if None).

    Returns:
        Ok(stdout) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output streaming to the terminal.

    Used for steps the operator should watch (publish, commit, release
    helper). Nothing is captured, so errors only carry the exit code.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
