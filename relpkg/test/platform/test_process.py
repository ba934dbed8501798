"""Tests for relpkg.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relpkg.core.result import Err, Ok
from relpkg.platform.process import ProcessError, is_available, merged_env, run, run_silent


class TestProcessError:
    """Test ProcessError dataclass."""

    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "status"),
            returncode=1,
            stdout="",
            stderr="fatal: not a git repository",
        )
        assert str(error) == "git status failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("npx", "release-it", "--no-increment", "--no-git", "--no-npm"),
            returncode=1,
            stdout="",
            stderr="",
        )
        assert str(error) == "npx release-it --no-increment ... failed (exit 1)"

    def test_not_found(self) -> None:
        error = ProcessError(("bun", "run", "build"), -1, "", "No such file")
        assert error.not_found
        assert str(error) == "bun run build could not be started"

    def test_display_command_quotes(self) -> None:
        error = ProcessError(("git", "commit", "-m", "chore: release 1.0.0"), 1, "", "")
        assert error.display_command() == "git commit -m 'chore: release 1.0.0'"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    """Test run function."""

    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(42)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 42
        assert "bad" in result.error.stderr

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.not_found
        assert len(result.error.stderr) > 0

    def test_runs_in_cwd(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert Path(result.value.strip()).resolve() == tmp_path.resolve()

    def test_env_is_passed(self, tmp_path: Path) -> None:
        env = merged_env({"RELEASE_VERSION": "1.2.3"})
        result = run(
            [sys.executable, "-c", "import os; print(os.environ['RELEASE_VERSION'])"],
            cwd=tmp_path,
            env=env,
        )

        assert result == Ok("1.2.3\n")


class TestRunSilent:
    def test_success(self, tmp_path: Path) -> None:
        assert run_silent([sys.executable, "-c", "pass"], cwd=tmp_path) == Ok(None)

    def test_failure_carries_exit_code_only(self, tmp_path: Path) -> None:
        result = run_silent([sys.executable, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert result.error.stdout == ""

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run_silent(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1


def test_merged_env_extra_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELEASE_NOTES", "old")
    env = merged_env({"RELEASE_NOTES": "new"})
    assert env["RELEASE_NOTES"] == "new"
    assert "PATH" in env


def test_is_available() -> None:
    assert is_available(Path(sys.executable).name) or is_available("python3")
    assert not is_available("nonexistent_command_12345")
