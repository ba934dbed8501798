from __future__ import annotations

from pathlib import Path

import pytest

from relpkg.clients import release_tool as tool_mod
from relpkg.clients.release_tool import ReleaseItTool, release_env
from relpkg.core.result import Ok


def test_release_env() -> None:
    assert release_env("1.1.0", "") == {"RELEASE_VERSION": "1.1.0", "RELEASE_NOTES": ""}


def test_runs_release_it_with_version_and_notes(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    seen: dict[str, object] = {}

    def fake_run_silent(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
        seen["cmd"] = cmd
        seen["cwd"] = cwd
        seen["env"] = env
        return Ok(None)

    monkeypatch.setenv("PATH", "/usr/bin")
    monkeypatch.setattr(tool_mod, "run_silent", fake_run_silent)

    assert ReleaseItTool(tmp_path).run("1.1.0", "Fixes") == Ok(None)

    assert seen["cmd"] == ["npx", "release-it", "--no-increment", "--no-git", "--no-npm"]
    assert seen["cwd"] == tmp_path
    env = seen["env"]
    assert isinstance(env, dict)
    assert env["RELEASE_VERSION"] == "1.1.0"
    assert env["RELEASE_NOTES"] == "Fixes"
    assert env["PATH"] == "/usr/bin"
