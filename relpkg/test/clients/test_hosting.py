from __future__ import annotations

from pathlib import Path

import pytest

from relpkg.clients import hosting as hosting_mod
from relpkg.clients.hosting import (
    GithubCli,
    RemoteReleaseRequest,
    expand_assets,
    remote_release_request,
)
from relpkg.core.result import Err, Ok
from relpkg.model.release_config import GithubPlatform


def _request(**overrides: object) -> RemoteReleaseRequest:
    fields: dict[str, object] = {
        "repository": "o/r",
        "tag": "v1.1.0",
        "target": "main",
        "title": "Release 1.1.0",
        "notes": "",
        "generate_notes": True,
        "draft": False,
        "prerelease": False,
        "assets": (),
    }
    fields.update(overrides)
    return RemoteReleaseRequest(**fields)  # type: ignore[arg-type]


class TestRequestArgs:
    def test_generated_notes(self) -> None:
        assert _request().args() == [
            "release",
            "create",
            "v1.1.0",
            "--repo",
            "o/r",
            "--target",
            "main",
            "--title",
            "Release 1.1.0",
            "--generate-notes",
        ]

    def test_explicit_notes_win(self) -> None:
        args = _request(notes="Fixes").args()
        assert args[-2:] == ["--notes", "Fixes"]
        assert "--generate-notes" not in args

    def test_no_notes_at_all(self) -> None:
        assert _request(generate_notes=False).args()[-2:] == ["--notes", ""]

    def test_flags_and_assets(self) -> None:
        args = _request(draft=True, prerelease=True, assets=("dist/a.tgz",)).args()
        assert args[-3:] == ["--draft", "--prerelease", "dist/a.tgz"]


def test_expand_assets(tmp_path: Path) -> None:
    (tmp_path / "dist" / "sub").mkdir(parents=True)
    (tmp_path / "dist" / "a.js").write_text("", encoding="utf-8")
    (tmp_path / "dist" / "sub" / "b.js").write_text("", encoding="utf-8")
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")

    found = expand_assets(tmp_path, ("dist/**", "package.json", "README.md", "package.json"))

    assert found == ("dist/a.js", "dist/sub/b.js", "package.json")


def test_remote_release_request(tmp_path: Path) -> None:
    github = GithubPlatform(repository="o/r", branch="develop", assets=())

    request = remote_release_request(
        root=tmp_path, github=github, tag="v2.0.0", version="2.0.0", notes="Big"
    )

    assert request == _request(
        tag="v2.0.0", target="develop", title="Release 2.0.0", notes="Big"
    )


def test_github_cli_missing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(hosting_mod, "is_available", lambda tool: False)

    result = GithubCli(tmp_path).create_release(_request())

    assert isinstance(result, Err)
    assert result.error.not_found
    assert "GitHub CLI" in result.error.stderr


def test_github_cli_runs_gh(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(hosting_mod, "is_available", lambda tool: True)
    monkeypatch.setattr(
        hosting_mod,
        "run_silent",
        lambda cmd, cwd, env=None: calls.append(cmd) or Ok(None),
    )

    assert GithubCli(tmp_path).create_release(_request()) == Ok(None)
    assert calls[0][:4] == ["gh", "release", "create", "v1.1.0"]
