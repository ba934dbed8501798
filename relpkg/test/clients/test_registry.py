from __future__ import annotations

from pathlib import Path

import pytest

from relpkg.clients import registry as registry_mod
from relpkg.clients.registry import NpmRegistry, PublishOptions, publish_options_for
from relpkg.core.result import Err, Ok, Result
from relpkg.model.release_config import DEFAULT_REGISTRY, NpmPlatform, PublishConfig
from relpkg.platform.process import ProcessError


def _err(cmd: list[str], returncode: int = 1) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout="", stderr="E404"))


class TestPublishOptions:
    def test_defaults_emit_no_flags(self) -> None:
        assert publish_options_for(None).args() == []
        assert publish_options_for(NpmPlatform()).args() == []
        assert publish_options_for(NpmPlatform(registry=DEFAULT_REGISTRY)).args() == []

    def test_non_default_values_become_flags(self) -> None:
        npm = NpmPlatform(tag="next", access="restricted", registry="https://npm.example.com/")
        assert publish_options_for(npm).args() == [
            "--tag",
            "next",
            "--access",
            "restricted",
            "--registry",
            "https://npm.example.com/",
        ]

    def test_publish_config_wins(self) -> None:
        npm = NpmPlatform(
            access="public",
            registry=DEFAULT_REGISTRY,
            publish_config=PublishConfig(
                access="restricted", registry="https://private.example.com/"
            ),
        )
        assert publish_options_for(npm) == PublishOptions(
            tag=None, access="restricted", registry="https://private.example.com/"
        )


class TestNpmRegistry:
    def test_commands(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        captured: list[tuple[str, list[str]]] = []

        def fake_run(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
            assert cwd == tmp_path
            captured.append(("run", cmd))
            return Ok("1.0.0\n")

        def fake_run_silent(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
            captured.append(("silent", cmd))
            return Ok(None)

        monkeypatch.setattr(registry_mod, "run", fake_run)
        monkeypatch.setattr(registry_mod, "run_silent", fake_run_silent)

        npm = NpmRegistry(tmp_path)
        assert npm.ping() == Ok(None)
        assert npm.version_exists("x", "1.0.0") is True
        assert npm.build() == Ok(None)
        assert npm.publish(PublishOptions(tag="next")) == Ok(None)

        assert captured == [
            ("run", ["npm", "ping"]),
            ("run", ["npm", "view", "x@1.0.0", "version"]),
            ("run", ["bun", "run", "build"]),
            ("silent", ["npm", "publish", "--tag", "next"]),
        ]

    def test_version_exists_queries_custom_registry(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        seen: list[list[str]] = []

        def fake_run(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
            seen.append(cmd)
            return Ok("1.0.0\n")

        monkeypatch.setattr(registry_mod, "run", fake_run)

        assert NpmRegistry(tmp_path).version_exists("x", "1.0.0", "https://npm.example.com/")
        assert seen == [
            ["npm", "view", "x@1.0.0", "version", "--registry", "https://npm.example.com/"]
        ]

    @pytest.mark.parametrize(
        "response",
        [Ok(""), Ok("\n"), _err(["npm", "view"])],
    )
    def test_version_absent(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        response: Result[str, ProcessError],
    ) -> None:
        monkeypatch.setattr(registry_mod, "run", lambda cmd, cwd, env=None: response)

        assert NpmRegistry(tmp_path).version_exists("x", "9.9.9") is False

    def test_build_failure_is_returned(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setattr(registry_mod, "run", lambda cmd, cwd, env=None: _err(cmd, 2))

        result = NpmRegistry(tmp_path).build()

        assert isinstance(result, Err)
        assert result.error.returncode == 2
