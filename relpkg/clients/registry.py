"""Package registry client (npm).

``RegistryClient`` is the capability the release flow depends on;
``NpmRegistry`` implements it by shelling out to ``npm`` and the build
command.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relpkg.core.result import Err, Ok, Result
from relpkg.model.release_config import DEFAULT_REGISTRY, NpmPlatform
from relpkg.platform.process import ProcessError, run, run_silent
from relpkg.release.config import BUILD_COMMAND

__all__ = ["NpmRegistry", "PublishOptions", "RegistryClient", "publish_options_for"]


@dataclass(frozen=True, slots=True)
class PublishOptions:
    """Flags for ``npm publish``. ``None`` means "use npm's default"."""

    tag: str | None = None
    access: str | None = None
    registry: str | None = None

    def args(self) -> list[str]:
        out: list[str] = []
        if self.tag is not None:
            out += ["--tag", self.tag]
        if self.access is not None:
            out += ["--access", self.access]
        if self.registry is not None:
            out += ["--registry", self.registry]
        return out


def publish_options_for(npm: NpmPlatform | None) -> PublishOptions:
    """Only values that differ from npm's defaults become flags."""
    if npm is None:
        return PublishOptions()
    access = npm.effective_access
    registry = npm.effective_registry
    return PublishOptions(
        tag=npm.tag if npm.tag != "latest" else None,
        access=access if access != "public" else None,
        registry=registry if registry is not None and registry != DEFAULT_REGISTRY else None,
    )


class RegistryClient(Protocol):
    def ping(self) -> Result[None, ProcessError]: ...

    def version_exists(self, name: str, version: str, registry: str | None = None) -> bool: ...

    def build(self) -> Result[None, ProcessError]: ...

    def publish(self, options: PublishOptions) -> Result[None, ProcessError]: ...


class NpmRegistry:
    """npm CLI backed registry client.

    Attributes:
        root: Package directory every command runs in.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def ping(self) -> Result[None, ProcessError]:
        return run(["npm", "ping"], cwd=self.root).map(lambda _: None)

    def version_exists(self, name: str, version: str, registry: str | None = None) -> bool:
        """True if ``name@version`` is on ``registry`` (npm's default when None).

        ``npm view`` exits 0 with empty output when the package exists but the
        version does not, so the output is checked too.
        """
        cmd = ["npm", "view", f"{name}@{version}", "version"]
        if registry is not None:
            cmd += ["--registry", registry]
        result = run(cmd, cwd=self.root)
        match result:
            case Ok(stdout):
                return stdout.strip() != ""
            case Err(_):
                return False

    def build(self) -> Result[None, ProcessError]:
        return run(list(BUILD_COMMAND), cwd=self.root).map(lambda _: None)

    def publish(self, options: PublishOptions) -> Result[None, ProcessError]:
        return run_silent(["npm", "publish", *options.args()], cwd=self.root)
