from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relpkg.clients.hosting import RemoteReleaseRequest
from relpkg.clients.registry import PublishOptions
from relpkg.clients.vcs import GitError
from relpkg.core.result import Err, Ok, Result
from relpkg.model.semver import ReleaseBump
from relpkg.output.console import MockConsole
from relpkg.platform.process import ProcessError
from relpkg.release.flow import ReleaseDeps


def process_error(*cmd: str, returncode: int = 1, stderr: str = "") -> ProcessError:
    return ProcessError(command=cmd, returncode=returncode, stdout="", stderr=stderr)


@dataclass
class FakeRegistry:
    reachable: bool = True
    published: set[str] = field(default_factory=set)
    build_ok: bool = True
    publish_ok: bool = True
    calls: list[str] = field(default_factory=list)
    publish_options: list[PublishOptions] = field(default_factory=list)

    def ping(self) -> Result[None, ProcessError]:
        self.calls.append("ping")
        return Ok(None) if self.reachable else Err(process_error("npm", "ping"))

    def version_exists(self, name: str, version: str, registry: str | None = None) -> bool:
        suffix = f" --registry {registry}" if registry else ""
        self.calls.append(f"view {name}@{version}{suffix}")
        return f"{name}@{version}" in self.published

    def build(self) -> Result[None, ProcessError]:
        self.calls.append("build")
        if self.build_ok:
            return Ok(None)
        return Err(process_error("bun", "run", "build", stderr="tsc: error"))

    def publish(self, options: PublishOptions) -> Result[None, ProcessError]:
        self.calls.append("publish")
        self.publish_options.append(options)
        return Ok(None) if self.publish_ok else Err(process_error("npm", "publish"))


@dataclass
class FakeVcs:
    repository: bool = True
    remote_text: str = "origin\tgit@github.com:owner/repo.git (fetch)\n"
    clean: bool = True
    tags: set[str] = field(default_factory=set)
    fail: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def _do(self, command: str, *args: str) -> Result[None, GitError]:
        self.calls.append(" ".join((command, *args)))
        if command in self.fail:
            return Err(GitError(command=command, message=f"{command} rejected"))
        return Ok(None)

    def is_repository(self) -> bool:
        return self.repository

    def remotes(self) -> Result[str, GitError]:
        return Ok(self.remote_text)

    def is_clean(self) -> bool:
        return self.clean

    def add(self, path: str) -> Result[None, GitError]:
        return self._do("add", path)

    def commit(self, message: str) -> Result[None, GitError]:
        return self._do("commit", message)

    def tag(self, name: str) -> Result[None, GitError]:
        result = self._do("tag", name)
        if isinstance(result, Ok):
            self.tags.add(name)
        return result

    def push(self) -> Result[None, GitError]:
        return self._do("push")

    def push_tag(self, remote: str, name: str) -> Result[None, GitError]:
        result = self._do("push_tag", remote, name)
        if isinstance(result, Ok) and name not in self.tags:
            return Err(GitError(command="push", message=f"src refspec {name} does not match any"))
        return result


@dataclass
class FakeReleaseTool:
    available: bool = False
    runs: list[tuple[str, str]] = field(default_factory=list)

    def run(self, version: str, notes: str) -> Result[None, ProcessError]:
        self.runs.append((version, notes))
        if self.available:
            return Ok(None)
        return Err(process_error("npx", "release-it", returncode=-1))


@dataclass
class FakeHosting:
    ok: bool = True
    requests: list[RemoteReleaseRequest] = field(default_factory=list)

    def create_release(self, request: RemoteReleaseRequest) -> Result[None, ProcessError]:
        self.requests.append(request)
        if self.ok:
            return Ok(None)
        return Err(process_error("gh", "release", "create", stderr="HTTP 403"))


@dataclass
class ScriptedPrompter:
    """Answers prompts from fixed values; ``None`` answers mean cancel."""

    bump: ReleaseBump | None = "minor"
    confirm: bool = True
    notes: str | None = ""
    interactive: bool = True
    asked: list[str] = field(default_factory=list)

    def available(self) -> bool:
        return self.interactive

    def select_bump(self, current_version: str) -> ReleaseBump | None:
        self.asked.append(f"bump {current_version}")
        return self.bump

    def confirm_release(self, new_version: str) -> bool:
        self.asked.append(f"confirm {new_version}")
        return self.confirm

    def release_notes(self) -> str | None:
        self.asked.append("notes")
        return self.notes


@dataclass
class Harness:
    root: Path
    console: MockConsole = field(default_factory=MockConsole)
    registry: FakeRegistry = field(default_factory=FakeRegistry)
    vcs: FakeVcs = field(default_factory=FakeVcs)
    tool: FakeReleaseTool = field(default_factory=FakeReleaseTool)
    hosting: FakeHosting = field(default_factory=FakeHosting)
    prompter: ScriptedPrompter = field(default_factory=ScriptedPrompter)

    def deps(self) -> ReleaseDeps:
        return ReleaseDeps(
            root=self.root,
            console=self.console,
            prompter=self.prompter,
            registry=self.registry,
            vcs=self.vcs,
            release_tool=self.tool,
            hosting=self.hosting,
        )
