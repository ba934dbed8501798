"""Interactive release run.

The run is a state machine over ``ReleaseSession``. Each step either advances
to the next step, finishes (completed or cancelled) or fails with a
``ReleaseError``. Nothing on disk or in git is touched before the
``write_manifest`` step, so every cancellation before it leaves the project
exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal, Protocol

from relpkg.clients.hosting import HostingClient
from relpkg.clients.registry import RegistryClient
from relpkg.clients.release_tool import ReleaseTool
from relpkg.clients.vcs import VersionControlClient
from relpkg.core.result import Err, Ok, Result
from relpkg.model.manifest import PackageManifest, load_manifest, write_manifest
from relpkg.model.release_config import ReleaseConfig, load_release_config
from relpkg.model.semver import ReleaseBump, bump_version
from relpkg.output.console import ConsoleProtocol, Style
from relpkg.release.commit import (
    CommitPath,
    commit_and_tag,
    create_remote_release,
    push_changes,
    release_names,
)
from relpkg.release.config import MANIFEST_FILE, RELEASE_CONFIG_FILE
from relpkg.release.errors import ReleaseError
from relpkg.release.fsm import (
    CANCEL,
    FINISH,
    StepHandler,
    StepOutcome,
    advance,
    run_state_machine,
)
from relpkg.release.notes import normalize_release_notes
from relpkg.release.preflight import check_connectivity, check_working_tree
from relpkg.release.publish import ensure_registry_published

ReleaseStep = Literal[
    "connectivity",
    "read_manifest",
    "read_config",
    "ensure_published",
    "select_bump",
    "compute_version",
    "confirm",
    "notes",
    "write_manifest",
    "commit_tag",
    "push",
    "remote_release",
    "report",
]


class Prompter(Protocol):
    """Interactive questions asked during a release.

    ``None`` from ``select_bump`` or ``release_notes`` means the operator
    cancelled.
    """

    def available(self) -> bool: ...

    def select_bump(self, current_version: str) -> ReleaseBump | None: ...

    def confirm_release(self, new_version: str) -> bool: ...

    def release_notes(self) -> str | None: ...


@dataclass(frozen=True, slots=True)
class ReleaseDeps:
    root: Path
    console: ConsoleProtocol
    prompter: Prompter
    registry: RegistryClient
    vcs: VersionControlClient
    release_tool: ReleaseTool
    hosting: HostingClient


@dataclass(frozen=True, slots=True)
class ReleaseSession:
    step: ReleaseStep = "connectivity"
    manifest: PackageManifest | None = None
    config: ReleaseConfig | None = None
    bump: ReleaseBump | None = None
    new_version: str | None = None
    notes: str = ""
    tag: str | None = None
    commit_path: CommitPath | None = None
    pushed: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    status: Literal["completed", "cancelled"]
    version: str | None = None
    tag: str | None = None
    notes: str = ""
    commit_path: CommitPath | None = None

    @property
    def completed(self) -> bool:
        return self.status == "completed"


def _missing(what: str) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="invalid_step", message=f"release state is missing {what}"))


def _cancelled(deps: ReleaseDeps) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    deps.console.info("Release cancelled")
    return Ok(CANCEL)


def _step_connectivity(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    deps.console.header("Checking connectivity")
    check_connectivity(registry=deps.registry, vcs=deps.vcs, console=deps.console)
    return Ok(advance(replace(s, step="read_manifest")))


def _step_read_manifest(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    loaded = load_manifest(deps.root / MANIFEST_FILE)
    if isinstance(loaded, Err):
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"Error reading {MANIFEST_FILE}",
                hint=loaded.error.pretty(),
            )
        )
    manifest = loaded.value
    deps.console.print(f"Package: {manifest.name}", Style.INFO)
    deps.console.print(f"Current version: {manifest.version}", Style.INFO)
    return Ok(advance(replace(s, manifest=manifest, step="read_config")))


def _step_read_config(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.manifest is None:
        return _missing("the manifest")

    loaded = load_release_config(deps.root / RELEASE_CONFIG_FILE)
    if isinstance(loaded, Err):
        return Err(
            ReleaseError(
                kind="config_invalid",
                message=f"Invalid {RELEASE_CONFIG_FILE}",
                hint=loaded.error.pretty(),
            )
        )

    config = loaded.value
    if config is None:
        config = ReleaseConfig(name=s.manifest.name)

    check_working_tree(vcs=deps.vcs, git=config.git, console=deps.console)
    return Ok(advance(replace(s, config=config, step="ensure_published")))


def _step_ensure_published(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.manifest is None or s.config is None:
        return _missing("the manifest or configuration")

    published = ensure_registry_published(
        registry=deps.registry,
        config=s.config,
        version=s.manifest.version,
        console=deps.console,
    )
    if isinstance(published, Err):
        return published
    return Ok(advance(replace(s, step="select_bump")))


def _step_select_bump(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.manifest is None:
        return _missing("the manifest")
    if not deps.prompter.available():
        return Err(
            ReleaseError(
                kind="prompt_unavailable",
                message="release requires an interactive terminal",
                hint="Run from a terminal to choose the version bump.",
            )
        )

    bump = deps.prompter.select_bump(s.manifest.version)
    if bump is None:
        return _cancelled(deps)
    return Ok(advance(replace(s, bump=bump, step="compute_version")))


def _step_compute_version(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.manifest is None or s.bump is None:
        return _missing("the manifest or bump")

    bumped = bump_version(s.manifest.version, s.bump)
    if isinstance(bumped, Err):
        return Err(ReleaseError(kind="invalid_version", message=bumped.error))
    new_version = bumped.value
    deps.console.print(f"New version: {s.manifest.version} -> {new_version}", Style.INFO)
    return Ok(advance(replace(s, new_version=new_version, step="confirm")))


def _step_confirm(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.new_version is None:
        return _missing("the new version")
    if not deps.prompter.confirm_release(s.new_version):
        return _cancelled(deps)
    return Ok(advance(replace(s, step="notes")))


def _step_notes(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    notes = deps.prompter.release_notes()
    if notes is None:
        return _cancelled(deps)
    return Ok(advance(replace(s, notes=normalize_release_notes(notes), step="write_manifest")))


def _step_write_manifest(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.manifest is None or s.new_version is None:
        return _missing("the manifest or new version")

    written = write_manifest(deps.root / MANIFEST_FILE, s.manifest.with_version(s.new_version))
    if isinstance(written, Err):
        return Err(
            ReleaseError(
                kind="write_failed",
                message=f"Failed to update {MANIFEST_FILE}",
                hint=written.error,
            )
        )
    deps.console.success(f"Updated {MANIFEST_FILE}")
    return Ok(advance(replace(s, step="commit_tag")))


def _step_commit_tag(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.config is None or s.new_version is None:
        return _missing("the configuration or new version")

    names = release_names(s.config.git, s.new_version)
    committed = commit_and_tag(
        tool=deps.release_tool,
        vcs=deps.vcs,
        names=names,
        version=s.new_version,
        notes=s.notes,
        git=s.config.git,
        console=deps.console,
    )
    if isinstance(committed, Err):
        return committed
    deps.console.success("Release completed")
    return Ok(
        advance(replace(s, tag=names.tag, commit_path=committed.value, step="push"))
    )


def _step_push(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.config is None or s.tag is None:
        return _missing("the configuration or tag")

    pushed = push_changes(vcs=deps.vcs, git=s.config.git, tag=s.tag, console=deps.console)
    if isinstance(pushed, Err):
        return pushed
    return Ok(advance(replace(s, pushed=pushed.value, step="remote_release")))


def _step_remote_release(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    if s.config is None or s.tag is None or s.new_version is None:
        return _missing("the configuration, tag or new version")
    if not s.pushed:
        if s.config.github is not None:
            deps.console.info("GitHub: release not created, nothing was pushed")
        return Ok(advance(replace(s, step="report")))

    create_remote_release(
        hosting=deps.hosting,
        config=s.config,
        root=deps.root,
        tag=s.tag,
        version=s.new_version,
        notes=s.notes,
        console=deps.console,
    )
    return Ok(advance(replace(s, step="report")))


def _step_report(
    s: ReleaseSession, *, deps: ReleaseDeps
) -> Result[StepOutcome[ReleaseSession], ReleaseError]:
    deps.console.outro(f"Successfully released {s.new_version}!")
    if s.notes:
        deps.console.print(f"Release notes: {s.notes}")
    deps.console.print(f"Tag: {s.tag}")
    if not s.pushed:
        deps.console.print("Ready to push to remote repository")
    return Ok(FINISH)


def _handlers(*, deps: ReleaseDeps) -> dict[str, StepHandler[ReleaseSession]]:
    return {
        "connectivity": lambda s: _step_connectivity(s, deps=deps),
        "read_manifest": lambda s: _step_read_manifest(s, deps=deps),
        "read_config": lambda s: _step_read_config(s, deps=deps),
        "ensure_published": lambda s: _step_ensure_published(s, deps=deps),
        "select_bump": lambda s: _step_select_bump(s, deps=deps),
        "compute_version": lambda s: _step_compute_version(s, deps=deps),
        "confirm": lambda s: _step_confirm(s, deps=deps),
        "notes": lambda s: _step_notes(s, deps=deps),
        "write_manifest": lambda s: _step_write_manifest(s, deps=deps),
        "commit_tag": lambda s: _step_commit_tag(s, deps=deps),
        "push": lambda s: _step_push(s, deps=deps),
        "remote_release": lambda s: _step_remote_release(s, deps=deps),
        "report": lambda s: _step_report(s, deps=deps),
    }


def run_release(deps: ReleaseDeps) -> Result[ReleaseOutcome, ReleaseError]:
    """Run one interactive release in ``deps.root``.

    Returns Ok for both a completed and a cancelled release; Err only for
    fatal failures.
    """
    deps.console.intro("Release Packages")
    finished = run_state_machine(
        initial_state=ReleaseSession(),
        get_step=lambda s: s.step,
        handlers=_handlers(deps=deps),
    )
    if isinstance(finished, Err):
        return finished

    session = finished.value.session
    return Ok(
        ReleaseOutcome(
            status=finished.value.status,
            version=session.new_version,
            tag=session.tag,
            notes=session.notes,
            commit_path=session.commit_path,
        )
    )
