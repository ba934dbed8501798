"""Advisory checks run before a release.

Nothing here can abort a release: problems are reported as warnings and the
run continues.
"""

from __future__ import annotations

from dataclasses import dataclass

from relpkg.clients.registry import RegistryClient
from relpkg.clients.vcs import VersionControlClient
from relpkg.core.result import Err, Ok
from relpkg.model.release_config import GitConfig
from relpkg.output.console import ConsoleProtocol, Style
from relpkg.release.config import HOSTING_PROVIDER_MARKER


@dataclass(frozen=True, slots=True)
class ConnectivityReport:
    registry_reachable: bool
    is_repository: bool
    hosted_remote: bool


def check_connectivity(
    *,
    registry: RegistryClient,
    vcs: VersionControlClient,
    console: ConsoleProtocol,
) -> ConnectivityReport:
    """Check the registry, the repository and its remotes."""
    registry_ok = _check_registry(registry, console)

    if not vcs.is_repository():
        console.warning("GitHub: Not a git repository")
        console.print("Initialize git repository for releases", Style.DIM)
        return ConnectivityReport(registry_ok, is_repository=False, hosted_remote=False)

    hosted = False
    match vcs.remotes():
        case Ok(remotes):
            hosted = HOSTING_PROVIDER_MARKER in remotes
        case Err(e):
            console.warning(f"GitHub: could not list remotes ({e.message})")

    if hosted:
        console.success("GitHub: Repository connected")
    else:
        console.warning("GitHub: No GitHub remote found")
        console.print("Consider adding a GitHub remote for releases", Style.DIM)

    return ConnectivityReport(registry_ok, is_repository=True, hosted_remote=hosted)


def _check_registry(registry: RegistryClient, console: ConsoleProtocol) -> bool:
    match registry.ping():
        case Ok(_):
            console.success("NPM: Registry connection verified")
            return True
        case Err(_):
            console.warning("NPM: Registry connection failed")
            console.print(
                "Make sure you are logged in to npm and have internet connection", Style.DIM
            )
            return False


def check_working_tree(
    *,
    vcs: VersionControlClient,
    git: GitConfig | None,
    console: ConsoleProtocol,
) -> bool | None:
    """Warn about uncommitted changes when ``git.requireCleanWorkingDirectory`` is set.

    Returns None when the check does not apply.
    """
    if git is None or not git.require_clean_working_directory:
        return None
    if not vcs.is_repository():
        return None
    clean = vcs.is_clean()
    if not clean:
        console.warning("Git: working directory has uncommitted changes")
    return clean
