"""Capability interfaces for external tools, and their CLI-backed implementations."""

from .hosting import GithubCli, HostingClient, RemoteReleaseRequest
from .registry import NpmRegistry, PublishOptions, RegistryClient
from .release_tool import ReleaseItTool, ReleaseTool
from .vcs import GitClient, GitError, VersionControlClient

__all__ = [
    "GitClient",
    "GitError",
    "GithubCli",
    "HostingClient",
    "NpmRegistry",
    "PublishOptions",
    "RegistryClient",
    "ReleaseItTool",
    "ReleaseTool",
    "RemoteReleaseRequest",
    "VersionControlClient",
]
