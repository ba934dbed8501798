"""Data models: semantic versions, the package manifest, the release configuration."""

from .manifest import PackageManifest, load_manifest, validate_manifest, write_manifest
from .release_config import (
    ReleaseConfig,
    create_default_release_config,
    load_release_config,
    validate_release_config,
)
from .semver import ReleaseBump, SemVer, bump_version, parse_version

__all__ = [
    # manifest
    "PackageManifest",
    "load_manifest",
    "validate_manifest",
    "write_manifest",
    # release config
    "ReleaseConfig",
    "create_default_release_config",
    "load_release_config",
    "validate_release_config",
    # semver
    "ReleaseBump",
    "SemVer",
    "bump_version",
    "parse_version",
]
