from __future__ import annotations

MANIFEST_FILE = "package.json"
RELEASE_CONFIG_FILE = ".release-package.json"

ROOT_ENV_VAR = "RELEASE_PACKAGE_ROOT"

BUILD_COMMAND: tuple[str, ...] = ("bun", "run", "build")

RELEASE_TOOL_COMMAND: tuple[str, ...] = (
    "npx",
    "release-it",
    "--no-increment",
    "--no-git",
    "--no-npm",
)
RELEASE_VERSION_ENV = "RELEASE_VERSION"
RELEASE_NOTES_ENV = "RELEASE_NOTES"

# Remote URLs containing this are treated as GitHub-hosted.
HOSTING_PROVIDER_MARKER = "github.com"
GIT_REMOTE = "origin"

RELEASE_NOTES_MAX_LENGTH = 500
