from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from relpkg.core.result import Err, Ok, Result

ReleaseBump = Literal["patch", "minor", "major"]

BUMP_KINDS: tuple[ReleaseBump, ...] = ("patch", "minor", "major")

SEMVER_PATTERN = r"^(\d+)\.(\d+)\.(\d+)(?:-([a-zA-Z0-9-]+))?(?:\+([a-zA-Z0-9-]+))?$"
_SEMVER_RE = re.compile(SEMVER_PATTERN, re.ASCII)

SEMVER_MESSAGE = "Version must be in semantic versioning format (e.g., 1.2.3)"


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    def core(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        text = self.core()
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        if self.build is not None:
            text += f"+{self.build}"
        return text

    def bump(self, kind: ReleaseBump) -> SemVer:
        """Increment one component; lower components reset, metadata is dropped."""
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def is_semver(text: str) -> bool:
    # fullmatch: "$" alone would accept a trailing newline
    return _SEMVER_RE.fullmatch(text) is not None


def parse_version(text: str) -> SemVer | None:
    m = _SEMVER_RE.fullmatch(text)
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4), m.group(5))


def bump_version(version: str, kind: ReleaseBump) -> Result[str, str]:
    """Bumped version string, or an error message naming the bad input."""
    parsed = parse_version(version)
    if parsed is None:
        return Err(
            f"Invalid version format: {version}. Expected semantic versioning (e.g., 1.2.3)"
        )
    if kind not in BUMP_KINDS:
        return Err(f"Unknown version type: {kind}")
    return Ok(str(parsed.bump(kind)))
