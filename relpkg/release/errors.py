"""Error payload for the release run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "manifest_invalid",
    "config_invalid",
    "invalid_version",
    "publish_failed",
    "write_failed",
    "commit_failed",
    "push_failed",
    "prompt_unavailable",
    "invalid_step",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Fatal error that aborts a release.

    ``message`` is shown as the single error line; ``hint`` is an optional
    dimmed follow-up (for validation failures, the per-field listing).
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message}\n{self.hint}"
        return self.message
