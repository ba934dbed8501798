"""Field-level validation results.

Validators never raise: they collect a ``FieldIssue`` for every violated field
and return ``Err(ValidationError)`` when at least one was found.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["FieldIssue", "ValidationError", "join_path"]

ROOT_PATH = "(root)"


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """A single violated field.

    Attributes:
        path: Dotted path to the field (``platforms.npm.access``), or
            ``(root)`` for problems with the document itself.
        message: Human readable reason.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationError:
    """All issues found while validating one document."""

    issues: tuple[FieldIssue, ...]

    @classmethod
    def of(cls, issues: Iterable[FieldIssue]) -> ValidationError:
        return cls(issues=tuple(issues))

    @classmethod
    def single(cls, path: str, message: str) -> ValidationError:
        return cls(issues=(FieldIssue(path=path, message=message),))

    @property
    def paths(self) -> list[str]:
        return [issue.path for issue in self.issues]

    def pretty(self) -> str:
        """One ``<field-path>: <reason>`` line per issue."""
        return "\n".join(str(issue) for issue in self.issues)

    def __str__(self) -> str:
        return self.pretty()


def join_path(*parts: str) -> str:
    return ".".join(p for p in parts if p) or ROOT_PATH
