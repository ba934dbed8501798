from __future__ import annotations

from relpkg.release.config import RELEASE_NOTES_MAX_LENGTH

NOTES_TOO_LONG = f"Release notes must be less than {RELEASE_NOTES_MAX_LENGTH} characters"


def release_notes_problem(text: str) -> str | None:
    """Return the validation message for ``text``, or None when it is acceptable."""
    if len(text) > RELEASE_NOTES_MAX_LENGTH:
        return NOTES_TOO_LONG
    return None


def normalize_release_notes(text: str | None) -> str:
    if text is None:
        return ""
    return text.strip()
