"""Exit codes for the release CLI.

A release run has only two observable outcomes for the shell: it completed
(or the operator cancelled it, which is not a failure) or it aborted on a
fatal error.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract."""

    OK = 0
    FAILURE = 1
