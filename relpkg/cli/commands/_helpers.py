"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TypeVar

import typer

from relpkg.core.errors import ErrorCode
from relpkg.core.result import Err, Ok, Result
from relpkg.output.console import ConsoleProtocol, Style

T = TypeVar("T")
E = TypeVar("E")


def exit_on_error(
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode = ErrorCode.FAILURE,
) -> T:
    """Return the Ok value, or report the error and exit.

    Expects error objects to have a ``message`` and an optional ``hint``;
    anything else is reported through ``str()``.
    """
    match result:
        case Ok(value):
            return value
        case Err(error):
            message: str = getattr(error, "message", str(error))
            hint: str | None = getattr(error, "hint", None)
            console.error(message)
            if hint:
                console.print(hint, Style.DIM)
            raise typer.Exit(code=int(error_code))
