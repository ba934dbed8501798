"""Arrow-key selector and y/n confirmation for the terminal.

Both helpers need a real TTY on stdin and stdout and raise RuntimeError
otherwise; callers check ``is_interactive_terminal()`` first.
"""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

Key = Literal["up", "down", "enter", "cancel", "other"]


@dataclass(frozen=True, slots=True)
class SelectorOption(Generic[T]):
    value: T
    label: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class SelectorResult(Generic[T]):
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal():
        return False
    if os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled() or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _read_char() -> str:
    if os.name == "nt":
        import msvcrt

        return msvcrt.getwch()

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def decode_key(ch: str, follow: str = "") -> Key:
    """Map a raw key (plus any escape-sequence tail) to a selector action."""
    if ch in ("\r", "\n"):
        return "enter"
    # "" is EOF on stdin, \x04 is Ctrl-D
    if ch in ("", "q", "Q", "\x03", "\x04"):
        return "cancel"
    if ch == "\x1b":
        if follow == "[A":
            return "up"
        if follow == "[B":
            return "down"
        return "cancel"
    if ch in ("\x00", "\xe0"):
        if follow == "H":
            return "up"
        if follow == "P":
            return "down"
        return "other"
    if ch in ("k", "K"):
        return "up"
    if ch in ("j", "J"):
        return "down"
    return "other"


def _read_key() -> Key:
    ch = _read_char()
    follow = ""
    if ch == "\x1b" and os.name != "nt":
        follow = _read_char()
        if follow == "[":
            follow += _read_char()
    elif ch in ("\x00", "\xe0"):
        follow = _read_char()
    return decode_key(ch, follow)


def _width() -> int:
    return max(40, min(100, shutil.get_terminal_size((80, 24)).columns))


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."


def render_options(options: list[SelectorOption[object]], index: int) -> list[str]:
    """Plain-text lines for ``options`` with ``index`` highlighted."""
    label_w = max(len(o.label) for o in options)
    detail_w = max(10, _width() - label_w - 8)
    lines: list[str] = []
    for i, opt in enumerate(options):
        marker = ">" if i == index else " "
        detail = _clip((opt.detail or "").strip(), detail_w)
        line = f" {marker} {opt.label.ljust(label_w)}  {detail}".rstrip()
        lines.append(_paint(line, "1", "30", "46") if i == index else line)
    return lines


def _render(
    *, title: str, subtitle: str | None, options: list[SelectorOption[object]], index: int
) -> None:
    sys.stdout.write("\x1b[2J\x1b[H")
    print(_paint(title, "1", "96"))
    if subtitle is not None:
        print(_paint(subtitle, "2", "37"))
    print()
    for line in render_options(options, index):
        print(line)
    print()
    print(_paint("Up/Down + Enter to choose, q to cancel", "2", "37"))
    sys.stdout.flush()


def select_one(
    *,
    title: str,
    options: list[SelectorOption[T]],
    subtitle: str | None = None,
    initial_index: int = 0,
) -> SelectorResult[T]:
    if not options:
        raise ValueError("selector requires at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    idx = max(0, min(initial_index, len(options) - 1))
    plain: list[SelectorOption[object]] = [
        SelectorOption(value=o.value, label=o.label, detail=o.detail) for o in options
    ]

    while True:
        _render(title=title, subtitle=subtitle, options=plain, index=idx)
        key = _read_key()

        if key == "up":
            idx = (idx - 1) % len(options)
        elif key == "down":
            idx = (idx + 1) % len(options)
        elif key == "enter":
            return SelectorResult(action="select", value=options[idx].value, index=idx)
        elif key == "cancel":
            return SelectorResult(action="cancel", value=None, index=idx)


def confirm_yn(*, prompt: str) -> bool:
    """Ask ``prompt`` until the operator answers y or n.

    Esc, Ctrl-C, Ctrl-D and end of input all mean no.
    """
    if not is_interactive_terminal():
        raise RuntimeError("interactive confirmation requires a TTY")

    print()
    print(_paint(prompt, "1", "97"))
    print(f"{_paint('y', '1', '32')} = continue, {_paint('n', '1', '31')} = cancel")
    sys.stdout.flush()

    while True:
        ch = _read_char().lower()
        if ch in {"", "\x1b", "\x03", "\x04", "n"}:
            return False
        if ch == "y":
            return True
