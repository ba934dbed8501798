"""Operating system boundary: subprocesses and files."""

from .files import atomic_write_text, render_json, write_json
from .process import ProcessError, is_available, merged_env, run, run_silent

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "is_available",
    "merged_env",
    "render_json",
    "run",
    "run_silent",
    "write_json",
]
