"""Shared Rich Console.

The chat loop, command handlers and output helpers all print through one
Console so tests can swap in a recording console.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the process-wide Console, creating it on first use."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def set_console(console: Console | None) -> None:
    """Replace the shared Console (None resets to a fresh default on next use)."""
    global _console
    _console = console
