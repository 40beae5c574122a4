"""Verbosity-aware output helpers.

Everything here writes to stderr: stdout is reserved for the resolved path,
which the shell wrapper captures and hands to `cd`.
"""

import click

from .config import get_verbosity

# Read from the config once, on first use, unless set explicitly
_verbosity: int | None = None


def set_verbosity_override(level: int | None) -> None:
    """Fix the verbosity for the current invocation.

    None forgets it, so the next log call reads the config again.
    """
    global _verbosity
    _verbosity = None if level is None else max(0, min(level, 3))


def current_verbosity() -> int:
    global _verbosity
    if _verbosity is None:
        _verbosity = get_verbosity()
    return _verbosity


def log_info(message: str) -> None:
    """Normal output (verbosity >= 1)."""
    if current_verbosity() >= 1:
        click.echo(message, err=True)


def log_verbose(message: str) -> None:
    """Detailed output (verbosity >= 2)."""
    if current_verbosity() >= 2:
        click.echo(message, err=True)


def log_debug(message: str) -> None:
    """Internals (verbosity >= 3)."""
    if current_verbosity() >= 3:
        click.echo(click.style(f"[debug] {message}", dim=True), err=True)


def log_warning(message: str) -> None:
    """Warnings are shown unless the user asked for silence."""
    if current_verbosity() >= 1:
        click.echo(click.style(f"Warning: {message}", fg="yellow"), err=True)
