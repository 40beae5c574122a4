"""Interactive selection among candidate directories.

A picker takes an ordered list of entries and blocks until the user either
chooses one (Chosen) or gives up (Cancelled). Pickers never touch the
bookmark store. The terminal UI goes to stderr since stdout carries the
chosen path back to the shell.
"""

import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Protocol, Sequence

import click

from .errors import PickerError
from .search import fuzzy_filter
from .utils import log_debug


@dataclass(frozen=True)
class PickerEntry:
    label: str
    path: str
    secondary: bool = False

    def display(self) -> str:
        if self.label == self.path:
            return self.path
        return f"{self.label}  {self.path}"


@dataclass(frozen=True)
class Chosen:
    path: str
    # Position in the entries passed to select(), for callers that need more than the path
    index: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Cancelled:
    pass


Selection = Chosen | Cancelled


class Picker(Protocol):
    def select(self, entries: Sequence[PickerEntry]) -> Selection:
        ...


class PromptPicker:
    """Numbered list with incremental filtering, driven by click prompts.

    Type text to narrow the list, a number to choose, nothing to take the
    first visible entry, ``q`` (or Ctrl-C) to cancel. A leading ``/`` makes
    the rest filter text even when it is all digits, so ``/2024`` narrows to
    a label like ``2024`` instead of choosing entry 2024.
    """

    def __init__(self, page_size: int = 20):
        self.page_size = page_size

    def _render(self, entries: Sequence[PickerEntry], visible: list[int], query: str) -> None:
        click.echo(err=True)
        if query:
            click.echo(click.style(f"  filter: {query}", fg="cyan"), err=True)
        for number, index in enumerate(visible[: self.page_size], 1):
            entry = entries[index]
            line = f"  {number:>2}. {entry.display()}"
            if entry.secondary:
                line = click.style(line, dim=True, italic=True)
            click.echo(line, err=True)
        hidden = len(visible) - self.page_size
        if hidden > 0:
            click.echo(click.style(f"  ... {hidden} more, type to filter", dim=True), err=True)

    def select(self, entries: Sequence[PickerEntry]) -> Selection:
        if not entries:
            return Cancelled()

        labels = [entry.display() for entry in entries]
        query = ""
        visible = list(range(len(entries)))

        while True:
            self._render(entries, visible, query)
            try:
                answer = click.prompt(
                    "  Select (number, filter text, q to quit)",
                    default="",
                    show_default=False,
                    err=True,
                ).strip()
            except click.Abort:
                click.echo(err=True)
                return Cancelled()

            if answer.lower() == "q":
                return Cancelled()

            if not answer:
                return Chosen(entries[visible[0]].path, visible[0])

            # isdecimal, not isdigit: "²" is a digit that int() rejects
            if answer.isdecimal():
                number = int(answer)
                if 1 <= number <= min(len(visible), self.page_size):
                    index = visible[number - 1]
                    return Chosen(entries[index].path, index)
                click.echo(click.style("  No entry with that number.", fg="red"), err=True)
                continue

            if answer.startswith("/") and len(answer) > 1:
                answer = answer[1:]

            narrowed = fuzzy_filter(answer, labels)
            if not narrowed:
                click.echo(click.style(f"  Nothing matches {answer!r}.", fg="red"), err=True)
                continue
            query, visible = answer, narrowed
            log_debug(f"Filter {query!r} kept {len(visible)} of {len(entries)} entries")


class FzfPicker:
    """Delegate selection to fzf, which draws on the terminal directly."""

    DELIMITER = "\t"

    def __init__(self, executable: str = "fzf"):
        self.executable = executable

    def select(self, entries: Sequence[PickerEntry]) -> Selection:
        if not entries:
            return Cancelled()

        lines = []
        for index, entry in enumerate(entries):
            text = entry.display()
            if entry.secondary:
                text = click.style(text, dim=True, italic=True)
            lines.append(f"{index}{self.DELIMITER}{text}")

        args = [
            self.executable,
            "--ansi",
            "--no-sort",
            "--height=40%",
            "--reverse",
            f"--delimiter={self.DELIMITER}",
            "--with-nth=2..",
        ]
        try:
            proc = subprocess.run(
                args,
                input="\n".join(lines) + "\n",
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise PickerError(f"Could not run {self.executable}: {e}") from e

        # 1: no match, 130: interrupted with Esc or Ctrl-C
        if proc.returncode in (1, 130):
            return Cancelled()
        if proc.returncode != 0:
            raise PickerError(f"{self.executable} failed (exit code {proc.returncode})")

        selected = (proc.stdout or "").strip()
        if not selected:
            return Cancelled()
        index_text = selected.split(self.DELIMITER, 1)[0]
        try:
            index = int(index_text)
            return Chosen(entries[index].path, index)
        except (ValueError, IndexError):
            raise PickerError(f"Unexpected {self.executable} output: {selected!r}") from None


def get_picker(name: str = "auto") -> Picker:
    """Build a picker by name: 'prompt', 'fzf', or 'auto' (fzf when installed)."""
    if name == "fzf":
        if shutil.which("fzf") is None:
            raise PickerError("fzf is required but was not found on PATH")
        return FzfPicker()
    if name == "auto" and shutil.which("fzf") is not None:
        return FzfPicker()
    return PromptPicker()
