"""Command line interface for pathmarks.

Only the resolved path is ever written to stdout; messages go to stderr so
the shell wrappers from `pathmarks init` can capture the path and `cd`.
"""

import functools
from pathlib import Path

import click

from . import __version__
from .completions import complete_label, complete_query
from .config import get_bookmarks_file, get_command_name, get_picker_name, get_verbosity
from .errors import InvalidPath, NoMatch, PathmarksError, StoreUnwritable
from .picker import Cancelled, Chosen, PickerEntry, get_picker
from .pruner import prune as prune_store
from .resolver import Candidates, Unique, list_subdirectories, resolve
from .shells import SHELLS, render_init
from .store import BookmarkStore, load_store, save_store
from .utils import log_debug, log_info, log_verbose, log_warning, set_verbosity_override

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def reports_errors(f):
    """Turn PathmarksError into a click error: message on stderr, exit 1."""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except PathmarksError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def persist(store: BookmarkStore, bookmarks_file: Path) -> None:
    """save_store, with write failures reported as StoreUnwritable."""
    try:
        save_store(store, bookmarks_file)
    except OSError as e:
        raise StoreUnwritable(bookmarks_file, e) from e


def current_dir() -> Path:
    """The working directory, or InvalidPath if it was removed under us."""
    try:
        cwd = Path.cwd()
    except OSError as e:
        raise InvalidPath(e.filename or ".") from e
    if not cwd.is_dir():
        raise InvalidPath(cwd)
    return cwd


def _select(entries: list[PickerEntry]) -> Chosen:
    selection = get_picker(get_picker_name()).select(entries)
    if isinstance(selection, Cancelled):
        log_verbose("Cancelled.")
        raise click.exceptions.Exit(1)
    return selection


def _choose(entries: list[PickerEntry]) -> str:
    return _select(entries).path


def _choose_label(store: BookmarkStore) -> str:
    """Let the user pick one bookmark and return its label."""
    if not len(store):
        raise NoMatch("")
    entries = [PickerEntry(b.label, b.path) for b in store]
    return entries[_select(entries).index].label


def _entries_for_browsing(store: BookmarkStore, cwd: Path) -> list[PickerEntry]:
    """All bookmarks, then the cwd's visible subdirectories not bookmarked."""
    entries = [PickerEntry(b.label, b.path) for b in store]
    bookmarked = {b.path for b in store}
    for subdir in list_subdirectories(cwd, include_hidden=False):
        if str(subdir) not in bookmarked:
            entries.append(PickerEntry(subdir.name, str(subdir), secondary=True))
    return entries


def _pick(store: BookmarkStore, cwd: Path, query: str) -> str:
    if not query.strip():
        entries = _entries_for_browsing(store, cwd)
        if not entries:
            raise NoMatch("")
        return _choose(entries)

    resolution = resolve(query, cwd, store, interactive=True)
    return _settle(resolution, query)


def _settle(resolution, query: str) -> str:
    if isinstance(resolution, Unique):
        return resolution.path
    if isinstance(resolution, Candidates):
        log_debug(f"{len(resolution.candidates)} candidates for {query!r}")
        return _choose([PickerEntry(c.label, c.path) for c in resolution.candidates])
    raise NoMatch(query)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="pathmarks")
@click.option("--verbose", "-v", count=True, help="More output (repeat for debug)")
@click.option("--quiet", "-q", is_flag=True, help="Only print errors and paths")
def cli(verbose: int, quiet: bool):
    """Bookmark directories and jump to them by label.

    Set up your shell with one of:

        eval "$(pathmarks init bash)"
        eval "$(pathmarks init zsh)"
        pathmarks init fish | source

    The bookmarks file lives at $PATHMARKS_FILE when set.
    """
    if quiet:
        set_verbosity_override(0)
    elif verbose:
        set_verbosity_override(1 + verbose)
    else:
        set_verbosity_override(get_verbosity())


@cli.command(short_help="Print the directory a query denotes")
@click.argument("query", required=False, default="", shell_complete=complete_query)
@reports_errors
def guess(query: str):
    """Resolve QUERY to a directory and print it.

    A subdirectory of the current directory whose name equals QUERY
    (ignoring case) always wins. Otherwise bookmark labels are fuzzy
    matched; ties open the picker. Without QUERY, behaves like `pick`.

    Examples:
        pathmarks guess proj
        pathmarks guess ../other
    """
    store = load_store(get_bookmarks_file())
    cwd = current_dir()
    if not query.strip():
        click.echo(_pick(store, cwd, ""))
        return
    click.echo(_settle(resolve(query, cwd, store), query))


@cli.command(short_help="Choose a directory interactively")
@click.argument("query", required=False, default="", shell_complete=complete_query)
@reports_errors
def pick(query: str):
    """Open the picker and print the chosen directory.

    Without QUERY the list holds every bookmark followed by the current
    directory's subdirectories. With QUERY it holds the matching bookmarks,
    best first.
    """
    store = load_store(get_bookmarks_file())
    click.echo(_pick(store, current_dir(), query))


@cli.command(short_help="Bookmark a directory")
@click.argument("label")
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@reports_errors
def save(label: str, path: Path | None):
    """Save PATH (default: current directory) under LABEL.

    An existing LABEL is overwritten.

    Examples:
        pathmarks save proj
        pathmarks save docs ~/Documents
    """
    bookmarks_file = get_bookmarks_file()
    store = load_store(bookmarks_file)
    target = path if path is not None else current_dir()

    previous = store.get(label)
    bookmark = store.add(label, target)
    persist(store, bookmarks_file)

    if previous is not None and previous.path != bookmark.path:
        log_info(f"Updated {label}: {previous.path} -> {bookmark.path}")
    else:
        log_info(f"Saved {label} -> {bookmark.path}")


@cli.command(short_help="Delete a bookmark")
@click.argument("label", required=False, shell_complete=complete_label)
@reports_errors
def delete(label: str | None):
    """Delete the bookmark LABEL.

    Without LABEL, choose the bookmark to delete from the picker.

    Examples:
        pathmarks delete proj
        pathmarks delete
    """
    bookmarks_file = get_bookmarks_file()
    store = load_store(bookmarks_file)
    if label is None:
        label = _choose_label(store)
    removed = store.remove(label)
    persist(store, bookmarks_file)
    log_info(f"Deleted {removed.label} ({removed.path})")


@cli.command(name="list", short_help="List bookmarks")
@click.option("--paths", "-p", is_flag=True, help="Print label and path separated by a tab")
@reports_errors
def list_bookmarks(paths: bool):
    """Print bookmark labels, one per line, in the order they were saved."""
    store = load_store(get_bookmarks_file())
    for bookmark in store:
        click.echo(f"{bookmark.label}\t{bookmark.path}" if paths else bookmark.label)


@cli.command(short_help="Remove bookmarks to missing directories")
@click.option("--dry-run", "-n", is_flag=True, help="Report what would be removed")
@reports_errors
def prune(dry_run: bool):
    """Remove bookmarks whose directory no longer exists.

    Bookmarks that cannot be checked (e.g. permission denied) are kept and
    reported; the command then exits with status 1.
    """
    bookmarks_file = get_bookmarks_file()
    store = load_store(bookmarks_file)
    report = prune_store(store, dry_run=dry_run)

    verb = "Would remove" if dry_run else "Removed"
    for label in report.removed:
        log_info(f"{verb} {label}")
    if report.removed and not dry_run:
        persist(store, bookmarks_file)

    for failure in report.failures:
        log_warning(str(failure))

    log_verbose(f"{verb} {len(report.removed)}, kept {report.kept_count}")
    if report.failures:
        raise click.ClickException(f"Could not check {len(report.failures)} bookmark(s)")


@cli.command(short_help="Print shell integration")
@click.argument("shell", type=click.Choice(SHELLS))
@click.option("--cmd", "command", default=None, help="Name of the jump function (default: t)")
def init(shell: str, command: str | None):
    """Print the integration script for SHELL.

    Examples:
        eval "$(pathmarks init bash)"
        eval "$(pathmarks init zsh --cmd j)"
        pathmarks init fish | source
    """
    click.echo(render_init(shell, command or get_command_name()), nl=False)


def main():
    cli()


if __name__ == "__main__":
    main()
