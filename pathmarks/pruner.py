"""Drop bookmarks whose target directory no longer exists."""

import os
import stat
from dataclasses import dataclass, field

from .errors import CheckFailed
from .store import BookmarkStore
from .utils import log_debug, log_verbose

# Errors that mean "gone"; anything else is a failed check
_MISSING = (FileNotFoundError, NotADirectoryError)


@dataclass
class PruneReport:
    removed: list[str] = field(default_factory=list)
    kept_count: int = 0
    failures: list[CheckFailed] = field(default_factory=list)


def is_live_directory(path: str) -> bool:
    """True if *path* is an existing directory, False if it is gone.

    Raises OSError for anything other than "does not exist", so callers can
    tell a permission problem from a dead bookmark.
    """
    try:
        st = os.stat(path)
    except _MISSING:
        return False
    return stat.S_ISDIR(st.st_mode)


def prune(store: BookmarkStore, dry_run: bool = False) -> PruneReport:
    """Remove dead bookmarks from *store* in place.

    A bookmark that cannot be checked is kept and reported as CheckFailed;
    it never aborts the run. With *dry_run* the store is left untouched.
    """
    report = PruneReport()
    for bookmark in store.list():
        try:
            live = is_live_directory(bookmark.path)
        except OSError as e:
            log_debug(f"stat {bookmark.path} failed: {e}")
            report.failures.append(CheckFailed(bookmark.label, e))
            report.kept_count += 1
            continue

        if live:
            report.kept_count += 1
            continue

        log_verbose(f"Dead bookmark: {bookmark.label} -> {bookmark.path}")
        report.removed.append(bookmark.label)
        if not dry_run:
            store.remove(bookmark.label)
    return report
