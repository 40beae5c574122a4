"""Bookmark persistence.

The bookmarks file holds one ``label<TAB>path`` per line. It is read fresh on
every invocation and written back whole, through a temporary file that is
renamed into place so readers never see a partial write.
"""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .errors import InvalidLabel, InvalidPath, NotFound, StoreCorrupt
from .utils import log_debug, log_warning

SEPARATOR = "\t"
ENCODING = "utf-8"
# Paths are bytes on POSIX; surrogateescape lets undecodable names round trip.
ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Bookmark:
    """A label bound to an absolute directory path."""

    label: str
    path: str

    def to_line(self) -> str:
        return f"{self.label}{SEPARATOR}{self.path}\n"


def validate_label(label: str) -> str:
    if not label or not label.strip() or any(c in label for c in "\t\r\n"):
        raise InvalidLabel(label)
    return label


def absolute_directory(path: str | os.PathLike) -> str:
    """Return *path* as a normalised absolute directory path.

    Relative paths are taken against the current directory and ``~`` is
    expanded. Symlinks are kept as typed. Raises InvalidPath when the
    result is not an existing directory.
    """
    expanded = os.path.expanduser(os.fspath(path))
    absolute = os.path.abspath(expanded)
    if "\n" in absolute or "\r" in absolute or not os.path.isdir(absolute):
        raise InvalidPath(absolute)
    return absolute


class BookmarkStore:
    """Ordered mapping of label to Bookmark.

    Insertion order is kept for listing and for fuzzy-match tie breaking.
    Overwriting an existing label keeps its original position.
    """

    def __init__(self, bookmarks: list[Bookmark] | None = None):
        self._bookmarks: dict[str, Bookmark] = {}
        for bookmark in bookmarks or []:
            self._bookmarks[bookmark.label] = bookmark

    def add(self, label: str, path: str | os.PathLike) -> Bookmark:
        """Insert or overwrite *label*; *path* must be an existing directory."""
        validate_label(label)
        bookmark = Bookmark(label, absolute_directory(path))
        self._bookmarks[label] = bookmark
        return bookmark

    def remove(self, label: str) -> Bookmark:
        try:
            return self._bookmarks.pop(label)
        except KeyError:
            raise NotFound(label) from None

    def get(self, label: str) -> Bookmark | None:
        return self._bookmarks.get(label)

    def list(self) -> list[Bookmark]:
        return list(self._bookmarks.values())

    def labels(self) -> list[str]:
        return list(self._bookmarks)

    def __contains__(self, label: object) -> bool:
        return label in self._bookmarks

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._bookmarks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BookmarkStore):
            return NotImplemented
        return self.list() == other.list()

    def __repr__(self) -> str:
        return f"BookmarkStore({self.list()!r})"


def parse_line(line: str, lineno: int) -> Bookmark | None:
    """Parse one line of the bookmarks file.

    Returns None for blank lines and raises StoreCorrupt for malformed ones.
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return None
    if SEPARATOR not in line:
        raise StoreCorrupt(lineno, "missing tab separator")
    label, path = line.split(SEPARATOR, 1)
    if not label.strip():
        raise StoreCorrupt(lineno, "empty label")
    if not os.path.isabs(path):
        raise StoreCorrupt(lineno, f"path is not absolute: {path!r}")
    return Bookmark(label, path)


def load_store(path: Path) -> BookmarkStore:
    """Load bookmarks from *path*.

    A missing or empty file gives an empty store, and so does one that
    cannot be read (with a warning). Malformed lines are skipped with a
    warning so one bad line never blocks the rest.
    """
    store = BookmarkStore()
    try:
        with open(path, encoding=ENCODING, errors=ERRORS, newline="\n") as f:
            lines = f.readlines()
    except FileNotFoundError:
        log_debug(f"No bookmarks file at {path}, starting empty")
        return store
    except OSError as e:
        log_warning(f"Cannot read bookmarks from {path}: {e.strerror or e}")
        return store

    for lineno, line in enumerate(lines, 1):
        try:
            bookmark = parse_line(line, lineno)
        except StoreCorrupt as e:
            log_warning(f"Skipping malformed bookmark in {path}: {e}")
            continue
        if bookmark is None:
            continue
        # Later duplicates overwrite the path but keep the first position
        store._bookmarks[bookmark.label] = bookmark

    log_debug(f"Loaded {len(store)} bookmarks from {path}")
    return store


def save_store(store: BookmarkStore, path: Path) -> None:
    """Write *store* to *path* atomically (temp file + rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    mode = 0o644
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=ENCODING, errors=ERRORS, newline="\n") as f:
            for bookmark in store:
                f.write(bookmark.to_line())
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    log_debug(f"Saved {len(store)} bookmarks to {path}")
