"""Query resolution: decide which directory a query denotes.

Priority, first success wins:

1. Empty query: every bookmark, for listing and picking.
2. Explicit paths (absolute, ``~`` or ``~/...``, containing a separator,
   ``.``/``..``) that name an existing directory. ``~user`` is a plain name.
3. A direct subdirectory of cwd whose name equals the query ignoring case.
   Typing a real subdirectory name always beats a bookmark.
4. Fuzzy match against bookmark labels.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .search import fuzzy_match
from .store import BookmarkStore
from .utils import log_debug


@dataclass(frozen=True)
class Candidate:
    label: str
    path: str
    score: int = 0


@dataclass(frozen=True)
class Unique:
    path: str


@dataclass(frozen=True)
class Candidates:
    candidates: list[Candidate] = field(default_factory=list)


@dataclass(frozen=True)
class NoMatch:
    query: str


Resolution = Unique | Candidates | NoMatch


def looks_like_path(query: str) -> bool:
    """True when *query* is spelled as a path rather than a bare name."""
    if query in (".", ".."):
        return True
    if query == "~":
        return True
    if os.path.isabs(query):
        return True
    seps = {os.sep} | ({os.altsep} if os.altsep else set())
    # "~/x" contains a separator; a bare "~name" is left to the other rules
    return any(sep in query for sep in seps)


def list_subdirectories(cwd: Path, include_hidden: bool = True) -> list[Path]:
    """Direct subdirectories of *cwd*, sorted by name.

    Symlinks to directories count. An unreadable *cwd* has none.
    """
    try:
        with os.scandir(cwd) as it:
            entries = list(it)
    except OSError as e:
        log_debug(f"Cannot list {cwd}: {e}")
        return []

    subdirs = []
    for entry in entries:
        if not include_hidden and entry.name.startswith("."):
            continue
        try:
            if entry.is_dir():
                subdirs.append(Path(cwd) / entry.name)
        except OSError:
            continue
    return sorted(subdirs, key=lambda p: p.name)


def _resolve_literal(query: str, cwd: Path) -> str | None:
    if query == "~" or query.startswith("~" + os.sep):
        query = os.path.expanduser(query)
    target = Path(query)
    if not target.is_absolute():
        target = Path(cwd) / target
    target = Path(os.path.normpath(target))
    return str(target) if target.is_dir() else None


def _match_subdirectory(query: str, cwd: Path) -> str | None:
    wanted = query.lower()
    matches = [p for p in list_subdirectories(cwd) if p.name.lower() == wanted]
    if len(matches) == 1:
        return str(matches[0])
    if matches:
        log_debug(f"{len(matches)} subdirectories match {query!r} ignoring case, falling back to bookmarks")
    return None


def rank_bookmarks(query: str, store: BookmarkStore) -> list[Candidate]:
    """Bookmarks matching *query*, best first; insertion order breaks ties."""
    scored = []
    for index, bookmark in enumerate(store):
        match = fuzzy_match(query, bookmark.label)
        if match is None:
            continue
        scored.append((match.score, index, bookmark))
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [Candidate(b.label, b.path, score) for score, _, b in scored]


def resolve(query: str | None, cwd: Path, store: BookmarkStore, interactive: bool = False) -> Resolution:
    """Resolve *query* relative to *cwd* against *store*.

    With *interactive* set, several matching bookmarks always come back as
    Candidates so the caller can let the user choose, even when one of
    them scores highest.
    """
    query = query or ""

    # Whitespace only counts for emptiness; " my dir" can still name a subdirectory
    if not query.strip():
        if not len(store):
            return NoMatch("")
        return Candidates([Candidate(b.label, b.path) for b in store])

    if looks_like_path(query):
        literal = _resolve_literal(query, cwd)
        if literal is not None:
            log_debug(f"{query!r} is an existing path")
            return Unique(literal)

    subdir = _match_subdirectory(query, cwd)
    if subdir is not None:
        log_debug(f"{query!r} matches subdirectory {subdir}")
        return Unique(subdir)

    ranked = rank_bookmarks(query, store)
    if not ranked:
        return NoMatch(query)

    for candidate in ranked:
        log_debug(f"  {candidate.score:>4}  {candidate.label}")

    if len(ranked) == 1:
        return Unique(ranked[0].path)
    if interactive or ranked[0].score == ranked[1].score:
        return Candidates(ranked)
    return Unique(ranked[0].path)
