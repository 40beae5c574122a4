"""Shell completion functions for the pathmarks CLI."""

from pathlib import Path

from click.shell_completion import CompletionItem

from .config import get_bookmarks_file
from .resolver import list_subdirectories
from .search import fuzzy_filter
from .store import load_store
from .utils import set_verbosity_override


def _load_quietly():
    # Completion output must stay clean, so malformed-line warnings are muted
    set_verbosity_override(0)
    return load_store(get_bookmarks_file())


def complete_label(ctx, param, incomplete: str) -> list:
    """Shell completion for existing bookmark labels.

    Uses prefix matching first, falls back to fuzzy matching if no prefix matches.
    """
    store = _load_quietly()
    prefixed = [b for b in store if b.label.startswith(incomplete)]
    if prefixed or not incomplete:
        return [CompletionItem(b.label, help=b.path) for b in prefixed]

    bookmarks = store.list()
    order = fuzzy_filter(incomplete, [b.label for b in bookmarks])
    return [CompletionItem(bookmarks[i].label, help=bookmarks[i].path) for i in order]


def complete_query(ctx, param, incomplete: str) -> list:
    """Shell completion for `guess`/`pick`: cwd subdirectories, then labels."""
    items = [
        CompletionItem(p.name, help="directory")
        for p in list_subdirectories(Path.cwd(), include_hidden=incomplete.startswith("."))
        if p.name.lower().startswith(incomplete.lower())
    ]
    names = {item.value for item in items}
    items.extend(item for item in complete_label(ctx, param, incomplete) if item.value not in names)
    return items
