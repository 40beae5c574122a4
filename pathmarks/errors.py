"""Error kinds raised by the bookmark store, resolver, picker and pruner."""


class PathmarksError(Exception):
    """Base class for every user-facing pathmarks failure."""


class InvalidPath(PathmarksError):
    """Target is not an existing directory."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Not an existing directory: {self.path}")


class InvalidLabel(PathmarksError):
    """Label cannot be stored in the line-oriented bookmarks file."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Invalid label: {label!r} (must be non-empty, without tabs or newlines)")


class NotFound(PathmarksError):
    """Label absent from the store."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Bookmark not found: {label}")


class StoreCorrupt(PathmarksError):
    """A line of the bookmarks file could not be parsed."""

    def __init__(self, lineno: int, reason: str):
        self.lineno = lineno
        self.reason = reason
        super().__init__(f"line {lineno}: {reason}")


class CheckFailed(PathmarksError):
    """Prune could not stat a bookmark for a reason other than it missing."""

    def __init__(self, label: str, error: OSError):
        self.label = label
        self.error = error
        super().__init__(f"Could not check {label}: {error.strerror or error}")


class NoMatch(PathmarksError):
    """Resolution found nothing."""

    def __init__(self, query: str):
        self.query = query
        if query:
            super().__init__(f"No directory or bookmark matches: {query}")
        else:
            super().__init__("No bookmarks saved yet. Add one with: pathmarks save <label>")


class PickerError(PathmarksError):
    """The interactive picker failed to run."""


class StoreUnwritable(PathmarksError):
    """The bookmarks file could not be written."""

    def __init__(self, path, error: OSError):
        self.path = str(path)
        self.error = error
        super().__init__(f"Could not save bookmarks to {self.path}: {error.strerror or error}")
