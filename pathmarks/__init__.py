"""pathmarks: bookmark directories and jump to them by label."""

__version__ = "0.1.0"
