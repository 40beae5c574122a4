"""Shared test fixtures for pathmarks tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from pathmarks import utils
from pathmarks.picker import Cancelled, Chosen


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test away from the real config and bookmarks file.

    Sets up:
    - XDG_CONFIG_HOME / XDG_DATA_HOME under tmp_path
    - PATHMARKS_FILE pointing at tmp_path/bookmarks.txt
    - the plain prompt picker, so fzf on the host is never launched
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("PATHMARKS_FILE", str(tmp_path / "bookmarks.txt"))
    monkeypatch.setenv("PATHMARKS_PICKER", "prompt")
    utils.set_verbosity_override(None)
    yield
    utils.set_verbosity_override(None)


@pytest.fixture
def bookmarks_file(tmp_path) -> Path:
    return tmp_path / "bookmarks.txt"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A directory tree to bookmark and a cwd to resolve from.

    Creates:
    - home/project, home/documents, home/music (bookmark targets)
    - cwd/Proj, cwd/src, cwd/.hidden (subdirectories of the cwd)
    - cwd/notes.txt (a file, never a candidate)

    Changes the working directory to cwd and returns a dict of paths.
    """
    home = tmp_path / "home"
    dirs = {}
    for name in ("project", "documents", "music"):
        d = home / name
        d.mkdir(parents=True)
        dirs[name] = d

    cwd = tmp_path / "cwd"
    for name in ("Proj", "src", ".hidden"):
        (cwd / name).mkdir(parents=True)
    (cwd / "notes.txt").write_text("not a directory\n")

    monkeypatch.chdir(cwd)
    return {"home": home, "cwd": cwd, **dirs}


@pytest.fixture
def runner():
    return CliRunner()


class FakePicker:
    """Records what it was shown and returns a scripted selection."""

    def __init__(self, choose_index: int | None = 0):
        self.choose_index = choose_index
        self.calls = []

    def select(self, entries):
        self.calls.append(list(entries))
        if self.choose_index is None:
            return Cancelled()
        return Chosen(entries[self.choose_index].path, self.choose_index)


@pytest.fixture
def fake_picker(monkeypatch):
    """Replace the CLI's picker factory with a FakePicker choosing the first entry."""
    picker = FakePicker()
    monkeypatch.setattr("pathmarks.cli.get_picker", lambda name="auto": picker)
    return picker


def write_bookmarks(path: Path, *pairs: tuple[str, Path | str]) -> None:
    """Write a bookmarks file directly, bypassing the store."""
    path.write_text("".join(f"{label}\t{target}\n" for label, target in pairs))
