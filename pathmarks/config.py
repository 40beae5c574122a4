"""Configuration and bookmark file resolution."""

import os
from pathlib import Path

import yaml

VALID_PICKERS = ("auto", "prompt", "fzf")


def get_config_dir() -> Path:
    """Config directory: $XDG_CONFIG_HOME/pathmarks (default ~/.config)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "pathmarks"


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"


def load_config() -> dict:
    """Load config from $XDG_CONFIG_HOME/pathmarks/config.yaml."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    try:
        config = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError:
        return {}
    return config if isinstance(config, dict) else {}


def get_data_dir() -> Path:
    base = os.environ.get("XDG_DATA_HOME")
    return (Path(base) if base else Path.home() / ".local" / "share") / "pathmarks"


def get_bookmarks_file() -> Path:
    """Get bookmarks file path with resolution priority.

    Priority:
    1. PATHMARKS_FILE environment variable
    2. Config file (bookmarks_file key)
    3. $XDG_DATA_HOME/pathmarks/bookmarks.txt
    """
    # 1. Environment variable
    env_file = os.environ.get("PATHMARKS_FILE")
    if env_file:
        return Path(env_file).expanduser()

    # 2. Config file
    config = load_config()
    if config.get("bookmarks_file"):
        return Path(str(config["bookmarks_file"])).expanduser()

    # 3. Data directory
    return get_data_dir() / "bookmarks.txt"


def get_verbosity() -> int:
    """Get verbosity level from config (default: 1).

    Levels:
    - 0: Silent (only errors and the resolved path)
    - 1: Normal (standard messages)
    - 2: Verbose (detailed information)
    - 3: Debug (very detailed with internals)
    """
    config = load_config()
    level = config.get("verbosity", 1)
    if not isinstance(level, int):
        return 1
    return max(0, min(level, 3))


def get_picker_name() -> str:
    """Picker backend: PATHMARKS_PICKER, then config, then 'auto'."""
    name = os.environ.get("PATHMARKS_PICKER") or load_config().get("picker") or "auto"
    name = str(name).lower()
    return name if name in VALID_PICKERS else "auto"


def get_command_name() -> str:
    """Default name of the shell function generated by `pathmarks init`."""
    return str(load_config().get("command") or "t")
