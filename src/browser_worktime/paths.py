"""Helpers for locating history exports and application directories."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs

from .history import HistoryFileNotFoundError


APP_NAME = "BrowserWorktime"
APP_AUTHOR = "BrowserWorktime"

HISTORY_PATTERN = "history*.csv"


def get_data_dir() -> Path:
    """Return the base directory for persistent data."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    path = Path(dirs.user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_path() -> Path:
    return get_data_dir() / "browser-worktime.log"


def find_default_history(directory: Optional[Path] = None) -> Path:
    """Return the last ``history*.csv`` (by name) in ``directory``."""
    directory = Path(directory) if directory is not None else Path.cwd()
    candidates = sorted(path for path in directory.glob(HISTORY_PATTERN) if path.is_file())
    if not candidates:
        raise HistoryFileNotFoundError(
            f"No {HISTORY_PATTERN} file found in {directory}; pass a path explicitly."
        )
    return candidates[-1]


def resolve_history_path(path: Optional[Path] = None) -> Path:
    if path is None:
        return find_default_history()
    path = Path(path)
    if not path.is_file():
        raise HistoryFileNotFoundError(f"History file does not exist: {path}")
    return path
