"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "WorkWatcher"
APP_AUTHOR = "WorkWatcher"


def get_data_dir() -> Path:
    """Return the base directory for persistent data."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    path = Path(dirs.user_data_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_activity_log_path() -> Path:
    return get_data_dir() / "activity_log.csv"


def get_error_log_dir() -> Path:
    return get_data_dir()
