"""Default file locations for the watcher's database and log."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "WindowWatcher"
APP_AUTHOR = "WindowWatcher"

_DIRS = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)


def get_db_path() -> Path:
    """Daily usage database; its directory is created when the store opens."""
    return Path(_DIRS.user_data_path) / "watcher.sqlite3"


def get_log_path() -> Path:
    return Path(_DIRS.user_log_path) / "watcher.log"
