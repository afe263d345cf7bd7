"""Command-line interface for the window watcher."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .config import WatcherSettings
from .paths import get_db_path, get_log_path

app = typer.Typer(help="Record how long each application window stays focused.")

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the application log directory."
    ),
) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = get_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
    )


@app.command()
def watch(
    db_path: Optional[Path] = typer.Option(
        None,
        "--db",
        path_type=Path,
        help="Location of the usage SQLite database.",
    ),
    poll_seconds: float = typer.Option(
        0.2,
        "--interval",
        min=0.05,
        help="Polling interval in seconds.",
    ),
    display: Optional[str] = typer.Option(
        None,
        "--display",
        help="X display to watch (defaults to $DISPLAY).",
    ),
) -> None:
    """Watch the focused window until interrupted."""
    from .accumulator import UsageAccumulator
    from .collector import UsageCollector
    from .db import SqliteUsageStore, UsageStoreError
    from .probe import WindowSystemUnavailable, XlibWindowProbe
    from .tracker import WindowTracker

    settings = WatcherSettings.from_intervals(poll_seconds=poll_seconds)
    db_path = db_path or get_db_path()

    try:
        store = SqliteUsageStore(db_path)
    except UsageStoreError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    try:
        probe = XlibWindowProbe(display)
    except WindowSystemUnavailable as exc:
        store.close()
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc

    logger.info("Writing daily usage to %s", db_path)
    collector = UsageCollector(
        tracker=WindowTracker(probe, rules=settings.rules),
        accumulator=UsageAccumulator(store),
        settings=settings,
    )
    collector.run_forever()
