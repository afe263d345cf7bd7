"""Poll loop tying focus detection to usage accounting."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Mapping, Optional

from .accumulator import UsageAccumulator
from .config import WatcherSettings
from .models import EMPTY_APP
from .probe import WindowQueryError
from .reporting import print_ledger
from .tracker import WindowTracker

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
LedgerCallback = Callable[[Mapping[str, timedelta]], None]


def local_now() -> datetime:
    """Current local time carrying its UTC offset.

    Differences between aware datetimes are absolute, so a segment that
    spans a daylight-saving shift keeps its real length.
    """
    return datetime.now().astimezone()


class UsageCollector:
    """Samples the focused window at a fixed interval and records usage."""

    def __init__(
        self,
        tracker: WindowTracker,
        accumulator: UsageAccumulator,
        settings: Optional[WatcherSettings] = None,
        clock: Clock = local_now,
        on_change: Optional[LedgerCallback] = print_ledger,
    ) -> None:
        self.tracker = tracker
        self.accumulator = accumulator
        self.settings = settings or WatcherSettings()
        self._clock = clock
        self._on_change = on_change
        self.segment_start = clock()

    def tick(self) -> bool:
        """Run one poll; return whether the focused application changed."""
        try:
            changed = self.tracker.poll_change()
        except WindowQueryError as exc:
            logger.warning("Skipping poll: %s", exc)
            return False

        if not changed:
            return False

        now = self._clock()
        self.segment_start = self.accumulator.on_focus_changed(
            self.tracker.state.previous, self.segment_start, now, now.date()
        )
        if self._on_change is not None:
            self._on_change(self.accumulator.ledger.snapshot())
        return True

    def run_forever(self) -> None:
        stop_event = threading.Event()
        try:
            self._run_loop(stop_event)
        except KeyboardInterrupt:
            logger.info("Watcher interrupted; recording the open segment.")
        finally:
            self._shutdown()

    def run_until_stopped(self, stop_event: threading.Event) -> None:
        """Run the watcher until the provided event is set."""
        try:
            self._run_loop(stop_event)
        finally:
            self._shutdown()

    def flush_current(self) -> None:
        """Credit the application that is focused right now."""
        current = self.tracker.state.current
        if current == EMPTY_APP:
            return
        now = self._clock()
        self.segment_start = self.accumulator.on_focus_changed(
            current, self.segment_start, now, now.date()
        )

    def _run_loop(self, stop_event: threading.Event) -> None:
        logger.info(
            "Starting watcher; polling every %.3fs",
            self.settings.poll_interval.total_seconds(),
        )
        interval = self.settings.poll_interval.total_seconds()
        while not stop_event.is_set():
            self.tick()
            stop_event.wait(interval)

    def _shutdown(self) -> None:
        try:
            self.flush_current()
        finally:
            try:
                self.accumulator.store.close()
            finally:
                self.tracker.probe.close()
            logger.info("Watcher stopped.")
