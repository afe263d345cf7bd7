"""Conversion of focus changes into per-application time credits."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, Mapping, Optional

from .db import UsageStore, UsageStoreError
from .models import EMPTY_APP

logger = logging.getLogger(__name__)

_ZERO = timedelta(0)


class UsageLedger(Mapping[str, timedelta]):
    """In-memory running totals for the current session and day."""

    def __init__(self) -> None:
        self._totals: dict[str, timedelta] = {}
        self.day: Optional[date] = None

    def __getitem__(self, app_name: str) -> timedelta:
        return self._totals[app_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    def add(self, app_name: str, elapsed: timedelta) -> timedelta:
        total = self._totals.get(app_name, _ZERO) + elapsed
        self._totals[app_name] = total
        return total

    def start_day(self, day: date) -> None:
        if self.day is not None and self.day != day:
            logger.info("Day changed from %s to %s; starting a new ledger.", self.day, day)
            self._totals.clear()
        self.day = day

    def snapshot(self) -> dict[str, timedelta]:
        return dict(self._totals)


class UsageAccumulator:
    """Credits the application that lost focus and flushes its total."""

    def __init__(self, store: UsageStore, ledger: Optional[UsageLedger] = None) -> None:
        self.store = store
        self.ledger = ledger if ledger is not None else UsageLedger()

    def on_focus_changed(
        self,
        previous_app: str,
        segment_start: datetime,
        now: datetime,
        day: date,
    ) -> datetime:
        """Credit ``previous_app`` with ``now - segment_start``.

        The session-cumulative total is written to the store, not the delta,
        so a later successful write repairs any earlier failed one. Returns
        ``now`` as the start of the next segment.
        """
        elapsed = now - segment_start
        if elapsed < _ZERO:
            logger.warning(
                "Clock went backwards by %s while %r was focused; crediting zero.",
                -elapsed,
                previous_app,
            )
            elapsed = _ZERO

        if previous_app == EMPTY_APP:
            return now

        self.ledger.start_day(day)
        total = self.ledger.add(previous_app, elapsed)
        try:
            self.store.upsert_daily_usage(previous_app, day, total)
        except UsageStoreError:
            logger.exception("Failed to persist usage for %r; keeping it in memory.", previous_app)
        return now
