from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytest

from window_watcher.db import UsageStoreError
from window_watcher.probe import WindowQueryError


def wm_class(name: str) -> str:
    return f"{name.lower()}\x00{name}\x00"


class FakeProbe:
    """Replays a scripted list of (class, title) pairs or exceptions."""

    def __init__(self, script: Optional[list[Union[tuple[str, str], Exception]]] = None) -> None:
        self.script = list(script or [])
        self.closed = False

    def push(self, app: str, title: str = "") -> None:
        self.script.append((wm_class(app), title))

    def fail(self, message: str = "BadWindow") -> None:
        self.script.append(WindowQueryError(message))

    def get_focused_window_class_and_title(self) -> tuple[str, str]:
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


class FakeStore:
    def __init__(self) -> None:
        self.upserts: list[tuple[str, date, timedelta]] = []
        self.rows: dict[tuple[str, date], timedelta] = {}
        self.failing = False
        self.closed = False

    def upsert_daily_usage(self, app_name: str, day: date, usage: timedelta) -> None:
        if self.failing:
            raise UsageStoreError("disk I/O error")
        self.upserts.append((app_name, day, usage))
        self.rows[(app_name, day)] = usage

    def get_daily_usage(self, app_name: str, day: date) -> Optional[timedelta]:
        return self.rows.get((app_name, day))

    def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 5, 9, 0, 0))
