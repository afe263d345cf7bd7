"""Domain models for focus tracking and daily usage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

DATE_FMT = "%Y-%m-%d"

EMPTY_APP = ""
UNKNOWN_APP = "Unknown"

_NANOS_PER_MICROSECOND = 1_000


@dataclass(slots=True)
class FocusState:
    """Currently and previously focused application names."""

    current: str = EMPTY_APP
    previous: str = EMPTY_APP


@dataclass(slots=True, frozen=True)
class DailyUsageRecord:
    """Cumulative time spent in one application on one calendar day."""

    app_name: str
    day: date
    usage: timedelta

    @property
    def date_key(self) -> str:
        return format_day(self.day)


def format_day(day: date) -> str:
    return day.strftime(DATE_FMT)


def duration_to_nanos(value: timedelta) -> int:
    return (value // timedelta(microseconds=1)) * _NANOS_PER_MICROSECOND


def nanos_to_duration(value: int) -> timedelta:
    return timedelta(microseconds=value // _NANOS_PER_MICROSECOND)
