"""
Single source of truth for "what day is it".

All calendar arithmetic (today, yesterday, N days back) and the on-disk
date/timestamp formats go through here, so rotation and streaks agree and
tests can pin time with `FixedClock`.
"""
from __future__ import annotations

import datetime as dt

from ..errors import InvalidInput

DATE_FMT = "%Y-%m-%d"


class Clock:
    """Wall clock in the local timezone of the running process."""

    def now(self) -> dt.datetime:
        return dt.datetime.now()

    def today(self) -> dt.date:
        return self.now().date()

    def yesterday(self) -> dt.date:
        return self.days_back(1)

    def days_back(self, n: int) -> dt.date:
        return self.today() - dt.timedelta(days=n)

    def today_str(self) -> str:
        return format_date(self.today())

    def timestamp(self) -> str:
        return format_timestamp(self.now())


class FixedClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, when: dt.datetime):
        self._now = when

    def now(self) -> dt.datetime:
        return self._now

    def set(self, when: dt.datetime) -> None:
        self._now = when

    def advance(self, **delta) -> dt.datetime:
        self._now = self._now + dt.timedelta(**delta)
        return self._now


def format_date(d: dt.date) -> str:
    return d.strftime(DATE_FMT)


def format_timestamp(t: dt.datetime) -> str:
    # fixed width so lexical order equals chronological order
    return t.replace(tzinfo=None).isoformat(sep=" ", timespec="microseconds")


def parse_date(value) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.datetime.strptime(str(value).strip(), DATE_FMT).date()
    except ValueError as e:
        raise InvalidInput(f"invalid date (expected YYYY-MM-DD): {value!r}") from e


def normalize_date(value) -> str:
    """Accept a date, datetime or YYYY-MM-DD string and return YYYY-MM-DD."""
    return format_date(parse_date(value))
