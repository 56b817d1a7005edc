"""Date and interval arithmetic shared by the recurrence and aggregation layers."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, TypeVar

from dateutil.parser import isoparse

from .exceptions import InvalidDateError

T = TypeVar("T", date, datetime)


def parse_date(value: Any) -> date:
    """Reduce a store value to a calendar date.

    Accepts ``date``, ``datetime`` (time of day dropped) and ISO-8601 strings.

    Raises:
        InvalidDateError: If the value is missing or not a parseable date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as err:
            raise InvalidDateError(f"Unparseable date: {value!r}", value=value) from err
    raise InvalidDateError(f"Missing or invalid date: {value!r}", value=value)


def overlaps(a_start: T, a_end: T, b_start: T, b_end: T) -> bool:
    """Return True if the closed intervals ``[a_start, a_end]`` and ``[b_start, b_end]`` intersect."""
    return a_start <= b_end and b_start <= a_end


def contains(point: T, start: T, end: T) -> bool:
    """Return True if ``start <= point <= end``."""
    return start <= point <= end


def _start_of(day: date, like: date) -> datetime:
    tzinfo = like.tzinfo if isinstance(like, datetime) else None
    return datetime.combine(day, time.min, tzinfo=tzinfo)


def _end_of(day: date, like: date) -> datetime:
    tzinfo = like.tzinfo if isinstance(like, datetime) else None
    return datetime.combine(day, time.max, tzinfo=tzinfo)


def day_bounds(value: date) -> tuple[datetime, datetime]:
    """Return the first and last instant of the day containing ``value``."""
    day = parse_date(value)
    return _start_of(day, value), _end_of(day, value)


def week_bounds(value: date) -> tuple[datetime, datetime]:
    """Return Monday 00:00 and Sunday end-of-day of the ISO week containing ``value``.

    The week always starts on Monday, independent of locale.
    """
    day = parse_date(value)
    monday = day - timedelta(days=day.weekday())
    sunday = monday + timedelta(days=6)
    return _start_of(monday, value), _end_of(sunday, value)


def month_bounds(value: date) -> tuple[datetime, datetime]:
    """Return the first and last instant of the calendar month containing ``value``."""
    day = parse_date(value)
    last = calendar.monthrange(day.year, day.month)[1]
    return (
        _start_of(day.replace(day=1), value),
        _end_of(day.replace(day=last), value),
    )


@dataclass(frozen=True)
class Window:
    """A closed ``[start, end]`` range events are tested against."""

    start: date | datetime
    end: date | datetime

    @classmethod
    def day(cls, value: date) -> Window:
        return cls(*day_bounds(value))

    @classmethod
    def week(cls, value: date) -> Window:
        return cls(*week_bounds(value))

    @classmethod
    def month(cls, value: date) -> Window:
        return cls(*month_bounds(value))

    def days(self) -> list[date]:
        """Every calendar date the window touches, in order."""
        first = parse_date(self.start)
        last = parse_date(self.end)
        return [first + timedelta(days=n) for n in range((last - first).days + 1)]
