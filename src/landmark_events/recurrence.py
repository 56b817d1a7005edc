"""Decide whether an event is active in a window or occurs on a given day."""

from __future__ import annotations

import logging
from datetime import date

from .exceptions import InvalidDateError
from .intervals import contains, overlaps, parse_date
from .models import Event, Frequency, Weekday

_LOGGER = logging.getLogger(__name__)


def effective_range(event: Event) -> tuple[date, date | None]:
    """Return the ``(start, end)`` dates occurrences are computed from.

    When a recurrence rule is present its dates replace the event's own.
    Only a missing rule start borrows the event's start; a rule without an
    end stays open-ended. ``end`` is ``None`` for open-ended or
    point-in-time events.

    Raises:
        InvalidDateError: If there is no start date, or a date is malformed.
    """
    rule = event.recurrence
    if rule is not None:
        raw_start = rule.start_date or event.start_date
        raw_end = rule.end_date
    else:
        raw_start = event.start_date
        raw_end = event.end_date

    start = parse_date(raw_start)
    end = parse_date(raw_end) if raw_end not in (None, "") else None
    return start, end


def is_active_in_window(event: Event, window_start: date, window_end: date) -> bool:
    """Return True if the event overlaps ``[window_start, window_end]``.

    Comparison is by calendar date. A weekly rule without an end stays
    active through the window end; a weekly rule with no weekdays is
    malformed and never active.
    """
    try:
        start, end = effective_range(event)
    except InvalidDateError:
        _LOGGER.debug("Skipping event %s: no usable dates", event.id, exc_info=True)
        return False

    first = parse_date(window_start)
    last = parse_date(window_end)

    if event.frequency == Frequency.WEEKLY:
        if not event.recurrence.days_of_week:
            _LOGGER.debug("Skipping weekly event %s without weekdays", event.id)
            return False
        return overlaps(start, end or last, first, last)

    return overlaps(start, end or start, first, last)


def occurs_on(event: Event, day: date) -> bool:
    """Return True if the event takes place on the calendar date of ``day``."""
    try:
        start, end = effective_range(event)
    except InvalidDateError:
        _LOGGER.debug("Skipping event %s: no usable dates", event.id, exc_info=True)
        return False

    target = parse_date(day)

    if event.frequency == Frequency.WEEKLY:
        return (
            contains(target, start, end or target)
            and Weekday(target.weekday()) in event.recurrence.days_of_week
        )

    if end is None:
        return target == start
    return contains(target, start, end)
