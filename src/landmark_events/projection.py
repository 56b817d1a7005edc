"""Thin view-model projection for the calendar and map screens."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from .const import ADDRESS_NOT_AVAILABLE
from .intervals import Window
from .models import Event, EventGroup, LocatedEvent
from .recurrence import occurs_on

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerPayload:
    """What the map layer needs to draw one marker."""

    key: str
    latitude: float
    longitude: float
    is_today: bool
    group: EventGroup

    @property
    def count(self) -> int:
        return len(self.group)


def marked_dates(events: Iterable[Event], window: Window) -> dict[date, list[Event]]:
    """Map every day in ``window`` that has occurrences to its events."""
    events = list(events)
    marked: dict[date, list[Event]] = {}
    for day in window.days():
        on_day = [e for e in events if occurs_on(e, day)]
        if on_day:
            marked[day] = on_day
    return marked


def marker_payloads(groups: Iterable[EventGroup], today: date) -> list[MarkerPayload]:
    """Build one payload per group that can be placed on the map.

    ``is_today`` highlights groups where any member occurs on ``today``.
    """
    payloads: list[MarkerPayload] = []
    for group in groups:
        if group.latitude is None or group.longitude is None:
            _LOGGER.debug("Group %s has no coordinates, skipping marker", group.key)
            continue
        payloads.append(
            MarkerPayload(
                key=group.key,
                latitude=group.latitude,
                longitude=group.longitude,
                is_today=any(occurs_on(e, today) for e in group.events),
                group=group,
            )
        )
    return payloads


def display_address(located: LocatedEvent) -> str:
    return located.location.address or ADDRESS_NOT_AVAILABLE
