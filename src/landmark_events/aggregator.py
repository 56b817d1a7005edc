"""Combine recurrence filtering and location resolution into map markers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from .intervals import Window
from .location import LocationResolver, PlaceLookup
from .models import Event, EventGroup, LocatedEvent
from .recurrence import is_active_in_window, occurs_on

_LOGGER = logging.getLogger(__name__)


def active_events(events: Iterable[Event], window: Window) -> list[Event]:
    """Return events active in ``window``, in input order.

    This is the date-only listing: events without any location are kept.
    """
    return [e for e in events if is_active_in_window(e, window.start, window.end)]


def events_on_day(events: Iterable[Event], day: date) -> list[Event]:
    """Return events occurring on ``day``, ordered by start time.

    Times compare as ``HH:MM`` strings; events without a time come first.
    The sort is stable, so equal times keep their input order.
    """
    return sorted(
        (e for e in events if occurs_on(e, day)),
        key=lambda e: e.start_time or "",
    )


def build_markers(
    located_events: Iterable[LocatedEvent], window: Window
) -> list[EventGroup]:
    """Group the active, located events into map markers.

    Groups come out in the order their key was first seen; members keep
    input order and the first member represents the group.
    """
    partitions: dict[str, list[LocatedEvent]] = {}
    for located in located_events:
        if not located.location.is_resolved:
            _LOGGER.debug("Event %s has no location, not placed on map", located.event.id)
            continue
        if not is_active_in_window(located.event, window.start, window.end):
            continue
        partitions.setdefault(located.key, []).append(located)

    return [EventGroup(key=key, members=tuple(members)) for key, members in partitions.items()]


async def async_build_markers(
    events: Iterable[Event], window: Window, lookup: PlaceLookup
) -> list[EventGroup]:
    """Filter ``events`` to ``window``, resolve their locations and group them.

    Only active events are resolved, so inactive ones cost no lookups.
    """
    active = active_events(events, window)
    located = await LocationResolver(lookup).async_resolve_all(active)
    return build_markers(located, window)


class MarkerCoordinator:
    """Keeps the latest marker set for a map view.

    Every ``async_refresh`` runs a full pass. Only the newest pass may
    replace ``groups``; a pass overtaken by a later refresh, or cancelled,
    leaves the previous output in place.
    """

    def __init__(self, lookup: PlaceLookup) -> None:
        self._lookup = lookup
        self._generation = 0
        self._groups: list[EventGroup] = []
        self._window: Window | None = None

    @property
    def groups(self) -> list[EventGroup]:
        return list(self._groups)

    @property
    def window(self) -> Window | None:
        return self._window

    async def async_refresh(
        self, events: Iterable[Event], window: Window
    ) -> list[EventGroup] | None:
        """Recompute markers for ``window``.

        Returns the new groups, or ``None`` if a newer refresh started while
        this one was waiting on lookups.
        """
        self._generation += 1
        generation = self._generation
        snapshot = tuple(events)

        groups = await async_build_markers(snapshot, window, self._lookup)

        if generation != self._generation:
            _LOGGER.debug("Discarding superseded marker pass %s", generation)
            return None

        self._groups = groups
        self._window = window
        return list(groups)
