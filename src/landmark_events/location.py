"""Resolve where an event takes place and which map marker it belongs to."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping

from .exceptions import LocationLookupFailure
from .models import Event, LocatedEvent, Place, ResolvedLocation

_LOGGER = logging.getLogger(__name__)

PlaceLookup = Callable[[str], Awaitable["Place | None"]]


def _custom_address(event: Event) -> str:
    return (event.custom_address or "").strip()


def _own_coordinates(event: Event) -> tuple[float | None, float | None]:
    if event.lat is None or event.lng is None:
        return None, None
    return event.lat, event.lng


def needs_lookup(event: Event) -> bool:
    """Whether resolving this event requires reading its place record."""
    return not _custom_address(event) and bool(event.location_id)


def resolve_location(
    event: Event,
    place: Place | None = None,
    *,
    failure: LocationLookupFailure | None = None,
) -> ResolvedLocation:
    """Compute the effective location of ``event``.

    A custom address overrides the referenced place. Without one, the place
    (if found) supplies both address and coordinates; otherwise the event's
    own coordinates are used and the address stays empty. The result is
    resolved when one of these sources applied, whatever the field contents.
    """
    lat, lng = _own_coordinates(event)

    custom = _custom_address(event)
    if custom:
        return ResolvedLocation(
            address=custom, latitude=lat, longitude=lng, resolved=True
        )

    if event.location_id and place is not None:
        if place.latitude is not None and place.longitude is not None:
            lat, lng = place.latitude, place.longitude
        return ResolvedLocation(
            address=place.address,
            latitude=lat,
            longitude=lng,
            resolved=True,
            failure=failure,
        )

    return ResolvedLocation(
        address="",
        latitude=lat,
        longitude=lng,
        resolved=lat is not None and lng is not None,
        failure=failure,
    )


def grouping_key(event: Event, location: ResolvedLocation) -> str:
    """Return the key that merges co-located events into one marker.

    Precedence: custom address, then place id, then coordinates. Events with
    none of these get a key of their own.
    """
    custom = _custom_address(event)
    if custom:
        return custom
    if event.location_id:
        return str(event.location_id)
    if location.has_coordinates:
        return f"{location.latitude}-{location.longitude}"
    return f"event:{event.id}"


def locate(
    event: Event,
    place: Place | None = None,
    *,
    failure: LocationLookupFailure | None = None,
) -> LocatedEvent:
    """Pair an event with its resolved location and grouping key."""
    location = resolve_location(event, place, failure=failure)
    return LocatedEvent(event=event, location=location, key=grouping_key(event, location))


def lookup_from_mapping(places: Mapping[str, Place]) -> PlaceLookup:
    """Adapt a preloaded ``{place_id: Place}`` mapping to the lookup signature."""

    async def _lookup(place_id: str) -> Place | None:
        return places.get(place_id)

    return _lookup


class LocationResolver:
    """Resolves locations for a batch of events.

    Each distinct place id is looked up once per call, and all lookups run
    concurrently. Failed lookups are logged and never retried; the affected
    events keep an empty address.
    """

    def __init__(self, lookup: PlaceLookup) -> None:
        self._lookup = lookup

    async def async_resolve_all(self, events: Iterable[Event]) -> list[LocatedEvent]:
        """Resolve every event, preserving input order."""
        events = list(events)
        place_ids = list(
            dict.fromkeys(str(e.location_id) for e in events if needs_lookup(e))
        )

        results = await asyncio.gather(*(self._fetch(pid) for pid in place_ids))
        by_id = dict(zip(place_ids, results))

        located: list[LocatedEvent] = []
        for event in events:
            place: Place | None = None
            failure: LocationLookupFailure | None = None
            if needs_lookup(event):
                place, failure = by_id[str(event.location_id)]
                if place is None and failure is None:
                    _LOGGER.debug(
                        "Place %s for event %s not found", event.location_id, event.id
                    )
            located.append(locate(event, place, failure=failure))
        return located

    async def _fetch(
        self, place_id: str
    ) -> tuple[Place | None, LocationLookupFailure | None]:
        try:
            return await self._lookup(place_id), None
        except Exception as err:  # noqa: BLE001
            _LOGGER.warning("Place lookup for %s failed", place_id, exc_info=True)
            failure = LocationLookupFailure(
                f"Place lookup failed: {err}", place_id=place_id
            )
            failure.__cause__ = err
            return None, failure
