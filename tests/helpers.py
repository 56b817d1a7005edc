"""Factories and fakes shared by the landmark events tests."""

from __future__ import annotations

from datetime import date

from landmark_events.models import Event, Frequency, Place, Recurrence, Weekday


def make_event(
    event_id: str = "evt_1",
    *,
    title: str = "Test Event",
    start_date: object = date(2024, 6, 1),
    end_date: object = None,
    start_time: str | None = None,
    recurrence: Recurrence | None = None,
    location_id: str | None = None,
    custom_address: str | None = None,
    lat: float | None = None,
    lng: float | None = None,
) -> Event:
    return Event(
        id=event_id,
        title=title,
        start_date=start_date,
        end_date=end_date,
        start_time=start_time,
        recurrence=recurrence,
        location_id=location_id,
        custom_address=custom_address,
        lat=lat,
        lng=lng,
    )


def weekly(*days: Weekday, start: object = None, end: object = None) -> Recurrence:
    return Recurrence(
        frequency=Frequency.WEEKLY,
        days_of_week=frozenset(days),
        start_date=start,
        end_date=end,
    )


class CountingLookup:
    """Place lookup backed by a dict that records every call."""

    def __init__(self, places: dict[str, Place], failing: set[str] | None = None) -> None:
        self.places = places
        self.failing = failing or set()
        self.calls: list[str] = []

    async def __call__(self, place_id: str) -> Place | None:
        self.calls.append(place_id)
        if place_id in self.failing:
            raise ConnectionError(f"store unavailable for {place_id}")
        return self.places.get(place_id)
