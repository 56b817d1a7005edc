"""Data models for events, places and their derived map groupings."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Union

from .const import DEFAULT_EVENT_TITLE
from .exceptions import LocationLookupFailure

_LOGGER = logging.getLogger(__name__)

# Raw date as it comes out of the store; parsed lazily by ``intervals.parse_date``.
DateValue = Union[date, datetime, str, None]


class Frequency(str, enum.Enum):
    """Recurrence frequencies understood by the resolver."""

    ONCE = "once"
    WEEKLY = "weekly"


class Weekday(enum.IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6


_WEEKDAY_PREFIXES = {
    "mo": Weekday.MON,
    "tu": Weekday.TUE,
    "we": Weekday.WED,
    "th": Weekday.THU,
    "fr": Weekday.FRI,
    "sa": Weekday.SAT,
    "su": Weekday.SUN,
}


@dataclass(frozen=True)
class Recurrence:
    """Recurrence rule attached to an event.

    When present, its dates replace the event's own dates for occurrence
    computation. Only a missing start borrows the event's start; a missing
    end leaves the rule open-ended.
    """

    frequency: Frequency = Frequency.ONCE
    days_of_week: frozenset[Weekday] = field(default_factory=frozenset)
    start_date: DateValue = None
    end_date: DateValue = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Recurrence:
        """Construct from a decamelized store dict."""
        return cls(
            frequency=_parse_frequency(data.get("frequency")),
            days_of_week=frozenset(
                day
                for day in (_parse_weekday(v) for v in data.get("days_of_week") or ())
                if day is not None
            ),
            start_date=data.get("start_date") or None,
            end_date=data.get("end_date") or None,
        )


@dataclass(frozen=True)
class Event:
    """Event record as stored by the app. Never mutated by this library."""

    id: str
    title: str
    start_date: DateValue = None
    end_date: DateValue = None
    description: str = ""
    start_time: str | None = None  # "HH:MM", display only
    end_time: str | None = None
    recurrence: Recurrence | None = None
    location_id: str | None = None
    custom_address: str | None = None
    lat: float | None = None
    lng: float | None = None
    image_url: str | None = None
    open_to_public: bool = False

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Event:
        """Construct from a decamelized store dict.

        Older documents use ``date``/``date_start``/``date_end`` and
        ``event_start_time``/``event_end_time``; both spellings are accepted.
        """
        recurrence = data.get("recurrence")
        location_id = data.get("location_id")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or DEFAULT_EVENT_TITLE,
            description=data.get("description") or "",
            start_date=(
                data.get("start_date") or data.get("date") or data.get("date_start")
            ),
            end_date=data.get("end_date") or data.get("date_end"),
            start_time=data.get("event_start_time") or data.get("start_time") or None,
            end_time=data.get("event_end_time") or data.get("end_time") or None,
            recurrence=(
                Recurrence.from_api_response(recurrence)
                if isinstance(recurrence, dict) and recurrence
                else None
            ),
            location_id=str(location_id) if location_id not in (None, "") else None,
            custom_address=data.get("custom_address") or None,
            lat=parse_coordinate(data.get("lat")),
            lng=parse_coordinate(data.get("lng")),
            image_url=data.get("image_url"),
            open_to_public=bool(data.get("open_to_public", False)),
        )

    @property
    def frequency(self) -> Frequency:
        if self.recurrence is None:
            return Frequency.ONCE
        return self.recurrence.frequency


@dataclass(frozen=True)
class Place:
    """Landmark record owned by the app; read-only here."""

    id: str
    name: str = ""
    address: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Place:
        """Construct from a decamelized store dict."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            address=data.get("address") or "",
            latitude=parse_coordinate(data.get("latitude")),
            longitude=parse_coordinate(data.get("longitude")),
        )


@dataclass(frozen=True)
class ResolvedLocation:
    """Effective address and coordinates of an event.

    ``resolved`` records which source applied: a custom address, the
    event's own coordinates, or a place that was found. A found place counts
    even when its address is blank or its coordinates are unparseable.
    """

    address: str = ""
    latitude: float | None = None
    longitude: float | None = None
    resolved: bool = False
    failure: LocationLookupFailure | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_resolved(self) -> bool:
        """Whether the event has an effective location at all."""
        return self.resolved


@dataclass(frozen=True)
class LocatedEvent:
    """An event paired with its resolved location and grouping key."""

    event: Event
    location: ResolvedLocation
    key: str


@dataclass(frozen=True)
class EventGroup:
    """One map marker: every active event sharing a grouping key."""

    key: str
    members: tuple[LocatedEvent, ...]

    @property
    def representative_event(self) -> LocatedEvent:
        return self.members[0]

    @property
    def events(self) -> list[Event]:
        return [m.event for m in self.members]

    @property
    def latitude(self) -> float | None:
        located = self._first_with_coordinates()
        return located.location.latitude if located else None

    @property
    def longitude(self) -> float | None:
        located = self._first_with_coordinates()
        return located.location.longitude if located else None

    def _first_with_coordinates(self) -> LocatedEvent | None:
        for member in self.members:
            if member.location.has_coordinates:
                return member
        return None

    def __len__(self) -> int:
        return len(self.members)


def parse_coordinate(value: Any) -> float | None:
    """Parse a latitude/longitude stored as number or string."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        _LOGGER.debug("Ignoring unparseable coordinate %r", value)
        return None
    if result != result:  # NaN
        return None
    return result


def _parse_frequency(value: Any) -> Frequency:
    """Parse a frequency, defaulting to ONCE for missing or unknown values."""
    if value is None:
        return Frequency.ONCE
    try:
        return Frequency(str(value).strip().lower())
    except ValueError:
        _LOGGER.debug("Unknown recurrence frequency %r, treating as once", value)
        return Frequency.ONCE


def _parse_weekday(value: Any) -> Weekday | None:
    """Parse ``"mon"``, ``"Monday"``, ``"MO"`` or 0-6 into a Weekday.

    Integers follow ``date.weekday()`` numbering (0 is Monday), not the
    JavaScript ``getDay()`` numbering where 0 is Sunday.
    """
    if isinstance(value, Weekday):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Weekday(value)
        except ValueError:
            return None
    if isinstance(value, str):
        return _WEEKDAY_PREFIXES.get(value.strip().lower()[:2])
    return None
