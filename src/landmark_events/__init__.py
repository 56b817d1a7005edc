"""Event recurrence resolution and map grouping for landmark events."""

from .const import __version__
from ._client import FirestoreClient
from .aggregator import (
    MarkerCoordinator,
    active_events,
    async_build_markers,
    build_markers,
    events_on_day,
)
from .exceptions import (
    ApiConnectionError,
    ApiResponseError,
    InvalidDateError,
    LandmarkEventsError,
    LocationLookupFailure,
    RateLimitError,
)
from .intervals import (
    Window,
    contains,
    day_bounds,
    month_bounds,
    overlaps,
    parse_date,
    week_bounds,
)
from .location import (
    LocationResolver,
    PlaceLookup,
    grouping_key,
    lookup_from_mapping,
    resolve_location,
)
from .models import (
    Event,
    EventGroup,
    Frequency,
    LocatedEvent,
    Place,
    Recurrence,
    ResolvedLocation,
    Weekday,
)
from .projection import MarkerPayload, display_address, marked_dates, marker_payloads
from .recurrence import effective_range, is_active_in_window, occurs_on

__all__ = [
    "__version__",
    "FirestoreClient",
    "MarkerCoordinator",
    "active_events",
    "async_build_markers",
    "build_markers",
    "events_on_day",
    "ApiConnectionError",
    "ApiResponseError",
    "InvalidDateError",
    "LandmarkEventsError",
    "LocationLookupFailure",
    "RateLimitError",
    "Window",
    "contains",
    "day_bounds",
    "month_bounds",
    "overlaps",
    "parse_date",
    "week_bounds",
    "LocationResolver",
    "PlaceLookup",
    "grouping_key",
    "lookup_from_mapping",
    "resolve_location",
    "Event",
    "EventGroup",
    "Frequency",
    "LocatedEvent",
    "Place",
    "Recurrence",
    "ResolvedLocation",
    "Weekday",
    "MarkerPayload",
    "display_address",
    "marked_dates",
    "marker_payloads",
    "effective_range",
    "is_active_in_window",
    "occurs_on",
]
