"""Exception hierarchy for the landmark events library."""

from __future__ import annotations


class LandmarkEventsError(Exception):
    """Base exception for all library errors."""


class InvalidDateError(LandmarkEventsError, ValueError):
    """A required date is missing or cannot be parsed.

    Attributes:
        value: The offending raw value.
    """

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class LocationLookupFailure(LandmarkEventsError):
    """A place lookup raised instead of returning a place or ``None``.

    Attributes:
        place_id: The place id that was being looked up.
    """

    def __init__(self, message: str, *, place_id: str) -> None:
        super().__init__(message)
        self.place_id = place_id


class ApiConnectionError(LandmarkEventsError):
    """Document store is unreachable (network error, DNS, timeout)."""


class ApiResponseError(LandmarkEventsError):
    """Document store returned an unexpected error response.

    Attributes:
        status_code: HTTP status code, if available.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ApiResponseError):
    """Document store returned 429 Too Many Requests.

    Attributes:
        retry_after: Seconds to wait before retrying, if provided by the server.
    """

    def __init__(
        self,
        message: str = "Rate limited",
        *,
        status_code: int = 429,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after
