"""Read-only Firestore REST client for event and place documents."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from ._serialization import decode_document
from .const import (
    COLLECTION_ENDPOINT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_THROTTLE_SECONDS,
    DOCUMENT_ENDPOINT,
    EVENTS_COLLECTION,
    PLACES_COLLECTION,
)
from .exceptions import ApiConnectionError, ApiResponseError, RateLimitError
from .models import Event, Place


class FirestoreClient:
    """Async reader for the app's ``events`` and ``markers`` collections.

    Usage::

        async with aiohttp.ClientSession() as session:
            client = FirestoreClient("my-project", api_key="...", session=session)
            events = await client.async_get_events()
            groups = await async_build_markers(
                events, Window.month(today), client.async_get_place
            )

    If no session is provided, the client creates and manages its own.
    The caller is responsible for calling ``async_close()`` when done
    (or use the client as an async context manager).
    """

    def __init__(
        self,
        project_id: str,
        *,
        api_key: str | None = None,
        session: aiohttp.ClientSession | None = None,
        request_interval: float = DEFAULT_THROTTLE_SECONDS,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._project_id = project_id
        self._api_key = api_key
        self._owns_session = session is None
        self._session = session or aiohttp.ClientSession()
        self._request_interval = request_interval
        self._next_slot = 0.0
        self._page_size = page_size

    async def __aenter__(self) -> FirestoreClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.async_close()

    async def async_close(self) -> None:
        """Close the HTTP session if the client owns it."""
        if self._owns_session:
            await self._session.close()

    # ------------------------------------------------------------------ #
    #  Events
    # ------------------------------------------------------------------ #

    async def async_get_events(self) -> list[Event]:
        """Fetch every document of the events collection."""
        documents = await self._list_collection(EVENTS_COLLECTION)
        return [Event.from_api_response(doc) for doc in documents]

    # ------------------------------------------------------------------ #
    #  Places
    # ------------------------------------------------------------------ #

    async def async_get_places(self) -> list[Place]:
        """Fetch every document of the markers collection."""
        documents = await self._list_collection(PLACES_COLLECTION)
        return [Place.from_api_response(doc) for doc in documents]

    async def async_get_place(self, place_id: str) -> Place | None:
        """Fetch a single place, or ``None`` if it does not exist.

        Matches the ``PlaceLookup`` signature, so it can be handed to
        ``LocationResolver`` and ``async_build_markers`` directly.
        """
        url = DOCUMENT_ENDPOINT.format(
            project_id=self._project_id,
            collection=PLACES_COLLECTION,
            document_id=place_id,
        )
        data = await self._request(url)
        if data is None:
            return None
        return Place.from_api_response(decode_document(data))

    # ------------------------------------------------------------------ #
    #  Internal HTTP layer
    # ------------------------------------------------------------------ #

    async def _list_collection(self, collection: str) -> list[dict[str, Any]]:
        """Page through a collection and return decoded documents."""
        url = COLLECTION_ENDPOINT.format(
            project_id=self._project_id, collection=collection
        )
        documents: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            params = {"pageSize": str(self._page_size)}
            if page_token:
                params["pageToken"] = page_token
            data = await self._request(url, params=params) or {}
            documents.extend(decode_document(d) for d in data.get("documents", []))
            page_token = data.get("nextPageToken")
            if not page_token:
                return documents

    async def _wait_for_slot(self) -> None:
        """Space requests at least ``request_interval`` seconds apart.

        Each caller reserves the next free slot before sleeping, so concurrent
        place lookups queue up in call order instead of firing together.
        """
        if self._request_interval <= 0:
            return
        now = asyncio.get_running_loop().time()
        slot = max(now, self._next_slot)
        self._next_slot = slot + self._request_interval
        if slot > now:
            await asyncio.sleep(slot - now)

    async def _request(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Execute a GET once this client's next request slot is due.

        Returns ``None`` for 404 so missing documents read as not-found.

        Raises:
            RateLimitError: On 429 responses.
            ApiResponseError: On other non-2xx responses.
            ApiConnectionError: On network errors.
        """
        await self._wait_for_slot()

        query: dict[str, str] = dict(params or {})
        if self._api_key:
            query["key"] = self._api_key

        try:
            async with self._session.request("GET", url, params=query) as resp:
                if resp.status == 404:
                    return None

                if resp.status == 429:
                    retry_after = resp.headers.get("Retry-After")
                    raise RateLimitError(
                        retry_after=float(retry_after) if retry_after else None,
                    )

                if resp.status >= 400:
                    body = await resp.text()
                    raise ApiResponseError(
                        f"API error: HTTP {resp.status} - {body}",
                        status_code=resp.status,
                    )

                return await resp.json()

        except aiohttp.ClientError as err:
            raise ApiConnectionError(f"Connection error: {err}") from err
