"""Constants for the landmark events library."""

from typing import Final

__version__ = "0.1.0"

FIRESTORE_BASE_URL: Final = "https://firestore.googleapis.com/v1"
DOCUMENTS_ROOT: Final = (
    f"{FIRESTORE_BASE_URL}/projects/{{project_id}}/databases/(default)/documents"
)
COLLECTION_ENDPOINT: Final = f"{DOCUMENTS_ROOT}/{{collection}}"
DOCUMENT_ENDPOINT: Final = f"{DOCUMENTS_ROOT}/{{collection}}/{{document_id}}"

EVENTS_COLLECTION: Final = "events"
PLACES_COLLECTION: Final = "markers"

DEFAULT_THROTTLE_SECONDS: Final = 0.1
DEFAULT_PAGE_SIZE: Final = 300

DEFAULT_EVENT_TITLE: Final = "Untitled Event"
ADDRESS_NOT_AVAILABLE: Final = "Address not available"
