"""Shared fixtures for the landmark events tests."""

from __future__ import annotations

import pytest

from helpers import CountingLookup

from landmark_events.models import Place


@pytest.fixture
def places() -> dict[str, Place]:
    return {
        "M1": Place(
            id="M1",
            name="Fort Santiago",
            address="Intramuros, Manila",
            latitude=14.5958,
            longitude=120.9694,
        ),
        "M2": Place(
            id="M2",
            name="Rizal Park",
            address="Ermita, Manila",
            latitude=14.5826,
            longitude=120.9787,
        ),
    }


@pytest.fixture
def lookup(places: dict[str, Place]) -> CountingLookup:
    return CountingLookup(places)
