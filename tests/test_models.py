"""Tests for store document decoding and model construction."""

from __future__ import annotations

from datetime import date

from landmark_events._serialization import decamelize, decode_document, decode_value
from landmark_events.models import Event, Frequency, Place, Recurrence, Weekday, parse_coordinate
from landmark_events.recurrence import occurs_on

EVENT_DOCUMENT = {
    "name": "projects/tour/databases/(default)/documents/events/ev42",
    "fields": {
        "title": {"stringValue": "Night Market"},
        "description": {"stringValue": "Street food"},
        "startDate": {"stringValue": "2024-06-01"},
        "endDate": {"stringValue": "2024-06-30"},
        "eventStartTime": {"stringValue": "18:00"},
        "eventEndTime": {"stringValue": "23:00"},
        "locationId": {"integerValue": "12"},
        "customAddress": {"stringValue": ""},
        "lat": {"nullValue": None},
        "openToPublic": {"booleanValue": True},
        "recurrence": {
            "mapValue": {
                "fields": {
                    "frequency": {"stringValue": "weekly"},
                    "daysOfWeek": {
                        "arrayValue": {
                            "values": [{"stringValue": "fri"}, {"stringValue": "sat"}]
                        }
                    },
                    "startDate": {"stringValue": "2024-06-01"},
                    "endDate": {"stringValue": "2024-06-30"},
                }
            }
        },
    },
}


# =========================================================================== #
#  1. Firestore value decoding
# =========================================================================== #


class TestDecodeValue:
    def test_scalars(self):
        assert decode_value({"stringValue": "x"}) == "x"
        assert decode_value({"integerValue": "7"}) == 7
        assert decode_value({"doubleValue": 1.5}) == 1.5
        assert decode_value({"booleanValue": False}) is False
        assert decode_value({"nullValue": None}) is None

    def test_timestamp_stays_string(self):
        assert decode_value({"timestampValue": "2024-06-01T00:00:00Z"}) == "2024-06-01T00:00:00Z"

    def test_geo_point(self):
        value = {"geoPointValue": {"latitude": 14.5, "longitude": 121.0}}
        assert decode_value(value) == {"latitude": 14.5, "longitude": 121.0}

    def test_empty_array(self):
        assert decode_value({"arrayValue": {}}) == []


class TestDecodeDocument:
    def test_id_from_document_name(self):
        assert decode_document(EVENT_DOCUMENT)["id"] == "ev42"

    def test_keys_are_decamelized(self):
        data = decode_document(EVENT_DOCUMENT)
        assert data["event_start_time"] == "18:00"
        assert data["recurrence"]["days_of_week"] == ["fri", "sat"]

    def test_decamelize_nested_lists(self):
        assert decamelize([{"fooBar": {"bazQux": 1}}]) == [{"foo_bar": {"baz_qux": 1}}]


# =========================================================================== #
#  2. Event / Place construction
# =========================================================================== #


class TestEventFromApiResponse:
    def test_full_document(self):
        ev = Event.from_api_response(decode_document(EVENT_DOCUMENT))
        assert ev.id == "ev42"
        assert ev.title == "Night Market"
        assert ev.start_time == "18:00"
        assert ev.location_id == "12"
        assert ev.custom_address is None
        assert ev.lat is None
        assert ev.open_to_public is True
        assert ev.frequency is Frequency.WEEKLY
        assert ev.recurrence.days_of_week == frozenset({Weekday.FRI, Weekday.SAT})

    def test_weekly_document_occurs_on_friday(self):
        ev = Event.from_api_response(decode_document(EVENT_DOCUMENT))
        assert occurs_on(ev, date(2024, 6, 7))  # Friday
        assert not occurs_on(ev, date(2024, 6, 6))  # Thursday

    def test_defaults(self):
        ev = Event.from_api_response({"id": 5})
        assert ev.id == "5"
        assert ev.title == "Untitled Event"
        assert ev.start_date is None
        assert ev.recurrence is None
        assert ev.frequency is Frequency.ONCE

    def test_legacy_date_fields(self):
        ev = Event.from_api_response({"id": "a", "date_start": "2024-06-01", "date_end": "2024-06-02"})
        assert ev.start_date == "2024-06-01"
        assert ev.end_date == "2024-06-02"

    def test_plain_date_field(self):
        ev = Event.from_api_response({"id": "a", "date": "2024-06-01", "start_time": "09:00"})
        assert ev.start_date == "2024-06-01"
        assert ev.start_time == "09:00"

    def test_string_coordinates(self):
        ev = Event.from_api_response({"id": "a", "lat": "14.5", "lng": "121"})
        assert (ev.lat, ev.lng) == (14.5, 121.0)

    def test_empty_recurrence_is_none(self):
        assert Event.from_api_response({"id": "a", "recurrence": {}}).recurrence is None


class TestRecurrenceFromApiResponse:
    def test_weekday_spellings(self):
        rule = Recurrence.from_api_response(
            {"frequency": "Weekly", "days_of_week": ["Monday", "TU", "wed", 3, "xyz", 9]}
        )
        assert rule.frequency is Frequency.WEEKLY
        assert rule.days_of_week == frozenset(
            {Weekday.MON, Weekday.TUE, Weekday.WED, Weekday.THU}
        )

    def test_integer_weekdays_count_from_monday(self):
        rule = Recurrence.from_api_response({"frequency": "weekly", "days_of_week": [0, 6]})
        assert rule.days_of_week == frozenset({Weekday.MON, Weekday.SUN})
        ev = Event(
            id="a",
            title="A",
            recurrence=Recurrence(
                frequency=Frequency.WEEKLY,
                days_of_week=rule.days_of_week,
                start_date="2024-06-01",
            ),
        )
        assert occurs_on(ev, date(2024, 6, 3))  # Monday
        assert occurs_on(ev, date(2024, 6, 9))  # Sunday
        assert not occurs_on(ev, date(2024, 6, 8))  # Saturday

    def test_unknown_frequency(self):
        assert Recurrence.from_api_response({"frequency": "yearly"}).frequency is Frequency.ONCE


class TestPlaceFromApiResponse:
    def test_string_coordinates_parsed(self):
        place = Place.from_api_response(
            {"id": 3, "name": "Museo", "address": "Padre Burgos", "latitude": "14.58", "longitude": "120.98"}
        )
        assert place.id == "3"
        assert (place.latitude, place.longitude) == (14.58, 120.98)

    def test_bad_coordinates(self):
        place = Place.from_api_response({"id": "x", "latitude": "n/a", "longitude": None})
        assert place.latitude is None
        assert place.longitude is None


class TestParseCoordinate:
    def test_rejects_bool_and_nan(self):
        assert parse_coordinate(True) is None
        assert parse_coordinate("nan") is None

    def test_accepts_int(self):
        assert parse_coordinate(14) == 14.0
