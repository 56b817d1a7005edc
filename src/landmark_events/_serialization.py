"""Firestore document decoding and camelCase to snake_case key conversion."""

from __future__ import annotations

import re
from typing import Any

_CAMEL_TO_SNAKE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _to_snake(name: str) -> str:
    return _CAMEL_TO_SNAKE.sub(r"_\1", name).lower()


def decamelize(data: Any) -> Any:
    """Recursively convert all dict keys from camelCase to snake_case."""
    if isinstance(data, dict):
        return {_to_snake(k): decamelize(v) for k, v in data.items()}
    if isinstance(data, list):
        return [decamelize(item) for item in data]
    return data


def decode_value(value: dict[str, Any]) -> Any:
    """Decode one Firestore typed value (``{"stringValue": "x"}`` etc.).

    Timestamps stay ISO strings; the date layer parses them lazily.
    """
    if "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        # int64 values arrive as JSON strings
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"].rsplit("/", 1)[-1]
    if "geoPointValue" in value:
        point = value["geoPointValue"]
        return {
            "latitude": float(point.get("latitude", 0.0)),
            "longitude": float(point.get("longitude", 0.0)),
        }
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    return None


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Decode a Firestore ``fields`` mapping into plain Python values."""
    return {name: decode_value(v) for name, v in fields.items()}


def decode_document(document: dict[str, Any]) -> dict[str, Any]:
    """Turn a Firestore REST document into a decamelized plain dict.

    The document id (last segment of ``name``) is stored under ``id`` unless
    the document already carries an ``id`` field.
    """
    data = decamelize(decode_fields(document.get("fields", {})))
    name = document.get("name", "")
    if name and "id" not in data:
        data["id"] = name.rsplit("/", 1)[-1]
    return data
