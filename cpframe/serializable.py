"""Field-registration based JSON and BSON serialization for objects."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

import bson


def _to_json(value: Any) -> Any:
    """Convert a field value into plain JSON-compatible data."""
    if isinstance(value, SerializableBase):
        return value.serialize()
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"map keys must be strings, got {type(key).__name__}")
            result[key] = _to_json(item)
        return result
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    raise TypeError(f"cannot serialize value of type {type(value).__name__}")


def _fresh(template: Any) -> Any:
    """A new value shaped like ``template`` for building container elements."""
    if isinstance(template, SerializableBase):
        return type(template)()
    return template


def _from_json(current: Any, data: Any) -> Any:
    """Build the new value of a field from JSON data, using its current value as a guide."""
    if isinstance(current, SerializableBase):
        current.deserialize(data)
        return current
    if data is None:
        return None
    if isinstance(current, list):
        if not isinstance(data, list):
            raise TypeError("expected a JSON array")
        template = current[0] if current else None
        return [_from_json(_fresh(template), item) for item in data]
    if isinstance(current, tuple):
        if not isinstance(data, list):
            raise TypeError("expected a JSON array")
        if len(data) > len(current):
            raise ValueError(
                f"array holds {len(current)} elements, got {len(data)}")
        items = list(current)
        for index, item in enumerate(data):
            items[index] = _from_json(items[index], item)
        return tuple(items)
    if isinstance(current, Mapping):
        if not isinstance(data, Mapping):
            raise TypeError("expected a JSON object")
        template = next(iter(current.values()), None)
        return {key: _from_json(_fresh(template), item) for key, item in data.items()}
    if isinstance(current, bool):
        if not isinstance(data, bool):
            raise TypeError("expected a JSON boolean")
        return data
    if isinstance(current, (int, float)):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise TypeError("expected a JSON number")
        return type(current)(data)
    if isinstance(current, str):
        if not isinstance(data, str):
            raise TypeError("expected a JSON string")
        return data
    return data


class SerializableBase:
    """Base class whose registered attributes serialize to JSON objects and BSON.

    Field types follow the current attribute value: nested SerializableBase
    objects are filled in place, lists and dicts take their element shape from
    their first element, tuples are fixed-size arrays, None is an empty optional,
    and numbers, strings and booleans keep their type.
    """

    @property
    def _serial_fields(self) -> Dict[str, str]:
        fields = self.__dict__.get("_SerializableBase__fields")
        if fields is None:
            fields = {}
            self.__dict__["_SerializableBase__fields"] = fields
        return fields

    def register_field(self, name: str, attribute: str) -> None:
        """Serialize the attribute named ``attribute`` under the JSON key ``name``."""
        self._serial_fields[name] = attribute

    def serialize(self) -> Dict[str, Any]:
        """All registered fields as a JSON object."""
        return {name: _to_json(getattr(self, attribute))
                for name, attribute in self._serial_fields.items()}

    def serialize_bson(self) -> bytes:
        """The serialized object encoded as BSON."""
        return bson.encode(self.serialize())

    def deserialize(self, data: Any) -> None:
        """Set registered fields from the keys present in ``data``; others are left alone."""
        if not isinstance(data, Mapping):
            return
        for name, attribute in self._serial_fields.items():
            if name in data:
                current = getattr(self, attribute, None)
                setattr(self, attribute, _from_json(current, data[name]))

    def deserialize_bson(self, data: bytes) -> None:
        """Set registered fields from BSON produced by serialize_bson()."""
        self.deserialize(bson.decode(bytes(data)))