"""A tagged JSON value with accessors that fail loudly on kind mismatches.

Response bodies are decoded twice: once into the typed envelope and once into
a raw tree held by :class:`JsonValue`. The raw tree is decoded with every
numeric literal as ``float``; use :meth:`JsonValue.as_int` to convert
explicitly when an integer is expected.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from ..errors import JsonTypeError


class JsonKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> JsonKind:
    """Return the JSON kind of a decoded Python value."""

    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if value is None:
        return JsonKind.NULL
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"not a JSON value: {type(value).__name__}")


class JsonValue:
    """Read-only view over one node of a decoded JSON document."""

    __slots__ = ("_value", "_kind")

    def __init__(self, value: Any = None) -> None:
        if isinstance(value, JsonValue):
            value = value.to_python()
        self._kind = kind_of(value)
        self._value = value

    @property
    def kind(self) -> JsonKind:
        return self._kind

    def _expect(self, kind: JsonKind) -> Any:
        if self._kind is not kind:
            raise JsonTypeError(kind.value, self._kind.value)
        return self._value

    def is_null(self) -> bool:
        return self._kind is JsonKind.NULL

    def as_str(self) -> str:
        return self._expect(JsonKind.STRING)

    def as_bool(self) -> bool:
        return self._expect(JsonKind.BOOLEAN)

    def as_float(self) -> float:
        return float(self._expect(JsonKind.NUMBER))

    def as_int(self) -> int:
        number = self._expect(JsonKind.NUMBER)
        if isinstance(number, float) and not number.is_integer():
            raise JsonTypeError("integral number", repr(number))
        return int(number)

    def as_list(self) -> List["JsonValue"]:
        return [JsonValue(item) for item in self._expect(JsonKind.ARRAY)]

    def as_dict(self) -> Dict[str, "JsonValue"]:
        return {key: JsonValue(item) for key, item in self._expect(JsonKind.OBJECT).items()}

    def get(self, key: str, default: Any = None) -> Optional["JsonValue"]:
        """Return the member ``key`` of an object, or ``default`` when absent."""

        members = self._expect(JsonKind.OBJECT)
        if key not in members:
            return default
        return JsonValue(members[key])

    def __getitem__(self, key: Union[str, int]) -> "JsonValue":
        if isinstance(key, int) and not isinstance(key, bool):
            return JsonValue(self._expect(JsonKind.ARRAY)[key])
        return JsonValue(self._expect(JsonKind.OBJECT)[key])

    def __contains__(self, key: object) -> bool:
        return self._kind is JsonKind.OBJECT and key in self._value

    def __len__(self) -> int:
        if self._kind in (JsonKind.ARRAY, JsonKind.OBJECT, JsonKind.STRING):
            return len(self._value)
        raise JsonTypeError("array, object or string", self._kind.value)

    def __iter__(self) -> Iterator["JsonValue"]:
        return iter(self.as_list())

    def to_python(self) -> Any:
        """Return the underlying decoded value (dict, list, str, float, bool or None)."""

        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonValue):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._kind, repr(self._value)))

    def __repr__(self) -> str:
        return f"JsonValue({self._value!r})"


__all__ = ["JsonKind", "kind_of", "JsonValue"]
