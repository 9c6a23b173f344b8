"""
In-memory JSON document model.

A single ``JsonValue`` class covers all six JSON kinds; the ``JsonType`` tag
is fixed when the node is created and every kind-dependent operation
dispatches on it. Container nodes hold plain Python references to their
children, so subtrees can be shared between containers cheaply.

Trees are assumed to be acyclic. Inserting a container into itself (directly
or through descendants) is not detected, and equality, cloning and
serialization of such a graph recurse until ``RecursionError``.
"""

import math
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any
from typing import TypeAlias

from ._errors import IndexOutOfBoundsError
from ._errors import InvalidArgumentError
from ._errors import InvalidTypeError
from ._errors import InvalidUTF8Error
from ._errors import KeyNotFoundError
from ._utf8 import escape
from ._utf8 import find_invalid_utf8

# Numbers closer than this compare equal, absorbing float round-trip noise
NUMBER_TOLERANCE = 1e-12

# Integral doubles inside this range are rendered without a fraction
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Python-native payloads accepted by JsonValue.from_python
PythonJson: TypeAlias = (
    None
    | bool
    | int
    | float
    | str
    | list["PythonJson"]
    | tuple["PythonJson", ...]
    | dict[str, "PythonJson"]
)


class JsonType(Enum):
    """Kind tag distinguishing the six JSON value variants."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def _checked_text(value: str | bytes | bytearray, what: str) -> str:
    """Returns text guaranteed to have a valid UTF-8 encoding."""
    if isinstance(value, bytes | bytearray):
        offset = find_invalid_utf8(value)
        if offset is not None:
            raise InvalidUTF8Error(
                f"Invalid UTF-8 sequence in {what} at byte {offset}"
            )
        return bytes(value).decode("utf-8")
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{what} must be str or bytes, not {type(value).__name__}"
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidUTF8Error(
            f"Invalid UTF-8 sequence in {what}: lone surrogate at {e.start}"
        ) from e
    return value


def _checked_child(value: Any) -> "JsonValue":
    if not isinstance(value, JsonValue):
        raise InvalidArgumentError(
            "container members must be JsonValue,"
            f" not {type(value).__name__}"
        )
    return value


def _checked_key(key: str | bytes | bytearray) -> str:
    return _checked_text(key, "object key")


def _checked_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidArgumentError(
            "number payload must be int or float,"
            f" not {type(value).__name__}"
        )
    try:
        return float(value)
    except OverflowError as e:
        raise InvalidArgumentError(
            "integer too large to convert to a double"
        ) from e


def _checked_payload(kind: "JsonType", payload: Any) -> Any:  # noqa: PLR0911
    """Returns the payload a node of ``kind`` stores, or raises."""
    if kind is JsonType.NULL:
        if payload is not None:
            raise InvalidArgumentError("null nodes carry no payload")
        return None
    elif kind is JsonType.BOOLEAN:
        if not isinstance(payload, bool):
            raise InvalidArgumentError(
                f"boolean payload must be bool, not {type(payload).__name__}"
            )
        return payload
    elif kind is JsonType.NUMBER:
        return _checked_number(payload)
    elif kind is JsonType.STRING:
        return _checked_text(payload, "string")
    elif kind is JsonType.ARRAY:
        if payload is None:
            return []
        return [_checked_child(item) for item in payload]
    else:
        members: dict[str, JsonValue] = {}
        if payload is None:
            return members
        pairs = payload.items() if isinstance(payload, Mapping) else payload
        for key, value in pairs:
            members[_checked_key(key)] = _checked_child(value)
        return members


def format_number(number: float) -> str:
    """
    Renders a double the way JSON output expects.

    Integral values in the signed 64-bit range print as integer literals,
    everything else uses the shortest repr that round-trips. NaN and the
    infinities come out as Python's ``nan``/``inf``, which is not JSON.
    """
    if _INT64_MIN <= number <= _INT64_MAX and math.floor(number) == number:
        return str(int(number))
    return repr(number)


class JsonValue:
    """
    One node of a JSON document tree.

    Build nodes with the named constructors (``JsonValue.null()``,
    ``JsonValue.number(3)``, ``JsonValue.object()``...). Typed accessors
    raise ``InvalidTypeError`` when called on the wrong kind.
    """

    __slots__ = ("_payload", "_type")

    _type: JsonType
    _payload: Any

    def __init__(self, kind: JsonType, payload: Any = None) -> None:
        """
        Creates a node after checking ``payload`` against ``kind``.

        Containers accept ``None`` for an empty payload, an iterable of
        children for arrays, and a mapping or key/value pairs for objects.
        """
        if not isinstance(kind, JsonType):
            raise InvalidArgumentError(
                f"kind must be a JsonType, not {type(kind).__name__}"
            )
        self._type = kind
        self._payload = _checked_payload(kind, payload)

    @classmethod
    def _make(cls, kind: JsonType, payload: Any) -> "JsonValue":
        """Binds an already valid payload; used by the parser and clone."""
        node = cls.__new__(cls)
        node._type = kind
        node._payload = payload
        return node

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------

    @classmethod
    def null(cls) -> "JsonValue":
        return cls._make(JsonType.NULL, None)

    @classmethod
    def boolean(cls, value: bool) -> "JsonValue":
        return cls(JsonType.BOOLEAN, value)

    @classmethod
    def number(cls, value: int | float) -> "JsonValue":
        return cls(JsonType.NUMBER, value)

    @classmethod
    def string(cls, value: str | bytes | bytearray) -> "JsonValue":
        """Creates a string node; bytes must be valid UTF-8."""
        return cls(JsonType.STRING, value)

    @classmethod
    def array(cls, items: Iterable["JsonValue"] = ()) -> "JsonValue":
        return cls(JsonType.ARRAY, items)

    @classmethod
    def object(
        cls,
        members: Mapping[str, "JsonValue"]
        | Iterable[tuple[str, "JsonValue"]]
        | None = None,
    ) -> "JsonValue":
        return cls(JsonType.OBJECT, members)

    @classmethod
    def from_python(cls, obj: PythonJson) -> "JsonValue":
        """Builds a tree from plain Python data (dict keys must be str)."""
        if obj is None:
            return cls.null()
        elif isinstance(obj, bool):
            return cls.boolean(obj)
        elif isinstance(obj, int | float):
            return cls.number(obj)
        elif isinstance(obj, str | bytes | bytearray):
            return cls.string(obj)
        elif isinstance(obj, list | tuple):
            return cls.array(cls.from_python(item) for item in obj)
        elif isinstance(obj, dict):
            node = cls.object()
            for key, value in obj.items():
                if not isinstance(key, str):
                    raise InvalidArgumentError(
                        f"keys must be strings, not {type(key).__name__}"
                    )
                node.set(key, cls.from_python(value))
            return node
        else:
            raise InvalidArgumentError(
                f"Object of type {type(obj).__name__} has no JSON equivalent"
            )

    # ------------------------------------------------------------------
    # Kind inspection
    # ------------------------------------------------------------------

    @property
    def type(self) -> JsonType:
        return self._type

    def is_null(self) -> bool:
        return self._type is JsonType.NULL

    def is_boolean(self) -> bool:
        return self._type is JsonType.BOOLEAN

    def is_number(self) -> bool:
        return self._type is JsonType.NUMBER

    def is_string(self) -> bool:
        return self._type is JsonType.STRING

    def is_array(self) -> bool:
        return self._type is JsonType.ARRAY

    def is_object(self) -> bool:
        return self._type is JsonType.OBJECT

    def _require(self, kind: JsonType) -> None:
        if self._type is not kind:
            raise InvalidTypeError(
                f"Value is not {_ARTICLES[kind]} {kind.value}"
                f" (found {self._type.value})"
            )

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def boolean_value(self) -> bool:
        self._require(JsonType.BOOLEAN)
        return self._payload

    def number_value(self) -> float:
        self._require(JsonType.NUMBER)
        return self._payload

    def string_value(self) -> str:
        self._require(JsonType.STRING)
        return self._payload

    def array_value(self) -> tuple["JsonValue", ...]:
        """Returns a read-only snapshot of the array's children."""
        self._require(JsonType.ARRAY)
        return tuple(self._payload)

    def object_value(self) -> Mapping[str, "JsonValue"]:
        """Returns a read-only live view of the object's members."""
        self._require(JsonType.OBJECT)
        return MappingProxyType(self._payload)

    # ------------------------------------------------------------------
    # Array operations
    # ------------------------------------------------------------------

    def push_back(self, value: "JsonValue") -> None:
        self._require(JsonType.ARRAY)
        self._payload.append(_checked_child(value))

    append = push_back

    def insert(self, index: int, value: "JsonValue") -> None:
        """Inserts before ``index``; ``index == size()`` appends."""
        self._require(JsonType.ARRAY)
        if not 0 <= index <= len(self._payload):
            raise IndexOutOfBoundsError(
                f"Array insert index {index} out of bounds"
                f" for size {len(self._payload)}"
            )
        self._payload.insert(index, _checked_child(value))

    def at(self, index: int) -> "JsonValue":
        self._require(JsonType.ARRAY)
        if not 0 <= index < len(self._payload):
            raise IndexOutOfBoundsError(
                f"Array index {index} out of bounds"
                f" for size {len(self._payload)}"
            )
        return self._payload[index]

    def remove(self, index: int) -> "JsonValue":
        """Removes and returns the element at ``index``."""
        removed = self.at(index)
        del self._payload[index]
        return removed

    # ------------------------------------------------------------------
    # Object operations
    # ------------------------------------------------------------------

    def set(self, key: str | bytes, value: "JsonValue") -> None:
        """Inserts a member or replaces the value of an existing key."""
        self._require(JsonType.OBJECT)
        self._payload[_checked_key(key)] = _checked_child(value)

    def get(self, key: str | bytes) -> "JsonValue | None":
        self._require(JsonType.OBJECT)
        return self._payload.get(_checked_key(key))

    def has(self, key: str | bytes) -> bool:
        self._require(JsonType.OBJECT)
        return _checked_key(key) in self._payload

    def erase(self, key: str | bytes) -> None:
        """Removes a member; missing keys are ignored."""
        self._require(JsonType.OBJECT)
        self._payload.pop(_checked_key(key), None)

    def keys(self) -> list[str]:
        self._require(JsonType.OBJECT)
        return list(self._payload)

    def items(self) -> list[tuple[str, "JsonValue"]]:
        self._require(JsonType.OBJECT)
        return list(self._payload.items())

    # ------------------------------------------------------------------
    # Container operations shared by arrays and objects
    # ------------------------------------------------------------------

    def _require_container(self) -> None:
        if self._type not in (JsonType.ARRAY, JsonType.OBJECT):
            raise InvalidTypeError(
                f"Value is not a container (found {self._type.value})"
            )

    def size(self) -> int:
        self._require_container()
        return len(self._payload)

    def empty(self) -> bool:
        return self.size() == 0

    def clear(self) -> None:
        self._require_container()
        self._payload.clear()

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        # Nodes are always truthy, even empty containers
        return True

    def __iter__(self) -> Iterator[Any]:
        """Iterates array elements, or (key, value) pairs of an object."""
        if self._type is JsonType.ARRAY:
            return iter(list(self._payload))
        elif self._type is JsonType.OBJECT:
            return iter(list(self._payload.items()))
        raise InvalidTypeError(
            f"Value is not a container (found {self._type.value})"
        )

    def __contains__(self, key: Any) -> bool:
        self._require(JsonType.OBJECT)
        return _checked_key(key) in self._payload

    def __getitem__(self, key: int | str | bytes) -> "JsonValue":
        if self._type is JsonType.ARRAY:
            if not isinstance(key, int) or isinstance(key, bool):
                raise InvalidArgumentError("array indices must be integers")
            return self.at(key)
        self._require(JsonType.OBJECT)
        name = _checked_key(key)  # type: ignore[arg-type]
        if name not in self._payload:
            raise KeyNotFoundError(f"Key not found: {name!r}")
        return self._payload[name]

    # ------------------------------------------------------------------
    # Equality, cloning, conversion
    # ------------------------------------------------------------------

    def equals(self, other: "JsonValue") -> bool:  # noqa: PLR0911
        """
        Deep structural equality.

        Numbers compare within ``NUMBER_TOLERANCE``; object member order is
        irrelevant.
        """
        if not isinstance(other, JsonValue) or self._type is not other._type:
            return False

        kind = self._type
        if kind is JsonType.NULL:
            return True
        elif kind is JsonType.BOOLEAN or kind is JsonType.STRING:
            return self._payload == other._payload
        elif kind is JsonType.NUMBER:
            return abs(self._payload - other._payload) < NUMBER_TOLERANCE
        elif kind is JsonType.ARRAY:
            if len(self._payload) != len(other._payload):
                return False
            return all(
                mine.equals(theirs)
                for mine, theirs in zip(self._payload, other._payload)
            )
        else:
            if len(self._payload) != len(other._payload):
                return False
            for key, value in self._payload.items():
                counterpart = other._payload.get(key)
                if counterpart is None or not value.equals(counterpart):
                    return False
            return True

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def clone(self) -> "JsonValue":
        """Deep copy; the result shares no node with the original."""
        kind = self._type
        if kind is JsonType.ARRAY:
            return JsonValue._make(
                kind, [item.clone() for item in self._payload]
            )
        elif kind is JsonType.OBJECT:
            return JsonValue._make(
                kind,
                {key: value.clone() for key, value in self._payload.items()},
            )
        return JsonValue._make(kind, self._payload)

    def to_python(self) -> PythonJson:
        """Converts the tree to plain Python data (numbers become float)."""
        kind = self._type
        if kind is JsonType.ARRAY:
            return [item.to_python() for item in self._payload]
        elif kind is JsonType.OBJECT:
            return {
                key: value.to_python() for key, value in self._payload.items()
            }
        return self._payload

    def to_string(self) -> str:
        """Compact single-line rendering meant for debugging output."""
        kind = self._type
        if kind is JsonType.NULL:
            return "null"
        elif kind is JsonType.BOOLEAN:
            return "true" if self._payload else "false"
        elif kind is JsonType.NUMBER:
            return format_number(self._payload)
        elif kind is JsonType.STRING:
            return escape(self._payload)
        elif kind is JsonType.ARRAY:
            return "[" + ", ".join(v.to_string() for v in self._payload) + "]"
        else:
            members = (
                f"{escape(key)}: {value.to_string()}"
                for key, value in self._payload.items()
            )
            return "{" + ", ".join(members) + "}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"JsonValue.{self._type.name}({self.to_string()})"


_ARTICLES = {
    JsonType.NULL: "a",
    JsonType.BOOLEAN: "a",
    JsonType.NUMBER: "a",
    JsonType.STRING: "a",
    JsonType.ARRAY: "an",
    JsonType.OBJECT: "an",
}
