"""
Renders ``JsonValue`` trees as JSON text.

Output is produced by writing chunks to a sink callable, so the same code
path serves in-memory serialization and streaming to file-like objects.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO
from typing import Any
from typing import TypeAlias

from ._errors import InvalidArgumentError
from ._errors import SerializationError
from ._profile import ProfileContext
from ._utf8 import escape
from ._value import JsonType
from ._value import JsonValue
from ._value import PythonJson
from ._value import format_number

logger = logging.getLogger(__name__)

Sink: TypeAlias = Callable[[str], Any]


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    Compact output separates items with ``", "`` and keys with ``": "``.
    Pretty output puts every member on its own line, indented by ``indent``
    spaces per nesting level.
    """

    pretty: bool = False
    indent: int = 2

    def __post_init__(self) -> None:
        if not isinstance(self.pretty, bool):
            raise InvalidArgumentError("pretty must be a boolean")
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise InvalidArgumentError("indent must be an integer")
        if self.indent < 0:
            raise InvalidArgumentError("indent must be non-negative")


def _encode_number(number: float) -> str:
    """Encode numeric values with JSON compliance."""
    if not math.isfinite(number):
        msg = "Out of range float values are not JSON compliant"
        logger.debug("refusing to serialize %r", number)
        raise SerializationError(msg)
    return format_number(number)


class _Writer:
    """Walks a tree depth-first and emits text chunks to a sink."""

    def __init__(self, config: EncodeConfig, write: Sink) -> None:
        self.config = config
        self.write = write

    def value(self, node: JsonValue, level: int) -> None:
        kind = node.type
        if kind is JsonType.NULL:
            self.write("null")
        elif kind is JsonType.BOOLEAN:
            self.write("true" if node.boolean_value() else "false")
        elif kind is JsonType.NUMBER:
            self.write(_encode_number(node.number_value()))
        elif kind is JsonType.STRING:
            self.write(escape(node.string_value()))
        elif kind is JsonType.ARRAY:
            self.array(node, level)
        else:
            self.object(node, level)

    def _open(self, opener: str, level: int) -> str:
        """Writes the opener and returns the separator placed between items."""
        self.write(opener)
        if not self.config.pretty:
            return ", "
        inner = " " * (self.config.indent * (level + 1))
        self.write("\n" + inner)
        return ",\n" + inner

    def _close(self, closer: str, level: int) -> None:
        if self.config.pretty:
            self.write("\n" + " " * (self.config.indent * level))
        self.write(closer)

    def array(self, node: JsonValue, level: int) -> None:
        if node.empty():
            self.write("[]")
            return

        separator = self._open("[", level)
        for index, item in enumerate(node):
            if index:
                self.write(separator)
            self.value(item, level + 1)
        self._close("]", level)

    def object(self, node: JsonValue, level: int) -> None:
        if node.empty():
            self.write("{}")
            return

        separator = self._open("{", level)
        for index, (key, item) in enumerate(node.items()):
            if index:
                self.write(separator)
            self.write(escape(key))
            self.write(": ")
            self.value(item, level + 1)
        self._close("}", level)


def _as_sink(target: IO[str] | Sink) -> Sink:
    write = getattr(target, "write", None)
    if callable(write):
        return write
    if callable(target):
        return target
    raise InvalidArgumentError(
        "sink must have a write() method or be callable"
    )


def serialize_to(
    value: JsonValue,
    sink: IO[str] | Sink,
    pretty: bool = False,
    indent: int = 2,
) -> None:
    """
    Streams the JSON text of ``value`` to a file-like object or callable.

    Chunks are written as they are produced, so large documents never need
    to exist as a single string.
    """
    if not isinstance(value, JsonValue):
        raise InvalidArgumentError(
            f"expected a JsonValue, not {type(value).__name__}"
        )
    config = EncodeConfig(pretty=pretty, indent=indent)
    write = _as_sink(sink)
    with ProfileContext("serialize"):
        _Writer(config, write).value(value, 0)


def serialize(value: JsonValue, pretty: bool = False, indent: int = 2) -> str:
    """Renders ``value`` as JSON text, compact unless ``pretty`` is set."""
    chunks: list[str] = []
    serialize_to(value, chunks.append, pretty, indent)
    return "".join(chunks)


def dumps(obj: JsonValue | PythonJson, **kwargs: Any) -> str:
    """
    Serializes a tree, or plain Python data, to a JSON string.

    Accepts the same keyword options as ``EncodeConfig``.
    """
    value = obj if isinstance(obj, JsonValue) else JsonValue.from_python(obj)
    config = EncodeConfig(**kwargs)
    return serialize(value, config.pretty, config.indent)


def dump(obj: JsonValue | PythonJson, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes a tree, or plain Python data, to a file-like object.
    """
    if not hasattr(fp, "write"):
        raise InvalidArgumentError("fp must have a write() method")

    value = obj if isinstance(obj, JsonValue) else JsonValue.from_python(obj)
    config = EncodeConfig(**kwargs)
    serialize_to(value, fp, config.pretty, config.indent)
