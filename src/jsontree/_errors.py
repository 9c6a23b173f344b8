"""
Error kinds and exception classes shared by every jsontree component.

The kinds form a closed set whose integer values are stable, so callers that
need numeric status codes can use ``kind.value`` directly.
"""

from enum import Enum
from typing import TypeAlias

Position: TypeAlias = int


class ErrorKind(Enum):
    """Closed set of failure categories reported by the library."""

    SUCCESS = 0
    MEMORY_ALLOCATION_FAILED = 1
    INVALID_UTF8 = 2
    SYNTAX_ERROR = 3
    INVALID_TYPE = 4
    KEY_NOT_FOUND = 5
    INDEX_OUT_OF_BOUNDS = 6
    INVALID_ARGUMENT = 7
    PARSE_ERROR = 8
    SERIALIZATION_ERROR = 9
    NOT_IMPLEMENTED = 10
    UNKNOWN_ERROR = 11

    @property
    def message(self) -> str:
        return error_message(self)


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.SUCCESS: "Success",
    ErrorKind.MEMORY_ALLOCATION_FAILED: "Memory allocation failed",
    ErrorKind.INVALID_UTF8: "Invalid UTF-8 sequence",
    ErrorKind.SYNTAX_ERROR: "JSON syntax error",
    ErrorKind.INVALID_TYPE: "Invalid type",
    ErrorKind.KEY_NOT_FOUND: "Key not found",
    ErrorKind.INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    ErrorKind.INVALID_ARGUMENT: "Invalid argument",
    ErrorKind.PARSE_ERROR: "Parse error",
    ErrorKind.SERIALIZATION_ERROR: "Serialization error",
    ErrorKind.NOT_IMPLEMENTED: "Not implemented",
    ErrorKind.UNKNOWN_ERROR: "Unknown error",
}


def error_message(kind: ErrorKind) -> str:
    """Returns the fixed human-readable message for an error kind."""
    return _MESSAGES[kind]


class JsonError(Exception):
    """
    Base class for every failure raised by jsontree.

    Carries the error kind so callers can map exceptions back onto the
    closed kind enumeration.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN_ERROR

    def __init__(self, msg: str | None = None) -> None:
        self.msg = msg if msg is not None else self.kind.message
        super().__init__(self.msg)


class InvalidUTF8Error(JsonError, ValueError):
    kind = ErrorKind.INVALID_UTF8


class InvalidTypeError(JsonError, TypeError):
    kind = ErrorKind.INVALID_TYPE


class KeyNotFoundError(JsonError, KeyError):
    kind = ErrorKind.KEY_NOT_FOUND

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.msg


class IndexOutOfBoundsError(JsonError, IndexError):
    kind = ErrorKind.INDEX_OUT_OF_BOUNDS


class InvalidArgumentError(JsonError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class SerializationError(JsonError, ValueError):
    kind = ErrorKind.SERIALIZATION_ERROR


class JSONDecodeError(JsonError, ValueError):
    """
    Handles JSON parsing failures with position and context information.

    Error state containing the character position, the byte offset of the
    same position in the UTF-8 encoding of the document, line/column numbers
    and the error kind, to help users identify and fix malformed input.

    When the document text is not known (``doc`` is None), ``lineno`` and
    ``colno`` are None and the message names the byte offset instead.
    """

    def __init__(
        self,
        msg: str,
        doc: str | None = None,
        pos: Position = 0,
        *,
        kind: ErrorKind = ErrorKind.SYNTAX_ERROR,
        byte_offset: Position | None = None,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.kind = kind
        self.doc = doc
        self.pos = pos
        self.lineno: int | None = None
        self.colno: int | None = None
        self.byte_offset = byte_offset

        if doc is not None:
            if byte_offset is None:
                self.byte_offset = len(
                    doc[:pos].encode("utf-8", "surrogatepass")
                )
            self.lineno = doc.count("\n", 0, pos) + 1
            self.colno = pos - doc.rfind("\n", 0, pos)
            where = f" at line {self.lineno}, column {self.colno}"
        elif byte_offset is not None:
            where = f" at byte {byte_offset}"
        else:
            where = ""

        super().__init__(msg)
        # JsonError stores the bare message; the formatted one is the str()
        self.msg = msg
        self.args = (msg + where,)

    def __str__(self) -> str:
        return self.args[0]


_EXCEPTIONS: dict[ErrorKind, type[JsonError]] = {
    ErrorKind.INVALID_UTF8: InvalidUTF8Error,
    ErrorKind.SYNTAX_ERROR: JSONDecodeError,
    ErrorKind.PARSE_ERROR: JSONDecodeError,
    ErrorKind.INVALID_TYPE: InvalidTypeError,
    ErrorKind.KEY_NOT_FOUND: KeyNotFoundError,
    ErrorKind.INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsError,
    ErrorKind.INVALID_ARGUMENT: InvalidArgumentError,
    ErrorKind.SERIALIZATION_ERROR: SerializationError,
}


def exception_for(kind: ErrorKind) -> type[JsonError]:
    """Returns the exception class raised for failures of the given kind."""
    return _EXCEPTIONS.get(kind, JsonError)


def make_error(kind: ErrorKind, msg: str | None = None) -> JsonError:
    """Builds an exception instance for a kind, preserving the kind tag."""
    exc_class = exception_for(kind)
    message = msg if msg is not None else kind.message
    if exc_class is JSONDecodeError:
        return JSONDecodeError(message, kind=kind)
    exc = exc_class(message)
    exc.kind = kind
    return exc
