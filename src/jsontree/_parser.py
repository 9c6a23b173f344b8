"""
Recursive-descent JSON parser producing ``JsonValue`` trees.

The parser walks the decoded text once with a single cursor and one
character of lookahead; ``peek`` and ``consume`` skip JSON whitespace before
every token. Grammar violations raise ``JSONDecodeError`` internally and the
public ``parse``/``parse_with_error`` entry points turn them into ``Result``
failures, so no partial tree ever escapes.
"""

import logging
import math
from dataclasses import dataclass
from dataclasses import fields
from typing import IO
from typing import Any
from typing import TypeAlias

from ._errors import ErrorKind
from ._errors import InvalidArgumentError
from ._errors import JSONDecodeError
from ._errors import Position
from ._profile import ProfileContext
from ._result import Result
from ._utf8 import find_invalid_utf8
from ._utf8 import unescape
from ._utf8_mapper import UTF8PositionMapper
from ._value import JsonType
from ._value import JsonValue

logger = logging.getLogger(__name__)

JsonInput: TypeAlias = str | bytes | bytearray | memoryview

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")
_CONTROL_LIMIT = 0x20

_LITERALS: dict[str, tuple[str, JsonType, bool | None]] = {
    "t": ("true", JsonType.BOOLEAN, True),
    "f": ("false", JsonType.BOOLEAN, False),
    "n": ("null", JsonType.NULL, None),
}


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    ``strict`` rejects raw control characters (below U+0020) inside string
    literals, as RFC 8259 requires; turning it off accepts them verbatim.
    """

    strict: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise InvalidArgumentError("strict must be a boolean")


_PARSE_OPTIONS = frozenset(field.name for field in fields(ParseConfig))


class JsonParser:
    """
    Single-pass recursive-descent parser over decoded JSON text.

    State is just the text and a cursor position; there is no backtracking.
    """

    def __init__(self, text: str, config: ParseConfig | None = None):
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.config = config if config is not None else ParseConfig()

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def skip_whitespace(self) -> None:
        """Skips whitespace characters as RFC 8259 defines them."""
        text = self.text
        while self.pos < self.length and text[self.pos] in _WHITESPACE:
            self.pos += 1

    def peek(self) -> str:
        """Returns the next non-whitespace character without consuming it."""
        self.skip_whitespace()
        return self.text[self.pos] if self.pos < self.length else ""

    def consume(self) -> str:
        """Returns the next non-whitespace character and advances past it."""
        char = self.peek()
        if char:
            self.pos += 1
        return char

    def _char(self) -> str:
        """Current character without whitespace skipping."""
        return self.text[self.pos] if self.pos < self.length else ""

    def error(
        self,
        msg: str,
        pos: Position | None = None,
        kind: ErrorKind = ErrorKind.SYNTAX_ERROR,
    ) -> JSONDecodeError:
        """Builds a positioned decode error for the document being parsed."""
        where = self.pos if pos is None else pos
        byte_offset = UTF8PositionMapper(self.text).char_to_byte(where)
        return JSONDecodeError(
            msg, self.text, where, kind=kind, byte_offset=byte_offset
        )

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse_document(self) -> JsonValue:
        """Parses exactly one value followed only by whitespace."""
        if self.text.startswith("\ufeff"):
            raise self.error(
                "JSON input should not contain BOM (Byte Order Mark)", 0
            )

        value = self.parse_value()
        if self.peek():
            raise self.error("Unexpected trailing characters")
        return value

    def parse_value(self) -> JsonValue:
        """Dispatches on the first non-whitespace character."""
        char = self.peek()

        if char == '"':
            return JsonValue._make(JsonType.STRING, self.parse_string())
        elif char == "{":
            return self.parse_object()
        elif char == "[":
            return self.parse_array()
        elif char in _LITERALS:
            return self.parse_literal()
        elif char == "-" or char in _DIGITS:
            return self.parse_number()
        else:
            raise self.error("Expecting value")

    def parse_literal(self) -> JsonValue:
        """Parses true, false or null."""
        literal, kind, payload = _LITERALS[self.text[self.pos]]
        if not self.text.startswith(literal, self.pos):
            raise self.error("Invalid literal")
        self.pos += len(literal)
        return JsonValue._make(kind, payload)

    def parse_object(self) -> JsonValue:
        """Parses a JSON object; later duplicate keys replace earlier ones."""
        with ProfileContext("parse_object"):
            self.consume()  # opening brace
            members: dict[str, JsonValue] = {}

            if self.peek() == "}":
                self.pos += 1
                return JsonValue._make(JsonType.OBJECT, members)

            while True:
                if self.peek() != '"':
                    raise self.error(
                        "Expecting property name enclosed in double quotes"
                    )
                key = self.parse_string()

                if self.peek() != ":":
                    raise self.error("Expecting ':' delimiter")
                self.pos += 1

                members[key] = self.parse_value()

                char = self.peek()
                if char == "}":
                    self.pos += 1
                    break
                elif char == ",":
                    comma_pos = self.pos
                    self.pos += 1
                    if self.peek() == "}":
                        raise self.error(
                            "Illegal trailing comma before end of object",
                            comma_pos,
                        )
                else:
                    raise self.error("Expecting ',' or '}' delimiter")

            return JsonValue._make(JsonType.OBJECT, members)

    def parse_array(self) -> JsonValue:
        """Parses a JSON array, preserving element order."""
        with ProfileContext("parse_array"):
            self.consume()  # opening bracket
            items: list[JsonValue] = []

            if self.peek() == "]":
                self.pos += 1
                return JsonValue._make(JsonType.ARRAY, items)

            while True:
                items.append(self.parse_value())

                char = self.peek()
                if char == "]":
                    self.pos += 1
                    break
                elif char == ",":
                    comma_pos = self.pos
                    self.pos += 1
                    if self.peek() == "]":
                        raise self.error(
                            "Illegal trailing comma before end of array",
                            comma_pos,
                        )
                else:
                    raise self.error("Expecting ',' or ']' delimiter")

            return JsonValue._make(JsonType.ARRAY, items)

    def _scan_string(self) -> str:
        """Scans a string literal including quotes and returns its raw text."""
        start = self.pos
        text = self.text
        strict = self.config.strict
        self.pos += 1  # opening quote

        while self.pos < self.length:
            char = text[self.pos]
            if char == '"':
                self.pos += 1
                return text[start : self.pos]
            elif char == "\\":
                # Skip escaped character; unescape validates it
                self.pos += 2
            elif strict and ord(char) < _CONTROL_LIMIT:
                raise self.error("Invalid control character in string")
            else:
                self.pos += 1

        raise self.error("Unterminated string starting at", start)

    def parse_string(self) -> str:
        """Parses a string literal at the cursor into text."""
        with ProfileContext("parse_string"):
            start = self.pos
            raw = self._scan_string()
            try:
                return unescape(raw)
            except JSONDecodeError as e:
                raise self.error(e.msg, start + e.pos, e.kind) from e

    def _scan_digits(self) -> None:
        while self._char() in _DIGITS:
            self.pos += 1

    def _scan_integer_part(self, start: Position) -> None:
        """Scans the integer part of a JSON number."""
        char = self._char()
        if char not in _DIGITS:
            raise self.error("Invalid number", start)

        self.pos += 1
        if char == "0":
            if self._char() in _DIGITS:
                raise self.error("Leading zeros not allowed", start)
        else:
            self._scan_digits()

    def _scan_decimal_part(self, start: Position) -> None:
        """Scans the decimal part of a JSON number if present."""
        if self._char() == ".":
            self.pos += 1
            if self._char() not in _DIGITS:
                raise self.error("Invalid decimal number", start)
            self._scan_digits()

    def _scan_exponent_part(self, start: Position) -> None:
        """Scans the exponent part of a JSON number if present."""
        if self._char() in ("e", "E"):
            self.pos += 1
            if self._char() in ("+", "-"):
                self.pos += 1
            if self._char() not in _DIGITS:
                raise self.error("Invalid exponent", start)
            self._scan_digits()

    def parse_number(self) -> JsonValue:
        """Parses a number literal into a double."""
        with ProfileContext("parse_number"):
            start = self.pos
            if self._char() == "-":
                self.pos += 1

            self._scan_integer_part(start)
            self._scan_decimal_part(start)
            self._scan_exponent_part(start)

            literal = self.text[start : self.pos]
            try:
                number = float(literal)
            except ValueError as e:
                raise self.error("Invalid number", start) from e
            if math.isinf(number):
                raise self.error("Number out of range", start)
            return JsonValue._make(JsonType.NUMBER, number)


def _decode_input(data: Any) -> str:
    """Returns the document as text, rejecting anything that is not UTF-8."""
    if isinstance(data, bytes | bytearray | memoryview):
        offset = find_invalid_utf8(data)
        if offset is not None:
            # The bytes before the bad sequence are valid, so line and
            # column can be taken from them
            prefix = bytes(data[:offset]).decode("utf-8")
            raise JSONDecodeError(
                "Invalid UTF-8 sequence in input",
                prefix,
                len(prefix),
                kind=ErrorKind.INVALID_UTF8,
                byte_offset=offset,
            )
        return bytes(data).decode("utf-8")

    if not isinstance(data, str):
        raise InvalidArgumentError(
            f"the JSON object must be str or bytes, not {type(data).__name__}"
        )

    try:
        data.encode("utf-8")
    except UnicodeEncodeError as e:
        raise JSONDecodeError(
            "Invalid UTF-8 sequence in input: lone surrogate",
            data,
            e.start,
            kind=ErrorKind.INVALID_UTF8,
        ) from e
    return data


def _parse_document(data: JsonInput, config: ParseConfig) -> JsonValue:
    text = _decode_input(data)
    with ProfileContext("parse_document", len(text)):
        parser = JsonParser(text, config)
        try:
            return parser.parse_document()
        except RecursionError as e:
            raise parser.error(
                "Maximum nesting depth exceeded",
                kind=ErrorKind.PARSE_ERROR,
            ) from e


def _parse_config(options: dict[str, Any]) -> ParseConfig:
    unknown = sorted(options.keys() - _PARSE_OPTIONS)
    if unknown:
        raise InvalidArgumentError(
            f"unexpected parse options: {', '.join(unknown)}"
        )
    return ParseConfig(**options)


def parse_with_error(data: JsonInput, **kwargs: Any) -> Result[JsonValue]:
    """
    Parses a JSON document without raising.

    A failed result carries the error kind, a descriptive message and the
    0-based byte offset of the failure in the UTF-8 encoded input. Bad
    options are reported as ``INVALID_ARGUMENT`` failures as well.
    """
    try:
        value = _parse_document(data, _parse_config(kwargs))
    except JSONDecodeError as e:
        logger.debug("JSON parse failed: %s (byte %d)", e, e.byte_offset)
        return Result.fail(e.kind, e.msg, e.byte_offset)
    except InvalidArgumentError as e:
        logger.debug("JSON parse rejected input: %s", e)
        return Result.fail(e.kind, e.msg)
    except MemoryError:
        logger.debug("JSON parse ran out of memory")
        return Result.fail(ErrorKind.MEMORY_ALLOCATION_FAILED)
    return Result.ok(value)


def parse(data: JsonInput, **kwargs: Any) -> Result[JsonValue]:
    """Parses a JSON document into a result holding the tree or a kind."""
    result = parse_with_error(data, **kwargs)
    if result:
        return result
    return Result.fail(result.error())


def loads(s: JsonInput, **kwargs: Any) -> JsonValue:
    """
    Parses a JSON document into a JsonValue tree.

    Raises JSONDecodeError with position information on malformed input and
    TypeError for unknown keyword arguments.
    """
    config = ParseConfig(**kwargs)
    return _parse_document(s, config)


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> JsonValue:
    """
    Parses a JSON document read from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise InvalidArgumentError("fp must have a read() method")

    return loads(fp.read(), **kwargs)
