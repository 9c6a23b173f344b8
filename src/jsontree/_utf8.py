"""
UTF-8 validation and JSON string literal escaping.

The validator walks raw bytes once and rejects everything the UTF-8 standard
forbids. The escaper and unescaper convert between Python text and quoted
JSON string literals.
"""

from ._errors import ErrorKind
from ._errors import InvalidArgumentError
from ._errors import JSONDecodeError
from ._errors import Position

# Lowest code point each sequence length may encode; smaller is overlong
_MIN_CODE_POINT = {2: 0x80, 3: 0x800, 4: 0x10000}
_MAX_CODE_POINT = 0x10FFFF
_SURROGATE_LOW = 0xD800
_SURROGATE_HIGH = 0xDFFF
_HIGH_SURROGATE_END = 0xDBFF
_CONTROL_LIMIT = 0x20

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_UNESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _sequence_length(lead: int) -> int:
    """Returns the byte count a leading byte announces, 0 if invalid."""
    if lead & 0x80 == 0x00:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 0


def find_invalid_utf8(data: bytes | bytearray | memoryview) -> Position | None:
    """
    Returns the offset of the first invalid UTF-8 sequence, or None.

    Rejects invalid leading bytes, truncated sequences, malformed
    continuation bytes, overlong encodings, surrogate code points and code
    points beyond U+10FFFF.
    """
    view = bytes(data)
    length = len(view)
    i = 0

    while i < length:
        lead = view[i]
        num_bytes = _sequence_length(lead)

        if num_bytes == 1:
            i += 1
            continue
        if num_bytes == 0 or i + num_bytes > length:
            return i

        code_point = lead & (0x7F >> num_bytes)
        for j in range(1, num_bytes):
            byte = view[i + j]
            if byte & 0xC0 != 0x80:
                return i
            code_point = (code_point << 6) | (byte & 0x3F)

        if code_point < _MIN_CODE_POINT[num_bytes]:
            return i
        if _SURROGATE_LOW <= code_point <= _SURROGATE_HIGH:
            return i
        if code_point > _MAX_CODE_POINT:
            return i

        i += num_bytes

    return None


def validate_utf8(data: bytes | bytearray | memoryview) -> bool:
    """Checks that a byte sequence is well-formed UTF-8."""
    return find_invalid_utf8(data) is None


def encode_code_point(code_point: int) -> bytes:
    """Encodes one code point as UTF-8 using the byte-count-by-range rule."""
    if not isinstance(code_point, int) or isinstance(code_point, bool):
        raise InvalidArgumentError("code point must be an integer")
    if code_point < 0 or code_point > _MAX_CODE_POINT:
        raise InvalidArgumentError(
            f"code point out of range: {code_point:#x}"
        )

    if code_point <= 0x7F:
        return bytes((code_point,))
    elif code_point <= 0x7FF:
        return bytes(
            (0xC0 | (code_point >> 6), 0x80 | (code_point & 0x3F))
        )
    elif code_point <= 0xFFFF:
        return bytes(
            (
                0xE0 | (code_point >> 12),
                0x80 | ((code_point >> 6) & 0x3F),
                0x80 | (code_point & 0x3F),
            )
        )
    else:
        return bytes(
            (
                0xF0 | (code_point >> 18),
                0x80 | ((code_point >> 12) & 0x3F),
                0x80 | ((code_point >> 6) & 0x3F),
                0x80 | (code_point & 0x3F),
            )
        )


def escape(text: str) -> str:
    """
    Renders text as a quoted JSON string literal.

    Control characters without a short escape become ``\\u00xx``; all other
    characters, including non-ASCII text, pass through unchanged.
    """
    result = ['"']
    for char in text:
        short = _ESCAPES.get(char)
        if short is not None:
            result.append(short)
        elif ord(char) < _CONTROL_LIMIT:
            result.append(f"\\u{ord(char):04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _read_hex4(inner: str, i: int, content: str) -> int:
    """Reads the four hex digits following ``\\u`` at ``inner[i]``."""
    hex_digits = inner[i + 2 : i + 6]
    if len(hex_digits) < 4:
        raise JSONDecodeError(
            "Incomplete unicode escape sequence", content, i + 1
        )
    if not all(c in _HEX_DIGITS for c in hex_digits):
        raise JSONDecodeError(
            f"Invalid unicode escape sequence: \\u{hex_digits}",
            content,
            i + 1,
        )
    return int(hex_digits, 16)


def _process_unicode_escape(
    inner: str, i: int, content: str
) -> tuple[str, int]:
    """
    Decodes a ``\\uXXXX`` escape, joining UTF-16 surrogate pairs.

    A high surrogate must be followed immediately by a low surrogate escape;
    any unpaired surrogate is rejected because it has no UTF-8 encoding.
    """
    code_point = _read_hex4(inner, i, content)

    if code_point < _SURROGATE_LOW or code_point > _SURROGATE_HIGH:
        return chr(code_point), i + 6

    if code_point <= _HIGH_SURROGATE_END and inner[i + 6 : i + 8] == "\\u":
        low = _read_hex4(inner, i + 6, content)
        if _HIGH_SURROGATE_END < low <= _SURROGATE_HIGH:
            combined = (
                0x10000
                + ((code_point - _SURROGATE_LOW) << 10)
                + (low - (_HIGH_SURROGATE_END + 1))
            )
            return chr(combined), i + 12

    raise JSONDecodeError(
        f"Unpaired surrogate in unicode escape: \\u{code_point:04x}",
        content,
        i + 1,
        kind=ErrorKind.INVALID_UTF8,
    )


def _process_escape_sequence(
    inner: str, i: int, content: str
) -> tuple[str, int]:
    """Decodes one escape sequence; returns the text and the next index."""
    if i + 1 >= len(inner):
        raise JSONDecodeError("Invalid escape sequence", content, i + 1)

    next_char = inner[i + 1]
    if next_char in _UNESCAPES:
        return _UNESCAPES[next_char], i + 2
    elif next_char == "u":
        return _process_unicode_escape(inner, i, content)
    else:
        raise JSONDecodeError(
            f"Invalid escape sequence: \\{next_char}", content, i + 1
        )


def unescape(quoted: str) -> str:
    """
    Converts a quoted JSON string literal back into text.

    Positions reported by the raised JSONDecodeError are offsets into
    ``quoted``.
    """
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        raise JSONDecodeError("Invalid JSON string format", quoted, 0)

    inner = quoted[1:-1]
    if "\\" not in inner:
        return inner

    result = []
    i = 0
    while i < len(inner):
        if inner[i] == "\\":
            char, i = _process_escape_sequence(inner, i, quoted)
            result.append(char)
        else:
            result.append(inner[i])
            i += 1

    return "".join(result)
