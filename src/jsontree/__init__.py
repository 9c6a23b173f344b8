"""
In-memory JSON document model with a strict parser and serializer.

Parse text into a tree of ``JsonValue`` nodes, inspect and mutate it through
typed accessors, and render it back to compact or pretty-printed text:

    >>> result = jsontree.parse('{"name": "John", "age": 30}')
    >>> doc = result.value()
    >>> doc.get("age").number_value()
    30.0
    >>> jsontree.serialize(doc)
    '{"name": "John", "age": 30}'

``parse`` and ``parse_with_error`` never raise for bad input; they return a
``Result``. ``loads``/``load`` and the value accessors raise subclasses of
``JsonError`` instead.
"""

import logging

from ._errors import ErrorKind
from ._errors import IndexOutOfBoundsError
from ._errors import InvalidArgumentError
from ._errors import InvalidTypeError
from ._errors import InvalidUTF8Error
from ._errors import JsonError
from ._errors import JSONDecodeError
from ._errors import KeyNotFoundError
from ._errors import SerializationError
from ._errors import error_message
from ._errors import exception_for
from ._parser import JsonParser
from ._parser import ParseConfig
from ._parser import load
from ._parser import loads
from ._parser import parse
from ._parser import parse_with_error
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import format_hot_path_report
from ._profile import get_hot_path_stats
from ._result import Result
from ._serializer import EncodeConfig
from ._serializer import dump
from ._serializer import dumps
from ._serializer import serialize
from ._serializer import serialize_to
from ._utf8 import encode_code_point
from ._utf8 import escape
from ._utf8 import find_invalid_utf8
from ._utf8 import unescape
from ._utf8 import validate_utf8
from ._value import NUMBER_TOLERANCE
from ._value import JsonType
from ._value import JsonValue

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NUMBER_TOLERANCE",
    "EncodeConfig",
    "ErrorKind",
    "HotPathStats",
    "IndexOutOfBoundsError",
    "InvalidArgumentError",
    "InvalidTypeError",
    "InvalidUTF8Error",
    "JSONDecodeError",
    "JsonError",
    "JsonParser",
    "JsonType",
    "JsonValue",
    "KeyNotFoundError",
    "ParseConfig",
    "Result",
    "SerializationError",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "encode_code_point",
    "error_message",
    "escape",
    "exception_for",
    "find_invalid_utf8",
    "format_hot_path_report",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
    "parse_with_error",
    "serialize",
    "serialize_to",
    "unescape",
    "validate_utf8",
]
