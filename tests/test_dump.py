"""
JSON encoding functionality tests.

Validates compact and pretty serialization, number and string rendering,
streaming to sinks, and the dump/dumps conveniences over plain Python data.
"""

import math
from io import StringIO
from typing import Any

import pytest

import jsontree
from jsontree import JsonValue


def test_dump() -> None:
    """
    Validates dump to file-like object.
    """
    sio = StringIO()
    jsontree.dump({}, sio)
    assert sio.getvalue() == "{}"


def test_dumps() -> None:
    """
    Validates dumps to string.
    """
    assert jsontree.dumps({}) == "{}"
    assert jsontree.dumps([1, "a", None, True]) == '[1, "a", null, true]'
    assert jsontree.dumps(JsonValue.null()) == "null"


def test_compact_serialization(sample_document: JsonValue) -> None:
    """
    Validates compact output separators and member order.
    """
    assert jsontree.serialize(sample_document) == (
        '{"name": "John", "age": 30, "active": true, "spouse": null,'
        ' "tags": ["admin", 1.5]}'
    )


def test_pretty_serialization(sample_document: JsonValue) -> None:
    """
    Validates pretty output puts each member on its own indented line.
    """
    expected = "\n".join(
        [
            "{",
            '  "name": "John",',
            '  "age": 30,',
            '  "active": true,',
            '  "spouse": null,',
            '  "tags": [',
            '    "admin",',
            "    1.5",
            "  ]",
            "}",
        ]
    )
    assert jsontree.serialize(sample_document, pretty=True) == expected


def test_pretty_custom_indent() -> None:
    """
    Validates the indent width applies per nesting level.
    """
    value = jsontree.loads('{"a": [1]}')
    assert jsontree.dumps(value, pretty=True, indent=4) == (
        '{\n    "a": [\n        1\n    ]\n}'
    )
    assert jsontree.dumps(value, pretty=True, indent=0) == (
        '{\n"a": [\n1\n]\n}'
    )


@pytest.mark.parametrize("pretty", [False, True])
def test_empty_containers(pretty: bool) -> None:
    """
    Validates empty containers render on one line in both modes.
    """
    assert jsontree.serialize(JsonValue.array(), pretty=pretty) == "[]"
    assert jsontree.serialize(JsonValue.object(), pretty=pretty) == "{}"

    nested = jsontree.loads('{"a": [], "b": {}}')
    expected = '{\n  "a": [],\n  "b": {}\n}' if pretty else (
        '{"a": [], "b": {}}'
    )
    assert jsontree.serialize(nested, pretty=pretty) == expected


@pytest.mark.parametrize(
    "number,expected",
    [
        (0, "0"),
        (30, "30"),
        (-17, "-17"),
        (3.0, "3"),
        (-0.0, "0"),
        (1.5, "1.5"),
        (0.1, "0.1"),
        (3.14159, "3.14159"),
        (1e-7, "1e-07"),
        (2.0**53, "9007199254740992"),
        (1e20, "1e+20"),
    ],
)
def test_number_rendering(number: float, expected: str) -> None:
    """
    Validates integral doubles print without a fraction.
    """
    assert jsontree.serialize(JsonValue.number(number)) == expected


@pytest.mark.parametrize("number", [math.nan, math.inf, -math.inf])
def test_non_finite_numbers_rejected(number: float) -> None:
    """
    Validates NaN and infinities cannot be serialized.
    """
    value = JsonValue.array([JsonValue.number(number)])

    with pytest.raises(jsontree.SerializationError) as exc_info:
        jsontree.serialize(value)
    assert exc_info.value.kind is jsontree.ErrorKind.SERIALIZATION_ERROR


@pytest.mark.parametrize(
    "text,expected",
    [
        ("plain", '"plain"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
        ("\b\f\n\r\t", '"\\b\\f\\n\\r\\t"'),
        ("\x00\x1f", '"\\u0000\\u001f"'),
        ("/", '"/"'),
        ("Zürich €", '"Zürich €"'),
    ],
)
def test_string_escaping(text: str, expected: str) -> None:
    """
    Validates string values are escaped and non-ASCII passes through.
    """
    assert jsontree.serialize(JsonValue.string(text)) == expected


def test_escaped_keys() -> None:
    """
    Validates object keys use the same escaping as values.
    """
    value = JsonValue.object({'a"b': JsonValue.null()})
    assert jsontree.serialize(value) == '{"a\\"b": null}'


def test_serialize_to_streams_chunks(sample_document: JsonValue) -> None:
    """
    Validates streaming to a callable or file produces the same text.
    """
    chunks: list[str] = []
    jsontree.serialize_to(sample_document, chunks.append)
    assert len(chunks) > 1
    assert "".join(chunks) == jsontree.serialize(sample_document)

    sio = StringIO()
    jsontree.serialize_to(sample_document, sio, pretty=True)
    assert sio.getvalue() == jsontree.serialize(sample_document, pretty=True)


def test_serialize_argument_validation() -> None:
    """
    Validates invalid sinks, values and options are rejected.
    """
    with pytest.raises(jsontree.InvalidArgumentError):
        sink: Any = object()
        jsontree.serialize_to(JsonValue.null(), sink)

    with pytest.raises(jsontree.InvalidArgumentError):
        jsontree.serialize({"a": 1})  # type: ignore[arg-type]

    with pytest.raises(jsontree.InvalidArgumentError):
        jsontree.serialize(JsonValue.null(), indent=-1)

    with pytest.raises(jsontree.InvalidArgumentError):
        jsontree.dump({}, "not a file")  # type: ignore[arg-type]

    with pytest.raises(TypeError):
        jsontree.dumps({}, sort_keys=True)


def test_dumps_rejects_unsupported_python_data() -> None:
    """
    Validates plain Python data without a JSON counterpart is rejected.
    """
    with pytest.raises(jsontree.InvalidArgumentError, match="keys must be"):
        jsontree.dumps({1: "a"})

    with pytest.raises(
        jsontree.InvalidArgumentError, match="Object of type set"
    ):
        jsontree.dumps({"a": {1, 2}})


def test_to_string_matches_compact_output(
    sample_document: JsonValue,
) -> None:
    """
    Validates the debugging rendering agrees with compact serialization.
    """
    assert sample_document.to_string() == jsontree.serialize(sample_document)
    assert str(sample_document) == jsontree.serialize(sample_document)
