"""
Result and error kind tests.
"""

import pytest

import jsontree
from jsontree import ErrorKind
from jsontree import Result


def test_ok_result() -> None:
    """
    Validates a successful result exposes its value.
    """
    result = Result.ok(5)

    assert result
    assert result.is_ok
    assert result.value() == 5
    assert result.value_or(0) == 5
    assert result.error() is ErrorKind.SUCCESS
    assert repr(result) == "Result.ok(5)"


def test_failed_result() -> None:
    """
    Validates a failed result exposes its kind and details.
    """
    result: Result[int] = Result.fail(
        ErrorKind.KEY_NOT_FOUND, "no such key", 3
    )

    assert not result
    assert not result.is_ok
    assert result.error() is ErrorKind.KEY_NOT_FOUND
    assert result.value_or(7) == 7
    assert result.message == "no such key"
    assert result.position == 3

    with pytest.raises(jsontree.KeyNotFoundError, match="no such key"):
        result.value()


def test_result_holds_one_alternative() -> None:
    """
    Validates a result cannot fail with SUCCESS or hold both alternatives.
    """
    with pytest.raises(ValueError):
        Result.fail(ErrorKind.SUCCESS)

    with pytest.raises(ValueError):
        Result(value=1, error=ErrorKind.UNKNOWN_ERROR)

    with pytest.raises(ValueError):
        Result.ok(1).to_exception()


def test_ok_result_may_hold_none() -> None:
    """
    Validates None is a legitimate successful value.
    """
    result: Result[None] = Result.ok(None)

    assert result
    assert result.value() is None


@pytest.mark.parametrize(
    "kind,exc_class",
    [
        (ErrorKind.INVALID_UTF8, jsontree.JSONDecodeError),
        (ErrorKind.SYNTAX_ERROR, jsontree.JSONDecodeError),
        (ErrorKind.PARSE_ERROR, jsontree.JSONDecodeError),
        (ErrorKind.INVALID_TYPE, jsontree.InvalidTypeError),
        (ErrorKind.INDEX_OUT_OF_BOUNDS, jsontree.IndexOutOfBoundsError),
        (ErrorKind.INVALID_ARGUMENT, jsontree.InvalidArgumentError),
        (ErrorKind.SERIALIZATION_ERROR, jsontree.SerializationError),
        (ErrorKind.MEMORY_ALLOCATION_FAILED, jsontree.JsonError),
        (ErrorKind.NOT_IMPLEMENTED, jsontree.JsonError),
    ],
)
def test_to_exception_preserves_kind(
    kind: ErrorKind, exc_class: type[jsontree.JsonError]
) -> None:
    """
    Validates failed results raise the exception class for their kind.
    """
    exc = Result.fail(kind).to_exception()

    assert type(exc) is exc_class
    assert exc.kind is kind
    assert exc.msg == kind.message


def test_map_and_and_then() -> None:
    """
    Validates chaining applies to values and passes failures through.
    """
    ok: Result[int] = Result.ok(2)
    failed: Result[int] = Result.fail(ErrorKind.PARSE_ERROR, "boom", 9)

    assert ok.map(lambda x: x * 10).value() == 20
    assert ok.and_then(lambda x: Result.ok(str(x))).value() == "2"
    assert not ok.and_then(lambda x: Result.fail(ErrorKind.INVALID_TYPE))

    mapped = failed.map(lambda x: x * 10)
    assert mapped.error() is ErrorKind.PARSE_ERROR
    assert mapped.message == "boom"
    assert mapped.position == 9

    chained = failed.and_then(lambda x: Result.ok(x))
    assert chained.error() is ErrorKind.PARSE_ERROR


def test_result_equality() -> None:
    """
    Validates results compare by outcome.
    """
    assert Result.ok(1) == Result.ok(1)
    assert Result.ok(1) != Result.ok(2)
    assert Result.fail(ErrorKind.SYNTAX_ERROR) == Result.fail(
        ErrorKind.SYNTAX_ERROR, "details differ"
    )
    assert Result.ok(None) != Result.fail(ErrorKind.UNKNOWN_ERROR)


def test_parse_results_chain() -> None:
    """
    Validates parse results compose with and_then.
    """
    result = jsontree.parse('{"n": 4}').map(
        lambda doc: doc.get("n").number_value()
    )
    assert result.value() == 4.0
