"""Tagged success-or-error outcome returned by the non-raising parse API."""

from collections.abc import Callable
from typing import Any
from typing import Generic
from typing import TypeVar

from ._errors import ErrorKind
from ._errors import JsonError
from ._errors import JSONDecodeError
from ._errors import Position
from ._errors import make_error

_DECODE_KINDS = frozenset(
    (ErrorKind.SYNTAX_ERROR, ErrorKind.PARSE_ERROR, ErrorKind.INVALID_UTF8)
)

T = TypeVar("T")
U = TypeVar("U")


class Result(Generic[T]):
    """
    Holds either a value or a single error kind, never both.

    Failed results may also carry a descriptive message and the byte offset
    at which the failure was detected.
    """

    __slots__ = ("_error", "_value", "message", "position")

    def __init__(
        self,
        value: T | None = None,
        error: ErrorKind | None = None,
        message: str | None = None,
        position: Position | None = None,
    ) -> None:
        if error is ErrorKind.SUCCESS:
            raise ValueError("a failed result needs a failure kind")
        if error is not None and value is not None:
            raise ValueError("a result holds either a value or an error")
        self._value = value
        self._error = error
        self.message = message
        self.position = position

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        message: str | None = None,
        position: Position | None = None,
    ) -> "Result[T]":
        return cls(error=kind, message=message, position=position)

    @property
    def is_ok(self) -> bool:
        return self._error is None

    def __bool__(self) -> bool:
        return self._error is None

    def value(self) -> T:
        """Returns the held value, or raises the exception for the failure."""
        if self._error is None:
            return self._value  # type: ignore[return-value]
        raise self.to_exception()

    def value_or(self, default: T) -> T:
        if self._error is None:
            return self._value  # type: ignore[return-value]
        return default

    def error(self) -> ErrorKind:
        """Returns the failure kind, or ``ErrorKind.SUCCESS`` for a value."""
        return ErrorKind.SUCCESS if self._error is None else self._error

    def to_exception(self) -> JsonError:
        """
        Builds the exception describing this failure.

        Failures of document decoding (syntax, parse and UTF-8 errors) raise
        ``JSONDecodeError`` carrying the kind, as ``loads`` does.
        """
        if self._error is None:
            raise ValueError("result holds a value, not an error")
        msg = self.message or self._error.message
        if self._error in _DECODE_KINDS:
            return JSONDecodeError(
                msg, kind=self._error, byte_offset=self.position
            )
        return make_error(self._error, msg)

    def map(self, func: Callable[[T], U]) -> "Result[U]":
        """Applies ``func`` to a held value; failures pass through."""
        if self._error is None:
            return Result(value=func(self._value))  # type: ignore[arg-type]
        return Result(
            error=self._error, message=self.message, position=self.position
        )

    def and_then(self, func: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chains a result-returning step; failures pass through unchanged."""
        if self._error is None:
            return func(self._value)  # type: ignore[arg-type]
        return Result(
            error=self._error, message=self.message, position=self.position
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._error == other._error and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._error is None:
            return f"Result.ok({self._value!r})"
        return f"Result.fail({self._error.name}, {self.message!r})"
