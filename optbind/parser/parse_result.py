# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParseResult`, the terminal outcome of one parse call.

A result is either PARSED (the bound value, no errors) or NOT_PARSED (the
partially bound value plus the ordered errors). Parsing never raises for bad
input; callers inspect the result instead.

Example:
    result = parser.parse_arguments(model, sys.argv[1:])
    result.with_parsed(run).with_not_parsed(render_errors)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

from optbind.errors import ErrorType, ParsingError, only_meaningful


class ParseResultType(Enum):
    PARSED = "parsed"
    NOT_PARSED = "not_parsed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParseResult:
    """
    The outcome of a parse call.

    Attributes:
        value (Any): Bound instance; partial when the parse failed.
        errors (tuple[ParsingError, ...]): Errors in first-encountered order.
        verb (str | None): Verb selected by verb dispatch, if any.
    """

    value: Any
    errors: tuple[ParsingError, ...] = ()
    verb: str | None = None

    @classmethod
    def success(cls, value: Any, verb: str | None = None) -> ParseResult:
        return cls(value, (), verb)

    @classmethod
    def failure(
        cls, value: Any, errors: Iterable[ParsingError], verb: str | None = None
    ) -> ParseResult:
        errors = tuple(errors)
        if not errors:
            raise ValueError("A failed ParseResult needs at least one error")
        return cls(value, errors, verb)

    @property
    def tag(self) -> ParseResultType:
        return ParseResultType.NOT_PARSED if self.errors else ParseResultType.PARSED

    @property
    def succeeded(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def error_types(self) -> list[ErrorType]:
        return [error.tag for error in self.errors]

    @property
    def meaningful_errors(self) -> list[ParsingError]:
        """Errors caused by bad input, excluding help/version requests."""
        return only_meaningful(self.errors)

    def with_parsed(self, action: Callable[[Any], Any]) -> ParseResult:
        """Invoke `action` with the bound value if the parse succeeded."""
        if self.succeeded:
            action(self.value)
        return self

    def with_not_parsed(
        self, action: Callable[[tuple[ParsingError, ...]], Any]
    ) -> ParseResult:
        """Invoke `action` with the errors if the parse failed."""
        if self.failed:
            action(self.errors)
        return self

    def map_result(
        self,
        parsed: Callable[[Any], Any],
        not_parsed: Callable[[tuple[ParsingError, ...]], Any],
    ) -> Any:
        """Return `parsed(value)` on success, `not_parsed(errors)` otherwise."""
        if self.succeeded:
            return parsed(self.value)
        return not_parsed(self.errors)

    def __bool__(self) -> bool:
        return self.succeeded
