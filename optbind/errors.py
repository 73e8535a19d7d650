# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `ParsingError` taxonomy reported through `ParseResult.errors`.

Parsing errors are plain immutable values, not exceptions. The instance binder
collects them in first-encountered order and keeps scanning, so a single parse
call reports every problem in the input at once.

Each error carries enough structured data (a `NameInfo` or the offending token)
for a renderer to produce a one-line message without re-parsing strings.

Error Types:
- Token errors: `BadFormatTokenError`, `UnknownOptionError`, `BadVerbSelectedError`
- Named errors: `MissingValueOptionError`, `BadFormatConversionError`,
  `MissingRequiredOptionError`, `SequenceOutOfRangeError`, `MutuallyExclusiveSetError`
- Requests: `HelpRequestedError`, `HelpVerbRequestedError`, `VersionRequestedError`,
  `NoVerbSelectedError`
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from optbind.parser.specification import Specification


class ErrorType(Enum):
    """Discriminator tag of every `ParsingError` subclass."""

    BAD_FORMAT_TOKEN = "bad_format_token"
    MISSING_VALUE_OPTION = "missing_value_option"
    UNKNOWN_OPTION = "unknown_option"
    MISSING_REQUIRED_OPTION = "missing_required_option"
    MUTUALLY_EXCLUSIVE_SET = "mutually_exclusive_set"
    BAD_FORMAT_CONVERSION = "bad_format_conversion"
    SEQUENCE_OUT_OF_RANGE = "sequence_out_of_range"
    NO_VERB_SELECTED = "no_verb_selected"
    BAD_VERB_SELECTED = "bad_verb_selected"
    HELP_REQUESTED = "help_requested"
    HELP_VERB_REQUESTED = "help_verb_requested"
    VERSION_REQUESTED = "version_requested"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NameInfo:
    """Short and long name of the option (or destination of the value) in error."""

    short_name: str = ""
    long_name: str = ""

    @property
    def name_text(self) -> str:
        """Return the names formatted as `-s/--long`, `-s` or `--long`."""
        if self.short_name and self.long_name:
            return f"-{self.short_name}/--{self.long_name}"
        if self.short_name:
            return f"-{self.short_name}"
        if self.long_name:
            return f"--{self.long_name}"
        return ""

    @classmethod
    def from_specification(cls, spec: Specification) -> NameInfo:
        if spec.positional:
            return cls("", spec.dest)
        return cls(spec.short_name or "", spec.long_name or "")

    def __str__(self) -> str:
        return self.name_text


EMPTY_NAME = NameInfo()


@dataclass(frozen=True)
class ParsingError:
    """Base type of all parsing errors."""

    tag: ClassVar[ErrorType]
    stops_processing: ClassVar[bool] = False


@dataclass(frozen=True)
class TokenError(ParsingError):
    """Base type of errors about a raw token."""

    token: str


@dataclass(frozen=True)
class NamedError(ParsingError):
    """Base type of errors about a known option or value."""

    name_info: NameInfo


@dataclass(frozen=True)
class BadFormatTokenError(TokenError):
    """A token is malformed, e.g. `--=value`."""

    tag: ClassVar[ErrorType] = ErrorType.BAD_FORMAT_TOKEN


@dataclass(frozen=True)
class UnknownOptionError(TokenError):
    """A token names an option that is not declared."""

    tag: ClassVar[ErrorType] = ErrorType.UNKNOWN_OPTION


@dataclass(frozen=True)
class MissingValueOptionError(NamedError):
    """A value-bearing option was named but no value was available."""

    tag: ClassVar[ErrorType] = ErrorType.MISSING_VALUE_OPTION


@dataclass(frozen=True)
class BadFormatConversionError(NamedError):
    """A value was available but could not be converted to the target type."""

    tag: ClassVar[ErrorType] = ErrorType.BAD_FORMAT_CONVERSION


@dataclass(frozen=True)
class MissingRequiredOptionError(NamedError):
    """A required option or value never received a legal value."""

    tag: ClassVar[ErrorType] = ErrorType.MISSING_REQUIRED_OPTION


@dataclass(frozen=True)
class SequenceOutOfRangeError(NamedError):
    """A sequence received fewer than `min_items` or more than `max_items` values."""

    tag: ClassVar[ErrorType] = ErrorType.SEQUENCE_OUT_OF_RANGE


@dataclass(frozen=True)
class MutuallyExclusiveSetError(NamedError):
    """An option was defined together with another option of the same set."""

    tag: ClassVar[ErrorType] = ErrorType.MUTUALLY_EXCLUSIVE_SET
    set_name: str = ""


@dataclass(frozen=True)
class NoVerbSelectedError(ParsingError):
    """No verb was given to a verb-dispatching parser."""

    tag: ClassVar[ErrorType] = ErrorType.NO_VERB_SELECTED
    stops_processing: ClassVar[bool] = True


@dataclass(frozen=True)
class BadVerbSelectedError(TokenError):
    """The first token does not match any declared verb."""

    tag: ClassVar[ErrorType] = ErrorType.BAD_VERB_SELECTED
    stops_processing: ClassVar[bool] = True


@dataclass(frozen=True)
class HelpRequestedError(ParsingError):
    """`--help` was given."""

    tag: ClassVar[ErrorType] = ErrorType.HELP_REQUESTED
    stops_processing: ClassVar[bool] = True


@dataclass(frozen=True)
class HelpVerbRequestedError(ParsingError):
    """`help [verb]` was given to a verb-dispatching parser."""

    tag: ClassVar[ErrorType] = ErrorType.HELP_VERB_REQUESTED
    stops_processing: ClassVar[bool] = True
    verb: str | None = None
    matched: bool = False


@dataclass(frozen=True)
class VersionRequestedError(ParsingError):
    """`--version` was given."""

    tag: ClassVar[ErrorType] = ErrorType.VERSION_REQUESTED
    stops_processing: ClassVar[bool] = True


def only_meaningful(errors: list[ParsingError] | tuple[ParsingError, ...]) -> list[ParsingError]:
    """Return the errors that describe bad input rather than a help or version request."""
    return [error for error in errors if not error.stops_processing]
