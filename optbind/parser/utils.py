# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value conversion for Optbind argument binding.

This module converts raw string tokens into the typed values a `Specification`
declares. Conversion is culture aware: the culture is a locale identifier passed
explicitly to every call (`"en_US"`, `"de-DE"`), or `None` for the invariant
culture, which uses Python's own lexical rules.

Functions:
- resolve_locale: Parse and cache a culture identifier as a Babel `Locale`.
- coerce_bool: Convert a string to a boolean (strict truthy/falsy set).
- coerce_enum: Convert a name (case-insensitive) or zero-based ordinal to an Enum member.
- coerce_number: Convert a string to `int`, `float` or `Decimal` for a culture.
- is_day_first: Whether a culture writes the day before the month.
- coerce_datetime: Parse a date/time, day-first when the culture writes dates that way.
- coerce_value: General-purpose conversion to a target type (unions, literals, enums, ...).
- split_items: Split sequence tokens on a separator character.
- convert_values: Convert the raw tokens of one specification according to its kind.

Every failure raises `ConversionError`, which the instance binder records as a
`BadFormatConversionError` for the option in question.
"""
from __future__ import annotations

import re
import types
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import EnumMeta
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Sequence, Union, get_args, get_origin

from babel import Locale, UnknownLocaleError
from babel.numbers import NumberFormatError, parse_decimal
from dateutil import parser as date_parser

from optbind.exceptions import ConversionError
from optbind.logger import logger
from optbind.parser.specification import Specification
from optbind.parser.target_kind import TargetKind

_ORDINAL = re.compile(r"[+-]?[0-9]+", re.ASCII)
TRUE_STRINGS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"false", "f", "0", "no", "n", "off"})


@lru_cache(maxsize=32)
def resolve_locale(culture: str) -> Locale:
    """
    Parse a culture identifier such as `en_US` or `de-DE`.

    Raises:
        ValueError: If the identifier is not a known locale.
    """
    try:
        return Locale.parse(culture.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as error:
        raise ValueError(f"Unknown culture: '{culture}'") from error


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Unlike a plain `bool(value)`, anything outside the known truthy/falsy
    spellings is rejected.

    Raises:
        ConversionError: If the string is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in TRUE_STRINGS:
        return True
    if normalized in FALSE_STRINGS:
        return False
    raise ConversionError(f"'{value}' is not a boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a symbolic name or a zero-based ordinal to an Enum member.

    Names are matched exactly first, then case-insensitively. A decimal string is
    read as an ordinal into the declaration order of the members.

    Raises:
        ConversionError: If the value names no member or the ordinal is out of range.
    """
    if isinstance(value, enum_type):
        return value

    text = str(value).strip()
    members = list(enum_type)
    try:
        return enum_type[text]
    except KeyError:
        pass

    folded = text.casefold()
    for member in members:
        if member.name.casefold() == folded:
            return member

    if _ORDINAL.fullmatch(text):
        ordinal = int(text)
        if 0 <= ordinal < len(members):
            return members[ordinal]
        raise ConversionError(
            f"Ordinal {ordinal} is out of range for {enum_type.__name__} (0-{len(members) - 1})"
        )

    names = ", ".join(member.name for member in members)
    raise ConversionError(f"'{value}' should be one of {{{names}}}")


def coerce_number(value: str, target_type: type, culture: str | None = None) -> Any:
    """
    Convert a string to `int`, `float` or `Decimal`.

    With a culture, group and decimal symbols follow that locale (Babel) and
    misplaced group symbols are rejected; integers must have no fractional part.
    Without one, Python's literal rules apply.

    Raises:
        ConversionError: If the string is not a number in the given culture.
    """
    text = value.strip()
    try:
        if culture is None:
            if target_type is int:
                return int(text)
            if target_type is Decimal:
                return Decimal(text)
            return float(text)
        number = parse_decimal(text, locale=resolve_locale(culture), strict=True)
        if target_type is int:
            if number != number.to_integral_value():
                raise ValueError(f"'{value}' is not a whole number")
            return int(number)
        return number if target_type is Decimal else float(number)
    except (NumberFormatError, InvalidOperation, ValueError, OverflowError) as error:
        raise ConversionError(
            f"'{value}' is not a valid {target_type.__name__}"
            + (f" for culture '{culture}'" if culture else "")
        ) from error


def is_day_first(culture: str | None) -> bool:
    """Return True if the culture writes the day before the month in short dates."""
    if culture is None:
        return False
    pattern = resolve_locale(culture).date_formats["short"].pattern
    day, month = pattern.find("d"), pattern.find("M")
    return 0 <= day < month


def coerce_datetime(value: str, culture: str | None = None) -> datetime:
    """Parse a date/time string; day-first when the culture's short date pattern is."""
    try:
        return date_parser.parse(value, dayfirst=is_day_first(culture))
    except (ValueError, OverflowError) as error:
        raise ConversionError(f"'{value}' could not be parsed as a datetime") from error


def coerce_value(value: str, target_type: Any, culture: str | None = None) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles typing constructs such as Union and Literal as well as Enum, bool,
    numbers, datetime and Path. Any other callable type is invoked with the string.

    Args:
        value (str): The input string to convert.
        target_type (Any): The desired type.
        culture (str | None): Locale identifier, or None for the invariant culture.

    Returns:
        Any: The converted value.

    Raises:
        ConversionError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if target_type is Any or target_type is str:
        return value

    if origin is Literal:
        if value not in [str(arg) for arg in args]:
            raise ConversionError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return next(arg for arg in args if str(arg) == value)

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg, culture)
            except ConversionError:
                continue
        raise ConversionError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type in (int, float, Decimal):
        return coerce_number(value, target_type, culture)

    if target_type is datetime:
        return coerce_datetime(value, culture)

    if target_type is date:
        return coerce_datetime(value, culture).date()

    if target_type is Path:
        return Path(value)

    if not callable(target_type):
        raise ConversionError(f"Cannot convert to non-callable type {target_type!r}")

    try:
        return target_type(value)
    except (ValueError, TypeError, ArithmeticError) as error:
        raise ConversionError(
            f"'{value}' could not be converted to {getattr(target_type, '__name__', target_type)}"
        ) from error


def split_items(values: Sequence[str], separator: str | None) -> list[str]:
    """Split every raw token on `separator`; tokens are kept whole without one."""
    if not separator:
        return list(values)
    items: list[str] = []
    for value in values:
        items.extend(value.split(separator))
    return items


def convert_values(
    values: Sequence[str], spec: Specification, culture: str | None = None
) -> Any:
    """
    Convert the raw tokens received for `spec`.

    - SWITCH: presence alone yields True.
    - SCALAR / NULLABLE: the single token is converted to `spec.type`.
    - SEQUENCE: every item (after separator splitting) must convert, otherwise the
      whole sequence fails.

    Raises:
        ConversionError: If any token fails to convert.
    """
    if spec.kind is TargetKind.SWITCH:
        return True
    if spec.kind is TargetKind.SEQUENCE:
        return [coerce_value(item, spec.type, culture) for item in values]
    if len(values) != 1:
        raise ConversionError(f"Expected exactly one value for '{spec.dest}', got {len(values)}")
    try:
        return coerce_value(values[0], spec.type, culture)
    except ConversionError as error:
        logger.debug("Conversion failed for '%s': %s", spec.dest, error)
        raise
