# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Formats a bound instance back into the command line that produces it.

The arguments are laid out the way `InstanceBinder` reads them:

- the verb of the model, if any, comes first;
- active short switches form one `-abc` cluster when `group_switches` is set;
- options follow in declaration order, switches as a bare name;
- positional values come last in position order, after a `--` sentinel when
  a value looks like an option or a preceding sequence would swallow them.

Values that are empty are omitted: `None`, an unset switch, an empty string,
an empty sequence, or a value equal to the specification's declared default.

Example:
    format_command_line(model, {"verbose": True, "int_seq": [1, 2, 3]})
    → "-v --int-seq 1 2 3"
"""
from __future__ import annotations

import shlex
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from babel.numbers import get_decimal_symbol

from optbind.logger import logger
from optbind.parser.specification import Specification, SpecificationModel
from optbind.parser.target_kind import TargetKind
from optbind.parser.tokenizer import DASH_DASH, is_input_value
from optbind.parser.utils import is_day_first, resolve_locale
from optbind.settings import FormatSettings


def format_value(value: Any, culture: str | None = None) -> str:
    """
    Render one converted value as text the value converter reads back.

    Enum members are written by name, booleans as `true`/`false`, and dates
    day-first when the culture writes them that way.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        text = format(Decimal(str(value)), "f")
        if culture is None:
            return text
        return text.replace(".", get_decimal_symbol(resolve_locale(culture)))
    if isinstance(value, (date, datetime)):
        pattern = "%d/%m/%Y" if is_day_first(culture) else "%Y-%m-%d"
        if isinstance(value, datetime):
            pattern += " %H:%M:%S.%f" if value.microsecond else " %H:%M:%S"
        return value.strftime(pattern)
    return str(value)


def _read(instance: Any, spec: Specification) -> Any:
    if isinstance(instance, Mapping):
        return instance.get(spec.dest)
    return getattr(instance, spec.dest, None)


def _is_empty(spec: Specification, value: Any) -> bool:
    if value is None or (spec.kind is TargetKind.SWITCH and not value):
        return True
    if isinstance(value, str) and not value:
        return True
    if spec.kind is TargetKind.SEQUENCE and not list(value):
        return True
    return spec.default is not None and value == spec.default


def _needs_inline(text: str) -> bool:
    return text == DASH_DASH or not is_input_value(text)


class _ArgumentWriter:
    """Collects the arguments of one `format_arguments()` call."""

    def __init__(self, settings: FormatSettings, culture: str | None) -> None:
        self.settings = settings
        self.culture = culture
        self.arguments: list[str] = []
        self.greedy_tail = False

    def texts(self, spec: Specification, value: Any) -> list[str]:
        if spec.kind is not TargetKind.SEQUENCE:
            return [format_value(value, self.culture)]
        items = [format_value(item, self.culture) for item in value]
        if spec.separator:
            return [spec.separator.join(items)]
        return items

    def option(self, spec: Specification, value: Any) -> None:
        use_short = spec.short_name is not None and (
            self.settings.prefer_short_name or spec.long_name is None
        )
        if spec.kind is TargetKind.SWITCH:
            self.arguments.append(f"-{spec.short_name}" if use_short else f"--{spec.long_name}")
            self.greedy_tail = False
            return

        first, *rest = self.texts(spec, value)
        if use_short:
            if _needs_inline(first):
                self.arguments.append(f"-{spec.short_name}{first}")
            else:
                self.arguments.extend([f"-{spec.short_name}", first])
        elif self.settings.use_equal_token or _needs_inline(first):
            self.arguments.append(f"--{spec.long_name}={first}")
        else:
            self.arguments.extend([f"--{spec.long_name}", first])
        if any(_needs_inline(text) for text in rest):
            logger.debug("Items of '%s' after the first cannot start with '-': %s", spec.dest, rest)
        self.arguments.extend(rest)

        self.greedy_tail = (
            spec.kind is TargetKind.SEQUENCE
            and not spec.separator
            and (spec.max_items is None or len(value) < spec.max_items)
        )


def format_arguments(
    model: SpecificationModel,
    instance: Any,
    settings: FormatSettings | None = None,
    *,
    enable_dash_dash: bool = True,
    culture: str | None = None,
) -> list[str]:
    """
    Return the argument vector that binds `instance` through `model`.

    Args:
        model (SpecificationModel): The model the instance was bound with.
        instance (Any): A dict keyed by destination, or an object with one
            attribute per destination.
        settings (FormatSettings | None): Naming, grouping and `=` preferences.
        enable_dash_dash (bool): Whether the parser reading the result honours `--`.
        culture (str | None): Culture used for numbers and dates, None for invariant.

    Returns:
        list[str]: The arguments, ready for `CommandLineParser.parse_arguments()`.
    """
    settings = settings or FormatSettings()
    writer = _ArgumentWriter(settings, culture)
    present = [
        (spec, _read(instance, spec))
        for spec in model
        if not _is_empty(spec, _read(instance, spec))
    ]
    options = [(spec, value) for spec, value in present if not spec.positional]
    values = sorted(
        ((spec, value) for spec, value in present if spec.positional),
        key=lambda pair: pair[0].position_index,
    )

    if settings.group_switches:
        cluster = [spec for spec, _ in options if spec.is_switch and spec.short_name]
        if cluster:
            writer.arguments.append("-" + "".join(spec.short_name for spec in cluster))
            options = [(spec, value) for spec, value in options if spec not in cluster]
    for spec, value in options:
        writer.option(spec, value)

    positional = [text for spec, value in values for text in writer.texts(spec, value)]
    needs_sentinel = bool(positional) and (
        writer.greedy_tail or any(_needs_inline(text) for text in positional)
    )
    verb = [model.verb] if model.verb else []
    if needs_sentinel and not enable_dash_dash:
        # Values read before the options cannot be taken by a sequence.
        logger.debug("Placing positional values before the options of %r", model)
        return [*verb, *positional, *writer.arguments]
    if needs_sentinel:
        return [*verb, *writer.arguments, DASH_DASH, *positional]
    return [*verb, *writer.arguments, *positional]


def format_command_line(
    model: SpecificationModel,
    instance: Any,
    settings: FormatSettings | None = None,
    *,
    enable_dash_dash: bool = True,
    culture: str | None = None,
) -> str:
    """Return `format_arguments()` joined into one shell-quoted command line."""
    return shlex.join(
        format_arguments(
            model,
            instance,
            settings,
            enable_dash_dash=enable_dash_dash,
            culture=culture,
        )
    )
