# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies raw command-line arguments without consuming further input.

Classification rules:
- `-` is a value (the conventional stdin/stdout marker).
- `--name` and `--name=value` are long options; the name is split on the first `=`.
- `-x`, `-xVALUE`, `-xyz` are short option groups.
- Numeric-looking strings such as `-4096` or `-1.5` are values, never options.
- Everything else is a value.

A standalone `--` is handled by `preprocess_dash_dash()` before classification:
every argument after it is forced to be a value. When the sentinel is disabled
a bare `--` is just a value.

`tokenize()` turns a whole argument vector into `Token` objects. It is used for
help/version detection and diagnostics; the `InstanceBinder` drives `classify()`
and the token streams directly so it can consume values per arity.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from optbind.errors import BadFormatTokenError, ParsingError
from optbind.logger import logger
from optbind.parser.parser_types import Token
from optbind.parser.specification import Specification
from optbind.parser.token_stream import ArgumentStream, CharacterStream

DASH_DASH = "--"

_NUMERIC = re.compile(
    r"""
    ^[-+]?
    (?:\d[\d.,_]*|[.,]\d[\d.,_]*)
    (?:[eE][-+]?\d+)?$
    """,
    re.VERBOSE,
)


class ArgumentKind(Enum):
    VALUE = "value"
    DASH = "dash"
    LONG_OPTION = "long_option"
    SHORT_GROUP = "short_group"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClassifiedArgument:
    """
    The classification of one raw argument.

    Attributes:
        kind (ArgumentKind): What the argument is.
        text (str): The raw argument.
        name (str): Long option name, or the short cluster without its dash.
        inline_value (str | None): Value given with `--name=value`.
    """

    kind: ArgumentKind
    text: str
    name: str = ""
    inline_value: str | None = None

    @property
    def is_option(self) -> bool:
        return self.kind in (ArgumentKind.LONG_OPTION, ArgumentKind.SHORT_GROUP)


def is_numeric(text: str) -> bool:
    """Return True if `text` looks like a signed integer or float."""
    return bool(_NUMERIC.match(text))


def classify(arg: str) -> ClassifiedArgument:
    """Classify one raw argument."""
    if arg == "-":
        return ClassifiedArgument(ArgumentKind.DASH, arg)
    if arg == DASH_DASH:
        return ClassifiedArgument(ArgumentKind.VALUE, arg)
    if arg.startswith("--"):
        name, sep, value = arg[2:].partition("=")
        return ClassifiedArgument(
            ArgumentKind.LONG_OPTION,
            arg,
            name=name,
            inline_value=value if sep else None,
        )
    if arg.startswith("-") and len(arg) > 1:
        if arg[1].isdigit() or is_numeric(arg):
            return ClassifiedArgument(ArgumentKind.VALUE, arg)
        return ClassifiedArgument(ArgumentKind.SHORT_GROUP, arg, name=arg[1:])
    return ClassifiedArgument(ArgumentKind.VALUE, arg)


def is_input_value(arg: str | None) -> bool:
    """Return True if `arg` can be consumed as the value of an option."""
    if arg is None:
        return False
    return not classify(arg).is_option


def preprocess_dash_dash(
    args: Sequence[str], enabled: bool = True
) -> tuple[list[str], list[str]]:
    """
    Split the argument vector on the first standalone `--`.

    Returns:
        tuple[list[str], list[str]]: The arguments before the sentinel, and the
        arguments after it, which must be treated as values.
    """
    if not enabled or DASH_DASH not in args:
        return list(args), []
    index = list(args).index(DASH_DASH)
    return list(args[:index]), list(args[index + 1 :])


def tokenize(
    args: Sequence[str],
    lookup: Callable[[str], Specification | None],
    enable_dash_dash: bool = True,
) -> tuple[list[Token], list[ParsingError]]:
    """
    Turn an argument vector into `Token` objects.

    `lookup` resolves a short name so a value-taking short option can claim the
    rest of its cluster as an adjacent value (`-xVALUE`). An unknown short name is
    still emitted as a name token but ends its cluster; resolving it is the
    binder's job.

    Returns:
        tuple[list[Token], list[ParsingError]]: Tokens and malformed-token errors.
    """
    before, forced = preprocess_dash_dash(args, enable_dash_dash)
    tokens: list[Token] = []
    errors: list[ParsingError] = []
    stream = ArgumentStream(before)
    while stream.advance():
        arg = stream.current()
        classified = classify(arg)
        if classified.kind is ArgumentKind.LONG_OPTION:
            if not classified.name:
                errors.append(BadFormatTokenError(arg))
                continue
            tokens.append(Token.name(classified.name))
            if classified.inline_value is not None:
                tokens.append(Token.value(classified.inline_value))
        elif classified.kind is ArgumentKind.SHORT_GROUP:
            tokens.extend(_tokenize_cluster(classified.name, lookup))
        else:
            tokens.append(Token.value(arg))
    tokens.extend(Token.value(arg, forced=True) for arg in forced)
    logger.debug("Tokenized %d argument(s) into %s", len(args), [str(t) for t in tokens])
    return tokens, errors


def _tokenize_cluster(
    cluster: str, lookup: Callable[[str], Specification | None]
) -> list[Token]:
    tokens: list[Token] = []
    chars = CharacterStream(cluster)
    while chars.advance():
        name = chars.current()
        tokens.append(Token.name(name))
        spec = lookup(name)
        # An unknown character ends the cluster.
        if spec is None:
            break
        if spec.kind.takes_value:
            suffix = chars.remaining_suffix_from_next()
            if suffix:
                tokens.append(Token.value(suffix))
            break
    return tokens
