# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandLineParser`, the entry point for binding argument vectors.

The parser accepts a `SpecificationModel`, a dataclass type or a callable,
checks for `--help`/`--version` requests, and hands the arguments to an
`InstanceBinder`. It also dispatches verbs (sub-commands) by their first token.

Key Features:
- `parse_arguments()`: bind one target and return a `ParseResult`.
- `parse_verbs()`: select a verb model by the first argument, with `help [verb]`,
  `--help` and `--version` handling.
- `tokenize()`: expose the classified `Token` stream for diagnostics.
- `format_command_line()`: turn a bound instance back into its arguments.
- Settings are explicit and immutable; one parser may be used for any number of
  sequential parse calls.

Example:
    parser = CommandLineParser(ParserSettings(culture="de_DE"))
    result = parser.parse_arguments(Options, ["--ratio", "1,5", "-v"])
    if result.succeeded:
        run(result.value)
    else:
        render_errors(result)
"""
from __future__ import annotations

import dataclasses
import shlex
import sys
from typing import Any, Callable, MutableMapping, Sequence, Union

from optbind.errors import (
    BadVerbSelectedError,
    HelpRequestedError,
    HelpVerbRequestedError,
    NoVerbSelectedError,
    ParsingError,
    VersionRequestedError,
)
from optbind.exceptions import SpecificationError
from optbind.logger import logger
from optbind.parser.instance_binder import InstanceBinder
from optbind.parser.parse_result import ParseResult
from optbind.parser.parser_types import Token
from optbind.parser.resolution_map import OptionResolutionMap
from optbind.parser.specification import SpecificationModel
from optbind.parser.tokenizer import tokenize
from optbind.parser.unparser import format_arguments
from optbind.settings import FormatSettings, ParserSettings
from optbind.utils import CaseInsensitiveDict

HELP_NAME = "help"
VERSION_NAME = "version"

ParseTarget = Union[SpecificationModel, type, Callable[..., Any]]


class CommandLineParser:
    """
    Binds command-line arguments to specification models.

    Args:
        settings (ParserSettings | None): Parser configuration. Keyword overrides
            are applied on top of it, e.g. `CommandLineParser(case_sensitive=False)`.
    """

    def __init__(self, settings: ParserSettings | None = None, **overrides: Any) -> None:
        base = settings or ParserSettings()
        self.settings: ParserSettings = (
            ParserSettings.model_validate({**base.model_dump(), **overrides})
            if overrides
            else base
        )

    def build_model(self, target: ParseTarget) -> SpecificationModel:
        """Return the `SpecificationModel` for a model, dataclass type or callable."""
        if isinstance(target, SpecificationModel):
            return target
        if isinstance(target, type) and dataclasses.is_dataclass(target):
            return SpecificationModel.from_dataclass(target)
        if callable(target):
            return SpecificationModel.from_callable(target)
        raise SpecificationError(f"Cannot build a specification model from {target!r}")

    def tokenize(self, target: ParseTarget, args: Sequence[str]) -> list[Token]:
        """Return the classified tokens of `args` against `target`'s names."""
        model = self.build_model(target)
        resolution = OptionResolutionMap(model, case_sensitive=self.settings.case_sensitive)
        tokens, _ = tokenize(args, resolution.lookup, self.settings.enable_dash_dash)
        return tokens

    def _same_name(self, left: str, right: str) -> bool:
        if self.settings.case_sensitive:
            return left == right
        return left.casefold() == right.casefold()

    def _request_errors(
        self, model: SpecificationModel, args: Sequence[str]
    ) -> list[ParsingError]:
        names = [token.text for token in self.tokenize(model, args) if token.is_name]
        if (
            self.settings.auto_help
            and not model.has_name(HELP_NAME)
            and any(self._same_name(name, HELP_NAME) for name in names)
        ):
            return [HelpRequestedError()]
        if (
            self.settings.auto_version
            and not model.has_name(VERSION_NAME)
            and any(self._same_name(name, VERSION_NAME) for name in names)
        ):
            return [VersionRequestedError()]
        return []

    def parse_arguments(
        self, target: ParseTarget, args: Sequence[str] | None = None
    ) -> ParseResult:
        """
        Bind `args` (default: `sys.argv[1:]`) to `target`.

        Returns:
            ParseResult: The bound value, or the partial value and every error found.

        Raises:
            SpecificationError: If `target` is misconfigured.
        """
        if args is None:
            args = sys.argv[1:]
        model = self.build_model(target)
        binder = InstanceBinder(model, self.settings)
        requests = self._request_errors(model, args)
        if requests:
            logger.debug("Parse of %r stopped by %s", model, requests[0].tag)
            return ParseResult.failure(None, requests, verb=model.verb)
        result = binder.bind(args)
        if model.verb:
            return dataclasses.replace(result, verb=model.verb)
        return result

    def verb_models(
        self, targets: Sequence[ParseTarget]
    ) -> MutableMapping[str, SpecificationModel]:
        """Return the verb models keyed by verb name, for dispatch or help rendering."""
        verbs: MutableMapping[str, SpecificationModel] = (
            {} if self.settings.case_sensitive else CaseInsensitiveDict()
        )
        for target in targets:
            model = self.build_model(target)
            if not model.verb:
                name = getattr(target, "__name__", "")
                if not name or isinstance(target, SpecificationModel):
                    raise SpecificationError(f"Model {model} does not declare a verb")
                model.verb = name.lower().replace("_", "-")
            if model.verb in verbs:
                raise SpecificationError(f"Verb '{model.verb}' is declared twice")
            verbs[model.verb] = model
        return verbs

    def parse_verbs(
        self, args: Sequence[str] | None, *targets: ParseTarget
    ) -> ParseResult:
        """
        Select a verb by the first argument and bind the rest to its model.

        Models declare their verb with `SpecificationModel(verb=...)`; dataclasses and
        callables default to their lower-cased name.

        Returns:
            ParseResult: The bound value with `verb` set, or a failure carrying
            `NoVerbSelectedError`, `BadVerbSelectedError`, a help/version request,
            or the chosen verb's parsing errors.
        """
        if args is None:
            args = sys.argv[1:]
        if not targets:
            raise SpecificationError("parse_verbs() needs at least one verb model")
        verbs = self.verb_models(targets)

        if not args:
            return ParseResult.failure(None, [NoVerbSelectedError()])
        first, rest = args[0], list(args[1:])
        if self._same_name(first, HELP_NAME) and HELP_NAME not in verbs:
            verb = rest[0] if rest else None
            return ParseResult.failure(
                None, [HelpVerbRequestedError(verb, matched=verb is not None and verb in verbs)]
            )
        if self.settings.auto_help and self._same_name(first, f"--{HELP_NAME}"):
            return ParseResult.failure(None, [HelpRequestedError()])
        if self.settings.auto_version and self._same_name(first, f"--{VERSION_NAME}"):
            return ParseResult.failure(None, [VersionRequestedError()])

        model = verbs.get(first)
        if model is None:
            return ParseResult.failure(None, [BadVerbSelectedError(first)])
        logger.debug("Selected verb '%s'", model.verb)
        return self.parse_arguments(model, rest)

    def format_arguments(
        self,
        target: ParseTarget,
        instance: Any,
        format_settings: FormatSettings | None = None,
    ) -> list[str]:
        """Return the arguments that bind `instance` with this parser's settings."""
        return format_arguments(
            self.build_model(target),
            instance,
            format_settings,
            enable_dash_dash=self.settings.enable_dash_dash,
            culture=self.settings.culture,
        )

    def format_command_line(
        self,
        target: ParseTarget,
        instance: Any,
        format_settings: FormatSettings | None = None,
    ) -> str:
        """
        Format a bound instance as a shell-quoted command line.

        Parsing the result with this parser gives back an equal instance, except
        for values equal to their default, which are omitted.
        """
        return shlex.join(self.format_arguments(target, instance, format_settings))

    def __repr__(self) -> str:
        return f"CommandLineParser(settings={self.settings!r})"
