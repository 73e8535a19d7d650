# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `InstanceBinder`, the state machine that binds an argument vector to a target.

The binder drives the token streams through the classifier, resolves every name
against the `OptionResolutionMap`, converts values with the culture of the
active `ParserSettings`, and writes them through the model's `BindingTarget`.

States:
    READY → SCANNING → (RESOLVING → CONVERTING → WRITING)* → ENFORCING → DONE

Key Features:
- Long options (`--name VALUE`, `--name=VALUE`) and short groups
  (`-abc`, `-xVALUE`, `-x VALUE`) with switch clusters. The first unknown
  character of a cluster is reported once and ends the cluster.
- Greedy sequence consumption bounded by `max_items`, or one token split on
  a separator character.
- Negative numbers and `-` are always values.
- Everything after `--` binds as positional values.
- Per-token errors are collected and scanning continues, so one call reports
  every problem in the input.
- Global enforcement: required options, mutually exclusive sets and positional
  sequence bounds.

The binder never raises for malformed input. Only a misconfigured
`SpecificationModel` raises, as `SpecificationError`, when the binder is built.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from optbind.errors import (
    BadFormatConversionError,
    BadFormatTokenError,
    MissingValueOptionError,
    NameInfo,
    ParsingError,
    SequenceOutOfRangeError,
    UnknownOptionError,
)
from optbind.exceptions import ConversionError
from optbind.logger import logger
from optbind.parser.parse_result import ParseResult
from optbind.parser.resolution_map import OptionResolutionMap
from optbind.parser.specification import Specification, SpecificationModel
from optbind.parser.target_kind import TargetKind
from optbind.parser.token_stream import ArgumentStream, CharacterStream
from optbind.parser.tokenizer import (
    ArgumentKind,
    ClassifiedArgument,
    classify,
    is_input_value,
    preprocess_dash_dash,
)
from optbind.parser.utils import convert_values, split_items
from optbind.settings import ParserSettings


class BinderState(Enum):
    READY = "ready"
    SCANNING = "scanning"
    RESOLVING = "resolving"
    CONVERTING = "converting"
    WRITING = "writing"
    ENFORCING = "enforcing"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass
class _BindPass:
    """Mutable state of one `bind()` call."""

    resolution: OptionResolutionMap
    instance: Any
    stream: ArgumentStream
    errors: list[ParsingError] = field(default_factory=list)
    positional_values: list[str] = field(default_factory=list)
    range_errors: list[ParsingError] = field(default_factory=list)


class InstanceBinder:
    """
    Binds argument vectors to the target of a `SpecificationModel`.

    A binder may be reused for any number of sequential `bind()` calls; the
    resolution map and the target instance are created afresh for each call.

    Args:
        model (SpecificationModel): What to bind and where to write it.
        settings (ParserSettings | None): Case sensitivity, culture and the
            unknown-option, `--` and mutually exclusive policies.

    Raises:
        SpecificationError: If the model's names collide under the configured
            case sensitivity.
    """

    def __init__(
        self,
        model: SpecificationModel,
        settings: ParserSettings | None = None,
    ) -> None:
        self.model = model
        self.settings = settings or ParserSettings()
        self.state = BinderState.READY
        # Built once up front so name collisions surface before any parse call.
        self._new_resolution_map()

    def _new_resolution_map(self) -> OptionResolutionMap:
        return OptionResolutionMap(
            self.model,
            case_sensitive=self.settings.case_sensitive,
            mutually_exclusive=self.settings.mutually_exclusive,
        )

    def bind(self, args: Sequence[str]) -> ParseResult:
        """Bind `args` and return the outcome."""
        self.state = BinderState.READY
        before, forced = preprocess_dash_dash(args, self.settings.enable_dash_dash)
        bind_pass = _BindPass(
            resolution=self._new_resolution_map(),
            instance=self.model.target.create(),
            stream=ArgumentStream(before),
        )

        self.state = BinderState.SCANNING
        while bind_pass.stream.advance():
            classified = classify(bind_pass.stream.current())
            if classified.kind is ArgumentKind.LONG_OPTION:
                self._bind_long_option(bind_pass, classified)
            elif classified.kind is ArgumentKind.SHORT_GROUP:
                self._bind_short_group(bind_pass, classified)
            else:
                bind_pass.positional_values.append(classified.text)
            self.state = BinderState.SCANNING
        bind_pass.positional_values.extend(forced)

        self._bind_positional_values(bind_pass)

        self.state = BinderState.ENFORCING
        for spec in self.model:
            if not bind_pass.resolution.received_value(spec):
                self.model.target.fill_missing(bind_pass.instance, spec)
        errors = [
            *bind_pass.errors,
            *bind_pass.resolution.enforce_required_rule(),
            *bind_pass.resolution.enforce_mutually_exclusive_rule(),
            *bind_pass.range_errors,
        ]
        logger.debug(
            "Bound %d argument(s) to %r with %d error(s)",
            len(args),
            self.model.target,
            len(errors),
        )

        self.state = BinderState.DONE
        if errors:
            # An immutable factory may reject a partial argument set, so a failed
            # parse exposes the accumulated arguments instead.
            partial = (
                bind_pass.instance
                if self.model.target.immutable
                else self.model.target.finish(bind_pass.instance)
            )
            return ParseResult.failure(partial, errors)
        return ParseResult.success(self.model.target.finish(bind_pass.instance))

    def _resolve(self, bind_pass: _BindPass, name: str) -> Specification | None:
        self.state = BinderState.RESOLVING
        spec = bind_pass.resolution.lookup(name)
        if spec is None:
            if self.settings.ignore_unknown_arguments:
                logger.debug("Skipping unknown option '%s'", name)
            else:
                bind_pass.errors.append(UnknownOptionError(name))
            return None
        bind_pass.resolution.mark_defined(spec)
        bind_pass.resolution.record_mutually_exclusive_occurrence(spec)
        return spec

    def _bind_long_option(self, bind_pass: _BindPass, classified: ClassifiedArgument) -> None:
        name = classified.name
        if not name or any(char.isspace() for char in name):
            bind_pass.errors.append(BadFormatTokenError(classified.text))
            return
        spec = self._resolve(bind_pass, name)
        if spec is None:
            return
        if spec.kind is TargetKind.SWITCH:
            if classified.inline_value is not None:
                bind_pass.errors.append(
                    BadFormatConversionError(NameInfo.from_specification(spec))
                )
                return
            self._write(bind_pass, spec, True)
            return
        values = [] if classified.inline_value is None else [classified.inline_value]
        self._bind_option_values(bind_pass, spec, values)

    def _bind_short_group(self, bind_pass: _BindPass, classified: ClassifiedArgument) -> None:
        chars = CharacterStream(classified.name)
        while chars.advance():
            spec = self._resolve(bind_pass, chars.current())
            if spec is None:
                return
            if spec.kind is TargetKind.SWITCH:
                self._write(bind_pass, spec, True)
                continue
            suffix = chars.remaining_suffix_from_next()
            self._bind_option_values(bind_pass, spec, [suffix] if suffix else [])
            return

    def _bind_option_values(
        self, bind_pass: _BindPass, spec: Specification, values: list[str]
    ) -> None:
        """Gather the values of a named, value-taking option and write them."""
        name_info = NameInfo.from_specification(spec)
        stream = bind_pass.stream

        if spec.kind is TargetKind.SEQUENCE:
            if spec.max_items == 0:
                bind_pass.errors.append(SequenceOutOfRangeError(name_info))
                return
            if spec.separator:
                if not values and is_input_value(stream.next_lookahead()):
                    stream.advance()
                    values.append(stream.current())
            else:
                while (spec.max_items is None or len(values) < spec.max_items) and (
                    is_input_value(stream.next_lookahead())
                ):
                    stream.advance()
                    values.append(stream.current())
            if not values:
                bind_pass.errors.append(MissingValueOptionError(name_info))
                return
            items = split_items(values, spec.separator)
            overflow = spec.max_items is not None and len(items) > spec.max_items
            if not spec.separator and not self.model.values:
                while is_input_value(stream.next_lookahead()):
                    stream.advance()
                    overflow = True
            if overflow or (spec.min_items is not None and len(items) < spec.min_items):
                logger.debug(
                    "'%s' received %d item(s), expected %s..%s",
                    spec.dest,
                    len(items),
                    spec.min_items,
                    spec.max_items,
                )
                bind_pass.errors.append(SequenceOutOfRangeError(name_info))
                return
            self._convert_and_write(bind_pass, spec, items)
            return

        if not values:
            if not is_input_value(stream.next_lookahead()):
                bind_pass.errors.append(MissingValueOptionError(name_info))
                return
            stream.advance()
            values.append(stream.current())
        self._convert_and_write(bind_pass, spec, values)

    def _bind_positional_values(self, bind_pass: _BindPass) -> None:
        """Assign collected values to positional specifications in index order."""
        specs = self.model.values
        remaining = list(bind_pass.positional_values)
        for index, spec in enumerate(specs):
            if not remaining:
                break
            if spec.kind is TargetKind.SEQUENCE:
                reserved = sum(self._min_required(later) for later in specs[index + 1 :])
                available = max(len(remaining) - reserved, 0)
                take = available if spec.max_items is None else min(available, spec.max_items)
            else:
                take = 1
            chunk, remaining = remaining[:take], remaining[take:]
            if not chunk:
                continue
            self.state = BinderState.RESOLVING
            bind_pass.resolution.mark_defined(spec)
            if spec.kind is TargetKind.SEQUENCE:
                items = split_items(chunk, spec.separator)
                if spec.min_items is not None and len(items) < spec.min_items:
                    bind_pass.range_errors.append(
                        SequenceOutOfRangeError(NameInfo.from_specification(spec))
                    )
                    continue
                self._convert_and_write(bind_pass, spec, items)
            else:
                self._convert_and_write(bind_pass, spec, chunk)
        if remaining:
            logger.debug("Ignoring %d extra positional value(s): %s", len(remaining), remaining)

    @staticmethod
    def _min_required(spec: Specification) -> int:
        if spec.kind is TargetKind.SEQUENCE:
            return spec.min_items or 0
        return 1

    def _convert_and_write(
        self, bind_pass: _BindPass, spec: Specification, values: list[str]
    ) -> None:
        self.state = BinderState.CONVERTING
        try:
            value = convert_values(values, spec, self.settings.culture)
        except ConversionError as error:
            logger.debug("Bad value for '%s' %s: %s", spec.dest, values, error)
            bind_pass.errors.append(
                BadFormatConversionError(NameInfo.from_specification(spec))
            )
            return
        self._write(bind_pass, spec, value)

    def _write(self, bind_pass: _BindPass, spec: Specification, value: Any) -> None:
        self.state = BinderState.WRITING
        self.model.target.write(bind_pass.instance, spec, value)
        bind_pass.resolution.mark_received(spec)

    def __repr__(self) -> str:
        return f"InstanceBinder(model={self.model}, state={self.state})"
