# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Specification` dataclass and the `SpecificationModel` that groups them.

A `Specification` is the immutable description of one bindable option or
positional value: its names, value shape (`TargetKind`), element type, arity
bounds, separator, default and mutually exclusive set. A `SpecificationModel`
is built once per target and is read-only during parsing, so it can be shared
across sequential parse calls.

Specifications are validated on construction. A misconfigured specification is
a programmer error and raises `SpecificationError`; it is never reported as a
parsing error.

Key Attributes:
- `short_name` / `long_name`: option names without dashes (`"i"`, `"int-seq"`)
- `dest`: destination key or attribute the value is written to
- `kind` / `type`: value shape and element type (e.g. SEQUENCE of `int`)
- `min_items` / `max_items`: sequence arity bounds (`None` means unbounded)
- `separator`: split one token into sequence items on this character
- `mutually_exclusive_set`: tag shared by options that may not be combined
- `positional` / `position_index`: ordinal slot of a positional value

Example:
    model = SpecificationModel()
    model.add_option("-i", "--int-seq", type=list[int], min_items=3, max_items=4)
    model.add_option("--colors", type=Colors)
    model.add_value("files", type=list[str])
"""
from __future__ import annotations

import collections.abc
import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Union, get_args, get_origin

from optbind.exceptions import SpecificationError
from optbind.logger import logger
from optbind.parser.binding_target import BindingTarget, DictTarget
from optbind.parser.target_kind import TargetKind

_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Set,
)


def describe_type(annotation: Any) -> tuple[TargetKind, Any]:
    """
    Map a type annotation to a `(TargetKind, element_type)` pair.

    - `bool` → SWITCH
    - `X | None` / `Optional[X]` → NULLABLE of X (or SEQUENCE for optional sequences)
    - `list[X]`, `tuple[X, ...]`, `Sequence[X]`, `set[X]` → SEQUENCE of X
    - anything else → SCALAR
    """
    if annotation is bool:
        return TargetKind.SWITCH, bool

    origin = get_origin(annotation)
    args = get_args(annotation)

    if isinstance(annotation, types.UnionType) or origin is Union:
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == len(args):
            return TargetKind.SCALAR, annotation
        inner = non_none[0] if len(non_none) == 1 else Union[tuple(non_none)]
        inner_kind, inner_type = describe_type(inner)
        if inner_kind is TargetKind.SEQUENCE:
            return TargetKind.SEQUENCE, inner_type
        return TargetKind.NULLABLE, inner_type

    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return TargetKind.SEQUENCE, args[0]
            if args:
                raise SpecificationError(
                    f"Fixed-length tuple annotations are not supported: {annotation}"
                )
        return TargetKind.SEQUENCE, args[0] if args else str

    if annotation in (list, tuple, set, frozenset):
        return TargetKind.SEQUENCE, str

    return TargetKind.SCALAR, annotation


@dataclass(frozen=True)
class Specification:
    """
    Describes one option or positional value.

    Attributes:
        dest (str): Destination key or attribute name.
        kind (TargetKind): Value shape: scalar, switch, nullable or sequence.
        type (Any): Scalar type, or element type for sequences and nullables.
        short_name (str | None): Single character short name, without the dash.
        long_name (str | None): Long name, without the leading dashes.
        required (bool): True if a legal value must be received.
        min_items (int | None): Minimum number of sequence items, None if unbounded.
        max_items (int | None): Maximum number of sequence items, None if unbounded.
        separator (str | None): Character used to split a single sequence token.
        default (Any): Value written when nothing was received.
        mutually_exclusive_set (str | None): Tag of the mutually exclusive set.
        positional (bool): True for positional values.
        position_index (int): Ordinal slot of a positional value.
        help (str): Help text.
        metavar (str | None): Placeholder shown in usage text.
    """

    dest: str
    kind: TargetKind = TargetKind.SCALAR
    type: Any = str
    short_name: str | None = None
    long_name: str | None = None
    required: bool = False
    min_items: int | None = None
    max_items: int | None = None
    separator: str | None = None
    default: Any = None
    mutually_exclusive_set: str | None = None
    positional: bool = False
    position_index: int = -1
    help: str = ""
    metavar: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TargetKind):
            try:
                object.__setattr__(self, "kind", TargetKind(self.kind))
            except ValueError as error:
                raise SpecificationError(str(error)) from error
        # -1 is accepted as "unbounded" for compatibility with declarative sources.
        if self.min_items == -1:
            object.__setattr__(self, "min_items", None)
        if self.max_items == -1:
            object.__setattr__(self, "max_items", None)
        self._validate()

    def _validate(self) -> None:
        if not self.dest or not self.dest.replace("_", "").isalnum():
            raise SpecificationError(
                f"dest must be a valid identifier (letters, digits, and underscores only): {self.dest!r}"
            )
        if self.positional:
            if self.short_name or self.long_name:
                raise SpecificationError(
                    f"Positional value '{self.dest}' cannot have option names"
                )
            if self.position_index < 0:
                raise SpecificationError(
                    f"Positional value '{self.dest}' needs a non-negative position index"
                )
            if self.kind is TargetKind.SWITCH:
                raise SpecificationError(
                    f"Positional value '{self.dest}' cannot be a switch"
                )
            if self.mutually_exclusive_set:
                raise SpecificationError(
                    f"Positional value '{self.dest}' cannot belong to a mutually exclusive set"
                )
        elif not self.short_name and not self.long_name:
            raise SpecificationError(f"Option '{self.dest}' needs a short or long name")

        if self.short_name is not None:
            if len(self.short_name) != 1:
                raise SpecificationError(
                    f"Short name '{self.short_name}' must be a single character"
                )
            if self.short_name.isdigit() or self.short_name in "-= " or self.short_name.isspace():
                raise SpecificationError(f"Short name '{self.short_name}' is not allowed")
        if self.long_name is not None:
            if len(self.long_name) < 2:
                raise SpecificationError(
                    f"Long name '{self.long_name}' must be longer than one character"
                )
            if self.long_name.startswith("-") or "=" in self.long_name or any(
                char.isspace() for char in self.long_name
            ):
                raise SpecificationError(f"Long name '{self.long_name}' is not allowed")

        if self.kind is not TargetKind.SEQUENCE:
            if self.min_items is not None or self.max_items is not None:
                raise SpecificationError(
                    f"Scalar specification '{self.dest}' does not support range specification"
                )
            if self.separator is not None:
                raise SpecificationError(
                    f"Scalar specification '{self.dest}' does not support a separator"
                )
        for bound in (self.min_items, self.max_items):
            if bound is not None and (not isinstance(bound, int) or bound < 0):
                raise SpecificationError(
                    f"Bad range in sequence specification '{self.dest}': {bound!r}"
                )
        if (
            self.min_items is not None
            and self.max_items is not None
            and self.min_items > self.max_items
        ):
            raise SpecificationError(
                f"Bad range in sequence specification '{self.dest}': "
                f"min_items={self.min_items} > max_items={self.max_items}"
            )
        if self.separator is not None and len(self.separator) != 1:
            raise SpecificationError(
                f"Separator for '{self.dest}' must be a single character"
            )

    @property
    def names(self) -> tuple[str, ...]:
        """Return the option names without dashes."""
        return tuple(name for name in (self.short_name, self.long_name) if name)

    @property
    def flags(self) -> tuple[str, ...]:
        """Return the option names as typed on the command line."""
        flags = []
        if self.short_name:
            flags.append(f"-{self.short_name}")
        if self.long_name:
            flags.append(f"--{self.long_name}")
        return tuple(flags)

    @property
    def is_sequence(self) -> bool:
        return self.kind is TargetKind.SEQUENCE

    @property
    def is_switch(self) -> bool:
        return self.kind is TargetKind.SWITCH

    def kind_default(self) -> Any:
        """Return the value bound when nothing was received and no default is set."""
        if self.kind is TargetKind.SEQUENCE:
            return []
        if self.kind is TargetKind.SWITCH:
            return False
        return None

    def get_choice_text(self) -> str:
        """Get the value placeholder text for usage and help output."""
        if self.kind is TargetKind.SWITCH:
            return ""
        if self.metavar:
            text = self.metavar
        elif isinstance(self.type, type) and issubclass(self.type, Enum):
            text = f"{{{','.join(member.name for member in self.type)}}}"
        else:
            text = self.dest if self.positional else self.dest.upper()
        if self.kind is TargetKind.SEQUENCE:
            if self.separator:
                return f"{text}[{self.separator}{text}...]"
            return f"{text} [{text} ...]"
        return text


class SpecificationModel:
    """
    The set of specifications bound by one parse call.

    Features:
    - Builder registration via `add_option()` and `add_value()`.
    - Declarative construction via `from_dataclass()` and `from_callable()`.
    - Guards against duplicate names, destinations and positional indices.
    - A `BindingTarget` describing where values are written.
    """

    def __init__(
        self,
        target: BindingTarget | None = None,
        verb: str | None = None,
        help_text: str = "",
        program: str | None = None,
    ) -> None:
        self.target: BindingTarget = target or DictTarget()
        self.verb: str | None = verb
        self.help_text: str = help_text
        self.program: str | None = program
        self._specifications: list[Specification] = []
        self._dest_set: set[str] = set()
        self._flag_map: dict[str, Specification] = {}
        self._positions: set[int] = set()

    def _parse_flags(self, flags: tuple[str, ...]) -> tuple[str | None, str | None]:
        """Split `-s` / `--long` flags into a short and a long name."""
        if not flags:
            raise SpecificationError("No flags provided")
        short_name: str | None = None
        long_name: str | None = None
        for flag in flags:
            if not isinstance(flag, str):
                raise SpecificationError(f"Flag '{flag}' must be a string")
            if flag.startswith("--"):
                if long_name is not None:
                    raise SpecificationError("Only one long flag is allowed per option")
                long_name = flag[2:]
            elif flag.startswith("-"):
                if short_name is not None:
                    raise SpecificationError("Only one short flag is allowed per option")
                if len(flag) != 2:
                    raise SpecificationError(
                        f"Flag '{flag}' must be a single character or start with '--'"
                    )
                short_name = flag[1:]
            else:
                raise SpecificationError(
                    f"Flag '{flag}' must start with '-' or '--'; use add_value() for positional values"
                )
        return short_name, long_name

    def _get_dest_from_names(
        self, short_name: str | None, long_name: str | None, dest: str | None
    ) -> str:
        if dest:
            return dest
        name = long_name or short_name
        assert name is not None, "name should not be None"
        return name.replace("-", "_").lower()

    def _resolve_kind(self, type: Any, kind: TargetKind | str | None) -> tuple[TargetKind, Any]:
        if kind is None:
            return describe_type(type)
        try:
            kind = TargetKind(kind)
        except ValueError as error:
            raise SpecificationError(str(error)) from error
        if kind is TargetKind.SWITCH:
            return kind, bool
        if kind is TargetKind.SEQUENCE:
            described_kind, element = describe_type(type)
            return kind, element if described_kind is TargetKind.SEQUENCE else type
        return kind, type

    def add_option(
        self,
        *flags: str,
        dest: str | None = None,
        type: Any = str,
        kind: TargetKind | str | None = None,
        required: bool = False,
        min_items: int | None = None,
        max_items: int | None = None,
        separator: str | None = None,
        default: Any = None,
        mutually_exclusive_set: str | None = None,
        help: str = "",
        metavar: str | None = None,
    ) -> Specification:
        """
        Define a new option.

        Args:
            *flags (str): `-x` and/or `--long-name`.
            dest (str | None): Destination key; derived from the long name if omitted.
            type (Any): Annotation describing the value (`int`, `list[int]`, `int | None`, an Enum, ...).
            kind (TargetKind | str | None): Explicit value shape, overriding the one derived from `type`.
            required (bool): Whether a legal value must be received.
            min_items / max_items (int | None): Sequence arity bounds.
            separator (str | None): Split a single sequence token on this character.
            default (Any): Value written when the option is absent.
            mutually_exclusive_set (str | None): Set tag.
            help (str): Help text.
            metavar (str | None): Placeholder in usage text.

        Returns:
            Specification: The registered specification.
        """
        short_name, long_name = self._parse_flags(flags)
        resolved_kind, element_type = self._resolve_kind(type, kind)
        spec = Specification(
            dest=self._get_dest_from_names(short_name, long_name, dest),
            kind=resolved_kind,
            type=element_type,
            short_name=short_name,
            long_name=long_name,
            required=required,
            min_items=min_items,
            max_items=max_items,
            separator=separator,
            default=default,
            mutually_exclusive_set=mutually_exclusive_set,
            help=help,
            metavar=metavar,
        )
        return self.add_specification(spec)

    def add_value(
        self,
        dest: str,
        *,
        position: int | None = None,
        type: Any = str,
        kind: TargetKind | str | None = None,
        required: bool = False,
        min_items: int | None = None,
        max_items: int | None = None,
        default: Any = None,
        help: str = "",
        metavar: str | None = None,
    ) -> Specification:
        """
        Define a new positional value.

        Positions default to the next free index, so values bind in registration order.
        """
        if position is None:
            position = max(self._positions, default=-1) + 1
        resolved_kind, element_type = self._resolve_kind(type, kind)
        spec = Specification(
            dest=dest,
            kind=resolved_kind,
            type=element_type,
            required=required,
            min_items=min_items,
            max_items=max_items,
            default=default,
            positional=True,
            position_index=position,
            help=help,
            metavar=metavar,
        )
        return self.add_specification(spec)

    def add_specification(self, spec: Specification) -> Specification:
        """Register an already built specification."""
        if spec.dest in self._dest_set:
            raise SpecificationError(f"Destination '{spec.dest}' is already defined")
        for flag in spec.flags:
            if flag in self._flag_map:
                existing = self._flag_map[flag]
                raise SpecificationError(
                    f"Flag '{flag}' is already used by '{existing.dest}'"
                )
        if spec.positional:
            if spec.position_index in self._positions:
                raise SpecificationError(
                    f"Position {spec.position_index} is already used"
                )
            self._positions.add(spec.position_index)
        for flag in spec.flags:
            self._flag_map[flag] = spec
        self._dest_set.add(spec.dest)
        self._specifications.append(spec)
        return spec

    @property
    def specifications(self) -> list[Specification]:
        return list(self._specifications)

    @property
    def options(self) -> list[Specification]:
        return [spec for spec in self._specifications if not spec.positional]

    @property
    def values(self) -> list[Specification]:
        """Positional values ordered by position index."""
        return sorted(
            (spec for spec in self._specifications if spec.positional),
            key=lambda spec: spec.position_index,
        )

    def get(self, dest: str) -> Specification | None:
        """Return the specification for a destination, if defined."""
        return next((spec for spec in self._specifications if spec.dest == dest), None)

    def has_name(self, name: str) -> bool:
        return any(name in spec.names for spec in self._specifications)

    @classmethod
    def from_dataclass(cls, target_type: type, **kwargs: Any) -> SpecificationModel:
        """Build a model from a dataclass declared with `option()` / `value()` fields."""
        from optbind.parser.signature import infer_model_from_dataclass

        return infer_model_from_dataclass(target_type, **kwargs)

    @classmethod
    def from_callable(
        cls,
        func: Callable[..., Any],
        metadata: dict[str, str | dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> SpecificationModel:
        """Build a model from a callable's signature; the callable builds the result."""
        from optbind.parser.signature import infer_model_from_callable

        return infer_model_from_callable(func, metadata, **kwargs)

    def to_definition_list(self) -> list[dict[str, Any]]:
        """Convert specification metadata into a serializable list of dicts."""
        return [
            {
                "dest": spec.dest,
                "kind": str(spec.kind),
                "type": getattr(spec.type, "__name__", str(spec.type)),
                "short_name": spec.short_name,
                "long_name": spec.long_name,
                "required": spec.required,
                "min_items": spec.min_items,
                "max_items": spec.max_items,
                "separator": spec.separator,
                "default": spec.default,
                "mutually_exclusive_set": spec.mutually_exclusive_set,
                "positional": spec.positional,
                "position_index": spec.position_index,
                "help": spec.help,
            }
            for spec in self._specifications
        ]

    def __iter__(self) -> Iterator[Specification]:
        return iter(self._specifications)

    def __len__(self) -> int:
        return len(self._specifications)

    def __str__(self) -> str:
        positional = sum(spec.positional for spec in self._specifications)
        required = sum(spec.required for spec in self._specifications)
        return (
            f"SpecificationModel(specs={len(self._specifications)}, "
            f"flags={len(self._flag_map)}, positional={positional}, required={required})"
        )

    def __repr__(self) -> str:
        return str(self)


def log_model(model: SpecificationModel) -> None:
    logger.debug("Built %s for target %r", model, model.target)
