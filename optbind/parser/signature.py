# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds `SpecificationModel` objects from dataclasses and callable signatures.

This module is the declarative surface of Optbind: instead of calling
`add_option()` by hand, a target type describes its own options.

Functions:
- option / value: Declare a dataclass field as an option or a positional value.
- infer_model_from_dataclass: Build a model from a dataclass. Frozen dataclasses
  (and dataclasses with required fields) are built once all arguments are known;
  the others are default-constructed and written through setter closures.
- infer_model_from_callable: Build a model from a function signature. Parameters
  without defaults become positional values, parameters with defaults become
  `--long-options`, and the callable itself builds the result.

Example:
    @dataclass
    class Options:
        verbose: bool = option("-v", help="Chatty output")
        int_seq: list[int] = option("-i", "--int-seq", min_items=1, default_factory=list)
        files: list[str] = value(default_factory=list)

    model = SpecificationModel.from_dataclass(Options)
"""
from __future__ import annotations

import dataclasses
import inspect
from typing import Any, Callable, get_type_hints

from optbind.exceptions import SpecificationError
from optbind.logger import logger
from optbind.parser.binding_target import ImmutableTarget, MutableTarget, attribute_setter
from optbind.parser.specification import SpecificationModel, log_model
from optbind.parser.target_kind import TargetKind

METADATA_KEY = "optbind"


def option(
    *flags: str,
    required: bool = False,
    kind: TargetKind | str | None = None,
    min_items: int | None = None,
    max_items: int | None = None,
    separator: str | None = None,
    mutually_exclusive_set: str | None = None,
    help: str = "",
    metavar: str | None = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field as an option. Without flags, the field name is the long name."""
    metadata = {
        METADATA_KEY: {
            "positional": False,
            "flags": flags,
            "required": required,
            "kind": kind,
            "min_items": min_items,
            "max_items": max_items,
            "separator": separator,
            "mutually_exclusive_set": mutually_exclusive_set,
            "help": help,
            "metavar": metavar,
        }
    }
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata
    )


def value(
    position: int | None = None,
    *,
    required: bool = False,
    kind: TargetKind | str | None = None,
    min_items: int | None = None,
    max_items: int | None = None,
    help: str = "",
    metavar: str | None = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field as a positional value."""
    metadata = {
        METADATA_KEY: {
            "positional": True,
            "position": position,
            "required": required,
            "kind": kind,
            "min_items": min_items,
            "max_items": max_items,
            "help": help,
            "metavar": metavar,
        }
    }
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata
    )


def _field_default(data_field: dataclasses.Field) -> Any:
    if data_field.default is not dataclasses.MISSING:
        return data_field.default
    if data_field.default_factory is not dataclasses.MISSING:
        return data_field.default_factory()
    return None


def _has_default(data_field: dataclasses.Field) -> bool:
    return (
        data_field.default is not dataclasses.MISSING
        or data_field.default_factory is not dataclasses.MISSING
    )


def _default_flags(name: str) -> tuple[str, ...]:
    long_name = name.lower().replace("_", "-")
    if len(long_name) == 1:
        return (f"-{long_name}",)
    return (f"--{long_name}",)


def infer_model_from_dataclass(target_type: type, **kwargs: Any) -> SpecificationModel:
    """
    Build a `SpecificationModel` from a dataclass.

    Fields declared with `option()` or `value()` carry their own metadata; any other
    init field becomes an option named after the field.

    Raises:
        SpecificationError: If `target_type` is not a dataclass or a field is misdeclared.
    """
    if not (isinstance(target_type, type) and dataclasses.is_dataclass(target_type)):
        raise SpecificationError(f"{target_type!r} is not a dataclass type")

    hints = get_type_hints(target_type)
    init_fields = [data_field for data_field in dataclasses.fields(target_type) if data_field.init]
    frozen = target_type.__dataclass_params__.frozen  # type: ignore[attr-defined]

    if frozen or not all(_has_default(data_field) for data_field in init_fields):
        target: ImmutableTarget | MutableTarget = ImmutableTarget(target_type)
    else:
        target = MutableTarget(
            target_type,
            {data_field.name: attribute_setter(data_field.name) for data_field in init_fields},
        )

    doc = inspect.getdoc(target_type) or ""
    # Undocumented dataclasses get a generated signature docstring.
    if doc.startswith(f"{target_type.__name__}("):
        doc = ""
    kwargs.setdefault("help_text", doc)
    model = SpecificationModel(target=target, **kwargs)
    for data_field in init_fields:
        metadata = dict(data_field.metadata.get(METADATA_KEY, {}))
        field_type = hints.get(data_field.name, str)
        default = _field_default(data_field)
        common = {
            "type": field_type,
            "kind": metadata.get("kind"),
            "required": metadata.get("required", False),
            "min_items": metadata.get("min_items"),
            "max_items": metadata.get("max_items"),
            "default": default,
            "help": metadata.get("help", ""),
            "metavar": metadata.get("metavar"),
        }
        if metadata.get("positional"):
            model.add_value(data_field.name, position=metadata.get("position"), **common)
        else:
            flags = metadata.get("flags") or _default_flags(data_field.name)
            model.add_option(
                *flags,
                dest=data_field.name,
                separator=metadata.get("separator"),
                mutually_exclusive_set=metadata.get("mutually_exclusive_set"),
                **common,
            )

    log_model(model)
    return model


def infer_model_from_callable(
    func: Callable[..., Any],
    arg_metadata: dict[str, str | dict[str, Any]] | None = None,
    **kwargs: Any,
) -> SpecificationModel:
    """
    Build a `SpecificationModel` from a callable's signature.

    Args:
        func (Callable): The function or class to inspect. It receives the bound
            arguments once parsing is complete.
        arg_metadata (dict | None): Per-parameter overrides. A string is taken as help
            text; a dict may set `help`, `type`, `flags`, `min_items`, `max_items`,
            `separator`, `mutually_exclusive_set` and `metavar`.

    Returns:
        SpecificationModel: A model whose target calls `func`.

    Raises:
        SpecificationError: If `func` is not callable or a parameter is misdeclared.
    """
    if not callable(func):
        raise SpecificationError(f"Provided target is not callable: {func!r}")
    arg_metadata = arg_metadata or {}
    signature = inspect.signature(func)
    hint_source = func.__init__ if isinstance(func, type) else func
    try:
        hints = get_type_hints(hint_source)
    except (NameError, TypeError) as error:
        logger.debug("Could not resolve type hints of %r: %s", func, error)
        hints = {}

    positional_parameters = [
        name
        for name, param in signature.parameters.items()
        if param.kind is inspect.Parameter.POSITIONAL_ONLY
    ]
    kwargs.setdefault("help_text", inspect.getdoc(func) or "")
    model = SpecificationModel(
        target=ImmutableTarget(func, positional_parameters), **kwargs
    )

    for name, param in signature.parameters.items():
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        ):
            continue
        raw_metadata = arg_metadata.get(name, {})
        metadata = (
            {"help": raw_metadata} if isinstance(raw_metadata, str) else dict(raw_metadata)
        )

        arg_type = metadata.get("type") or hints.get(name)
        if arg_type is None:
            arg_type = (
                param.annotation
                if param.annotation is not inspect.Parameter.empty
                and not isinstance(param.annotation, str)
                else str
            )
        is_required = param.default is inspect.Parameter.empty
        default = None if is_required else param.default
        kind: str | None = None
        # Only a False default can be flipped by presence alone.
        if arg_type is bool and default is not False:
            kind = "scalar"

        if is_required:
            model.add_value(
                name,
                type=arg_type,
                kind=kind,
                required=True,
                min_items=metadata.get("min_items"),
                max_items=metadata.get("max_items"),
                help=metadata.get("help", ""),
                metavar=metadata.get("metavar"),
            )
        else:
            flags = metadata.get("flags") or [f"--{name.replace('_', '-')}"]
            model.add_option(
                *flags,
                dest=name,
                type=arg_type,
                kind=kind,
                default=default,
                min_items=metadata.get("min_items"),
                max_items=metadata.get("max_items"),
                separator=metadata.get("separator"),
                mutually_exclusive_set=metadata.get("mutually_exclusive_set"),
                help=metadata.get("help", ""),
                metavar=metadata.get("metavar"),
            )

    log_model(model)
    return model
