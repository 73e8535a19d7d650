# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative specification models loaded from YAML or TOML files."""
from __future__ import annotations

import importlib
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from optbind.exceptions import SpecificationError
from optbind.logger import logger
from optbind.parser.specification import SpecificationModel
from optbind.parser.target_kind import TargetKind
from optbind.settings import read_document

TYPE_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "decimal": Decimal,
    "bool": bool,
    "datetime": datetime,
    "date": date,
    "path": Path,
}


def import_object(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.Colors'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise SpecificationError(f"Invalid type path: '{dotted_path}'")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise SpecificationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise SpecificationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


def resolve_type(name: str) -> Any:
    """Return the Python type for a type name or dotted import path."""
    if name.lower() in TYPE_NAMES:
        return TYPE_NAMES[name.lower()]
    return import_object(name)


class RawSpecification(BaseModel):
    """One option or positional value as written in a specification file."""

    model_config = ConfigDict(extra="forbid")

    flags: list[str] = Field(default_factory=list)
    dest: str | None = None
    positional: bool = False
    position: int | None = None
    type: str = "str"
    kind: TargetKind | None = None
    required: bool = False
    min_items: int | None = None
    max_items: int | None = None
    separator: str | None = None
    default: Any = None
    mutually_exclusive_set: str | None = None
    help: str = ""
    metavar: str | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, value: Any) -> TargetKind | None:
        if value is None or isinstance(value, TargetKind):
            return value
        return TargetKind(value)

    @model_validator(mode="after")
    def validate_names(self) -> RawSpecification:
        if self.positional:
            if self.flags:
                raise ValueError("Positional values cannot have flags")
            if not self.dest:
                raise ValueError("Positional values need a 'dest'")
        elif not self.flags:
            raise ValueError("Options need at least one flag")
        return self


class RawModel(BaseModel):
    """A specification file: program metadata and its options."""

    model_config = ConfigDict(extra="forbid")

    program: str | None = None
    verb: str | None = None
    help: str = ""
    options: list[RawSpecification] = Field(default_factory=list)


def convert_model(raw_model: RawModel) -> SpecificationModel:
    """Build a `SpecificationModel` from a validated `RawModel`."""
    model = SpecificationModel(
        verb=raw_model.verb, help_text=raw_model.help, program=raw_model.program
    )
    for raw_spec in raw_model.options:
        common = {
            "type": resolve_type(raw_spec.type),
            "kind": raw_spec.kind,
            "required": raw_spec.required,
            "min_items": raw_spec.min_items,
            "max_items": raw_spec.max_items,
            "default": raw_spec.default,
            "help": raw_spec.help,
            "metavar": raw_spec.metavar,
        }
        if raw_spec.positional:
            assert raw_spec.dest is not None, "positional dest should not be None"
            model.add_value(raw_spec.dest, position=raw_spec.position, **common)
        else:
            model.add_option(
                *raw_spec.flags,
                dest=raw_spec.dest,
                separator=raw_spec.separator,
                mutually_exclusive_set=raw_spec.mutually_exclusive_set,
                **common,
            )
    return model


def loader(file_path: Path | str) -> SpecificationModel:
    """
    Load a `SpecificationModel` from a YAML or TOML file.

    The file should contain a mapping with an `options` list. Each entry needs
    `flags` (or `positional: true` and a `dest`) and may set `type`, `kind`,
    `required`, `min_items`, `max_items`, `separator`, `default`,
    `mutually_exclusive_set`, `help` and `metavar`.

    Args:
        file_path (Path | str): Path to the specification file (YAML or TOML).

    Returns:
        SpecificationModel: A model ready for `CommandLineParser.parse_arguments()`.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or the file is not a mapping.
        pydantic.ValidationError: If an entry is malformed.
        SpecificationError: If the entries describe an inconsistent model.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such specification file: {file_path}")

    raw_config = read_document(path)
    if not isinstance(raw_config, dict) or "options" not in raw_config:
        raise ValueError(
            "Specification file must contain a mapping with a list of options.\n"
            "Example:\n"
            "program: 'my-tool'\n"
            "options:\n"
            "  - flags: ['-i', '--int-seq']\n"
            "    type: int\n"
            "    kind: sequence"
        )

    model = convert_model(RawModel.model_validate(raw_config))
    logger.debug("Loaded %s from %s", model, path)
    return model
