# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""settings.py
Parser settings for Optbind, loadable from YAML or TOML."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from babel import Locale, UnknownLocaleError
from pydantic import BaseModel, ConfigDict, field_validator

from optbind.logger import logger

INVARIANT_CULTURES = {"", "invariant"}


class ParserSettings(BaseModel):
    """
    Immutable parser configuration passed explicitly into every parse call.

    Attributes:
        case_sensitive (bool): Compare option names case-sensitively.
        culture (str | None): Locale identifier for numeric and date conversion,
            None for the invariant culture.
        ignore_unknown_arguments (bool): Skip unknown options instead of reporting them.
        enable_dash_dash (bool): Treat everything after a standalone `--` as values.
        auto_help (bool): Report `--help` as a help request.
        auto_version (bool): Report `--version` as a version request.
        mutually_exclusive (bool): Enforce mutually exclusive sets.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    case_sensitive: bool = True
    culture: str | None = None
    ignore_unknown_arguments: bool = False
    enable_dash_dash: bool = True
    auto_help: bool = True
    auto_version: bool = True
    mutually_exclusive: bool = True

    @field_validator("culture")
    @classmethod
    def validate_culture(cls, value: str | None) -> str | None:
        if value is None or value.strip().lower() in INVARIANT_CULTURES:
            return None
        try:
            Locale.parse(value.strip().replace("-", "_"))
        except (UnknownLocaleError, ValueError, TypeError) as error:
            raise ValueError(f"Unknown culture: '{value}'") from error
        return value.strip()


class FormatSettings(BaseModel):
    """
    Immutable options for turning a bound instance back into arguments.

    Attributes:
        prefer_short_name (bool): Name options by their short name when they have one.
        group_switches (bool): Emit every active short switch as one `-abc` cluster.
        use_equal_token (bool): Write long options with values as `--name=value`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefer_short_name: bool = False
    group_switches: bool = False
    use_equal_token: bool = False


def load_settings(file_path: Path | str) -> ParserSettings:
    """
    Load `ParserSettings` from a YAML or TOML file.

    The settings may sit at the top level or under a `parser:` table.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or does not hold a mapping.
        pydantic.ValidationError: If a setting has an invalid value.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such settings file: {file_path}")

    raw_settings = read_document(path)
    if not isinstance(raw_settings, dict):
        raise ValueError("Settings file must contain a mapping of parser settings.")
    section: Any = raw_settings.get("parser", raw_settings)
    if not isinstance(section, dict):
        raise ValueError("The 'parser' table must be a mapping of parser settings.")

    settings = ParserSettings.model_validate(section)
    logger.debug("Loaded parser settings from %s: %s", path, settings)
    return settings


def read_document(path: Path) -> Any:
    """Read a YAML or TOML document chosen by file extension."""
    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as document:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(document)
        if suffix == ".toml":
            return toml.load(document)
    raise ValueError(f"Unsupported config format: {suffix}")
