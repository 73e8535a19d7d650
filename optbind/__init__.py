"""
Optbind CLI Parsing

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .errors import ErrorType, NameInfo, ParsingError
from .exceptions import ConversionError, InvalidStateError, OptbindError, SpecificationError
from .parser import (
    CommandLineParser,
    ParseResult,
    Specification,
    SpecificationModel,
    TargetKind,
    format_command_line,
    option,
    value,
)
from .settings import FormatSettings, ParserSettings, load_settings
from .version import __version__

logger = logging.getLogger("optbind")


__all__ = [
    "CommandLineParser",
    "ConversionError",
    "ErrorType",
    "FormatSettings",
    "InvalidStateError",
    "NameInfo",
    "OptbindError",
    "ParseResult",
    "ParserSettings",
    "ParsingError",
    "Specification",
    "SpecificationError",
    "SpecificationModel",
    "TargetKind",
    "__version__",
    "format_command_line",
    "load_settings",
    "option",
    "value",
]
