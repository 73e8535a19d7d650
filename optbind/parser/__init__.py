"""
Optbind CLI Parsing

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .binding_target import BindingTarget, DictTarget, ImmutableTarget, MutableTarget
from .command_line_parser import CommandLineParser
from .instance_binder import BinderState, InstanceBinder
from .parse_result import ParseResult, ParseResultType
from .parser_types import ResolutionMapEntry, Token, TokenKind
from .resolution_map import OptionResolutionMap
from .signature import option, value
from .specification import Specification, SpecificationModel, describe_type
from .target_kind import TargetKind
from .token_stream import ArgumentStream, CharacterStream, TokenStream
from .unparser import format_arguments, format_command_line, format_value

__all__ = [
    "ArgumentStream",
    "BinderState",
    "BindingTarget",
    "CharacterStream",
    "CommandLineParser",
    "DictTarget",
    "ImmutableTarget",
    "InstanceBinder",
    "MutableTarget",
    "OptionResolutionMap",
    "ParseResult",
    "ParseResultType",
    "ResolutionMapEntry",
    "Specification",
    "SpecificationModel",
    "TargetKind",
    "Token",
    "TokenKind",
    "TokenStream",
    "describe_type",
    "format_arguments",
    "format_command_line",
    "format_value",
    "option",
    "value",
]
