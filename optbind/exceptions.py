# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the exception classes raised by Optbind.

Optbind separates two kinds of failure:

- User input problems (unknown options, bad values, missing required options, ...)
  are never raised. They are collected as `ParsingError` values on the returned
  `ParseResult` (see `optbind.errors`).
- Programmer or configuration defects are raised as exceptions from this module,
  usually while a `SpecificationModel` is being built.

Exception Hierarchy:
- OptbindError
    ├── SpecificationError
    ├── InvalidStateError
    └── ConversionError (also a ValueError)
"""


class OptbindError(Exception):
    """Base exception for all Optbind errors."""


class SpecificationError(OptbindError):
    """Raised when an option or value specification is misconfigured."""


class InvalidStateError(OptbindError):
    """Raised when a token stream is used outside of its valid range."""


class ConversionError(OptbindError, ValueError):
    """Raised by the value converter when a string cannot be converted."""
