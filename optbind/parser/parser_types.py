# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token and per-pass state models for the Optbind instance binder.

Contents:
- `TokenKind` / `Token`: one classified unit of input, either a name reference
  (`--long`, `-s`) or a bare value. Equality is structural.
- `ResolutionMapEntry`: tracks whether a `Specification` has been named
  (`is_defined`) and whether a legal value was written (`received_value`)
  during a single parse call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from optbind.parser.specification import Specification


class TokenKind(Enum):
    NAME = "name"
    VALUE = "value"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A classified token. `forced` marks values escaped by the `--` sentinel."""

    kind: TokenKind
    text: str
    forced: bool = field(default=False, compare=False)

    @classmethod
    def name(cls, text: str) -> Token:
        return cls(TokenKind.NAME, text)

    @classmethod
    def value(cls, text: str, forced: bool = False) -> Token:
        return cls(TokenKind.VALUE, text, forced)

    @property
    def is_name(self) -> bool:
        return self.kind is TokenKind.NAME

    @property
    def is_value(self) -> bool:
        return self.kind is TokenKind.VALUE

    def __str__(self) -> str:
        return f"{self.kind}:{self.text}"


@dataclass
class ResolutionMapEntry:
    """Tracks a specification and whether it was named and received a value."""

    spec: Specification
    is_defined: bool = False
    received_value: bool = False

    def mark_defined(self, received_value: bool = False) -> None:
        """Mark the specification as named, optionally as having received a value."""
        self.is_defined = True
        if received_value:
            self.received_value = True

    def reset(self) -> None:
        """Reset the per-pass state."""
        self.is_defined = False
        self.received_value = False
