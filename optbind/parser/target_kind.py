# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TargetKind`, the semantic shape of the value a specification binds.

The kind decides how the instance binder reads values from the token stream:

- SCALAR:   exactly one value token (`--name VALUE`, `--name=VALUE`, `-nVALUE`).
- SWITCH:   no value token; presence alone stores `True`.
- NULLABLE: like SCALAR, but an absent option leaves the target `None`.
- SEQUENCE: one or more value tokens, bounded by `min_items`/`max_items`,
            or a single token split on a separator character.

Supports alias coercion for config-friendly values.

Example:
    TargetKind("list")     → TargetKind.SEQUENCE
    TargetKind("flag")     → TargetKind.SWITCH
    TargetKind("optional") → TargetKind.NULLABLE
"""
from __future__ import annotations

from enum import Enum


class TargetKind(Enum):
    """
    The value shape of a `Specification`.

    Aliases:
        - "flag", "bool" → "switch"
        - "optional" → "nullable"
        - "list", "array" → "sequence"
    """

    SCALAR = "scalar"
    SWITCH = "switch"
    NULLABLE = "nullable"
    SEQUENCE = "sequence"

    @classmethod
    def choices(cls) -> list[TargetKind]:
        """Return a list of all target kinds."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "flag": "switch",
            "bool": "switch",
            "optional": "nullable",
            "list": "sequence",
            "array": "sequence",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> TargetKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def takes_value(self) -> bool:
        """Return True if this kind needs at least one value token."""
        return self is not TargetKind.SWITCH

    def __str__(self) -> str:
        """Return the string representation of the target kind."""
        return self.value
