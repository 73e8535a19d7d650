# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionResolutionMap`, the name lookup and per-pass bookkeeping of a parse call.

The map indexes every short and long name of a `SpecificationModel`, so a lookup
by either name resolves to the same `Specification`. It also owns one
`ResolutionMapEntry` per specification (`is_defined`, `received_value`) and the
occurrence order of mutually exclusive sets.

A map is built at the start of every parse call and discarded at the end, so no
state leaks between calls sharing one model.

After scanning:
- `enforce_required_rule()` reports every required specification that was not
  both named and given a legal value.
- `enforce_mutually_exclusive_rule()` reports one error per option of every set
  in which more than one distinct option was named.
"""
from __future__ import annotations

from typing import MutableMapping

from optbind.errors import (
    MissingRequiredOptionError,
    MutuallyExclusiveSetError,
    NameInfo,
    ParsingError,
)
from optbind.exceptions import SpecificationError
from optbind.logger import logger
from optbind.parser.parser_types import ResolutionMapEntry
from optbind.parser.specification import Specification, SpecificationModel
from optbind.utils import CaseInsensitiveDict


class OptionResolutionMap:
    """Name to `Specification` lookup with per-pass state."""

    def __init__(
        self,
        model: SpecificationModel,
        case_sensitive: bool = True,
        mutually_exclusive: bool = True,
    ) -> None:
        self.model = model
        self.case_sensitive = case_sensitive
        self.mutually_exclusive = mutually_exclusive
        self._names: MutableMapping[str, Specification] = (
            {} if case_sensitive else CaseInsensitiveDict()
        )
        self._entries: dict[str, ResolutionMapEntry] = {}
        self._set_occurrences: dict[str, list[Specification]] = {}

        for spec in model:
            for name in spec.names:
                if name in self._names:
                    other = self._names[name]
                    raise SpecificationError(
                        f"Name '{name}' of '{spec.dest}' collides with '{other.dest}'"
                        + ("" if case_sensitive else " (case-insensitive)")
                    )
                self._names[name] = spec
            self._entries[spec.dest] = ResolutionMapEntry(spec)

    def lookup(self, name: str) -> Specification | None:
        """Return the specification registered under a short or long name."""
        return self._names.get(name)

    def entry(self, spec: Specification) -> ResolutionMapEntry:
        return self._entries[spec.dest]

    def mark_defined(self, spec: Specification) -> None:
        """Record that `spec` was named in the input."""
        self._entries[spec.dest].mark_defined()

    def mark_received(self, spec: Specification) -> None:
        """Record that a legal value was written for `spec`."""
        self._entries[spec.dest].mark_defined(received_value=True)

    def is_defined(self, spec: Specification) -> bool:
        return self._entries[spec.dest].is_defined

    def received_value(self, spec: Specification) -> bool:
        return self._entries[spec.dest].received_value

    def record_mutually_exclusive_occurrence(self, spec: Specification) -> None:
        """Count `spec` once in its mutually exclusive set, in order of first appearance."""
        set_name = spec.mutually_exclusive_set
        if not set_name:
            return
        occurrences = self._set_occurrences.setdefault(set_name, [])
        if spec not in occurrences:
            occurrences.append(spec)

    def occurrence_count(self, set_name: str) -> int:
        return len(self._set_occurrences.get(set_name, []))

    def enforce_required_rule(self) -> list[ParsingError]:
        errors: list[ParsingError] = []
        for entry in self._entries.values():
            if not entry.spec.required:
                continue
            if entry.is_defined and entry.received_value:
                continue
            errors.append(
                MissingRequiredOptionError(NameInfo.from_specification(entry.spec))
            )
        return errors

    def enforce_mutually_exclusive_rule(self) -> list[ParsingError]:
        if not self.mutually_exclusive:
            return []
        errors: list[ParsingError] = []
        for set_name, specs in self._set_occurrences.items():
            if len(specs) <= 1:
                continue
            logger.debug(
                "Mutually exclusive set '%s' defined by %s",
                set_name,
                [spec.dest for spec in specs],
            )
            errors.extend(
                MutuallyExclusiveSetError(NameInfo.from_specification(spec), set_name)
                for spec in specs
            )
        return errors

    def reset(self) -> None:
        """Clear all per-pass state."""
        for entry in self._entries.values():
            entry.reset()
        self._set_occurrences.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return (
            f"OptionResolutionMap(names={len(self._names)}, "
            f"case_sensitive={self.case_sensitive})"
        )
