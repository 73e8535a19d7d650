# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Binding targets used by the `InstanceBinder` to write converted values.

A binding target hides how a parsed value reaches the caller's object:

- `DictTarget`: values are stored in a plain `dict[str, Any]` keyed by destination.
- `MutableTarget`: a factory creates the instance up front and values are written
  through setter closures captured when the specification model was built.
- `ImmutableTarget`: values are accumulated and handed to a factory (a frozen
  dataclass, a named tuple, or any callable) once scanning is complete.

Targets never look at raw tokens. They only receive already converted values.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from copy import deepcopy
from typing import TYPE_CHECKING, Any, Callable

from optbind.parser.target_kind import TargetKind

if TYPE_CHECKING:
    from optbind.parser.specification import Specification

Setter = Callable[[Any, Any], None]


def attribute_setter(name: str) -> Setter:
    """Return a setter closure writing attribute `name`."""

    def _setter(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return _setter


class BindingTarget(ABC):
    """Base class for all binding targets."""

    immutable: bool = False

    @abstractmethod
    def create(self) -> Any:
        """Allocate the instance (or accumulator) for one parse call."""

    @abstractmethod
    def write(self, instance: Any, spec: Specification, value: Any) -> None:
        """Write one converted value."""

    def missing_value(self, spec: Specification) -> tuple[bool, Any]:
        """Return `(should_write, value)` for a specification that received nothing."""
        if spec.default is not None:
            return True, deepcopy(spec.default)
        return True, spec.kind_default()

    def fill_missing(self, instance: Any, spec: Specification) -> None:
        should_write, value = self.missing_value(spec)
        if should_write:
            self.write(instance, spec, value)

    def finish(self, instance: Any) -> Any:
        """Return the bound object handed to the caller."""
        return instance


class DictTarget(BindingTarget):
    """Bind into a `dict` keyed by each specification's destination."""

    def create(self) -> dict[str, Any]:
        return {}

    def write(self, instance: dict[str, Any], spec: Specification, value: Any) -> None:
        instance[spec.dest] = value

    def __repr__(self) -> str:
        return "DictTarget()"


class MutableTarget(BindingTarget):
    """Bind into a default-constructed object through setter closures."""

    def __init__(
        self,
        factory: Callable[[], Any],
        setters: dict[str, Setter] | None = None,
    ) -> None:
        self.factory = factory
        self.setters: dict[str, Setter] = setters or {}

    def create(self) -> Any:
        return self.factory()

    def write(self, instance: Any, spec: Specification, value: Any) -> None:
        setter = self.setters.get(spec.dest)
        if setter is None:
            setter = attribute_setter(spec.dest)
            self.setters[spec.dest] = setter
        setter(instance, value)

    def missing_value(self, spec: Specification) -> tuple[bool, Any]:
        # Keep the instance's own attribute default unless a default was declared.
        if spec.default is not None:
            return True, deepcopy(spec.default)
        if spec.kind is TargetKind.SEQUENCE:
            return True, []
        return False, None

    def __repr__(self) -> str:
        name = getattr(self.factory, "__name__", repr(self.factory))
        return f"MutableTarget({name})"


class ImmutableTarget(BindingTarget):
    """Accumulate constructor arguments and build the instance at the end."""

    immutable = True

    def __init__(
        self,
        factory: Callable[..., Any],
        positional_parameters: list[str] | None = None,
    ) -> None:
        self.factory = factory
        self.positional_parameters: list[str] = positional_parameters or []

    def create(self) -> dict[str, Any]:
        return {}

    def write(self, instance: dict[str, Any], spec: Specification, value: Any) -> None:
        instance[spec.dest] = value

    def finish(self, instance: dict[str, Any]) -> Any:
        pending = dict(instance)
        args = [pending.pop(name) for name in self.positional_parameters if name in pending]
        return self.factory(*args, **pending)

    def __repr__(self) -> str:
        name = getattr(self.factory, "__name__", repr(self.factory))
        return f"ImmutableTarget({name})"
