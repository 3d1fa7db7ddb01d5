# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Transformation rules — how a registry entry becomes a transformer.

Two variants, resolved through the same resolve(container) call:

- ClassRule: a transformer class, constructed with no arguments
- FactoryRule: a callable taking the Container and returning a transformer

Resolution is deferred until transform time; nothing is built at
registration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from ..container import Container


class TransformerRule(ABC):
    """A registered, not yet resolved, transformer."""

    kind: str = ""

    @abstractmethod
    def resolve(self, container: "Container") -> Any:
        """Build the transformer instance."""
        ...


@dataclass(frozen=True)
class ClassRule(TransformerRule):
    """Instantiate `transformer_class` with no arguments."""

    transformer_class: type
    kind: str = "class"

    def resolve(self, container: "Container") -> Any:
        return self.transformer_class()


@dataclass(frozen=True)
class FactoryRule(TransformerRule):
    """Call `factory(container)` and use its return value."""

    factory: Callable[["Container"], Any]
    kind: str = "factory"

    def resolve(self, container: "Container") -> Any:
        return self.factory(container)


def as_rule(value: Any) -> Any:
    """Wrap a raw registration value into a rule.

    Classes become ClassRule, other callables FactoryRule. Values of any
    other shape are returned unchanged and rejected at resolution time.
    """
    if value is None or isinstance(value, TransformerRule):
        return value
    if isinstance(value, type):
        return ClassRule(value)
    if callable(value):
        return FactoryRule(value)
    return value
