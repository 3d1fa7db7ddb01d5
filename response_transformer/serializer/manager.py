# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Serialization manager — builds plain structures from resources.

Resolution of includes for each rendered object:
1. The transformer's default_includes (always rendered)
2. available_includes whose dotted path from the root is requested
   (e.g. "author.profile" while rendering the author of an article)
3. Nothing below recursion_limit levels of nesting

Requested scopes live in a context variable, so a manager shared by
concurrent requests never leaks one request's embeds into another.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Iterable

from ..errors import InvalidTransformerError, TransformerNotFoundError
from .base import BaseTransformer
from .resource import Collection, Item, Resource


class Manager:
    """Walks a resource and its transformer to produce dicts and lists."""

    def __init__(self, recursion_limit: int = 10) -> None:
        self.recursion_limit = recursion_limit
        self._requested: ContextVar[tuple[str, ...]] = ContextVar(
            f"requested_scopes_{id(self)}", default=()
        )

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def create_item(self, data: Any, transformer: Any) -> Item:
        return Item(data, transformer)

    def create_collection(self, data: Iterable[Any], transformer: Any) -> Collection:
        return Collection(list(data), transformer)

    # -------------------------------------------------------------------------
    # Requested scopes
    # -------------------------------------------------------------------------

    def set_requested_scopes(self, scopes: Iterable[str]) -> "Manager":
        """Set the includes requested for the current context.

        Every dotted scope also requests its parents: "author.profile"
        requests "author" and "author.profile". Segments beyond
        recursion_limit are dropped.
        """
        parsed: list[str] = []
        for scope in scopes:
            parts = [part for part in scope.split(".") if part][: self.recursion_limit]
            for depth in range(1, len(parts) + 1):
                path = ".".join(parts[:depth])
                if path not in parsed:
                    parsed.append(path)
        self._requested.set(tuple(parsed))
        return self

    @property
    def requested_scopes(self) -> tuple[str, ...]:
        return self._requested.get()

    def is_requested(self, path: str) -> bool:
        return path in self._requested.get()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def serialize(self, resource: Resource) -> Any:
        """Render `resource`: an Item becomes a dict, a Collection a list."""
        return self._serialize(resource, ())

    def _serialize(self, resource: Resource, path: tuple[str, ...]) -> Any:
        if isinstance(resource, Collection):
            return [
                self._transform_item(item, resource.transformer, path)
                for item in resource.data
            ]
        return self._transform_item(resource.data, resource.transformer, path)

    def _transform_item(self, data: Any, transformer: Any, path: tuple[str, ...]) -> Any:
        if transformer is None:
            raise TransformerNotFoundError(type(data).__name__)

        if isinstance(transformer, BaseTransformer):
            result = dict(transformer.transform(data))
            for name in self._includes_for(transformer, path):
                nested = transformer.include(name, data)
                result[name] = None if nested is None else self._serialize(nested, (*path, name))
            return result

        if callable(transformer):
            return transformer(data)

        raise InvalidTransformerError(transformer)

    def _includes_for(self, transformer: BaseTransformer, path: tuple[str, ...]) -> list[str]:
        if len(path) >= self.recursion_limit:
            return []

        names = list(transformer.default_includes)
        for name in transformer.available_includes:
            if name not in names and self.is_requested(".".join((*path, name))):
                names.append(name)
        return names
