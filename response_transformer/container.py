# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Injection context handed to transformer factories.

Factories registered on the transformer registry receive a Container and
pull their collaborators out of it:

    container = Container()
    container.instance(UrlBuilder, UrlBuilder(base="https://api.example.com"))

    registry.register(
        "Article",
        lambda c: ArticleTransformer(urls=c.resolve(UrlBuilder)),
    )
"""

from __future__ import annotations

from typing import Any, Callable

import structlog

from .errors import NotResolvableError

logger = structlog.get_logger(__name__)

Factory = Callable[["Container"], Any]


class Container:
    """Minimal dependency container keyed by type (or any hashable key)."""

    def __init__(self) -> None:
        self._factories: dict[Any, Factory] = {}
        self._singletons: set[Any] = set()
        self._instances: dict[Any, Any] = {}

    def bind(
        self,
        abstract: Any,
        factory: Factory | None = None,
        *,
        singleton: bool = False,
    ) -> "Container":
        """Bind a factory for `abstract`.

        Without a factory, `abstract` must be a class and is constructed with
        no arguments. Singleton bindings are built once, on first resolve.
        """
        if factory is None:
            factory = lambda _c: abstract()  # noqa: E731
        self._factories[abstract] = factory
        self._instances.pop(abstract, None)
        if singleton:
            self._singletons.add(abstract)
        else:
            self._singletons.discard(abstract)
        return self

    def singleton(self, abstract: Any, factory: Factory | None = None) -> "Container":
        return self.bind(abstract, factory, singleton=True)

    def instance(self, abstract: Any, obj: Any) -> "Container":
        """Bind an already-built object."""
        self._instances[abstract] = obj
        return self

    def bound(self, abstract: Any) -> bool:
        return abstract in self._instances or abstract in self._factories

    def resolve(self, abstract: Any) -> Any:
        """Return the instance bound for `abstract`.

        Raises:
            NotResolvableError: if nothing is bound for `abstract`.
        """
        if abstract in self._instances:
            return self._instances[abstract]

        factory = self._factories.get(abstract)
        if factory is None:
            logger.warning(
                "Dependency not resolvable",
                dependency=getattr(abstract, "__name__", str(abstract)),
            )
            raise NotResolvableError(abstract)

        obj = factory(self)
        if abstract in self._singletons:
            self._instances[abstract] = obj
        return obj
