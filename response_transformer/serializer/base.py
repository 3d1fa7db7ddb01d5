# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""BaseTransformer abstract base class.

Each domain type implements this interface to declare how one instance is
rendered, and which related resources may be embedded on request.

Example:
    class ArticleTransformer(BaseTransformer):
        available_includes = ("author", "comments")

        def transform(self, article):
            return {"id": article.id, "title": article.title}

        def include_author(self, article):
            return self.item(article.author, AuthorTransformer())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from .resource import Collection, Item, Resource


class BaseTransformer(ABC):
    """Abstract transformer for one domain type."""

    # Includes a caller may request through the embeds query parameter.
    available_includes: tuple[str, ...] = ()

    # Includes always rendered, requested or not.
    default_includes: tuple[str, ...] = ()

    @abstractmethod
    def transform(self, data: Any) -> dict[str, Any]:
        """Render the plain fields of `data`."""
        ...

    def include(self, name: str, data: Any) -> Resource | None:
        """Build the resource for include `name` via `include_<name>()`."""
        method = getattr(self, f"include_{name}", None)
        if method is None:
            raise AttributeError(
                f"{type(self).__name__} declares include '{name}' "
                f"but has no include_{name}() method"
            )
        return method(data)

    def item(self, data: Any, transformer: Any) -> Item:
        return Item(data, transformer)

    def collection(self, data: Iterable[Any], transformer: Any) -> Collection:
        return Collection(list(data), transformer)
