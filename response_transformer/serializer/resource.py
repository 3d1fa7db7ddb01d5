# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Resource shapes: a single item or a collection of items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Resource:
    """Data paired with the transformer that renders it (may be None)."""

    data: Any
    transformer: Any = None

    shape: ClassVar[str] = "item"


@dataclass(frozen=True)
class Item(Resource):
    """A single object, rendered as a dict."""

    shape: ClassVar[str] = "item"


@dataclass(frozen=True)
class Collection(Resource):
    """An ordered sequence of objects, rendered as a list of dicts."""

    shape: ClassVar[str] = "collection"
