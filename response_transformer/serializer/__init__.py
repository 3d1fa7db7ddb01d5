# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Serialization engine.

Renders domain objects through transformers into plain dicts and lists,
embedding related resources when they are requested.
"""

from .base import BaseTransformer
from .manager import Manager
from .resource import Collection, Item, Resource

__all__ = [
    "BaseTransformer",
    "Manager",
    "Resource",
    "Item",
    "Collection",
]
