# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Type identifiers used as registry keys.

A domain class can pick its own key with a `__transform_key__` class
attribute; otherwise the class name is used:

    class Article:
        __transform_key__ = "article"
"""

from __future__ import annotations

from typing import Any

# Values of these types are used as literal keys (sentinel registrations).
SCALAR_TYPES = (str, bytes, int, float, bool, type(None))


def is_homogeneous_sequence(value: Any) -> bool:
    """True for the ordered collections rendered as collection resources."""
    return isinstance(value, (list, tuple))


def class_key(cls: type) -> str:
    """Registry key for instances of `cls`."""
    explicit = getattr(cls, "__transform_key__", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    return cls.__name__


def transform_key(value: Any) -> Any:
    """Derive the registry key for a response value.

    - list/tuple: key of the first element (None when empty)
    - scalar: the value itself
    - anything else: class_key() of its type
    """
    if is_homogeneous_sequence(value):
        if not value:
            return None
        return transform_key(value[0])

    if isinstance(value, SCALAR_TYPES):
        return value

    return class_key(type(value))
