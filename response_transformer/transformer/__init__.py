# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Type-keyed transformer registry."""

from .keys import class_key, is_homogeneous_sequence, transform_key
from .registry import (
    TransformerRegistry,
    get_transformer_registry,
    reset_transformer_registry,
)
from .rules import ClassRule, FactoryRule, TransformerRule, as_rule

__all__ = [
    "TransformerRegistry",
    "get_transformer_registry",
    "reset_transformer_registry",
    "TransformerRule",
    "ClassRule",
    "FactoryRule",
    "as_rule",
    "transform_key",
    "class_key",
    "is_homogeneous_sequence",
]
