# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Response Transformer.

Renders objects returned by request handlers through transformers
registered per type, embedding related resources requested with the
`embeds` query parameter.

    registry = get_transformer_registry()
    registry.register("Article", ArticleTransformer)
    registry.register("Comment", lambda c: CommentTransformer(c.resolve(UrlBuilder)))

    registry.transform(article)            # -> dict
    registry.transform([article, other])   # -> list of dicts
"""

from .container import Container
from .errors import (
    InvalidTransformerError,
    InvalidTypeKeyError,
    NotResolvableError,
    TransformerError,
    TransformerErrorCode,
    TransformerNotFoundError,
)
from .responses import TransformerResponse, morph
from .serializer import BaseTransformer, Collection, Item, Manager
from .transformer import (
    ClassRule,
    FactoryRule,
    TransformerRegistry,
    get_transformer_registry,
    reset_transformer_registry,
)

__all__ = [
    "TransformerRegistry",
    "get_transformer_registry",
    "reset_transformer_registry",
    "ClassRule",
    "FactoryRule",
    "BaseTransformer",
    "Manager",
    "Item",
    "Collection",
    "Container",
    "TransformerResponse",
    "morph",
    "TransformerError",
    "TransformerErrorCode",
    "NotResolvableError",
    "TransformerNotFoundError",
    "InvalidTransformerError",
    "InvalidTypeKeyError",
]
