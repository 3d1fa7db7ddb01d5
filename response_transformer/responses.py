# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""JSON response that runs transformable content through the registry.

    @app.get("/articles")
    def list_articles():
        return TransformerResponse(repository.all())

Content with a registered transformer is transformed using the embeds of
the bound request; any other content is JSON-encoded unmodified.
"""

from typing import Any, Mapping

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from .transformer import TransformerRegistry, get_transformer_registry


def morph(content: Any, registry: TransformerRegistry | None = None, request: Any = None) -> Any:
    """Transform `content` when it is transformable, else pass it through."""
    registry = registry or get_transformer_registry()
    if registry.is_transformable(content):
        return registry.transform(content, request)
    return jsonable_encoder(content)


class TransformerResponse(JSONResponse):
    """JSONResponse whose content is morphed through a TransformerRegistry."""

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        media_type: str | None = None,
        background: BackgroundTask | None = None,
        *,
        registry: TransformerRegistry | None = None,
        request: Any = None,
    ) -> None:
        super().__init__(
            morph(content, registry, request),
            status_code=status_code,
            headers=headers,
            media_type=media_type,
            background=background,
        )
