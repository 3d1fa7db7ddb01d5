# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Request context middleware — binds the inbound request on the registry.

Handlers and responses rendered during the request read embeds from the
bound request without passing it around explicitly.
"""

from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..transformer import TransformerRegistry, get_transformer_registry


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind the current request for the duration of the request."""

    def __init__(self, app: ASGIApp, registry: TransformerRegistry | None = None):
        super().__init__(app)
        self._registry = registry

    @property
    def registry(self) -> TransformerRegistry:
        return self._registry or get_transformer_registry()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        registry = self.registry
        token = registry.bind_request_context(request)

        structlog.contextvars.bind_contextvars(
            path=request.url.path,
            method=request.method,
        )

        try:
            return await call_next(request)
        finally:
            registry.release_request_context(token)
            structlog.contextvars.unbind_contextvars("path", "method")
