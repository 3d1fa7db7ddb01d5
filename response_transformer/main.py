# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Response Transformer - Application Entry Point.

Builds a FastAPI app wired with the request context middleware and the
transformer error handler. Services register their transformers on the
registry and mount their routers on the returned app.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from .config import get_settings
from .errors import TransformerError
from .logging_config import configure_logging
from .middleware import RequestContextMiddleware
from .transformer import TransformerRegistry, get_transformer_registry

logger = structlog.get_logger(__name__)


def create_app(registry: TransformerRegistry | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        registry: Registry bound by the middleware. Defaults to the
            process-wide registry.
    """
    settings = get_settings()
    registry = registry or get_transformer_registry()
    started_at = datetime.now(timezone.utc)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.registry = registry
    app.add_middleware(RequestContextMiddleware, registry=registry)

    @app.exception_handler(TransformerError)
    async def transformer_error_handler(request: Request, exc: TransformerError) -> JSONResponse:
        logger.error(
            "Transformer error",
            code=exc.code.value,
            message=exc.message,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Liveness probe with registry introspection."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "started_at": started_at.isoformat(),
            "transformers": len(registry.list_transformers()),
        }

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        if not settings.enable_metrics:
            return Response(status_code=404)
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


def main() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Starting Response Transformer",
        version=settings.app_version,
        environment=settings.environment,
    )
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
