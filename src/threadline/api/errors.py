"""Translate domain exceptions into HTTP responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from threadline.core.errors import ContentError

logger = logging.getLogger(__name__)


async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    """Render an expected domain failure with its stable code."""
    logger.debug(
        "%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected fault and hide its details from the client."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "internal_error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain and fallback handlers to ``app``."""
    app.add_exception_handler(ContentError, content_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
