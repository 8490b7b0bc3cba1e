# src/threadline/main.py
"""Main entry point for the Threadline application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from threadline.api.errors import register_exception_handlers
from threadline.api.v1 import (
    bookmarks_router,
    drafts_router,
    posts_router,
    reactions_router,
    users_router,
)
from threadline.core.logging_config import configure_logging
from threadline.core.settings import settings
from threadline.db.session import dispose_engine

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Threadline API",
    description="Threaded social posts with exact engagement counters",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(reactions_router, prefix="/api/v1")
app.include_router(drafts_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(bookmarks_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    dispose_engine()
    logger.info("%s stopped", settings.app_name)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Threadline API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("threadline.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
