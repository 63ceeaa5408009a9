# src/aurora/main.py
"""Main entry point for the Aurora application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from aurora.api.v1 import (
    categories_router,
    comments_router,
    posts_router,
    system_router,
    users_router,
)
from aurora.api.v1.payloads import first_error_message
from aurora.core.settings import settings
from aurora.db.session import create_tables
from aurora.services.errors import AuroraError

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Social content platform API",
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


@app.exception_handler(AuroraError)
async def aurora_error_handler(request: Request, exc: AuroraError) -> JSONResponse:
    """Render domain errors as ``{"detail": message}``."""
    if exc.status_code >= 500:
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report only the first validation error, as a 400."""
    return JSONResponse(status_code=400, content={"detail": first_error_message(exc)})


# Include API routers
app.include_router(system_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(categories_router, prefix=settings.api_prefix)
app.include_router(posts_router, prefix=settings.api_prefix)
app.include_router(comments_router, prefix=settings.api_prefix)

# Files written by the local blob store; skipped when media is served elsewhere
if settings.media_base_url.startswith("/"):
    app.mount(
        settings.media_base_url,
        StaticFiles(directory=settings.media_root, check_dir=False),
        name="media",
    )


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("aurora.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    main()
