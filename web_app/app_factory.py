"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from microlink.errors import InvalidInput, LinkError, StoreUnavailable

from .api import api_router
from .middleware.logging import LoggingMiddleware
from .web import web_router

logger = logging.getLogger("microlink.web")


async def link_error_handler(request: Request, exc: LinkError) -> JSONResponse:
    """Render service errors with their mapped status code."""
    if isinstance(exc, StoreUnavailable):
        # Cause was logged by the store; clients only see a generic message
        detail = "Internal server error"
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        detail = exc.message

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": detail},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as InvalidInput (400) rather than 422."""
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    detail = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": InvalidInput.code, "detail": detail},
    )


def create_app(
    store_instance,
    cache_instance,
    service_instance,
    resolver_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Link store instance
        cache_instance: Redirect cache instance or None
        service_instance: LinkService instance
        resolver_instance: RedirectResolver instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Micro-Link",
        description="Short link registration and click-tracked redirects",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.state.store = store_instance
    app.state.cache = cache_instance
    app.state.service = service_instance
    app.state.resolver = resolver_instance
    app.state.config = config

    app.add_exception_handler(LinkError, link_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=config.cors_methods,
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
