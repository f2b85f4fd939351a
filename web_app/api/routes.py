"""API routes implementation."""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Query, Request, status

from microlink.common.urls import build_base_url, build_short_url
from microlink.database.models import Link

from .schemas import ErrorResponse, HealthResponse, LinkCreateRequest, LinkResponse

router = APIRouter()


def _to_response(request: Request, link: Link) -> LinkResponse:
    config = request.app.state.config
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    return LinkResponse(
        **link.to_dict(),
        short_url=build_short_url(link.short_code, base_url, config.path_prefix),
    )


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Link store error"},
    },
    summary="Register short link",
)
async def create_link(request: Request, body: LinkCreateRequest):
    """Register a short code for a target URL."""
    service = request.app.state.service
    link = await service.register_link(body.short_code, body.target_url)
    return _to_response(request, link)


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={500: {"model": ErrorResponse, "description": "Link store error"}},
    summary="List links",
    description="List all links, most clicked first.",
)
async def list_links(request: Request, limit: Optional[int] = Query(None, ge=1)):
    service = request.app.state.service
    links = await service.list_links(limit)
    return [_to_response(request, link) for link in links]


@router.get(
    "/links/{short_code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Link store error"},
    },
    summary="Get link",
    description="Get the stored record for a short code. Does not count a click.",
)
async def get_link(request: Request, short_code: str):
    service = request.app.state.service
    link = await service.get_link(short_code)
    return _to_response(request, link)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report database and cache status.",
)
async def health_check(request: Request):
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
