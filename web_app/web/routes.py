"""Public redirect and liveness routes."""

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from microlink.errors import NotFound

router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse, include_in_schema=False)
async def healthz():
    """Liveness probe; does not touch the store."""
    return PlainTextResponse("OK")


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_target(request: Request, short_code: str):
    """Redirect to the target URL and count the click in the background."""
    resolver = request.app.state.resolver

    try:
        target = await resolver.resolve(short_code)
    except NotFound:
        return PlainTextResponse("not found", status_code=status.HTTP_404_NOT_FOUND)

    # 302 so browsers and proxies do not cache the redirect and skip the counter
    return RedirectResponse(url=target.target_url, status_code=status.HTTP_302_FOUND)
