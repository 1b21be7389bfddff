from fastapi import APIRouter, Depends, Request, Response, status
from shortlink_app.api.rate_limit import limiter
from shortlink_app.config import settings
from shortlink_app.dependencies import get_url_service
from shortlink_app.schemas.url import ErrorResponse, ShortenRequest, ShortenResponse
from shortlink_app.services.url_service import URLService

router = APIRouter(tags=["urls"])


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": ShortenResponse, "description": "URL was already shortened"},
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.rate_limit_shorten)
async def shorten_url(
    request: Request,
    response: Response,
    payload: ShortenRequest,
    url_service: URLService = Depends(get_url_service)
):
    """Create a short URL (201), or return the existing one (200)"""
    url, created = await url_service.shorten(payload.url)
    if not created:
        response.status_code = status.HTTP_200_OK
    return ShortenResponse.model_validate(url)
