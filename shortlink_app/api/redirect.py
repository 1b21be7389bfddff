from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from shortlink_app.dependencies import get_url_service
from shortlink_app.schemas.url import ErrorResponse
from shortlink_app.services.url_service import URLService

router = APIRouter(tags=["redirect"])


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"model": ErrorResponse}},
)
async def redirect_to_original_url(
    code: str,
    url_service: URLService = Depends(get_url_service)
):
    """
    Redirect to the original URL.

    Flow:
    1. Resolve through the cache, falling back to the store
    2. Count the visit (cache hit or not)
    3. 302 to the original URL

    Unknown codes raise ShortURLNotFoundError, rendered as 404.
    """
    original_url = await url_service.resolve(code)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
