from typing import List

from fastapi import APIRouter, Depends
from shortlink_app.dependencies import get_url_service
from shortlink_app.schemas.url import ErrorResponse, MessageResponse, URLStats
from shortlink_app.services.url_service import URLService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=List[URLStats])
async def list_urls(url_service: URLService = Depends(get_url_service)):
    """List every short URL with its visit count"""
    urls = await url_service.list_all()
    return [URLStats.model_validate(url) for url in urls]


@router.get("/{code}", response_model=URLStats, responses={404: {"model": ErrorResponse}})
async def get_url_stats(
    code: str,
    url_service: URLService = Depends(get_url_service)
):
    """Statistics for one short URL (read from the store, never the cache)"""
    url = await url_service.get_one(code)
    return URLStats.model_validate(url)


@router.delete("/{code}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
async def delete_url(
    code: str,
    url_service: URLService = Depends(get_url_service)
):
    """Delete a short URL and invalidate its cache entry"""
    await url_service.remove(code)
    return MessageResponse(message="Deleted")
