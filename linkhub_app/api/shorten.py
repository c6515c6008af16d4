from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from linkhub_app.dependencies import get_url_service
from linkhub_app.exceptions import LinkHubError
from linkhub_app.schemas.url import (
    AliasAvailability,
    MessageResponse,
    ShortenRequest,
    ShortenResponse,
    UrlStats,
)
from linkhub_app.services.url_service import URLService

router = APIRouter(tags=["shorten"])


@router.post("/shorten", response_model=ShortenResponse)
def shorten_url(
    body: ShortenRequest,
    url_service: URLService = Depends(get_url_service)
):
    """Create a short URL; failures come back as a ShortenResponse with success=false"""
    try:
        return url_service.shorten(body)
    except LinkHubError as e:
        failure = ShortenResponse(success=False, message=e.message)
        return JSONResponse(
            status_code=e.status_code,
            content=failure.model_dump(mode="json", by_alias=True)
        )


@router.get("/check-alias/{alias}", response_model=AliasAvailability)
def check_alias(alias: str, url_service: URLService = Depends(get_url_service)):
    """Availability hint for a custom alias (length only)"""
    return url_service.check_alias(alias)


@router.get("/user/{user_id}", response_model=List[UrlStats])
def get_user_urls(user_id: int, url_service: URLService = Depends(get_url_service)):
    """All short URLs of one owner, newest first"""
    return url_service.get_user_urls(user_id)


@router.get("/{short_code}/stats", response_model=UrlStats)
def get_url_stats(short_code: str, url_service: URLService = Depends(get_url_service)):
    """Statistics for a short URL"""
    return url_service.get_url_stats(short_code)


@router.delete("/{short_code}", response_model=MessageResponse)
def delete_url(
    short_code: str,
    user_id: Optional[int] = Query(None, alias="userId"),
    url_service: URLService = Depends(get_url_service)
):
    """Delete a short URL together with its click history"""
    url_service.delete_url(short_code, user_id=user_id)
    return MessageResponse(message="URL deleted successfully")
