from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from linkhub_app.dependencies import get_click_recorder, get_resolution_service
from linkhub_app.services.click_recorder import ClickRecorder
from linkhub_app.services.resolution_service import ResolutionService

router = APIRouter(tags=["redirect"])


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.get("/{short_code}")
def redirect_to_original_url(
    short_code: str,
    request: Request,
    resolver: ResolutionService = Depends(get_resolution_service),
    recorder: ClickRecorder = Depends(get_click_recorder)
):
    """
    Redirect to the original URL.

    Flow:
    1. Resolve the code; this counts the click (404 if missing or expired)
    2. Record the click details, outside the resolve critical section
    3. Redirect
    """
    original_url = resolver.resolve(short_code)

    recorder.record_click(
        short_code,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent", "unknown"),
        referrer=request.headers.get("referer"),
    )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
