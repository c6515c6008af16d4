from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from linkhub_app.api.redirect import client_ip
from linkhub_app.dependencies import (
    get_analytics,
    get_bulk_executor,
    get_click_recorder,
    get_dashboard,
    get_mapping_store,
    get_url_service,
)
from linkhub_app.exceptions import ValidationError
from linkhub_app.models.url import utcnow
from linkhub_app.schemas.url import (
    BulkOperationRequest,
    BulkOperationResponse,
    DashboardStats,
    MessageResponse,
    UpdateUrlRequest,
    UrlAnalytics,
    UrlInfo,
)
from linkhub_app.services.analytics_service import AnalyticsAggregator
from linkhub_app.services.bulk_operations import BulkOperationExecutor
from linkhub_app.services.click_recorder import ClickRecorder
from linkhub_app.services.dashboard_service import DashboardSummarizer
from linkhub_app.services.url_service import URLService
from linkhub_app.storage.mapping_store import MappingStore

router = APIRouter(prefix="/manage", tags=["manage"])


@router.get("/urls", response_model=List[UrlInfo])
def list_urls(
    user_id: Optional[int] = Query(None, alias="userId"),
    page: int = Query(1),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    store: MappingStore = Depends(get_mapping_store)
):
    """One page of short URLs, newest first"""
    mappings = store.list_page(owner_id=user_id, page=page, page_size=page_size)
    return [UrlInfo.model_validate(m) for m in mappings]


@router.get("/urls/{short_code}", response_model=UrlInfo)
def get_url_details(short_code: str, analytics: AnalyticsAggregator = Depends(get_analytics)):
    """Full detail of a short URL including its latest clicks"""
    return analytics.get_details(short_code)


@router.put("/urls/{short_code}", response_model=UrlInfo)
def update_url(
    short_code: str,
    body: UpdateUrlRequest,
    user_id: Optional[int] = Query(None, alias="userId"),
    store: MappingStore = Depends(get_mapping_store)
):
    mapping = store.update(
        short_code,
        owner_id=user_id,
        original_url=body.original_url,
        expires_at=body.expires_at,
        is_active=body.is_active
    )
    return UrlInfo.model_validate(mapping)


@router.delete("/urls/{short_code}", response_model=MessageResponse)
def delete_url(
    short_code: str,
    user_id: Optional[int] = Query(None, alias="userId"),
    url_service: URLService = Depends(get_url_service)
):
    url_service.delete_url(short_code, user_id=user_id)
    return MessageResponse(message="URL deleted successfully")


@router.get("/urls/{short_code}/analytics", response_model=UrlAnalytics)
def get_url_analytics(
    short_code: str,
    user_id: Optional[int] = Query(None, alias="userId"),
    analytics: AnalyticsAggregator = Depends(get_analytics)
):
    return analytics.get_analytics(short_code, owner_id=user_id)


@router.post("/bulk", response_model=BulkOperationResponse)
def bulk_operation(
    body: BulkOperationRequest,
    user_id: Optional[int] = Query(None, alias="userId"),
    executor: BulkOperationExecutor = Depends(get_bulk_executor)
):
    """Apply delete/activate/deactivate to many codes; per-item failures are reported"""
    if not body.short_codes:
        raise ValidationError("Short codes are required")
    if not body.operation:
        raise ValidationError("Operation is required")

    return executor.apply(body.short_codes, body.operation, owner_id=user_id)


@router.post("/urls/{short_code}/click", response_model=MessageResponse)
def record_click(
    short_code: str,
    request: Request,
    recorder: ClickRecorder = Depends(get_click_recorder)
):
    """Record a click reported by a client; unknown codes are ignored"""
    recorder.record_click(
        short_code,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent", "unknown"),
        referrer=request.headers.get("referer"),
        count_click=True
    )
    return MessageResponse(message="Click recorded successfully")


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard_stats(
    user_id: Optional[int] = Query(None, alias="userId"),
    dashboard: DashboardSummarizer = Depends(get_dashboard)
):
    return dashboard.summarize(owner_id=user_id)


@router.get("/export/csv")
def export_csv(
    user_id: Optional[int] = Query(None, alias="userId"),
    url_service: URLService = Depends(get_url_service)
):
    """Export short URLs as a CSV attachment"""
    filename = f"urls_export_{utcnow():%Y%m%d}.csv"
    return Response(
        content=url_service.export_csv(owner_id=user_id),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
