from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from linkhub_app.config import settings


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python.

    - from_attributes=True reads straight from domain models
    - populate_by_name=True lets services build schemas with snake_case names
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


def short_url_for(short_code: str) -> str:
    return f"{settings.base_url}/{short_code}"


# Shortening

class ShortenRequest(CamelModel):
    original_url: str = Field("", description="The original URL to be shortened")
    custom_alias: Optional[str] = Field(None, description="Caller-chosen short code")
    expires_at: Optional[datetime] = None
    owner_id: Optional[int] = None


class ShortenResponse(CamelModel):
    success: bool
    message: str
    short_url: Optional[str] = None
    short_code: Optional[str] = None
    original_url: Optional[str] = None
    expires_at: Optional[datetime] = None


class UrlStats(CamelModel):
    short_code: str
    original_url: str
    click_count: int
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_active: bool


class AliasAvailability(CamelModel):
    alias: str
    available: bool
    message: str


class MessageResponse(CamelModel):
    message: str


# Management

class ClickRecordOut(CamelModel):
    id: int
    short_code: str
    clicked_at: datetime
    ip_address: str
    user_agent: str
    referrer: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None


class UrlInfo(CamelModel):
    """Full view of a mapping, as used by the management API"""

    id: int
    short_code: str
    original_url: str
    owner_id: Optional[int] = None
    custom_alias: Optional[str] = None
    created_at: datetime
    expires_at: Optional[datetime] = None
    click_count: int
    is_active: bool
    click_history: List[ClickRecordOut] = Field(default_factory=list)

    @computed_field(alias="shortUrl")
    @property
    def short_url(self) -> str:
        """Computed field - generated from short_code"""
        return short_url_for(self.short_code)


class UpdateUrlRequest(CamelModel):
    original_url: Optional[str] = None
    expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None


class DailyClick(CamelModel):
    date: date
    count: int


class CountryClick(CamelModel):
    country: str
    count: int


class ReferrerClick(CamelModel):
    referrer: str
    count: int


class UrlAnalytics(CamelModel):
    short_code: str
    original_url: str
    total_clicks: int
    created_at: datetime
    last_click_at: Optional[datetime] = None
    daily_clicks: List[DailyClick] = Field(default_factory=list)
    country_clicks: List[CountryClick] = Field(default_factory=list)
    referrer_clicks: List[ReferrerClick] = Field(default_factory=list)


class BulkOperationRequest(CamelModel):
    short_codes: List[str] = Field(default_factory=list)
    operation: str = ""  # "delete", "activate", "deactivate"


class BulkOperationResponse(CamelModel):
    success: bool = True
    message: str = "Bulk operation completed"
    success_count: int = 0
    failure_count: int = 0
    failed_items: List[str] = Field(default_factory=list)


class DashboardStats(CamelModel):
    total_urls: int
    active_urls: int
    expired_urls: int
    total_clicks: int
    average_clicks_per_url: float
    top_urls: List[UrlInfo] = Field(default_factory=list)
