from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so they compare with aware ones"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class UrlMapping(BaseModel):
    """
    One short link.

    Lives only in MappingStore and is mutated only while the store lock
    is held. Everything handed out of the store is a copy.
    """

    id: int
    short_code: str
    original_url: str
    owner_id: Optional[int] = None
    custom_alias: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: Optional[datetime] = None
    click_count: int = 0
    is_active: bool = True

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return as_utc(self.expires_at) < (now or utcnow())

    def matches(self, code: str) -> bool:
        return code == self.short_code or (
            self.custom_alias is not None and code == self.custom_alias
        )


class ClickRecord(BaseModel):
    """
    One observed click.

    `short_code` is a lookup key, not an ownership link. Records are
    removed only when their mapping is deleted.
    """

    id: int
    short_code: str
    clicked_at: datetime = Field(default_factory=utcnow)
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    referrer: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None

    model_config = ConfigDict(frozen=True)
