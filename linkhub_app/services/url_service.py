import csv
import io
from typing import List, Optional

import structlog

from linkhub_app.config import settings
from linkhub_app.exceptions import NotFoundError
from linkhub_app.schemas.url import (
    AliasAvailability,
    ShortenRequest,
    ShortenResponse,
    UrlStats,
    short_url_for,
)
from linkhub_app.storage.mapping_store import MappingStore

logger = structlog.get_logger()

CSV_HEADER = ["ShortCode", "OriginalUrl", "CreatedAt", "ClickCount", "IsActive", "ExpiresAt"]


class URLService:
    """
    Shortening facade used by the public API.

    The store is injected (not created internally), so tests can hand in a
    fresh one per test.
    """

    def __init__(self, store: MappingStore):
        self.store = store

    def shorten(self, request: ShortenRequest) -> ShortenResponse:
        """Create a short URL, or return the one this owner already has for the URL

        Raises ValidationError, ConflictError or ExhaustedError; nothing is
        stored in that case.
        """
        mapping, created = self.store.create(
            original_url=request.original_url,
            owner_id=request.owner_id,
            custom_alias=request.custom_alias,
            expires_at=request.expires_at
        )

        if created:
            message = "URL shortened successfully"
            logger.info("url_shortened", short_code=mapping.short_code, owner_id=mapping.owner_id)
        else:
            message = "URL already shortened"
            logger.info("url_already_shortened", short_code=mapping.short_code, owner_id=mapping.owner_id)

        return ShortenResponse(
            success=True,
            message=message,
            short_url=short_url_for(mapping.short_code),
            short_code=mapping.short_code,
            original_url=mapping.original_url,
            expires_at=mapping.expires_at
        )

    def get_url_stats(self, short_code: str) -> UrlStats:
        mapping = self.store.get(short_code)
        if mapping is None:
            raise NotFoundError("Short URL not found")
        return UrlStats.model_validate(mapping)

    def get_user_urls(self, user_id: int) -> List[UrlStats]:
        """All mappings of one owner, newest first"""
        return [UrlStats.model_validate(m) for m in self.store.snapshot(owner_id=user_id)]

    def delete_url(self, short_code: str, user_id: Optional[int] = None) -> None:
        try:
            self.store.delete(short_code, owner_id=user_id)
        except NotFoundError:
            raise NotFoundError("Short URL not found") from None

    def check_alias(self, alias: str) -> AliasAvailability:
        """
        Cheap availability hint.

        Only the length is checked; the alias may still be taken when
        the caller actually shortens with it.
        """
        available = bool(alias) and len(alias) >= settings.min_alias_length
        return AliasAvailability(
            alias=alias,
            available=available,
            message="Alias is available" if available else "Alias is not available or invalid"
        )

    def export_csv(self, owner_id: Optional[int] = None) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for mapping in self.store.snapshot(owner_id=owner_id):
            writer.writerow([
                mapping.short_code,
                mapping.original_url,
                mapping.created_at.strftime("%Y-%m-%d"),
                mapping.click_count,
                mapping.is_active,
                mapping.expires_at.strftime("%Y-%m-%d") if mapping.expires_at else "",
            ])
        return buffer.getvalue()
