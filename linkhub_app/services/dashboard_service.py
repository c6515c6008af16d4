from typing import Optional

from linkhub_app.config import settings
from linkhub_app.models.url import utcnow
from linkhub_app.schemas.url import DashboardStats, UrlInfo
from linkhub_app.storage.mapping_store import MappingStore


class DashboardSummarizer:
    """Point-in-time summary over all mappings, or one owner's mappings"""

    def __init__(self, store: MappingStore, top_limit: Optional[int] = None):
        self.store = store
        self.top_limit = top_limit or settings.dashboard_top_limit

    def summarize(self, owner_id: Optional[int] = None) -> DashboardStats:
        mappings = self.store.snapshot(owner_id=owner_id)
        now = utcnow()

        total_clicks = sum(m.click_count for m in mappings)
        # sorted() is stable: equal counts stay newest first
        top = sorted(mappings, key=lambda m: m.click_count, reverse=True)[:self.top_limit]

        return DashboardStats(
            total_urls=len(mappings),
            active_urls=sum(1 for m in mappings if m.is_active),
            # Counted only; the mappings are not deactivated here
            expired_urls=sum(1 for m in mappings if m.is_expired(now)),
            total_clicks=total_clicks,
            average_clicks_per_url=total_clicks / len(mappings) if mappings else 0.0,
            top_urls=[UrlInfo.model_validate(m) for m in top]
        )
