"""
Click analytics computed on demand from the click log.

Nothing is precomputed: every query takes a snapshot of the mapping and
its records and rolls them up. Snapshots are not linearizable with
concurrent writes, which is acceptable for read-only views.
"""

from collections import Counter
from typing import Iterable, List, Optional

from linkhub_app.config import settings
from linkhub_app.exceptions import NotFoundError
from linkhub_app.models.url import ClickRecord
from linkhub_app.schemas.url import (
    CountryClick,
    DailyClick,
    ReferrerClick,
    UrlAnalytics,
    UrlInfo,
)
from linkhub_app.storage.mapping_store import MappingStore


def _ranked(values: Iterable[Optional[str]]) -> List[tuple]:
    """Count non-empty values, most frequent first (ties keep first-seen order)"""
    return Counter(value for value in values if value).most_common()


class AnalyticsAggregator:

    def __init__(self, store: MappingStore, history_limit: Optional[int] = None):
        self.store = store
        self.click_log = store.click_log
        self.history_limit = history_limit or settings.click_history_limit

    def get_analytics(self, short_code: str, owner_id: Optional[int] = None) -> UrlAnalytics:
        """
        Per-day, per-country and per-referrer rollups for one mapping.

        Total clicks come from the mapping's own counter, not from the
        records; the two only drift apart if recording failed.
        """
        mapping = self.store.get(short_code)
        if mapping is None or (owner_id is not None and mapping.owner_id != owner_id):
            raise NotFoundError("URL not found")

        clicks = self.click_log.records_for(mapping.short_code)

        return UrlAnalytics(
            short_code=mapping.short_code,
            original_url=mapping.original_url,
            total_clicks=mapping.click_count,
            created_at=mapping.created_at,
            last_click_at=max((c.clicked_at for c in clicks), default=None),
            daily_clicks=self.daily_clicks(clicks),
            country_clicks=[
                CountryClick(country=country, count=count)
                for country, count in _ranked(c.country for c in clicks)
            ],
            referrer_clicks=[
                ReferrerClick(referrer=referrer, count=count)
                for referrer, count in _ranked(c.referrer for c in clicks)
            ]
        )

    @staticmethod
    def daily_clicks(clicks: Iterable[ClickRecord]) -> List[DailyClick]:
        per_day = Counter(c.clicked_at.date() for c in clicks)
        return [DailyClick(date=day, count=per_day[day]) for day in sorted(per_day)]

    def get_details(self, short_code: str) -> UrlInfo:
        """Mapping detail with the most recent clicks, newest first"""
        mapping = self.store.get(short_code)
        if mapping is None:
            raise NotFoundError("URL not found")

        history = self.click_log.recent(mapping.short_code, limit=self.history_limit)
        return UrlInfo.model_validate({
            **mapping.model_dump(),
            "click_history": [record.model_dump() for record in history],
        })
