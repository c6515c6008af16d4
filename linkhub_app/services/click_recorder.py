from typing import Optional

import structlog

from linkhub_app.geo.strategies import GeoLookupStrategy, NullGeoLookup
from linkhub_app.models.url import ClickRecord
from linkhub_app.storage.mapping_store import MappingStore

logger = structlog.get_logger()


class ClickRecorder:
    """
    Appends click records for existing mappings.

    Recording is best-effort telemetry: unknown codes are ignored and a
    failing geolocation lookup only leaves country/city empty.
    """

    def __init__(self, store: MappingStore, geo_lookup: Optional[GeoLookupStrategy] = None):
        self.store = store
        self.click_log = store.click_log
        self.geo_lookup = geo_lookup or NullGeoLookup()

    def record_click(
        self,
        short_code: str,
        ip_address: str = "unknown",
        user_agent: str = "unknown",
        referrer: Optional[str] = None,
        count_click: bool = False
    ) -> Optional[ClickRecord]:
        """
        Record one click on `short_code`.

        Args:
            count_click: Also add one to the mapping's click count. The
                redirect path leaves this off because resolve already counted.

        Returns:
            The stored record, or None if the mapping does not exist
        """
        # Never hold the store lock across the lookup
        country, city = self._locate(ip_address)

        with self.store.lock:
            mapping = self.store.find_live(short_code)
            if mapping is None:
                return None

            if count_click:
                mapping.click_count += 1

            # Appended under the store lock so a concurrent delete cannot
            # purge the log first and leave this record orphaned
            record = self.click_log.append(ClickRecord(
                id=self.click_log.next_id(),
                short_code=mapping.short_code,
                ip_address=ip_address or "unknown",
                user_agent=user_agent or "unknown",
                referrer=referrer or None,
                country=country,
                city=city
            ))

        logger.debug("click_recorded", short_code=record.short_code, country=country)
        return record

    def _locate(self, ip_address: str):
        try:
            return self.geo_lookup.lookup(ip_address)
        except Exception as e:
            logger.warning("geo_lookup_failed", ip_address=ip_address, error=str(e))
            return None, None
