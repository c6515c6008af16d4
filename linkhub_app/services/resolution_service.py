import structlog

from linkhub_app.exceptions import ExpiredError, NotFoundError
from linkhub_app.models.url import utcnow
from linkhub_app.storage.mapping_store import MappingStore

logger = structlog.get_logger()


class ResolutionService:
    """
    Turns a short code or alias into its redirect target.

    This is the hot path. The expiry check and the click increment run as
    one critical section under the store lock, so concurrent resolves never
    lose a click and never count a mapping that a concurrent delete removed.
    """

    def __init__(self, store: MappingStore):
        self.store = store

    def resolve(self, code: str) -> str:
        """
        Resolve a code and count the click.

        Returns:
            The original URL

        Raises:
            NotFoundError: Unknown or inactive code
            ExpiredError: The mapping just expired; it is now inactive
        """
        with self.store.lock:
            mapping = self.store.find_live(code)
            if mapping is None or not mapping.is_active:
                raise NotFoundError("Short URL not found or expired")

            # Lazy expiry: flipped once, never resurrected by resolve
            if mapping.is_expired(utcnow()):
                mapping.is_active = False
                logger.info("url_expired", short_code=mapping.short_code, expires_at=mapping.expires_at)
                raise ExpiredError("Short URL not found or expired")

            mapping.click_count += 1
            return mapping.original_url
