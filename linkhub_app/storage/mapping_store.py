"""
In-memory store of short code -> UrlMapping.

The store is the single owner of mapping state. Every read-then-write on a
mapping runs under `lock`, a re-entrant lock scoped to the whole store.
Services that need a longer critical section (resolution, click counting)
take the lock themselves and use `find_live()` inside it.

Reads hand out copies, so callers never observe a mapping mid-update.
"""

import itertools
import threading
from datetime import datetime
from typing import Annotated, Dict, List, Optional, Set, Tuple

import structlog
from pydantic import AnyUrl, TypeAdapter, UrlConstraints
from pydantic import ValidationError as PydanticValidationError

from linkhub_app.config import settings
from linkhub_app.exceptions import ConflictError, NotFoundError, ValidationError
from linkhub_app.models.url import UrlMapping, as_utc
from linkhub_app.services.short_code_factory import ShortCodeFactory
from linkhub_app.services.short_code_strategies import ShortCodeStrategy
from linkhub_app.storage.click_log import ClickLog

logger = structlog.get_logger()

# AnyUrl rather than HttpUrl: HttpUrl caps length at 2083 characters
_http_url = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]
)

# Paths served by fixed routes; an alias with one of these names would never resolve
RESERVED_ALIASES = frozenset({"health", "docs", "redoc", "openapi.json"})


def validate_url(url: Optional[str]) -> str:
    """
    Check that `url` is an absolute http(s) URL.

    The caller's string is returned untouched; pydantic is only used to
    judge it, not to normalize it.
    """
    if not url or not url.strip():
        raise ValidationError("Original URL is required")
    try:
        _http_url.validate_python(url)
    except PydanticValidationError:
        raise ValidationError("Invalid URL format") from None
    return url


class MappingStore:

    def __init__(
        self,
        click_log: Optional[ClickLog] = None,
        code_strategy: Optional[ShortCodeStrategy] = None,
        min_alias_length: Optional[int] = None
    ):
        self.click_log = click_log if click_log is not None else ClickLog()
        self.code_strategy = code_strategy or ShortCodeFactory.create_strategy()
        self.min_alias_length = min_alias_length or settings.min_alias_length
        self.lock = threading.RLock()

        self._mappings: Dict[str, UrlMapping] = {}
        # Every code ever handed out, including deleted ones. Never shrinks.
        self._issued: Set[str] = set()
        self._ids = itertools.count(1)

    # Creation

    def create(
        self,
        original_url: str,
        owner_id: Optional[int] = None,
        custom_alias: Optional[str] = None,
        expires_at: Optional[datetime] = None
    ) -> Tuple[UrlMapping, bool]:
        """
        Create a mapping, or return the active one that already exists
        for the same (original_url, owner_id).

        Returns:
            (mapping, created) where created is False for the existing one

        Raises:
            ValidationError: Bad URL or alias too short
            ConflictError: Alias already used, or reserved by a fixed route
            ExhaustedError: No free generated code found
        """
        original_url = validate_url(original_url)
        custom_alias = custom_alias or None
        if custom_alias is not None and len(custom_alias) < self.min_alias_length:
            raise ValidationError(
                f"Custom alias must be at least {self.min_alias_length} characters"
            )
        if custom_alias in RESERVED_ALIASES:
            raise ConflictError("Custom alias is reserved")

        with self.lock:
            if custom_alias is not None and self.is_taken(custom_alias):
                raise ConflictError("Custom alias already exists")

            existing = self._find_active_duplicate(original_url, owner_id)
            if existing is not None:
                return existing.model_copy(), False

            mapping_id = next(self._ids)
            short_code = custom_alias or self.code_strategy.generate(mapping_id, self.is_taken)

            mapping = UrlMapping(
                id=mapping_id,
                short_code=short_code,
                original_url=original_url,
                owner_id=owner_id,
                custom_alias=custom_alias,
                expires_at=as_utc(expires_at)
            )
            self._mappings[short_code] = mapping
            self._issued.add(short_code)
            return mapping.model_copy(), True

    def is_taken(self, code: str) -> bool:
        """True if `code` was ever issued, as a generated code or an alias"""
        return code in self._issued

    def _find_active_duplicate(self, original_url: str, owner_id: Optional[int]) -> Optional[UrlMapping]:
        for mapping in self._mappings.values():
            if (mapping.original_url == original_url
                    and mapping.owner_id == owner_id
                    and mapping.is_active):
                return mapping
        return None

    # Lookup

    def find_live(self, code: str) -> Optional[UrlMapping]:
        """
        Return the stored mapping itself, not a copy.

        Only call this while holding `lock`.
        """
        mapping = self._mappings.get(code)
        if mapping is not None and mapping.matches(code):
            return mapping
        return None

    def get(self, code: str) -> Optional[UrlMapping]:
        """Copy of the mapping for a short code or alias, or None"""
        with self.lock:
            mapping = self.find_live(code)
            return mapping.model_copy() if mapping is not None else None

    def _find_owned(self, code: str, owner_id: Optional[int]) -> UrlMapping:
        # Owner mismatch must look exactly like absence
        mapping = self.find_live(code)
        if mapping is None or (owner_id is not None and mapping.owner_id != owner_id):
            raise NotFoundError("URL not found")
        return mapping

    # Mutation

    def update(
        self,
        code: str,
        owner_id: Optional[int] = None,
        original_url: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        is_active: Optional[bool] = None
    ) -> UrlMapping:
        """
        Partially update the whitelisted fields of a mapping.
        Fields left as None are not touched.
        """
        if original_url:
            original_url = validate_url(original_url)

        with self.lock:
            mapping = self._find_owned(code, owner_id)
            if original_url:
                mapping.original_url = original_url
            if expires_at is not None:
                mapping.expires_at = as_utc(expires_at)
            if is_active is not None:
                mapping.is_active = is_active
            return mapping.model_copy()

    def set_active(self, code: str, active: bool, owner_id: Optional[int] = None) -> UrlMapping:
        with self.lock:
            mapping = self._find_owned(code, owner_id)
            mapping.is_active = active
            return mapping.model_copy()

    def delete(self, code: str, owner_id: Optional[int] = None) -> UrlMapping:
        """
        Remove a mapping and every click record of its code.

        The code stays issued and is never handed out again.
        """
        with self.lock:
            mapping = self._find_owned(code, owner_id)
            del self._mappings[mapping.short_code]
            purged = self.click_log.purge(mapping.short_code)

        logger.info("url_deleted", short_code=mapping.short_code, purged_clicks=purged)
        return mapping

    def increment_clicks(self, code: str) -> Optional[int]:
        """Add one click to an existing mapping. Returns the new count."""
        with self.lock:
            mapping = self.find_live(code)
            if mapping is None:
                return None
            mapping.click_count += 1
            return mapping.click_count

    # Reads over many mappings

    def snapshot(self, owner_id: Optional[int] = None) -> List[UrlMapping]:
        """Copies of the (owner-filtered) mappings, newest first"""
        with self.lock:
            mappings = [
                mapping.model_copy()
                for mapping in self._mappings.values()
                if owner_id is None or mapping.owner_id == owner_id
            ]
        mappings.sort(key=lambda m: (m.created_at, m.id), reverse=True)
        return mappings

    def list_page(
        self,
        owner_id: Optional[int] = None,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> List[UrlMapping]:
        """One page of the (owner-filtered) mappings, newest first"""
        if page_size is None:
            page_size = settings.default_page_size
        if page < 1 or page_size < 1:
            raise ValidationError("page and pageSize must be positive")

        start = (page - 1) * page_size
        return self.snapshot(owner_id)[start:start + page_size]

    def __len__(self) -> int:
        with self.lock:
            return len(self._mappings)
