"""Sample links for demos, loaded when `seed_demo_data` is enabled."""

from datetime import timedelta

from linkhub_app.models.url import utcnow
from linkhub_app.storage.mapping_store import MappingStore

DEMO_LINKS = [
    # (alias, original_url, owner_id, age_days, click_count)
    ("google1", "https://www.google.com", 1, 7, 25),
    ("github1", "https://github.com", 1, 3, 12),
]


def seed_demo_data(store: MappingStore) -> int:
    """Insert the demo links that are not present yet. Returns how many were added."""
    added = 0
    for alias, original_url, owner_id, age_days, click_count in DEMO_LINKS:
        with store.lock:
            if store.is_taken(alias):
                continue
            mapping, created = store.create(original_url, owner_id=owner_id, custom_alias=alias)
            if not created:
                continue
            live = store.find_live(mapping.short_code)
            live.created_at = utcnow() - timedelta(days=age_days)
            live.click_count = click_count
            added += 1
    return added
