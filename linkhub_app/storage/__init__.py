"""
In-memory storage for LinkHub.

Mappings and click records are kept in separate collections, each behind
its own lock. MappingStore drives the click log's cascade on delete.
"""

from .click_log import ClickLog
from .mapping_store import MappingStore, validate_url
from .seed import seed_demo_data

__all__ = [
    "ClickLog",
    "MappingStore",
    "validate_url",
    "seed_demo_data",
]
