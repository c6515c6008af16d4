"""
Domain models for LinkHub.

Mappings and click records are kept in memory only, in MappingStore and
ClickLog respectively.
"""

from .url import UrlMapping, ClickRecord

__all__ = ["UrlMapping", "ClickRecord"]
