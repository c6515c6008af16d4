"""
Geolocation strategies using Strategy Pattern.
Allows switching between lookup backends without touching the click recorder.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple


GeoResult = Tuple[Optional[str], Optional[str]]


class GeoLookupStrategy(ABC):
    """
    Abstract base class for geolocation lookups.

    A lookup maps a client IP address to (country, city). Either part may
    be None when unknown. Lookups are best-effort: click counting never
    depends on them.
    """

    @abstractmethod
    def lookup(self, ip_address: str) -> GeoResult:
        """
        Resolve an IP address.

        Args:
            ip_address: Client IP address as seen by the server

        Returns:
            (country, city) tuple
        """
        pass


class NullGeoLookup(GeoLookupStrategy):
    """
    Null Object Pattern - lookup that knows nothing.

    Used for:
    - Testing
    - Deployments without a geolocation backend
    """

    def lookup(self, ip_address: str) -> GeoResult:
        """Always returns (None, None)"""
        return None, None


class StaticGeoLookup(GeoLookupStrategy):
    """
    Answers every lookup with the same configured location.

    Handy for demos and single-region deployments.
    """

    def __init__(self, country: Optional[str], city: Optional[str]):
        self.country = country or None
        self.city = city or None

    def lookup(self, ip_address: str) -> GeoResult:
        return self.country, self.city
