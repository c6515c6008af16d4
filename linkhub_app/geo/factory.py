"""
Factory for creating geolocation lookup instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum

import structlog

from .strategies import GeoLookupStrategy, NullGeoLookup, StaticGeoLookup
from linkhub_app.config import settings

logger = structlog.get_logger()


class GeoBackend(Enum):
    """Available geolocation backends"""
    NULL = "null"
    STATIC = "static"


class GeoLookupFactory:
    """
    Simple factory for creating geolocation lookup instances.

    Uses Singleton Pattern - creates instance once, reuses it.
    Gets configuration from settings (not passed as parameters).
    """

    _instance: GeoLookupStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: GeoBackend) -> GeoLookupStrategy:
        """
        Create or return cached geolocation lookup.

        Args:
            backend: Type of lookup backend (from enum)

        Returns:
            Singleton lookup instance
        """
        if cls._instance is not None:
            return cls._instance

        if backend == GeoBackend.NULL:
            cls._instance = NullGeoLookup()

        elif backend == GeoBackend.STATIC:
            cls._instance = StaticGeoLookup(
                country=settings.geo_static_country,
                city=settings.geo_static_city
            )

        else:
            raise ValueError(f"Unknown geo backend: {backend}")

        logger.info("geo_lookup_initialized", backend=backend.value)
        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
