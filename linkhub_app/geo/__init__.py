"""
Geolocation module for LinkHub.
Implements Strategy Pattern for pluggable IP -> (country, city) lookups.
"""

from .strategies import GeoLookupStrategy, NullGeoLookup, StaticGeoLookup
from .factory import GeoLookupFactory, GeoBackend

__all__ = [
    "GeoLookupStrategy",
    "NullGeoLookup",
    "StaticGeoLookup",
    "GeoLookupFactory",
    "GeoBackend",
]
