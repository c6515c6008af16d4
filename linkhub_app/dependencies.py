"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the store and the geolocation
lookup, and builds the services around them for each request.

Pattern: Dependency Injection
- Loose coupling between components
- Easy to test (override get_mapping_store with a fresh store)
- Flexible (swap implementations via config)
"""

from functools import lru_cache

from fastapi import Depends

from linkhub_app.config import settings
from linkhub_app.geo.factory import GeoLookupFactory, GeoBackend
from linkhub_app.geo.strategies import GeoLookupStrategy
from linkhub_app.services.analytics_service import AnalyticsAggregator
from linkhub_app.services.bulk_operations import BulkOperationExecutor
from linkhub_app.services.click_recorder import ClickRecorder
from linkhub_app.services.dashboard_service import DashboardSummarizer
from linkhub_app.services.resolution_service import ResolutionService
from linkhub_app.services.url_service import URLService
from linkhub_app.storage.mapping_store import MappingStore


@lru_cache()
def get_mapping_store() -> MappingStore:
    """
    Get the mapping store (singleton).

    The store owns its click log, so both live and die together.
    """
    return MappingStore()


@lru_cache()
def get_geo_lookup() -> GeoLookupStrategy:
    """Get geolocation lookup (singleton) based on settings"""
    backend = GeoBackend(settings.geo_lookup_backend)
    return GeoLookupFactory.create(backend)


def get_url_service(store: MappingStore = Depends(get_mapping_store)) -> URLService:
    return URLService(store=store)


def get_resolution_service(store: MappingStore = Depends(get_mapping_store)) -> ResolutionService:
    return ResolutionService(store=store)


def get_click_recorder(
    store: MappingStore = Depends(get_mapping_store),
    geo_lookup: GeoLookupStrategy = Depends(get_geo_lookup)
) -> ClickRecorder:
    return ClickRecorder(store=store, geo_lookup=geo_lookup)


def get_analytics(store: MappingStore = Depends(get_mapping_store)) -> AnalyticsAggregator:
    return AnalyticsAggregator(store=store)


def get_dashboard(store: MappingStore = Depends(get_mapping_store)) -> DashboardSummarizer:
    return DashboardSummarizer(store=store)


def get_bulk_executor(store: MappingStore = Depends(get_mapping_store)) -> BulkOperationExecutor:
    return BulkOperationExecutor(store=store)
