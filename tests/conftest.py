"""
Test configuration and fixtures for LinkHub.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from linkhub_app.dependencies import get_geo_lookup, get_mapping_store
from linkhub_app.geo.strategies import StaticGeoLookup
from linkhub_app.services.short_code_strategies import RandomShortCodeStrategy
from linkhub_app.storage.click_log import ClickLog
from linkhub_app.storage.mapping_store import MappingStore


@pytest.fixture(scope="function")
def click_log():
    """A fresh, empty click log"""
    return ClickLog()


@pytest.fixture(scope="function")
def store(click_log):
    """
    A fresh mapping store for each test.
    This ensures tests are isolated and don't affect each other.
    """
    return MappingStore(
        click_log=click_log,
        code_strategy=RandomShortCodeStrategy(length=6, max_attempts=10),
        min_alias_length=3
    )


@pytest.fixture(scope="function")
def geo_lookup():
    return StaticGeoLookup(country="Vietnam", city="Ho Chi Minh City")


@pytest.fixture(scope="function")
def client(store, geo_lookup):
    """
    Create a test client with the store dependency overridden.
    This is the main fixture that tests will use.
    """
    app.dependency_overrides[get_mapping_store] = lambda: store
    app.dependency_overrides[get_geo_lookup] = lambda: geo_lookup

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
