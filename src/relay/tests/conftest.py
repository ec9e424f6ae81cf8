# ABOUTME: pytest configuration for relay tests
# ABOUTME: Configures timeouts and provides shared sink, builder and settings fixtures

import pytest

from relay.config import get_settings
from relay.implementations.memory import ChainBuilder, InMemoryInstrumentationSink


def pytest_configure(config):
    """Configure pytest for relay tests."""
    config.addinivalue_line("markers", "unit: Unit tests with 20-second timeout")
    config.addinivalue_line("markers", "integration: Integration tests with 60-second timeout")
    config.addinivalue_line("markers", "contract: Contract tests with 60-second timeout")
    config.addinivalue_line("markers", "benchmark: Benchmark tests with 60-second timeout")


def pytest_collection_modifyitems(config, items):
    """Modify test items to add appropriate timeouts based on test type."""
    for item in items:
        # If there's already a timeout marker, don't override it
        if item.get_closest_marker("timeout"):
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif any(item.get_closest_marker(mark) for mark in ["integration", "contract", "benchmark"]):
            item.add_marker(pytest.mark.timeout(60))
        # Other tests will use the global default (60 seconds from pyproject.toml)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the settings cache so environment changes in a test are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sink():
    """In-memory sink recording every published event."""
    return InMemoryInstrumentationSink()


@pytest.fixture
def builder():
    """Chain builder with its own cache, reading the process-wide registry."""
    return ChainBuilder(name="test")
