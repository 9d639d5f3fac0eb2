"""Shared fixtures for Tender Connector tests."""

from datetime import datetime, timezone

import pytest

from tender_connector.config.catalog import load_catalog
from tender_connector.config.models import AppConfig
from tender_connector.logging.context import clear_log_context

# Reference "now" for recency windows; upstream fixtures are dated September 2025
NOW = datetime(2025, 10, 1, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed end of the recency window."""
    return NOW


@pytest.fixture
def catalog():
    """Packaged default catalog."""
    return load_catalog()


@pytest.fixture
def mock_config():
    """Application config selecting the mock source."""
    return AppConfig(mode="mock")


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()

