"""Source drivers for the upstream procurement sources.

This module provides interchangeable drivers behind one contract:
- Feed: feed.FeedDriver (Atom index -> first page)
- Flat feed: flat_feed.FlatFeedDriver (single JSON document)
- Scrape: scrape.ScrapeDriver (HTML search results page)
- Mock: mock.MockDriver (fixed fixtures, no network)

Use the factory function to instantiate drivers:
    from tender_connector.drivers.factory import get_driver
    driver = get_driver(app_config.mode, app_config, catalog)
    listings = driver.fetch_listings(search_filter)
"""

from .base import BaseDriver
from .exceptions import (
    DriverConfigurationError,
    DriverError,
    FetchError,
    FetchTimeoutError,
    ParseError,
)
from .factory import get_driver
from .feed import FeedDriver, FeedPage
from .flat_feed import FlatFeedDriver
from .mock import MOCK_LISTINGS, MockDriver
from .scrape import ScrapeDriver

__all__ = [
    # Base and factory
    "BaseDriver",
    "get_driver",
    # Drivers
    "FeedDriver",
    "FeedPage",
    "FlatFeedDriver",
    "ScrapeDriver",
    "MockDriver",
    "MOCK_LISTINGS",
    # Exceptions
    "DriverError",
    "FetchError",
    "FetchTimeoutError",
    "ParseError",
    "DriverConfigurationError",
]
