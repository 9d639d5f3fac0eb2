"""Factory function for instantiating source drivers."""

import logging

from tender_connector.config.models import AppConfig, SourceMode
from tender_connector.domain.models import Catalog
from tender_connector.matching.engine import ListingMatcher

from .base import BaseDriver
from .exceptions import DriverConfigurationError
from .feed import FeedDriver
from .flat_feed import FlatFeedDriver
from .mock import MockDriver
from .scrape import ScrapeDriver

logger = logging.getLogger(__name__)


def get_driver(mode: str, app_config: AppConfig, catalog: Catalog) -> BaseDriver:
    """Factory function to instantiate the driver for a source mode.

    Selection is a pure function of the mode: exactly one driver serves each
    call and results are never merged across sources.

    Args:
        mode: Source mode (mock, scrape, feed, flat_feed)
        app_config: Application configuration with source addresses and HTTP settings
        catalog: Alias catalog (used by the scrape driver's query builder)

    Returns:
        Instantiated driver for the mode

    Raises:
        DriverConfigurationError: If the mode is unknown or its source address is missing

    Example:
        >>> driver = get_driver("mock", AppConfig(mode="mock"), Catalog())
        >>> listings = driver.fetch_listings(SearchFilter())
    """
    try:
        source_mode = SourceMode(str(getattr(mode, "value", mode)).lower())
    except ValueError:
        supported = ", ".join(m.value for m in SourceMode)
        raise DriverConfigurationError(
            f"Unknown source mode: {mode}. Supported modes: {supported}"
        ) from None

    logger.debug(
        "Creating driver instance",
        extra={"mode": source_mode.value},
    )

    sources = app_config.sources
    http_config = app_config.http

    if source_mode == SourceMode.MOCK:
        return MockDriver(http_config=http_config)

    if source_mode == SourceMode.SCRAPE:
        return ScrapeDriver(
            search_endpoint=str(sources.search_endpoint),
            site_domain=sources.site_domain,
            matcher=ListingMatcher(catalog),
            http_config=http_config,
        )

    if source_mode == SourceMode.FLAT_FEED:
        if sources.flat_feed_url is None:
            raise DriverConfigurationError(
                "Source mode 'flat_feed' requires sources.flat_feed_url (or FLAT_FEED_URL)"
            )
        return FlatFeedDriver(feed_url=str(sources.flat_feed_url), http_config=http_config)

    return FeedDriver(feed_url=str(sources.feed_url), http_config=http_config)
