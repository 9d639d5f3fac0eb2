"""Search orchestration: driver fetch, normalization, filtering and ranking."""

import time
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from tender_connector.config.models import AppConfig
from tender_connector.domain.models import CanonicalListing, Catalog, SearchFilter
from tender_connector.drivers.base import BaseDriver
from tender_connector.drivers.exceptions import DriverError
from tender_connector.drivers.factory import get_driver
from tender_connector.drivers.feed import FeedDriver
from tender_connector.drivers.scrape import ScrapeDriver
from tender_connector.logging import get_logger
from tender_connector.logging.context import log_context
from tender_connector.matching.engine import ListingMatcher
from tender_connector.matching.ranking import FilterRankEngine

from .models import SourceReport

logger = get_logger(__name__, component="pipeline")

SAMPLE_SIZE = 3


class SearchService:
    """
    Runs one search call end to end.

    Holds only the configured driver and the frozen catalog, so a single
    instance is shared by all concurrent callers. Each call fetches raw
    items once, normalizes them, then filters, ranks and truncates.
    """

    def __init__(
        self,
        app_config: AppConfig,
        catalog: Catalog,
        driver: Optional[BaseDriver] = None,
    ):
        """
        Initialize the search service.

        Args:
            app_config: Application configuration (mode, sources, HTTP settings)
            catalog: Organization aliases and keyword vocabulary
            driver: Pre-built driver (defaults to the one selected by app_config.mode)
        """
        self.app_config = app_config
        self.catalog = catalog
        self.matcher = ListingMatcher(catalog)
        self.engine = FilterRankEngine(self.matcher)
        self.driver = driver or get_driver(app_config.mode, app_config, catalog)

    @property
    def mode(self) -> str:
        """Source mode served by the active driver."""
        return self.driver.MODE

    def search(
        self, search_filter: SearchFilter, now: Optional[datetime] = None
    ) -> List[CanonicalListing]:
        """
        Execute a search against the configured source.

        Args:
            search_filter: Caller's filter
            now: End of the recency window (defaults to the current time)

        Returns:
            At most search_filter.limit listings, most recent first

        Raises:
            DriverError: FetchError/ParseError from the driver, unchanged
        """
        with log_context(search_id=uuid4().hex[:12], mode=self.mode):
            started = time.monotonic()
            logger.info(
                "Search started",
                extra={
                    "event": "search.started",
                    "organization": search_filter.organization,
                    "keyword": search_filter.extra_keyword,
                    "recency_days": search_filter.recency_days,
                    "limit": search_filter.limit,
                },
            )

            try:
                listings = self.driver.fetch_listings(search_filter)
            except DriverError as e:
                logger.error(
                    f"Search failed: {e}",
                    extra={
                        "event": "search.failed",
                        "error_type": type(e).__name__,
                        "duration_seconds": round(time.monotonic() - started, 3),
                    },
                )
                raise

            results = self.engine.apply(listings, search_filter, now=now)

            logger.info(
                "Search completed",
                extra={
                    "event": "search.completed",
                    "fetched": len(listings),
                    "returned": len(results),
                    "duration_seconds": round(time.monotonic() - started, 3),
                },
            )
            return results

    def inspect(self) -> SourceReport:
        """
        Report what the configured source returns before any filtering.

        The scrape source needs a query to return anything, so inspection
        does not apply to it.

        Returns:
            SourceReport with raw/mapped counts and a few samples

        Raises:
            DriverError: FetchError/ParseError from the driver, unchanged
        """
        if isinstance(self.driver, ScrapeDriver):
            return SourceReport(
                mode=self.mode,
                note="Scrape mode only returns results for a query; use /search instead",
            )

        with log_context(search_id=uuid4().hex[:12], mode=self.mode):
            feed_type = first_url = None
            if isinstance(self.driver, FeedDriver):
                page = self.driver.fetch_page()
                raw_items, feed_type, first_url = page.entries, page.feed_type, page.first_url
            else:
                raw_items = self.driver.fetch_items(SearchFilter())

            mapped = self.driver.normalize_items(raw_items)

            logger.info(
                "Source inspected",
                extra={
                    "event": "search.inspected",
                    "raw_count": len(raw_items),
                    "mapped_count": len(mapped),
                },
            )
            return SourceReport(
                mode=self.mode,
                raw_count=len(raw_items),
                mapped_count=len(mapped),
                samples=mapped[:SAMPLE_SIZE],
                feed_type=feed_type,
                first_url=first_url,
            )

    def close(self) -> None:
        """Release the driver's HTTP resources."""
        self.driver.close()
