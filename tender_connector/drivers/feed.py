"""Syndication feed driver (Atom index with a first-page link)."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import feedparser

from tender_connector.config.models import HttpConfig
from tender_connector.domain.models import RawItem, SearchFilter
from tender_connector.logging import get_logger
from tender_connector.normalization import ListingNormalizer

from .base import BaseDriver
from .exceptions import ParseError

logger = get_logger(__name__, component="driver")

FEED_ACCEPT = "application/atom+xml, application/xml;q=0.9, */*;q=0.8"


@dataclass
class FeedPage:
    """One fetched feed page.

    Attributes:
        feed_type: feedparser's format label (e.g. "atom10"), empty if unknown
        entries: Raw items extracted from the page
        first_url: URL the entries were read from
    """

    feed_type: str
    first_url: str
    entries: List[RawItem] = field(default_factory=list)


class FeedDriver(BaseDriver):
    """Driver for the public-procurement syndication feed.

    The configured URL is a syndication index. Its link with rel="first"
    points at the page holding the most recent entries; when absent, the
    index itself is read. Entries rarely carry a structured organization, so
    normalization recovers it from the labelled summary text.

    Feed Details:
        Format: Atom 1.0
        Pages fetched per call: index + first page (one hop, no further paging)
    """

    MODE = "feed"
    RECOVERS_ORGANIZATION = True

    def __init__(
        self,
        feed_url: str,
        http_config: Optional[HttpConfig] = None,
        normalizer: Optional[ListingNormalizer] = None,
    ) -> None:
        super().__init__(http_config=http_config, normalizer=normalizer)
        self.feed_url = str(feed_url)

    def fetch_items(self, search_filter: SearchFilter) -> List[RawItem]:
        """Fetch the entries of the feed's first page.

        Args:
            search_filter: Unused; the feed is not queryable

        Returns:
            Raw entries with title, link, updated and summary keys

        Raises:
            FetchError: If either request fails
            ParseError: If the index is not a recognizable feed
        """
        return self.fetch_page().entries

    def fetch_page(self) -> FeedPage:
        """Follow the index to its first page and extract the entries.

        Returns:
            FeedPage with the feed type, the page URL and its entries
        """
        logger.info(
            "Fetching feed index",
            extra={"event": "driver.feed.index", "driver": self.MODE, "url": self.feed_url},
        )
        index = self._parse(self.feed_url)
        if not index.get("version") and not index.get("entries"):
            raise ParseError(
                f"Feed index at {self.feed_url} is not a recognizable syndication feed"
                + (f": {index.get('bozo_exception')}" if index.get("bozo") else "")
            )

        first_url = self._first_page_url(index) or self.feed_url
        page = index if first_url == self.feed_url else self._parse(first_url)

        entries = [self._entry_to_item(entry) for entry in page.get("entries", [])]

        logger.info(
            "Fetched feed page",
            extra={
                "event": "driver.feed.page",
                "driver": self.MODE,
                "url": first_url,
                "feed_type": page.get("version", ""),
                "count": len(entries),
            },
        )
        return FeedPage(feed_type=page.get("version", ""), first_url=first_url, entries=entries)

    def _parse(self, url: str) -> Any:
        """Fetch a URL and parse it with feedparser."""
        response = self._request(url, headers={"Accept": FEED_ACCEPT})
        return feedparser.parse(response.content)

    @staticmethod
    def _first_page_url(parsed: Any) -> Optional[str]:
        """Return the href of the rel="first" link, if any."""
        for link in parsed.get("feed", {}).get("links", []):
            if str(link.get("rel", "")).lower() == "first" and link.get("href"):
                return link["href"]
        return None

    @staticmethod
    def _entry_to_item(entry: Any) -> RawItem:
        """Map a feedparser entry to a raw item."""
        summary = entry.get("summary", "")
        if not summary and entry.get("content"):
            summary = entry["content"][0].get("value", "")

        return {
            "title": entry.get("title", ""),
            "link": entry.get("link", ""),
            "updated": entry.get("updated") or entry.get("published", ""),
            "summary": summary,
        }
