"""Flat JSON feed driver."""

from typing import Any, List, Optional

from tender_connector.config.models import HttpConfig
from tender_connector.domain.models import RawItem, SearchFilter
from tender_connector.logging import get_logger
from tender_connector.normalization import ListingNormalizer

from .base import BaseDriver

logger = get_logger(__name__, component="driver")


class FlatFeedDriver(BaseDriver):
    """Driver for a single JSON document of listings.

    The endpoint contract is loosely specified, so two shapes are accepted:
    a top-level array, or an object with an "items" array. Anything else,
    including a body that is not JSON at all, yields no items.
    """

    MODE = "flat_feed"

    def __init__(
        self,
        feed_url: str,
        http_config: Optional[HttpConfig] = None,
        normalizer: Optional[ListingNormalizer] = None,
    ) -> None:
        super().__init__(http_config=http_config, normalizer=normalizer)
        self.feed_url = str(feed_url)

    def fetch_items(self, search_filter: SearchFilter) -> List[RawItem]:
        """Fetch the JSON document and return its item mappings.

        Args:
            search_filter: Unused; the document is not queryable

        Returns:
            Mapping items from the document, empty for unrecognized shapes

        Raises:
            FetchError: If the request fails
        """
        logger.info(
            "Fetching flat feed",
            extra={"event": "driver.flat_feed.request", "driver": self.MODE, "url": self.feed_url},
        )

        try:
            document = self._request_json(self.feed_url)
        except ValueError as e:
            logger.warning(
                f"Flat feed at {self.feed_url} is not valid JSON",
                extra={
                    "event": "driver.flat_feed.unrecognized",
                    "driver": self.MODE,
                    "url": self.feed_url,
                    "error": str(e),
                },
            )
            return []

        items = self.extract_items(document)
        logger.info(
            "Fetched flat feed",
            extra={"event": "driver.flat_feed.fetched", "driver": self.MODE, "count": len(items)},
        )
        return items

    @staticmethod
    def extract_items(document: Any) -> List[RawItem]:
        """Extract item mappings from a decoded JSON document.

        Args:
            document: Decoded JSON value

        Returns:
            Mapping elements of the top-level array or of document["items"];
            empty list for any other shape
        """
        if isinstance(document, list):
            candidates = document
        elif isinstance(document, dict) and isinstance(document.get("items"), list):
            candidates = document["items"]
        else:
            logger.warning(
                "Flat feed document has no item array",
                extra={
                    "event": "driver.flat_feed.unrecognized",
                    "document_type": type(document).__name__,
                },
            )
            return []

        return [item for item in candidates if isinstance(item, dict)]
