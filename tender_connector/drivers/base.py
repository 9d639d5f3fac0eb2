"""Base driver class with shared functionality for all source drivers.

This module provides the abstract base class that all source drivers must
implement, along with the shared HTTP request handling every upstream fetch
goes through.
"""

import logging
from abc import ABC, abstractmethod
from http.cookiejar import DefaultCookiePolicy
from typing import Any, ClassVar, Dict, List, Optional

import requests

from tender_connector.config.models import HttpConfig
from tender_connector.domain.models import CanonicalListing, RawItem, SearchFilter
from tender_connector.logging import get_logger
from tender_connector.normalization import ListingNormalizer

from .exceptions import FetchError, FetchTimeoutError

logger = get_logger(__name__, component="driver")


class BaseDriver(ABC):
    """Base class for all source drivers.

    A driver retrieves raw items from exactly one upstream source format.
    Subclasses implement fetch_items(); fetch_listings() normalizes those
    items and may be overridden by sources that already produce canonical
    listings.

    Drivers make a single attempt per call and never retry.

    Attributes:
        MODE: Source mode served by the driver
        RECOVERS_ORGANIZATION: Whether items are feed-structured and may carry
            their organization only inside a summary blob
        http_config: Timeout, headers and TLS settings
        normalizer: ListingNormalizer used by fetch_listings()
    """

    MODE: ClassVar[str] = ""
    RECOVERS_ORGANIZATION: ClassVar[bool] = False

    def __init__(
        self,
        http_config: Optional[HttpConfig] = None,
        normalizer: Optional[ListingNormalizer] = None,
    ) -> None:
        """Initialize driver with HTTP configuration.

        Args:
            http_config: Outbound HTTP settings (defaults to HttpConfig())
            normalizer: Normalizer for raw items (defaults to ListingNormalizer())
        """
        self.http_config = http_config or HttpConfig()
        self.normalizer = normalizer or ListingNormalizer()

        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": self.http_config.user_agent,
            "Accept-Language": self.http_config.accept_language,
        })
        self._session.verify = not self.http_config.allow_insecure
        # Concurrent calls share this session; an empty allow-list rejects every cookie
        self._session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    @abstractmethod
    def fetch_items(self, search_filter: SearchFilter) -> List[RawItem]:
        """Fetch raw items from the upstream source.

        Args:
            search_filter: Caller's filter (used by sources that query by term)

        Returns:
            Raw, source-specific items. Empty list when the source has none.

        Raises:
            FetchError: On non-2xx responses or transport failures
            ParseError: When a mandatory payload is malformed
        """
        pass

    def fetch_listings(self, search_filter: SearchFilter) -> List[CanonicalListing]:
        """Fetch raw items and normalize them into canonical listings."""
        return self.normalize_items(self.fetch_items(search_filter))

    def normalize_items(self, raw_items: List[RawItem]) -> List[CanonicalListing]:
        """Map this driver's raw items to canonical listings."""
        return self.normalizer.normalize_batch(
            raw_items, recover_organization_from_summary=self.RECOVERS_ORGANIZATION
        )

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self._session.close()

    def _request(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Issue a GET request with error handling.

        Handles:
        - Bounded timeout from http_config
        - Connection errors and timeouts
        - HTTP error status codes (anything outside 2xx)
        - Logging of request details

        Args:
            url: URL to request
            params: Query parameters
            headers: Additional headers (merged with session defaults)

        Returns:
            Successful response

        Raises:
            FetchError: On non-2xx HTTP status or transport failure
            FetchTimeoutError: On request timeout
        """
        logger.debug(
            f"HTTP GET request to {url}",
            extra={
                "event": "driver.fetch.request",
                "driver": self.MODE,
                "url": url,
                "timeout": self.http_config.timeout,
            },
        )

        try:
            response = self._session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.http_config.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.http_config.timeout} seconds",
                extra={
                    "event": "driver.fetch.error",
                    "driver": self.MODE,
                    "error_type": "Timeout",
                    "url": url,
                },
            )
            raise FetchTimeoutError(
                f"Request to {url} timed out after {self.http_config.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "driver.fetch.error",
                    "driver": self.MODE,
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise FetchError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if not 200 <= response.status_code < 300:
            logger.log(
                logging.WARNING if response.status_code >= 500 else logging.ERROR,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "driver.fetch.error",
                    "driver": self.MODE,
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise FetchError(
                f"Upstream HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "driver.fetch.succeeded",
                "driver": self.MODE,
                "status_code": response.status_code,
                "url": url,
                "bytes": len(response.content),
            },
        )
        return response

    def _request_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            FetchError / FetchTimeoutError: As for _request()
            ValueError: If the body is not valid JSON
        """
        response = self._request(url, params=params, headers={"Accept": "application/json"})
        return response.json()
