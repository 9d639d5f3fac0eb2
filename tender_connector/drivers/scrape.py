"""HTML search-results scrape driver."""

import re
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from tender_connector.config.models import HttpConfig
from tender_connector.domain.models import RawItem, SearchFilter
from tender_connector.logging import get_logger
from tender_connector.matching.engine import ListingMatcher
from tender_connector.normalization import ListingNormalizer
from tender_connector.utils.text import collapse_whitespace

from .base import BaseDriver

logger = get_logger(__name__, component="driver")

RESULT_LINK_SELECTOR = ".result__a"


class ScrapeDriver(BaseDriver):
    """Driver that scrapes a web search engine's HTML results page.

    The query is scoped to the procurement site and embeds the organization's
    alias disjunction plus the extra keyword. The results page exposes only
    titles and links, so items carry the filter's organization key
    (uppercased) as their organization and leave every other field empty.
    """

    MODE = "scrape"

    def __init__(
        self,
        search_endpoint: str,
        site_domain: str,
        matcher: ListingMatcher,
        http_config: Optional[HttpConfig] = None,
        normalizer: Optional[ListingNormalizer] = None,
    ) -> None:
        super().__init__(http_config=http_config, normalizer=normalizer)
        self.search_endpoint = str(search_endpoint)
        self.site_domain = site_domain.lower()
        self.matcher = matcher

    def build_query(self, search_filter: SearchFilter) -> str:
        """Build the site-scoped search query.

        Example:
            site:contrataciondelestado.es (navantia OR sociedad estatal navantia) waterjet

        Args:
            search_filter: Caller's filter

        Returns:
            Query string with whitespace collapsed
        """
        org_terms = ""
        if not search_filter.is_wildcard:
            org_terms = f"({' OR '.join(self.matcher.aliases_for(search_filter.organization))})"

        return collapse_whitespace(
            f"site:{self.site_domain} {org_terms} {search_filter.extra_keyword or ''}"
        )

    def fetch_items(self, search_filter: SearchFilter) -> List[RawItem]:
        """Run the search and extract result links.

        Args:
            search_filter: Caller's filter

        Returns:
            Every result linking to the procurement site, with title, url and
            organization; the limit is applied after ranking

        Raises:
            FetchError: If the search request fails
        """
        query = self.build_query(search_filter)
        logger.info(
            "Fetching search results",
            extra={"event": "driver.scrape.request", "driver": self.MODE, "query": query},
        )

        response = self._request(
            self.search_endpoint,
            params={"q": query},
            headers={"Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8"},
        )
        organization = "" if search_filter.is_wildcard else search_filter.organization.upper()
        items = self.extract_results(response.text, organization)

        logger.info(
            "Fetched search results",
            extra={"event": "driver.scrape.fetched", "driver": self.MODE, "count": len(items)},
        )
        return items

    def extract_results(self, html_text: str, organization: str) -> List[RawItem]:
        """Extract result entries pointing at the procurement site.

        Args:
            html_text: Search results page
            organization: Organization value stamped on every item

        Returns:
            Raw items in page order
        """
        soup = BeautifulSoup(html_text, "html.parser")
        items = []
        for anchor in soup.select(RESULT_LINK_SELECTOR):
            href = (anchor.get("href") or "").strip()
            if not self._is_site_link(href):
                continue
            items.append({
                "title": collapse_whitespace(anchor.get_text(" ", strip=True)),
                "url": href,
                "organization": organization,
            })
        return items

    def _is_site_link(self, href: str) -> bool:
        """Whether href is an absolute http(s) link on the procurement site."""
        if not re.match(r"^https?://", href, re.IGNORECASE):
            return False
        host = (urlparse(href).hostname or "").lower()
        return host == self.site_domain or host.endswith("." + self.site_domain)
