"""Filter and rank engine for normalized listings.

This module applies the three search predicates (organization, keyword,
recency) to canonical listings, orders the survivors by publication date
descending, and truncates them to the requested limit.

Missing or uncertain data fails open: an unattributed listing passes the
organization predicate and an unparseable date passes the recency window.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from tender_connector.domain.models import CanonicalListing, SearchFilter
from tender_connector.logging import get_logger
from tender_connector.utils.timestamps import parse_datetime, utc_now, window_start

from .engine import ListingMatcher
from .models import MatchResult

logger = get_logger(__name__, component="matching")

# Sort key for listings whose date is missing or unparseable
OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class FilterRankEngine:
    """Applies filter predicates and recency ordering to listings."""

    def __init__(self, matcher: ListingMatcher):
        """Initialize FilterRankEngine.

        Args:
            matcher: ListingMatcher holding the organization/keyword catalog
        """
        self.matcher = matcher

    def evaluate(
        self,
        listing: CanonicalListing,
        search_filter: SearchFilter,
        now: Optional[datetime] = None,
    ) -> MatchResult:
        """Evaluate one listing against the filter predicates.

        Args:
            listing: Normalized listing
            search_filter: Caller's filter
            now: End of the recency window (defaults to utc_now())

        Returns:
            MatchResult with each predicate outcome
        """
        reference_date = parse_datetime(listing.publication_date)

        organization_ok = self.matcher.organization_matches(
            search_filter.organization, listing.organization_name
        )
        matched_keywords = self.matcher.matched_keywords(
            listing.searchable_text, search_filter.extra_keyword
        )

        if not search_filter.has_recency_window or reference_date is None:
            recency_ok = True
        else:
            recency_ok = reference_date >= window_start(search_filter.recency_days, now)

        return MatchResult(
            listing=listing,
            organization_ok=organization_ok,
            keyword_ok=bool(matched_keywords),
            recency_ok=recency_ok,
            reference_date=reference_date,
            matched_keywords=matched_keywords,
        )

    def apply(
        self,
        listings: Iterable[CanonicalListing],
        search_filter: SearchFilter,
        now: Optional[datetime] = None,
    ) -> List[CanonicalListing]:
        """Filter, sort and truncate listings.

        Algorithm:
        1. Evaluate every listing against organization, keyword and recency predicates
        2. Keep the matches
        3. Sort by parsed publication date descending; missing dates sort last
           and ties keep their input order
        4. Truncate to search_filter.limit

        Args:
            listings: Normalized listings from one driver
            search_filter: Caller's filter
            now: End of the recency window (defaults to utc_now())

        Returns:
            At most search_filter.limit listings, most recent first
        """
        now = now or utc_now()
        evaluated = 0
        rejected = {"organization": 0, "keyword": 0, "recency": 0}
        matches: List[MatchResult] = []

        for listing in listings:
            evaluated += 1
            result = self.evaluate(listing, search_filter, now)
            if result.is_match:
                matches.append(result)
            else:
                rejected[result.rejection_reason] += 1
                logger.debug(
                    "Listing rejected",
                    extra={
                        "event": "matching.listing.rejected",
                        "reason": result.rejection_reason,
                        "title": listing.title,
                        "organization_name": listing.organization_name,
                    },
                )

        # list.sort is stable, including with reverse=True
        matches.sort(key=lambda r: r.reference_date or OLDEST, reverse=True)
        ranked = [r.listing for r in matches[: search_filter.limit]]

        logger.info(
            "Listings filtered",
            extra={
                "event": "matching.filter.completed",
                "evaluated": evaluated,
                "matched": len(matches),
                "returned": len(ranked),
                "rejected_organization": rejected["organization"],
                "rejected_keyword": rejected["keyword"],
                "rejected_recency": rejected["recency"],
            },
        )
        return ranked
