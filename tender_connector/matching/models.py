"""Data models for the matching engine."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from tender_connector.domain.models import CanonicalListing


@dataclass
class MatchResult:
    """Result of evaluating one listing against a SearchFilter.

    Attributes:
        listing: The evaluated listing
        organization_ok: Organization predicate outcome (relaxed when unattributed)
        keyword_ok: Keyword predicate outcome
        recency_ok: Recency predicate outcome (fails open on missing/unparseable dates)
        reference_date: Parsed publication date, None if missing or unparseable
        matched_keywords: Active keywords found in the listing's searchable text
    """

    listing: CanonicalListing
    organization_ok: bool
    keyword_ok: bool
    recency_ok: bool
    reference_date: Optional[datetime] = None
    matched_keywords: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_match(self) -> bool:
        """Whether the listing passes all three predicates."""
        return self.organization_ok and self.keyword_ok and self.recency_ok

    @property
    def rejection_reason(self) -> Optional[str]:
        """Name of the first failing predicate, or None for a match."""
        if not self.organization_ok:
            return "organization"
        if not self.keyword_ok:
            return "keyword"
        if not self.recency_ok:
            return "recency"
        return None
