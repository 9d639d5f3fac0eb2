"""Data models for search execution reporting."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tender_connector.domain.models import CanonicalListing


@dataclass
class SourceReport:
    """
    Snapshot of what the configured source currently returns, before filtering.

    Attributes:
        mode: Source mode that produced the report
        raw_count: Number of raw items fetched
        mapped_count: Number of listings after normalization
        samples: First listings after normalization
        feed_type: Syndication format label (feed mode only)
        first_url: Page the entries were read from (feed mode only)
        note: Explanation when inspection does not apply to the mode
    """

    mode: str
    raw_count: int = 0
    mapped_count: int = 0
    samples: List[CanonicalListing] = field(default_factory=list)
    feed_type: Optional[str] = None
    first_url: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, omitting fields that do not apply."""
        if self.note:
            return {"mode": self.mode, "note": self.note}

        data: Dict[str, Any] = {
            "mode": self.mode,
            "rawCount": self.raw_count,
            "mappedCount": self.mapped_count,
            "samples": [listing.to_public_dict() for listing in self.samples],
        }
        if self.feed_type is not None:
            data["feedType"] = self.feed_type
        if self.first_url is not None:
            data["firstUrl"] = self.first_url
        return data
