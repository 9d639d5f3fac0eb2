"""Listing normalization service for converting RawItem to CanonicalListing.

This module implements the normalization logic that:
1. Resolves each canonical field from an ordered list of source keys
2. Recovers the contracting organization from free-text summaries of
   feed-structured items when no structured field carries it
3. Builds the searchable text used by keyword matching
"""

import html
import logging
from typing import Any, Iterable, List, Optional, Tuple

from tender_connector.domain.models import CanonicalListing, RawItem
from tender_connector.logging import get_logger
from tender_connector.utils.text import collapse_whitespace, strip_html

from .fields import (
    FIELD_CANDIDATES,
    ORGANIZATION_LABEL_PATTERNS,
    SUMMARY_CANDIDATES,
    TEXT_NODE_KEYS,
)

logger = get_logger(__name__, component="normalization")


def coerce_field_value(value: Any) -> Optional[str]:
    """Convert a raw source value to a stripped string.

    Strings are stripped, numbers stringified, and text-node mappings such as
    {"#text": "..."} unwrapped. Anything else (lists, booleans, None, empty
    strings) counts as absent.

    Args:
        value: Raw value from a source mapping

    Returns:
        Non-empty string, or None if the value is absent or unusable
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        for key in TEXT_NODE_KEYS:
            if key in value:
                return coerce_field_value(value[key])
    return None


def resolve_field(raw_item: RawItem, candidates: Tuple[str, ...]) -> str:
    """Return the first present, non-empty value among candidate keys.

    Args:
        raw_item: Source mapping
        candidates: Source keys in priority order

    Returns:
        Resolved value, or empty string when no candidate is usable
    """
    for key in candidates:
        value = coerce_field_value(raw_item.get(key))
        if value is not None:
            return value
    return ""


def recover_organization(summary: Optional[str]) -> str:
    """Extract the contracting organization from a labelled summary blob.

    Label patterns are tried in order and the first one found wins. This is a
    best-effort heuristic: no match simply yields an empty string.

    Args:
        summary: Raw summary/content text, possibly containing HTML

    Returns:
        Organization name, or empty string if no label is present

    Example:
        >>> recover_organization("Órgano de Contratación: INTA<br/>Importe: 100")
        'INTA'
    """
    if not summary:
        return ""

    text = html.unescape(str(summary))
    for pattern in ORGANIZATION_LABEL_PATTERNS:
        match = pattern.search(text)
        if match:
            return collapse_whitespace(match.group(1))
    return ""


class ListingNormalizer:
    """Normalizes RawItem mappings into CanonicalListing models.

    The mapping is pure and total: any mapping produces a listing, and every
    missing field becomes an empty string.
    """

    def __init__(self, logger_instance: Optional[logging.LoggerAdapter] = None):
        """Initialize ListingNormalizer.

        Args:
            logger_instance: Logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger

    def normalize(self, raw_item: RawItem, recover_organization_from_summary: bool = False) -> CanonicalListing:
        """Normalize a single RawItem into a CanonicalListing.

        Steps:
        1. Resolve every canonical field from its candidate keys
        2. Extract summary text
        3. When requested and no organization resolved, recover it from the summary
        4. Build searchable_text from title, organization, procedure, status and summary

        Args:
            raw_item: Source mapping produced by a driver
            recover_organization_from_summary: Whether the item is feed-structured
                and may carry its organization only inside the summary

        Returns:
            CanonicalListing with all fields populated (possibly empty)
        """
        fields = {
            name: resolve_field(raw_item, candidates)
            for name, candidates in FIELD_CANDIDATES.items()
        }

        summary_raw = resolve_field(raw_item, SUMMARY_CANDIDATES)
        summary_text = strip_html(summary_raw)

        if recover_organization_from_summary and not fields["organization_name"]:
            recovered = recover_organization(summary_raw)
            fields["organization_name"] = recovered
            self.logger.debug(
                "Organization recovery attempted",
                extra={
                    "event": "normalization.organization.recovered"
                    if recovered
                    else "normalization.organization.unresolved",
                    "title": fields["title"],
                    "organization_name": recovered,
                },
            )

        searchable_text = " ".join(
            part
            for part in (
                fields["title"],
                fields["organization_name"],
                fields["procedure_type"],
                fields["status"],
                summary_text,
            )
            if part
        )

        return CanonicalListing(searchable_text=searchable_text, **fields)

    def normalize_batch(
        self, raw_items: Iterable[Any], recover_organization_from_summary: bool = False
    ) -> List[CanonicalListing]:
        """Normalize a batch of raw items.

        Items that are not mappings cannot come from a well-behaved driver and
        are skipped with a warning.

        Args:
            raw_items: Items returned by a driver
            recover_organization_from_summary: Passed through to normalize()

        Returns:
            Normalized listings in input order
        """
        listings = []
        skipped = 0
        for raw_item in raw_items:
            if not isinstance(raw_item, dict):
                skipped += 1
                continue
            listings.append(self.normalize(raw_item, recover_organization_from_summary))

        if skipped:
            self.logger.warning(
                f"Skipped {skipped} non-mapping raw items",
                extra={"event": "normalization.batch.skipped", "skipped": skipped},
            )

        self.logger.info(
            "Normalized raw items",
            extra={
                "event": "normalization.batch.completed",
                "normalized": len(listings),
                "skipped": skipped,
            },
        )
        return listings
