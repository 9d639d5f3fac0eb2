"""Normalization layer for converting raw source items to canonical listings.

This module provides:
- ListingNormalizer: RawItem -> CanonicalListing mapping
- FIELD_CANDIDATES: ordered source keys per canonical field
- recover_organization: label-based organization recovery from summaries
"""

from .fields import FIELD_CANDIDATES, ORGANIZATION_LABEL_PATTERNS, SUMMARY_CANDIDATES
from .service import ListingNormalizer, coerce_field_value, recover_organization, resolve_field

__all__ = [
    "ListingNormalizer",
    "FIELD_CANDIDATES",
    "SUMMARY_CANDIDATES",
    "ORGANIZATION_LABEL_PATTERNS",
    "coerce_field_value",
    "resolve_field",
    "recover_organization",
]
