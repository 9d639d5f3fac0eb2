"""Domain models for the tender connector."""

from .models import (
    DEFAULT_LIMIT,
    DEFAULT_RECENCY_DAYS,
    MAX_LIMIT,
    MAX_RECENCY_DAYS,
    WILDCARD_ORGANIZATION,
    CanonicalListing,
    Catalog,
    RawItem,
    SearchFilter,
)

__all__ = [
    "SearchFilter",
    "CanonicalListing",
    "Catalog",
    "RawItem",
    "WILDCARD_ORGANIZATION",
    "DEFAULT_RECENCY_DAYS",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MAX_RECENCY_DAYS",
]
