"""Matching and ranking of normalized listings.

This module provides:
- ListingMatcher: diacritic-insensitive alias and keyword predicates
- FilterRankEngine: applies predicates, orders by recency, truncates
- MatchResult: per-listing predicate outcomes
"""

from .engine import ListingMatcher
from .models import MatchResult
from .ranking import FilterRankEngine

__all__ = [
    "ListingMatcher",
    "FilterRankEngine",
    "MatchResult",
]
