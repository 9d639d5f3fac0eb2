"""Alias and keyword matching for procurement listings.

This module implements the text predicates that:
1. Resolve an organization filter to its alias set and test containment
2. Test listing text against the static keyword vocabulary plus an extra term

Matching is substring-based on diacritic- and case-folded text, which lets a
curated alias list absorb abbreviations, legal-entity suffixes and garbled
spellings coming from uncontrolled upstream feeds.
"""

from typing import Iterable, Optional, Tuple

from tender_connector.domain.models import WILDCARD_ORGANIZATION, Catalog
from tender_connector.utils.text import normalize_text


class ListingMatcher:
    """Evaluates organization and keyword predicates against listing text.

    Holds only the read-only Catalog, so one instance is safely shared by
    concurrent search calls.
    """

    def __init__(self, catalog: Catalog):
        """Initialize ListingMatcher.

        Args:
            catalog: Organization aliases and keyword vocabulary
        """
        self.catalog = catalog

    @staticmethod
    def contains_any(text: Optional[str], terms: Iterable[str]) -> bool:
        """Check whether any term appears in text, ignoring case and diacritics.

        The text is normalized once; each term is normalized before comparison.
        Terms that normalize to an empty string are ignored.

        Args:
            text: Text to search in
            terms: Candidate substrings

        Returns:
            True if at least one term is a substring of text. False for an empty
            term set.

        Example:
            >>> ListingMatcher.contains_any("LÁSER de fibra", ["laser"])
            True
        """
        normalized_text = normalize_text(text)
        for term in terms:
            normalized_term = normalize_text(term)
            if normalized_term and normalized_term in normalized_text:
                return True
        return False

    def aliases_for(self, organization: str) -> Tuple[str, ...]:
        """Return the alias set for an organization key.

        Unknown keys, and keys declared without aliases, resolve to the key
        itself as the only alias.
        """
        key = organization.strip().lower()
        aliases = self.catalog.organizations.get(key)
        if aliases:
            return aliases
        return (key,)

    def organization_matches(self, organization: Optional[str], organization_name: Optional[str]) -> bool:
        """Check whether a listing's organization satisfies the organization filter.

        Returns True when:
        - the filter organization is absent or the wildcard
        - the listing has no organization name (unattributed listings are kept)
        - any alias of the filter organization occurs in the organization name

        Args:
            organization: Organization key from the filter
            organization_name: Organization name carried by the listing

        Returns:
            True if the listing passes the organization predicate
        """
        if not organization or organization.strip().lower() == WILDCARD_ORGANIZATION:
            return True
        if not organization_name or not organization_name.strip():
            return True
        return self.contains_any(organization_name, self.aliases_for(organization))

    def keyword_terms(self, extra_keyword: Optional[str] = None) -> Tuple[str, ...]:
        """Return the active keyword set: the extra keyword followed by the static vocabulary."""
        if extra_keyword and extra_keyword.strip():
            return (extra_keyword.strip(),) + self.catalog.keywords
        return self.catalog.keywords

    def matched_keywords(self, text: Optional[str], extra_keyword: Optional[str] = None) -> Tuple[str, ...]:
        """Return every active keyword found in text, in keyword-set order."""
        normalized_text = normalize_text(text)
        return tuple(
            term
            for term in self.keyword_terms(extra_keyword)
            if normalize_text(term) and normalize_text(term) in normalized_text
        )

    def keyword_matches(self, text: Optional[str], extra_keyword: Optional[str] = None) -> bool:
        """Check whether text contains the extra keyword or any static keyword.

        The static vocabulary is always active; the extra keyword widens the
        set and never replaces it.
        """
        return self.contains_any(text, self.keyword_terms(extra_keyword))
