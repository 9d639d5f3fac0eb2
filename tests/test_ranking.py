"""Unit tests for the filter and rank engine."""

from datetime import datetime, timezone

import pytest

from tender_connector.domain.models import CanonicalListing, SearchFilter
from tender_connector.matching import FilterRankEngine, ListingMatcher


def listing(title, organization="", date="", url=""):
    return CanonicalListing(title=title, organization_name=organization, publication_date=date, url=url)


@pytest.fixture
def engine(catalog):
    return FilterRankEngine(ListingMatcher(catalog))


class TestEvaluate:
    """Test per-listing predicate evaluation."""

    def test_match(self, engine, now):
        """Test that a matching listing passes all predicates."""
        result = engine.evaluate(listing("Corte láser", "INTA", "2025-09-01"), SearchFilter(organization="inta"), now)

        assert result.is_match is True
        assert result.rejection_reason is None
        assert "láser" in result.matched_keywords
        assert result.reference_date == datetime(2025, 9, 1, tzinfo=timezone.utc)

    def test_rejection_reasons(self, engine, now):
        """Test that the first failing predicate is reported."""
        search_filter = SearchFilter(organization="inta", recency_days=10)

        assert engine.evaluate(listing("Corte láser", "Navantia", "2025-09-30"), search_filter, now).rejection_reason == "organization"
        assert engine.evaluate(listing("Limpieza", "INTA", "2025-09-30"), search_filter, now).rejection_reason == "keyword"
        assert engine.evaluate(listing("Corte láser", "INTA", "2025-09-01"), search_filter, now).rejection_reason == "recency"

    @pytest.mark.parametrize("date", ["", "pendiente de publicar", "0001-01-01T00:00:00+01:00"])
    def test_missing_date_passes_recency(self, engine, now, date):
        """Test that absent or unparseable dates fail open."""
        result = engine.evaluate(listing("Corte láser", "INTA", date), SearchFilter(recency_days=1), now)

        assert result.recency_ok is True
        assert result.reference_date is None

    def test_unbounded_window(self, engine, now):
        """Test that recency_days=0 accepts any date."""
        result = engine.evaluate(listing("Corte láser", "INTA", "1999-01-01"), SearchFilter(recency_days=0), now)

        assert result.recency_ok is True

    def test_window_boundary_inclusive(self, engine, now):
        """Test that a listing exactly at the window start is kept."""
        result = engine.evaluate(listing("Corte láser", "INTA", "2025-09-21"), SearchFilter(recency_days=10), now)

        assert result.recency_ok is True


class TestApply:
    """Test filtering, ordering and truncation."""

    def test_sorted_most_recent_first(self, engine, now):
        """Test that a later valid date precedes an earlier one."""
        listings = [
            listing("Plegadora A", date="2025-08-02"),
            listing("Plegadora B", date="2025-09-20"),
            listing("Plegadora C", date="15/09/2025"),
        ]

        results = engine.apply(listings, SearchFilter(recency_days=365), now)

        assert [r.title for r in results] == ["Plegadora B", "Plegadora C", "Plegadora A"]

    def test_undated_listings_sort_last_in_input_order(self, engine, now):
        """Test that unparseable dates go last and ties keep input order."""
        listings = [
            listing("Láser 1"),
            listing("Láser 2", date="2025-09-01"),
            listing("Láser 3", date="sin fecha"),
            listing("Láser 4", date="2025-09-01"),
        ]

        results = engine.apply(listings, SearchFilter(), now)

        assert [r.title for r in results] == ["Láser 2", "Láser 4", "Láser 1", "Láser 3"]

    def test_limit_truncates_after_sorting(self, engine, now):
        """Test that the most recent listings survive truncation."""
        listings = [listing(f"Torno {day}", date=f"2025-09-{day:02d}") for day in range(1, 21)]

        results = engine.apply(listings, SearchFilter(limit=3), now)

        assert len(results) == 3
        assert [r.title for r in results] == ["Torno 20", "Torno 19", "Torno 18"]

    def test_result_length_never_exceeds_limit(self, engine, now):
        """Test the limit bound for several limits."""
        listings = [listing(f"CNC {i}", date="2025-09-01") for i in range(12)]

        for limit in (1, 5, 12, 50):
            assert len(engine.apply(listings, SearchFilter(limit=limit), now)) <= limit

    def test_recency_predicate_holds_for_results(self, engine, now):
        """Test that every dated result lies inside the window."""
        listings = [listing(f"Fresado {i}", date=f"2025-{month:02d}-15") for i, month in enumerate(range(1, 10))]
        search_filter = SearchFilter(recency_days=60)

        results = engine.apply(listings, search_filter, now)

        assert results
        for result in results:
            assert datetime.fromisoformat(result.publication_date).replace(tzinfo=timezone.utc) >= datetime(
                2025, 8, 2, tzinfo=timezone.utc
            )

    def test_out_of_range_date_kept_and_sorted_last(self, engine, now):
        """Test that a date with no UTC equivalent neither raises nor drops the listing."""
        listings = [listing("Láser antiguo", date="0001-01-01T00:00:00+01:00"), listing("Láser nuevo", date="2025-09-20")]

        results = engine.apply(listings, SearchFilter(recency_days=30), now)

        assert [r.title for r in results] == ["Láser nuevo", "Láser antiguo"]

    def test_empty_input(self, engine, now):
        """Test that no listings yield no results."""
        assert engine.apply([], SearchFilter(), now) == []

    def test_defaults_now_to_current_time(self, engine):
        """Test that apply works without an explicit now."""
        results = engine.apply([listing("Láser", date="2000-01-01")], SearchFilter(recency_days=30))

        assert results == []
