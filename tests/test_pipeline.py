"""Tests for search orchestration.

Covers the end-to-end scenarios:
- Mock source filtered by organization
- Flat feed inside and outside the recency window
- Syndication feed with organization recovered from summaries
- Error propagation and source inspection
"""

import logging
from unittest.mock import patch

import pytest

from tender_connector.config.models import AppConfig
from tender_connector.domain.models import SearchFilter
from tender_connector.drivers import FeedDriver, FetchError, FlatFeedDriver, MockDriver, ParseError, ScrapeDriver
from tender_connector.pipeline import SearchService, SourceReport
from tests.helpers import StaticDriver, load_upstream_fixture, make_response

FEED_URL = "https://contrataciondelestado.es/sindicacion/sindicacion.atom"
FLAT_FEED_URL = "https://datos.example.org/licitaciones.json"

CORTE_LASER = {"titulo": "Corte láser", "organo": "INTA", "fecha": "2025-09-01"}


class TestSearchService:
    """Tests for SearchService.search."""

    def test_driver_selected_from_mode(self, mock_config, catalog):
        """Test that the configured mode picks the driver."""
        service = SearchService(mock_config, catalog)

        assert isinstance(service.driver, MockDriver)
        assert service.mode == "mock"

    def test_mock_navantia(self, mock_config, catalog, now):
        """Test mock source filtered to one organization."""
        service = SearchService(mock_config, catalog)

        results = service.search(SearchFilter(organization="navantia", recency_days=365, limit=10), now=now)

        assert [r.title for r in results] == ["Sistema waterjet para mecanizado", "Plegadora CNC para taller naval"]

    def test_mock_all_organizations_sorted(self, mock_config, catalog, now):
        """Test wildcard results are most recent first."""
        service = SearchService(mock_config, catalog)

        results = service.search(SearchFilter(organization="all", recency_days=365), now=now)

        assert [r.publication_date for r in results] == ["2025-09-25", "2025-09-20", "2025-08-02"]

    def test_mock_limit(self, mock_config, catalog, now):
        """Test result cap."""
        service = SearchService(mock_config, catalog)

        results = service.search(SearchFilter(recency_days=365, limit=1), now=now)

        assert len(results) == 1
        assert results[0].organization_name == "INTA"

    @pytest.mark.parametrize("recency_days,expected_titles", [(120, ["Corte láser"]), (10, [])])
    def test_flat_feed_recency_window(self, catalog, now, recency_days, expected_titles):
        """Test the flat-feed document end to end inside and outside the window."""
        config = AppConfig(mode="flat_feed", sources={"flat_feed_url": FLAT_FEED_URL})
        service = SearchService(config, catalog)
        document = {"items": [CORTE_LASER]}

        with patch.object(service.driver._session, "get", return_value=make_response(json_data=document)) as mock_get:
            results = service.search(SearchFilter(organization="inta", recency_days=recency_days), now=now)

        mock_get.assert_called_once()
        assert mock_get.call_args.args[0] == FLAT_FEED_URL
        assert [r.title for r in results] == expected_titles
        assert all(r.organization_name == "INTA" for r in results)

    def test_flat_feed_bare_object(self, catalog, now):
        """Test that an object without items yields empty results, not an error."""
        config = AppConfig(mode="flat_feed", sources={"flat_feed_url": FLAT_FEED_URL})
        service = SearchService(config, catalog)
        assert isinstance(service.driver, FlatFeedDriver)

        with patch.object(service.driver._session, "get", return_value=make_response(json_data={"total": 0})):
            results = service.search(SearchFilter(organization="inta"), now=now)

        assert results == []

    def test_feed_recovers_organization(self, catalog, now):
        """Test feed search with organizations recovered from summaries."""
        service = SearchService(AppConfig(sources={"feed_url": FEED_URL}), catalog)
        responses = [
            make_response(load_upstream_fixture("feed_index.atom")),
            make_response(load_upstream_fixture("feed_first_page.atom")),
        ]

        with patch.object(service.driver._session, "get", side_effect=responses):
            results = service.search(SearchFilter(organization="inta", recency_days=120), now=now)

        assert [r.title for r in results] == [
            "Suministro de máquina de corte por láser para banco de ensayos",
            "Sistema de corte por chorro de agua (waterjet)",
        ]
        assert results[0].organization_name == "INTA"
        assert results[1].organization_name == ""

    def test_extra_keyword_widens_results(self, catalog, now):
        """Test that the extra keyword admits listings outside the vocabulary."""
        items = [
            {"titulo": "Servicio de limpieza", "organo": "INTA", "fecha": "2025-09-20"},
            CORTE_LASER,
        ]
        service = SearchService(AppConfig(), catalog, driver=StaticDriver(items=items))

        without_keyword = service.search(SearchFilter(organization="inta"), now=now)
        with_keyword = service.search(SearchFilter(organization="inta", keyword="limpieza"), now=now)

        assert [r.title for r in without_keyword] == ["Corte láser"]
        assert [r.title for r in with_keyword] == ["Servicio de limpieza", "Corte láser"]

    def test_one_fetch_per_call(self, catalog, now):
        """Test that each search fetches exactly once with the caller's filter."""
        driver = StaticDriver(items=[CORTE_LASER])
        service = SearchService(AppConfig(), catalog, driver=driver)
        search_filter = SearchFilter(organization="inta")

        service.search(search_filter, now=now)
        service.search(search_filter, now=now)

        assert driver.calls == [search_filter, search_filter]

    @pytest.mark.parametrize("error", [FetchError("Upstream HTTP 503", 503, FEED_URL), ParseError("bad index")])
    def test_driver_errors_propagate(self, catalog, error):
        """Test that fetch and parse errors reach the caller unchanged."""
        service = SearchService(AppConfig(), catalog, driver=StaticDriver(error=error))

        with pytest.raises(type(error)) as exc_info:
            service.search(SearchFilter())

        assert exc_info.value is error

    def test_search_logs_context(self, mock_config, catalog, now, caplog):
        """Test that search records carry the completion event."""
        service = SearchService(mock_config, catalog)

        with caplog.at_level(logging.INFO):
            service.search(SearchFilter(), now=now)

        events = [getattr(record, "event", None) for record in caplog.records]
        assert "search.started" in events
        assert "search.completed" in events

    def test_close_releases_driver(self, catalog):
        """Test that close() is forwarded to the driver."""
        driver = StaticDriver()
        service = SearchService(AppConfig(), catalog, driver=driver)

        service.close()

        assert driver.closed is True


class TestInspect:
    """Tests for SearchService.inspect."""

    def test_mock_report(self, mock_config, catalog):
        """Test counts and samples for the mock source."""
        report = SearchService(mock_config, catalog).inspect()

        assert isinstance(report, SourceReport)
        assert report.raw_count == 3
        assert report.mapped_count == 3
        assert len(report.samples) == 3
        assert report.to_dict()["mode"] == "mock"
        assert report.to_dict()["samples"][0]["organizationName"] == "INTA"

    def test_feed_report(self, catalog):
        """Test feed type and page URL in the feed report."""
        service = SearchService(AppConfig(sources={"feed_url": FEED_URL}), catalog)
        responses = [
            make_response(load_upstream_fixture("feed_index.atom")),
            make_response(load_upstream_fixture("feed_first_page.atom")),
        ]

        with patch.object(service.driver._session, "get", side_effect=responses):
            data = service.inspect().to_dict()

        assert data["rawCount"] == 5
        assert data["mappedCount"] == 5
        assert len(data["samples"]) == 3
        assert data["feedType"] == "atom10"
        assert data["firstUrl"] == "https://contrataciondelestado.es/sindicacion/licitaciones_1.atom"

    def test_scrape_report_is_a_note(self, catalog):
        """Test that scrape mode does not support inspection."""
        service = SearchService(AppConfig(mode="scrape"), catalog)
        assert isinstance(service.driver, ScrapeDriver)

        with patch.object(service.driver._session, "get") as mock_get:
            data = service.inspect().to_dict()

        mock_get.assert_not_called()
        assert set(data) == {"mode", "note"}
        assert data["mode"] == "scrape"

    def test_inspect_errors_propagate(self, catalog):
        """Test that inspection surfaces driver errors."""
        service = SearchService(AppConfig(), catalog, driver=StaticDriver(error=ParseError("bad")))

        with pytest.raises(ParseError):
            service.inspect()

    def test_feed_driver_type(self, catalog):
        """Test that feed is the default mode."""
        service = SearchService(AppConfig(), catalog)

        assert isinstance(service.driver, FeedDriver)
        assert service.mode == "feed"
