"""Tests for the HTTP surface."""

import asyncio
import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tender_connector.api import create_app, discovery_events, format_event
from tender_connector.config.models import AppConfig, ServerConfig
from tender_connector.drivers import FetchError, ParseError
from tender_connector.pipeline import SearchService
from tender_connector.tools import TOOL_NAME, build_manifest
from tests.helpers import StaticDriver


@pytest.fixture
def mock_client(mock_config, catalog):
    """Client over the mock source."""
    return TestClient(create_app(SearchService(mock_config, catalog)))


def client_for(catalog, driver):
    return TestClient(create_app(SearchService(AppConfig(), catalog, driver=driver)))


class TestHealth:
    def test_health(self, mock_client):
        """Test liveness endpoint."""
        response = mock_client.get("/health")

        assert response.status_code == 200
        assert response.text == "ok"


class TestSearchEndpoint:
    """Tests for GET /search."""

    def test_search_schema_names(self, mock_client):
        """Test search with the declared parameter names."""
        response = mock_client.get("/search", params={"organization": "navantia", "recencyDays": 3650, "limit": 10})

        assert response.status_code == 200
        assert [item["title"] for item in response.json()] == [
            "Sistema waterjet para mecanizado",
            "Plegadora CNC para taller naval",
        ]

    def test_search_short_names(self, mock_client):
        """Test search with org/q/days."""
        response = mock_client.get("/search", params={"org": "inta", "q": "fibra", "days": 3650})

        assert response.status_code == 200
        assert [item["organizationName"] for item in response.json()] == ["INTA"]

    def test_search_limit(self, mock_client):
        """Test that results never exceed the limit."""
        response = mock_client.get("/search", params={"recencyDays": 3650, "limit": 2})

        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_flat_feed_listing(self, catalog):
        """Test canonical camelCase output for a flat-feed record."""
        driver = StaticDriver(items=[{"titulo": "Corte láser", "organo": "INTA", "fecha": "2025-09-01"}])
        client = client_for(catalog, driver)

        response = client.get("/search", params={"organization": "inta", "recencyDays": 3650})

        assert response.status_code == 200
        assert response.json() == [
            {
                "title": "Corte láser",
                "organizationName": "INTA",
                "procedureType": "",
                "status": "",
                "amount": "",
                "publicationDate": "2025-09-01",
                "deadlineDate": "",
                "url": "",
            }
        ]

    @pytest.mark.parametrize(
        "params",
        [{"organization": "acme"}, {"limit": 1000}, {"recencyDays": "soon"}],
    )
    def test_invalid_filter_is_422(self, mock_client, params):
        """Test that invalid filters are rejected."""
        response = mock_client.get("/search", params=params)

        assert response.status_code == 422
        assert "error" in response.json()

    @pytest.mark.parametrize(
        "error",
        [
            FetchError("Upstream HTTP 503: Service Unavailable", 503, "https://contrataciondelestado.es/x"),
            ParseError("Feed index is not a recognizable syndication feed"),
        ],
    )
    def test_driver_error_is_502(self, catalog, error):
        """Test that upstream failures map to 502 with a hint."""
        client = client_for(catalog, StaticDriver(error=error))

        response = client.get("/search", params={"organization": "inta"})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == str(error)
        assert "USE_HTML=1" in body["hint"]


class TestInvokeEndpoint:
    """Tests for POST /invoke."""

    def test_invoke(self, mock_client):
        """Test tool invocation envelope."""
        response = mock_client.post(
            "/invoke",
            json={"tool": TOOL_NAME, "args": {"organization": "navantia", "recencyDays": 3650}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "tool_result"
        assert body["tool"] == TOOL_NAME
        assert len(body["content"]) == 2

    def test_invoke_without_args(self, mock_client):
        """Test that args are optional."""
        response = mock_client.post("/invoke", json={"tool": TOOL_NAME})

        assert response.status_code == 200
        assert response.json()["type"] == "tool_result"

    def test_unknown_tool_is_400(self, mock_client):
        """Test unknown tool names."""
        response = mock_client.post("/invoke", json={"tool": "placsp.delete", "args": {}})

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown tool: placsp.delete"}

    def test_invalid_args_is_422(self, mock_client):
        """Test argument validation."""
        response = mock_client.post("/invoke", json={"tool": TOOL_NAME, "args": {"limit": 0.5}})

        assert response.status_code == 422

    def test_invoke_driver_error_is_502(self, catalog):
        """Test upstream failure during invocation."""
        client = client_for(catalog, StaticDriver(error=ParseError("bad index")))

        response = client.post("/invoke", json={"tool": TOOL_NAME, "args": {}})

        assert response.status_code == 502
        assert response.json()["error"] == "bad index"


class TestDiscovery:
    """Tests for GET /sse and the event generator."""

    def test_events_start_with_manifest_then_heartbeat(self, catalog):
        """Test the event sequence until disconnect."""
        manifest = build_manifest(catalog)
        checks = iter([False, True])

        async def is_disconnected():
            return next(checks)

        async def collect():
            return [chunk async for chunk in discovery_events(manifest, 0.01, is_disconnected)]

        chunks = asyncio.run(collect())

        assert len(chunks) == 2
        assert chunks[0].startswith("data: ")
        assert json.loads(chunks[0][len("data: "):]) == {"type": "manifest", "manifest": manifest}
        assert chunks[1] == ":\n\n"

    def test_format_event(self):
        """Test event framing."""
        assert format_event({"a": "á"}) == 'data: {"a": "á"}\n\n'

    def test_sse_route(self, mock_client, catalog):
        """Test that the route streams the manifest as an event stream."""

        async def single_event(manifest, heartbeat_seconds, is_disconnected):
            yield format_event({"type": "manifest", "manifest": manifest})

        with patch("tender_connector.api.routes.discovery_events", side_effect=single_event) as mock_events:
            response = mock_client.get("/sse")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        payload = json.loads(response.text.strip()[len("data: "):])
        assert payload["type"] == "manifest"
        assert payload["manifest"]["tools"][0]["name"] == TOOL_NAME
        assert mock_events.call_args.args[1] == ServerConfig().heartbeat_seconds


class TestDebugEndpoint:
    def test_debug_mock(self, mock_client):
        """Test source report for the mock source."""
        response = mock_client.get("/debug")

        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "mock"
        assert body["rawCount"] == 3
        assert len(body["samples"]) == 3

    def test_debug_driver_error_is_502(self, catalog):
        """Test upstream failure during inspection."""
        client = client_for(catalog, StaticDriver(error=FetchError("down", 0, "https://x")))

        response = client.get("/debug")

        assert response.status_code == 502
