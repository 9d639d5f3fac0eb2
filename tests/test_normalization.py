"""Unit tests for the record normalizer."""

import pytest

from tender_connector.normalization import (
    ListingNormalizer,
    coerce_field_value,
    recover_organization,
    resolve_field,
)


@pytest.fixture
def normalizer():
    return ListingNormalizer()


class TestCoerceFieldValue:
    """Test conversion of raw values to strings."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("  INTA ", "INTA"),
            (45000, "45000"),
            (1250.5, "1250.5"),
            ({"#text": "Abierto"}, "Abierto"),
            ({"href": "https://contrataciondelestado.es/x"}, "https://contrataciondelestado.es/x"),
        ],
    )
    def test_usable_values(self, value, expected):
        """Test strings, numbers and text nodes."""
        assert coerce_field_value(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", True, ["INTA"], {"other": "x"}])
    def test_unusable_values(self, value):
        """Test that unusable values count as absent."""
        assert coerce_field_value(value) is None


class TestResolveField:
    """Test ordered candidate resolution."""

    def test_first_candidate_wins(self):
        """Test that the earliest present key is used."""
        raw = {"title": "English title", "titulo": "Título"}

        assert resolve_field(raw, ("titulo", "title")) == "Título"

    def test_empty_candidate_skipped(self):
        """Test that empty values fall through to later keys."""
        raw = {"organo": "", "organismo": None, "organization": "Navantia"}

        assert resolve_field(raw, ("organo", "organismo", "organization")) == "Navantia"

    def test_no_candidate(self):
        """Test that missing fields resolve to empty string."""
        assert resolve_field({}, ("titulo", "title")) == ""


class TestRecoverOrganization:
    """Test organization recovery from summary blobs."""

    def test_contracting_body_label(self):
        """Test the primary label."""
        assert recover_organization("Órgano de Contratación: INTA") == "INTA"

    def test_value_ends_at_field_separator(self):
        """Test semicolon-separated summaries."""
        summary = "Id licitación: 2025/0142; Órgano de Contratación: INTA; Importe: 180000 EUR"

        assert recover_organization(summary) == "INTA"

    def test_value_ends_at_tag(self):
        """Test HTML summaries."""
        summary = "<p>Órgano de Contratación: Navantia S.A., S.M.E.<br/>Importe: 95000</p>"

        assert recover_organization(summary) == "Navantia S.A., S.M.E."

    def test_escaped_html(self):
        """Test entity-escaped summaries."""
        summary = "&lt;p&gt;Órgano de Contratación: INTA&lt;br/&gt;Importe: 100&lt;/p&gt;"

        assert recover_organization(summary) == "INTA"

    def test_label_without_accents(self):
        """Test unaccented spelling of the label."""
        assert recover_organization("Organo de Contratacion: ENSA") == "ENSA"

    def test_dash_label(self):
        """Test the dash-separated variant."""
        assert recover_organization("Órgano de Contratación - Fábrica Nacional de Moneda y Timbre") == (
            "Fábrica Nacional de Moneda y Timbre"
        )

    @pytest.mark.parametrize(
        "summary,expected",
        [
            ("Organismo: Indra Sistemas", "Indra Sistemas"),
            ("Entidad adjudicadora: Equipos Nucleares S.A.", "Equipos Nucleares S.A."),
            ("Contracting body: Navantia", "Navantia"),
        ],
    )
    def test_alternative_labels(self, summary, expected):
        """Test the secondary labels."""
        assert recover_organization(summary) == expected

    def test_first_pattern_wins(self):
        """Test pattern priority when several labels are present."""
        summary = "Organismo: Ministerio de Defensa; Órgano de Contratación: INTA"

        assert recover_organization(summary) == "INTA"

    @pytest.mark.parametrize("summary", [None, "", "Importe: 100 EUR; Estado: PUB"])
    def test_no_label(self, summary):
        """Test that summaries without labels yield empty string."""
        assert recover_organization(summary) == ""


class TestListingNormalizer:
    """Test RawItem -> CanonicalListing mapping."""

    def test_flat_feed_keys(self, normalizer):
        """Test Spanish flat-feed keys."""
        listing = normalizer.normalize({"titulo": "Corte láser", "organo": "INTA", "fecha": "2025-09-01"})

        assert listing.title == "Corte láser"
        assert listing.organization_name == "INTA"
        assert listing.publication_date == "2025-09-01"
        assert listing.url == ""

    def test_full_record(self, normalizer):
        """Test every canonical field."""
        raw = {
            "titulo": "Torno CNC",
            "organismo": "Navantia",
            "procedimiento": "Abierto",
            "estado": "Publicado",
            "presupuesto": 45000,
            "fecha": "15/09/2025",
            "fecha_limite": "30/09/2025",
            "enlace": "https://contrataciondelestado.es/licitacion/torno",
        }

        data = normalizer.normalize(raw).to_public_dict()

        assert data == {
            "title": "Torno CNC",
            "organizationName": "Navantia",
            "procedureType": "Abierto",
            "status": "Publicado",
            "amount": "45000",
            "publicationDate": "15/09/2025",
            "deadlineDate": "30/09/2025",
            "url": "https://contrataciondelestado.es/licitacion/torno",
        }

    def test_english_keys(self, normalizer):
        """Test English fallback keys."""
        listing = normalizer.normalize(
            {"title": "Waterjet", "organization": "ENSA", "date": "2025-09-01", "url": "https://x.es"}
        )

        assert listing.title == "Waterjet"
        assert listing.organization_name == "ENSA"
        assert listing.url == "https://x.es"

    def test_empty_item(self, normalizer):
        """Test that an empty mapping still produces a listing."""
        listing = normalizer.normalize({})

        assert listing.to_public_dict() == {key: "" for key in listing.to_public_dict()}

    def test_organization_recovered_from_summary(self, normalizer):
        """Test feed-structured items carrying their organization in the summary."""
        raw = {
            "title": "Suministro de láser",
            "link": "https://contrataciondelestado.es/licitacion/1",
            "updated": "2025-09-25T10:00:00Z",
            "summary": "Órgano de Contratación: INTA",
        }

        listing = normalizer.normalize(raw, recover_organization_from_summary=True)

        assert listing.organization_name == "INTA"
        assert listing.publication_date == "2025-09-25T10:00:00Z"
        assert listing.url == "https://contrataciondelestado.es/licitacion/1"

    def test_no_recovery_unless_requested(self, normalizer):
        """Test that non-feed items keep an empty organization."""
        listing = normalizer.normalize({"title": "Láser", "summary": "Órgano de Contratación: INTA"})

        assert listing.organization_name == ""

    def test_structured_organization_wins_over_summary(self, normalizer):
        """Test that recovery only fills a missing organization."""
        raw = {"title": "Láser", "organo": "Navantia", "summary": "Órgano de Contratación: INTA"}

        listing = normalizer.normalize(raw, recover_organization_from_summary=True)

        assert listing.organization_name == "Navantia"

    def test_searchable_text_includes_summary(self, normalizer):
        """Test that summary text takes part in keyword matching."""
        raw = {"title": "Suministro", "summary": "<p>Máquina de <b>corte por agua</b></p>", "estado": "PUB"}

        listing = normalizer.normalize(raw)

        assert listing.searchable_text == "Suministro PUB Máquina de corte por agua"

    def test_batch_skips_non_mappings(self, normalizer):
        """Test that non-mapping items are dropped."""
        listings = normalizer.normalize_batch([{"titulo": "A"}, "not-a-listing", None, {"titulo": "B"}])

        assert [listing.title for listing in listings] == ["A", "B"]

    def test_batch_preserves_order(self, normalizer):
        """Test input order is kept."""
        raw_items = [{"titulo": str(i)} for i in range(5)]

        assert [listing.title for listing in normalizer.normalize_batch(raw_items)] == ["0", "1", "2", "3", "4"]
