"""Deterministic mock source used for testing and offline operation."""

from typing import List

from tender_connector.domain.models import CanonicalListing, RawItem, SearchFilter

from .base import BaseDriver

MOCK_LISTINGS = (
    {
        "title": "Suministro máquina de corte por láser",
        "organization_name": "INTA",
        "procedure_type": "Abierto",
        "status": "Publicado",
        "amount": "100000",
        "publication_date": "2025-09-25",
        "deadline_date": "2025-10-10",
        "url": "https://contrataciondelestado.es/licitacion/ejemplo-inta-laser",
    },
    {
        "title": "Sistema waterjet para mecanizado",
        "organization_name": "Navantia",
        "procedure_type": "Abierto simplificado",
        "status": "Publicado",
        "amount": "65000",
        "publication_date": "2025-09-20",
        "deadline_date": "2025-10-05",
        "url": "https://contrataciondelestado.es/licitacion/ejemplo-navantia-waterjet",
    },
    {
        "title": "Plegadora CNC para taller naval",
        "organization_name": "Navantia",
        "procedure_type": "SARA",
        "status": "Publicado",
        "amount": "120000",
        "publication_date": "2025-08-02",
        "deadline_date": "2025-09-01",
        "url": "https://contrataciondelestado.es/licitacion/ejemplo-navantia-plegadora",
    },
)


class MockDriver(BaseDriver):
    """Driver returning a fixed set of listings without network access.

    Fixtures are already in canonical shape, so they bypass the field
    resolver; filtering and ranking still apply downstream.
    """

    MODE = "mock"

    def fetch_items(self, search_filter: SearchFilter) -> List[RawItem]:
        """Return copies of the fixtures."""
        return [dict(listing) for listing in MOCK_LISTINGS]

    def normalize_items(self, raw_items: List[RawItem]) -> List[CanonicalListing]:
        """Build listings directly from canonical-shaped fixtures."""
        return [CanonicalListing(**item) for item in raw_items]
