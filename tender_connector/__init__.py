"""Tender Connector: procurement listing search over public contracting sources."""

__version__ = "0.1.0"
