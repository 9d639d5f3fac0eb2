"""Test helper utilities for Tender Connector tests."""

from .responses import make_response
from .static_driver import StaticDriver, load_upstream_fixture

__all__ = ["StaticDriver", "load_upstream_fixture", "make_response"]
