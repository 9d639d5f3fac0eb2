"""HTTP surface for the connector."""

from .app import create_app
from .events import discovery_events, format_event

__all__ = ["create_app", "discovery_events", "format_event"]
