"""Tool manifest and invocation adapter over the search service."""

from typing import Any, Dict, Mapping, Optional

from tender_connector.domain.models import MAX_LIMIT, MAX_RECENCY_DAYS, WILDCARD_ORGANIZATION, Catalog
from tender_connector.logging import get_logger
from tender_connector.pipeline.runner import SearchService

from .arguments import build_search_filter
from .exceptions import UnknownToolError

logger = get_logger(__name__, component="tools")

TOOL_NAME = "placsp.search"
PROTOCOL = "mcp"
PROTOCOL_VERSION = "0.1"


def build_tool_schema(catalog: Catalog) -> Dict[str, Any]:
    """Describe the search tool and its input schema.

    The organization enum is derived from the catalog, so it always matches
    the alias table in use.
    """
    organizations = list(catalog.organization_keys) + [WILDCARD_ORGANIZATION]
    return {
        "name": TOOL_NAME,
        "description": (
            "Search public procurement listings, filtering by contracting organization "
            f"({', '.join(key.upper() for key in catalog.organization_keys)}) and by "
            "machinery and manufacturing keywords (laser, waterjet, machining, bending, welding...)."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "organization": {"type": "string", "enum": organizations},
                "keyword": {"type": "string"},
                "recencyDays": {"type": "integer", "minimum": 1, "maximum": MAX_RECENCY_DAYS},
                "limit": {"type": "integer", "minimum": 1, "maximum": MAX_LIMIT},
            },
            "required": [],
        },
    }


def build_manifest(catalog: Catalog) -> Dict[str, Any]:
    """Build the manifest advertised on the discovery stream."""
    return {
        "protocol": PROTOCOL,
        "version": PROTOCOL_VERSION,
        "tools": [build_tool_schema(catalog)],
    }


class ToolInvoker:
    """Dispatches tool calls to the search service.

    Carries no matching logic of its own: arguments become a SearchFilter and
    the results of SearchService.search are wrapped with a type tag.
    """

    def __init__(self, service: SearchService):
        self.service = service

    def invoke(self, tool: Optional[str], arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Invoke a tool by name.

        Args:
            tool: Tool name requested by the client
            arguments: Tool arguments

        Returns:
            {"type": "tool_result", "tool": name, "content": [listing, ...]}

        Raises:
            UnknownToolError: If tool is not TOOL_NAME
            ToolArgumentsError: If arguments violate the input schema
            DriverError: Propagated from the search
        """
        if tool != TOOL_NAME:
            logger.warning(
                "Unknown tool requested",
                extra={"event": "tools.invoke.unknown", "tool": tool},
            )
            raise UnknownToolError(tool)

        search_filter = build_search_filter(arguments, self.service.catalog)
        listings = self.service.search(search_filter)
        return {
            "type": "tool_result",
            "tool": TOOL_NAME,
            "content": [listing.to_public_dict() for listing in listings],
        }
