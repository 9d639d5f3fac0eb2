"""Tool-invocation surface over the search service."""

from .arguments import build_search_filter
from .exceptions import ToolArgumentsError, ToolError, UnknownToolError
from .manifest import TOOL_NAME, ToolInvoker, build_manifest, build_tool_schema

__all__ = [
    "TOOL_NAME",
    "ToolInvoker",
    "build_manifest",
    "build_tool_schema",
    "build_search_filter",
    "ToolError",
    "UnknownToolError",
    "ToolArgumentsError",
]
