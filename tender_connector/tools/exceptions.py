"""Custom exceptions for the tool-invocation surface."""

from typing import List, Optional


class ToolError(Exception):
    """Base exception for tool-invocation errors caused by the caller."""

    pass


class UnknownToolError(ToolError):
    """The requested tool name is not served by this connector."""

    def __init__(self, tool: Optional[str]) -> None:
        super().__init__(f"Unknown tool: {tool}")
        self.tool = tool


class ToolArgumentsError(ToolError):
    """Tool arguments do not satisfy the declared input schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        self.errors = errors or []
        detail = f": {'; '.join(self.errors)}" if self.errors else ""
        super().__init__(f"{message}{detail}")
