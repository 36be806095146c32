"""MCP tool definitions for assistant integration."""

from focuslens.mcp.tools import (
    TOOL_DEFINITIONS,
    ToolDefinition,
    execute_tool,
    get_perspective_data,
)

__all__ = [
    "TOOL_DEFINITIONS",
    "ToolDefinition",
    "execute_tool",
    "get_perspective_data",
]
