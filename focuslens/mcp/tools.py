"""
MCP tool definitions for assistant integration.

Exposes perspective queries as a tool an assistant can call. Tool results
are markdown text plus an error flag; failures are reported in the text,
never raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from focuslens.models.criteria import FilterCriteria, TierOrdering
from focuslens.models.failure import create_unknown_failure
from focuslens.provider.osascript import PerspectiveProvider, get_default_provider
from focuslens.services.perspective_query import list_perspectives, query_perspective
from focuslens.services.report_formatter import (
    render_failure,
    render_perspective_list,
    render_query_result,
)

logger = logging.getLogger(__name__)

# Argument names accepted by get_perspective_data that map onto FilterCriteria
CRITERIA_ARGUMENTS: tuple[str, ...] = (
    "hide_completed",
    "hide_recurring_duplicates",
    "min_estimated_minutes",
    "max_estimated_minutes",
    "flagged_only",
    "with_tags",
    "with_due_date",
    "project_name",
    "budget",
    "tier_ordering",
    "prioritize",
)


@dataclass
class ToolDefinition:
    """Definition of an MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="get_perspective_data",
        description=(
            "Get a prioritized view of tasks and projects in an OmniFocus perspective. "
            "Without perspective_name, lists the available perspectives."
        ),
        parameters={
            "type": "object",
            "properties": {
                "perspective_name": {
                    "type": "string",
                    "description": "Perspective to query; omit to list perspectives",
                },
                "hide_completed": {
                    "type": "boolean",
                    "description": "Hide completed and dropped items",
                    "default": True,
                },
                "hide_recurring_duplicates": {
                    "type": "boolean",
                    "description": "Hide duplicate occurrences of repeating tasks",
                    "default": True,
                },
                "min_estimated_minutes": {
                    "type": "integer",
                    "description": "Only tasks estimated at or above this many minutes",
                },
                "max_estimated_minutes": {
                    "type": "integer",
                    "description": "Only tasks estimated at or below this many minutes",
                },
                "flagged_only": {
                    "type": "boolean",
                    "description": "Only flagged tasks",
                    "default": False,
                },
                "with_tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Only tasks carrying at least one of these tags",
                },
                "with_due_date": {
                    "type": "boolean",
                    "description": "Only tasks with (true) or without (false) a due date",
                },
                "project_name": {
                    "type": "string",
                    "description": "Only tasks in this project",
                },
                "budget": {
                    "type": "integer",
                    "description": "Max tasks returned",
                    "default": 500,
                },
                "tier_ordering": {
                    "type": "string",
                    "enum": [o.value for o in TierOrdering],
                    "description": "Priority tier order",
                    "default": TierOrdering.URGENT_FIRST.value,
                },
                "prioritize": {
                    "type": "boolean",
                    "description": "Bucket by urgency tier; false keeps provider order",
                    "default": True,
                },
            },
            "required": [],
        },
    ),
]


def get_perspective_data(
    provider: PerspectiveProvider,
    arguments: dict[str, Any],
) -> dict[str, Any]:
    """
    Run the get_perspective_data tool synchronously.

    Returns:
        {"content": markdown text, "is_error": bool}
    """
    perspective_name = arguments.get("perspective_name")

    if not perspective_name:
        listing = list_perspectives(provider)
        if listing.failure is not None:
            return {
                "content": render_failure(listing.failure, "Failed to list perspectives"),
                "is_error": True,
            }
        return {"content": render_perspective_list(listing.data or []), "is_error": False}

    criteria = {key: arguments[key] for key in CRITERIA_ARGUMENTS if key in arguments}
    response = query_perspective(provider, perspective_name, criteria)
    result = response.data
    if response.failure is not None or result is None:
        return {
            "content": render_failure(
                response.failure, f'Failed to get data for perspective "{perspective_name}"'
            ),
            "is_error": True,
        }

    return {
        "content": render_query_result(result, FilterCriteria(**criteria)),
        "is_error": False,
    }


async def execute_tool(
    tool_name: str,
    arguments: dict[str, Any],
    provider: PerspectiveProvider | None = None,
) -> dict[str, Any]:
    """
    Execute an MCP tool by name.

    The provider call blocks, so it runs in a worker thread.

    Raises:
        ValueError: If tool name is unknown
    """
    if tool_name != "get_perspective_data":
        raise ValueError(f"Unknown tool: {tool_name}")

    active_provider = provider or get_default_provider()
    try:
        return await asyncio.to_thread(get_perspective_data, active_provider, arguments)
    except Exception as e:
        logger.exception("Tool execution error for %s", tool_name)
        failure = create_unknown_failure(e).failure
        return {"content": render_failure(failure, "Tool execution failed"), "is_error": True}
