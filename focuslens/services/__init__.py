from focuslens.services.perspective_query import (
    build_request,
    list_perspectives,
    query_perspective,
)
from focuslens.services.report_formatter import (
    format_duration,
    format_project,
    format_task,
    render_failure,
    render_perspective_list,
    render_query_result,
)

__all__ = [
    "build_request",
    "format_duration",
    "format_project",
    "format_task",
    "list_perspectives",
    "query_perspective",
    "render_failure",
    "render_perspective_list",
    "render_query_result",
]
