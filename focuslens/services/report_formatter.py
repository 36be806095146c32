"""
Markdown report formatter.

Renders QueryResult and perspective listings for human consumption.
Presentation only: task order is taken from the engine unchanged.
"""

from collections.abc import Sequence
from datetime import datetime

from focuslens.models.criteria import FilterCriteria
from focuslens.models.failure import FailureDetail
from focuslens.models.records import ProjectRecord, ProjectStatus, TaskRecord
from focuslens.models.result import QueryResult
from focuslens.provider.messages import PerspectiveInfo, PerspectiveKind

PROJECT_STATUS_ICONS: dict[ProjectStatus, str] = {
    ProjectStatus.ACTIVE: "🟢",
    ProjectStatus.DONE: "✅",
    ProjectStatus.DROPPED: "❌",
    ProjectStatus.ON_HOLD: "⏸️",
    ProjectStatus.UNSPECIFIED: "📋",
}


def format_duration(minutes: int) -> str:
    """45 -> '45m', 120 -> '2h', 90 -> '1h 30m'."""
    if minutes < 60:
        return f"{minutes}m"
    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}m"


def _format_date(moment: datetime | None) -> str:
    return f" 📅{moment.date().isoformat()}" if moment else ""


def format_task(task: TaskRecord) -> str:
    """One markdown line for a task."""
    if task.completed:
        icon = "✅"
    elif task.flagged:
        icon = "🚩"
    else:
        icon = "⬜"
    duration = f" ({format_duration(task.estimated_minutes)})" if task.estimated_minutes else ""
    project = f" [{task.project_name}]" if task.project_name else ""
    tags = f" #{' #'.join(task.tags)}" if task.tags else ""
    return f"{icon} **{task.name}**{duration}{project}{tags}{_format_date(task.due_date)}"


def format_project(project: ProjectRecord) -> str:
    """One markdown line for a project."""
    icon = PROJECT_STATUS_ICONS[project.status]
    flag = " 🚩" if project.flagged else ""
    duration = (
        f" ({format_duration(project.estimated_minutes)})" if project.estimated_minutes else ""
    )
    task_count = f" [{project.task_count} tasks]" if project.task_count else ""
    return f"{icon} **{project.name}**{flag}{duration}{task_count}{_format_date(project.due_date)}"


def _estimate_summary(tasks: Sequence[TaskRecord]) -> list[str]:
    estimated = [t.estimated_minutes for t in tasks if t.estimated_minutes]
    if not estimated:
        return []

    total = sum(estimated)
    average = round(total / len(estimated))
    return [
        "## 📊 Estimated time",
        f"- **Total**: {format_duration(total)}",
        f"- **Average**: {format_duration(average)}",
        f"- **Tasks with estimates**: {len(estimated)}/{len(tasks)}",
    ]


def render_query_result(result: QueryResult, criteria: FilterCriteria | None = None) -> str:
    """Render a full perspective report."""
    filters = criteria.describe() if criteria else []
    filter_text = f" ({', '.join(filters)})" if filters else ""

    task_count = len(result.tasks)
    project_count = len(result.projects)
    stats = result.stats

    lines = [
        f"# 📋 {result.perspective} perspective{filter_text}",
        "",
        f"**Tasks**: {task_count} | **Projects**: {project_count}",
        f"**Priority**: high {stats.high} · medium {stats.medium} · low {stats.low}"
        f" (budget {stats.budget})",
        "",
    ]

    if result.projects:
        lines.append(f"## 📁 Projects ({project_count})")
        lines.append("")
        lines.extend(format_project(p) for p in result.projects)
        lines.append("")

    if result.tasks:
        lines.append(f"## ✅ Tasks ({task_count})")
        lines.append("")
        lines.extend(format_task(t) for t in result.tasks)
        lines.append("")

    if not result.tasks and not result.projects:
        lines.append("*No items match these filters.*")
        lines.append("")

    lines.extend(_estimate_summary(result.tasks))

    return "\n".join(lines).rstrip() + "\n"


def render_perspective_list(perspectives: Sequence[PerspectiveInfo]) -> str:
    """Render available perspectives with usage notes."""
    built_in = [p for p in perspectives if p.kind == PerspectiveKind.BUILT_IN]
    custom = [p for p in perspectives if p.kind == PerspectiveKind.CUSTOM]

    lines = ["# 📋 Available perspectives", ""]
    if built_in:
        lines.append("## Built-in perspectives")
        lines.extend(f"- **{p.name}** (built-in)" for p in built_in)
        lines.append("")
    if custom:
        lines.append("## Custom perspectives")
        lines.extend(f"- **{p.name}** (custom)" for p in custom)
        lines.append("")

    lines.extend(
        [
            "## Usage",
            "Pass one of the names above as `perspective_name`.",
            "",
            "## Filter options",
            "- `min_estimated_minutes`: only tasks estimated at or above this many minutes",
            "- `max_estimated_minutes`: only tasks estimated at or below this many minutes",
            "- `flagged_only`: only flagged tasks",
            "- `with_due_date`: only tasks with (true) or without (false) a due date",
            "- `project_name`: only tasks in this project",
            "- `with_tags`: only tasks carrying at least one of these tags",
            "- `budget`: maximum number of tasks returned",
        ]
    )
    return "\n".join(lines) + "\n"


def render_failure(failure: FailureDetail | None, context: str) -> str:
    """Render a failure envelope as a one-paragraph message."""
    if failure is None:
        return f"{context}."
    text = f"{context}: {failure.message}"
    if failure.suggestion:
        text += f"\n\n{failure.suggestion}"
    return text
