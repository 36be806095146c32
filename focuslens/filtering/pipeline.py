"""
Predicate Pipeline — short-circuit accept/reject per record.

Pure functions only: no state survives from one record to the next.
"""

from collections.abc import Iterable, Sequence

from focuslens.filtering.rules import FilterRule
from focuslens.models.criteria import FilterCriteria
from focuslens.models.records import ProjectRecord, TaskRecord


def first_failing_rule(
    task: TaskRecord,
    rules: Sequence[FilterRule],
    criteria: FilterCriteria,
) -> str | None:
    """
    Evaluate enabled rules in order and stop at the first failure.

    Args:
        task: The record under test
        rules: Enabled rules, already in evaluation order
        criteria: The active criteria

    Returns:
        Name of the rejecting rule, or None if the task passed every rule
    """
    for rule in rules:
        if not rule.predicate(task, criteria):
            return rule.name
    return None


def passes_filters(
    task: TaskRecord,
    rules: Sequence[FilterRule],
    criteria: FilterCriteria,
) -> bool:
    """True if the task passes every enabled rule."""
    return first_failing_rule(task, rules, criteria) is None


def filter_projects(
    projects: Iterable[ProjectRecord],
    criteria: FilterCriteria,
) -> list[ProjectRecord]:
    """
    Lighter project path: hide done/dropped projects when requested.

    Projects are never scored or quota-bounded. Input order is preserved.
    """
    if not criteria.hide_completed:
        return list(projects)
    return [project for project in projects if not project.is_closed()]
