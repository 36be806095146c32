"""
Filter Rule Table — static, selectivity-ordered predicates.

Rules are ordered by decreasing expected exclusion rate so that the most
selective (and usually cheapest) predicates reject a record before the rest
run. The order is hand-tuned and fixed here; it is never recomputed per
query.

INVARIANTS:
- Rules are evaluated strictly in ascending `order`
- A rule whose criterion is unset is skipped entirely
- A value a predicate needs but the record lacks is a failure, not a pass
"""

from collections.abc import Callable
from dataclasses import dataclass

from focuslens.models.criteria import FilterCriteria
from focuslens.models.records import TaskRecord

TaskPredicate = Callable[[TaskRecord, FilterCriteria], bool]
RuleGate = Callable[[FilterCriteria], bool]


@dataclass(frozen=True, slots=True)
class FilterRule:
    """
    A named task predicate with its static selectivity estimate.

    `exclusion_rate` only documents why the rule sits where it does in the
    table. It is never used at query time.
    """

    name: str
    exclusion_rate: float
    order: int
    is_enabled: RuleGate
    predicate: TaskPredicate

    def __post_init__(self) -> None:
        if not 0.0 <= self.exclusion_rate <= 1.0:
            raise ValueError(f"exclusion_rate out of range for {self.name}: {self.exclusion_rate}")


# =============================================================================
# PREDICATES
# =============================================================================


def _in_project(task: TaskRecord, criteria: FilterCriteria) -> bool:
    return task.project_name is not None and task.project_name == criteria.project_name


def _is_flagged(task: TaskRecord, criteria: FilterCriteria) -> bool:  # noqa: ARG001
    return task.flagged


def _meets_min_duration(task: TaskRecord, criteria: FilterCriteria) -> bool:
    if task.estimated_minutes is None or criteria.min_estimated_minutes is None:
        return False
    return task.estimated_minutes >= criteria.min_estimated_minutes


def _meets_max_duration(task: TaskRecord, criteria: FilterCriteria) -> bool:
    if task.estimated_minutes is None or criteria.max_estimated_minutes is None:
        return False
    return task.estimated_minutes <= criteria.max_estimated_minutes


def _matches_due_date_presence(task: TaskRecord, criteria: FilterCriteria) -> bool:
    return (task.due_date is not None) == criteria.with_due_date


def _has_requested_tag(task: TaskRecord, criteria: FilterCriteria) -> bool:
    if not criteria.with_tags:
        return False
    return not set(criteria.with_tags).isdisjoint(task.tags)


def _is_open(task: TaskRecord, criteria: FilterCriteria) -> bool:  # noqa: ARG001
    return not (task.completed or task.dropped)


# =============================================================================
# THE TABLE
# =============================================================================

RULE_TABLE: tuple[FilterRule, ...] = (
    FilterRule(
        name="project_name",
        exclusion_rate=0.90,
        order=1,
        is_enabled=lambda c: c.project_name is not None,
        predicate=_in_project,
    ),
    FilterRule(
        name="flagged_only",
        exclusion_rate=0.85,
        order=2,
        is_enabled=lambda c: c.flagged_only,
        predicate=_is_flagged,
    ),
    FilterRule(
        name="min_duration",
        exclusion_rate=0.70,
        order=3,
        is_enabled=lambda c: c.min_estimated_minutes is not None,
        predicate=_meets_min_duration,
    ),
    FilterRule(
        name="max_duration",
        exclusion_rate=0.60,
        order=4,
        is_enabled=lambda c: c.max_estimated_minutes is not None,
        predicate=_meets_max_duration,
    ),
    FilterRule(
        name="due_date_presence",
        exclusion_rate=0.50,
        order=5,
        is_enabled=lambda c: c.with_due_date is not None,
        predicate=_matches_due_date_presence,
    ),
    FilterRule(
        name="tag_membership",
        exclusion_rate=0.40,
        order=6,
        is_enabled=lambda c: bool(c.with_tags),
        predicate=_has_requested_tag,
    ),
    FilterRule(
        name="hide_completed",
        exclusion_rate=0.30,
        order=7,
        is_enabled=lambda c: c.hide_completed,
        predicate=_is_open,
    ),
)


def enabled_rules(criteria: FilterCriteria) -> tuple[FilterRule, ...]:
    """
    Rules active for these criteria, in evaluation order.

    Resolved once per query so disabled rules cost nothing per record.
    """
    return tuple(
        rule for rule in sorted(RULE_TABLE, key=lambda r: r.order) if rule.is_enabled(criteria)
    )
