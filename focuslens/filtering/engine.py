"""
Query Engine — single-pass filter, score, classify and collect.

Per task record:

    Scanned -> Rejected(rule)
            |  Accepted -> Scored -> Classified(tier) -> Included(tier)
                                                      |  DroppedByQuota

Each record is visited at most once. Once every tier quota is full the scan
stops and the remaining records are never pulled from the stream.

The engine performs no I/O. The only state kept between queries is the
metrics history below, which is capped and written under a lock.
"""

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock

from focuslens.filtering.assembler import assemble_result
from focuslens.filtering.pipeline import filter_projects, first_failing_rule
from focuslens.filtering.quota import QuotaCollector, ResultQuota
from focuslens.filtering.rules import enabled_rules
from focuslens.filtering.scoring import classify_score, score_task
from focuslens.models.criteria import FilterCriteria
from focuslens.models.records import ProjectRecord, TaskRecord
from focuslens.models.result import QueryResult

logger = logging.getLogger(__name__)


@dataclass
class QueryMetrics:
    """Metrics recorded per query."""

    perspective: str = ""
    enabled_rules: tuple[str, ...] = ()
    scanned: int = 0
    rejected_by_rule: dict[str, int] = field(default_factory=dict)
    dropped_by_quota: int = 0
    accepted: int = 0
    quota_filled: bool = False
    projects_in: int = 0
    projects_out: int = 0


# Most recent queries only; older entries fall off the left
METRICS_HISTORY_LIMIT = 256

_metrics_history: deque[QueryMetrics] = deque(maxlen=METRICS_HISTORY_LIMIT)
_metrics_lock = Lock()


def get_query_metrics() -> list[QueryMetrics]:
    """Get recorded metrics, oldest first."""
    with _metrics_lock:
        return list(_metrics_history)


def reset_query_metrics() -> None:
    """Reset metrics history (for testing)."""
    with _metrics_lock:
        _metrics_history.clear()


def build_quota(criteria: FilterCriteria) -> ResultQuota:
    """Tiered 40/40/20 quota, or a single pool when prioritization is off."""
    if criteria.prioritize:
        return ResultQuota.from_budget(criteria.budget)
    return ResultQuota.pooled(criteria.budget)


def run_query(
    perspective: str,
    tasks: Iterable[TaskRecord],
    projects: Iterable[ProjectRecord],
    criteria: FilterCriteria,
    now: datetime,
) -> QueryResult:
    """
    Run the filter/score/quota pipeline over one provider response.

    Args:
        perspective: Name of the perspective the records came from
        tasks: Task records in provider scan order (may be a lazy iterator)
        projects: Project records in provider order
        criteria: Validated filter criteria
        now: Clock reading used for every due-date computation

    Returns:
        QueryResult with tier-ordered tasks, filtered projects and stats
    """
    rules = enabled_rules(criteria)
    collector = QuotaCollector(quota=build_quota(criteria))
    metrics = QueryMetrics(
        perspective=perspective,
        enabled_rules=tuple(rule.name for rule in rules),
    )

    task_iter = iter(tasks)
    while not collector.is_full:
        task = next(task_iter, None)
        if task is None:
            break
        metrics.scanned += 1

        rejected_by = first_failing_rule(task, rules, criteria)
        if rejected_by is not None:
            metrics.rejected_by_rule[rejected_by] = metrics.rejected_by_rule.get(rejected_by, 0) + 1
            continue

        tier = classify_score(score_task(task, now))
        collector.offer(task, tier)

    metrics.dropped_by_quota = collector.dropped_by_quota
    metrics.accepted = collector.total_accepted
    metrics.quota_filled = collector.is_full

    project_list = list(projects)
    visible_projects = filter_projects(project_list, criteria)
    metrics.projects_in = len(project_list)
    metrics.projects_out = len(visible_projects)

    result = assemble_result(perspective, collector, visible_projects, criteria.tier_ordering)

    with _metrics_lock:
        _metrics_history.append(metrics)

    logger.info(
        "QUERY_COMPLETED",
        extra={
            "perspective": perspective,
            "rules": metrics.enabled_rules,
            "scanned": metrics.scanned,
            "rejected": sum(metrics.rejected_by_rule.values()),
            "dropped_by_quota": metrics.dropped_by_quota,
            "accepted": metrics.accepted,
            "quota_filled": metrics.quota_filled,
            "budget": criteria.budget,
            "projects": metrics.projects_out,
        },
    )

    return result
