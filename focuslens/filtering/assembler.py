"""
Result assembly: tier concatenation and stats.

No re-sorting happens here beyond concatenating buckets in the caller's
chosen tier order. Within a tier, scan order is preserved.
"""

from collections.abc import Sequence

from focuslens.filtering.quota import QuotaCollector
from focuslens.models.criteria import TierOrdering
from focuslens.models.records import ProjectRecord, TaskRecord
from focuslens.models.result import PriorityTier, QueryResult, QueryStats

TIER_ORDERS: dict[TierOrdering, tuple[PriorityTier, ...]] = {
    TierOrdering.URGENT_FIRST: (PriorityTier.HIGH, PriorityTier.MEDIUM, PriorityTier.LOW),
    TierOrdering.NATURAL: (PriorityTier.LOW, PriorityTier.MEDIUM, PriorityTier.HIGH),
}


def ordered_tasks(collector: QuotaCollector, ordering: TierOrdering) -> list[TaskRecord]:
    """
    Concatenate the collector's buckets.

    Pooled collectors return plain scan order regardless of `ordering`.
    """
    if collector.quota.is_pooled:
        return list(collector.scan_order)

    tasks: list[TaskRecord] = []
    for tier in TIER_ORDERS[ordering]:
        tasks.extend(collector.buckets[tier])
    return tasks


def assemble_result(
    perspective: str,
    collector: QuotaCollector,
    projects: Sequence[ProjectRecord],
    ordering: TierOrdering,
) -> QueryResult:
    """Build the final QueryResult from a filled collector and filtered projects."""
    stats = QueryStats(
        high=collector.count(PriorityTier.HIGH),
        medium=collector.count(PriorityTier.MEDIUM),
        low=collector.count(PriorityTier.LOW),
        total_filtered=collector.total_accepted,
        budget=collector.quota.budget,
        project_count=len(projects),
    )

    return QueryResult(
        perspective=perspective,
        tasks=ordered_tasks(collector, ordering),
        projects=list(projects),
        stats=stats,
    )
