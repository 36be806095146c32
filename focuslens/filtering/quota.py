"""
Result Quota and Quota Collector — tier-bounded accumulation.

The collector consumes (task, tier) pairs in scan order. Each tier has its
own counter capped by the quota; a task whose tier is already full is
dropped. Once every counter has reached its capacity the collector is full
and the caller stops scanning.

INVARIANTS:
- Sum of tier capacities <= budget
- Within a tier, accepted tasks keep scan order
- A full collector never accepts another task

TRADE-OFF (intentional):
Work is bounded by the records scanned until full, not by the total record
count. Qualifying tasks that appear late in the provider's enumeration can
be missed. Do not "fix" this by scanning everything.
"""

from dataclasses import dataclass, field

from focuslens.config import HIGH_TIER_PERCENT, LOW_TIER_PERCENT, MEDIUM_TIER_PERCENT
from focuslens.models.records import TaskRecord
from focuslens.models.result import PriorityTier

TIER_PERCENTAGES: dict[PriorityTier, int] = {
    PriorityTier.HIGH: HIGH_TIER_PERCENT,
    PriorityTier.MEDIUM: MEDIUM_TIER_PERCENT,
    PriorityTier.LOW: LOW_TIER_PERCENT,
}


@dataclass(frozen=True)
class ResultQuota:
    """
    Capacities derived from a result budget.

    `capacities` is None for the plain (pooled) mode, where one shared
    counter is capped at the whole budget.
    """

    budget: int
    capacities: dict[PriorityTier, int] | None

    @classmethod
    def from_budget(cls, budget: int) -> "ResultQuota":
        """Split the budget 40/40/20 across high/medium/low, rounding down."""
        if budget <= 0:
            raise ValueError(f"budget must be positive, got {budget}")
        capacities = {tier: budget * percent // 100 for tier, percent in TIER_PERCENTAGES.items()}
        return cls(budget=budget, capacities=capacities)

    @classmethod
    def pooled(cls, budget: int) -> "ResultQuota":
        """A single pool holding up to `budget` tasks of any tier."""
        if budget <= 0:
            raise ValueError(f"budget must be positive, got {budget}")
        return cls(budget=budget, capacities=None)

    @property
    def is_pooled(self) -> bool:
        return self.capacities is None

    def capacity(self, tier: PriorityTier) -> int:
        """Capacity of one tier. In pooled mode every tier shares the budget."""
        if self.capacities is None:
            return self.budget
        return self.capacities[tier]


@dataclass
class QuotaCollector:
    """Accumulates classified tasks into per-tier buckets."""

    quota: ResultQuota
    buckets: dict[PriorityTier, list[TaskRecord]] = field(
        default_factory=lambda: {tier: [] for tier in PriorityTier}
    )
    scan_order: list[TaskRecord] = field(default_factory=list)
    dropped_by_quota: int = 0

    def count(self, tier: PriorityTier) -> int:
        """Tasks accepted into a tier so far."""
        return len(self.buckets[tier])

    @property
    def total_accepted(self) -> int:
        return len(self.scan_order)

    def _has_room(self, tier: PriorityTier) -> bool:
        if self.quota.is_pooled:
            return self.total_accepted < self.quota.budget
        return self.count(tier) < self.quota.capacity(tier)

    @property
    def is_full(self) -> bool:
        """True once every counter has reached its capacity."""
        if self.quota.is_pooled:
            return self.total_accepted >= self.quota.budget
        return all(self.count(tier) >= self.quota.capacity(tier) for tier in PriorityTier)

    def offer(self, task: TaskRecord, tier: PriorityTier) -> bool:
        """
        Offer a classified task.

        Returns:
            True if accepted, False if its tier was already full
        """
        if not self._has_room(tier):
            self.dropped_by_quota += 1
            return False

        self.buckets[tier].append(task)
        self.scan_order.append(task)
        return True
