"""
Tests for the Result Quota and Quota Collector.

These tests verify:
- 40/40/20 capacities, rounded down
- Per-tier caps and drops
- Fullness detection, including budgets too small for any tier
- The pooled (plain) mode
"""

import pytest

from focuslens.filtering.quota import QuotaCollector, ResultQuota
from focuslens.models.records import TaskRecord
from focuslens.models.result import PriorityTier


def _task(n: int) -> TaskRecord:
    return TaskRecord(id=f"t{n}", name=f"Task {n}")


class TestResultQuota:
    """Tests for capacity derivation."""

    @pytest.mark.parametrize(
        ("budget", "high", "medium", "low"),
        [
            (10, 4, 4, 2),
            (500, 200, 200, 100),
            (7, 2, 2, 1),
            (3, 1, 1, 0),
            (1, 0, 0, 0),
        ],
    )
    def test_capacities(self, budget: int, high: int, medium: int, low: int) -> None:
        quota = ResultQuota.from_budget(budget)
        assert quota.capacity(PriorityTier.HIGH) == high
        assert quota.capacity(PriorityTier.MEDIUM) == medium
        assert quota.capacity(PriorityTier.LOW) == low

    @pytest.mark.parametrize("budget", [1, 2, 3, 7, 10, 99, 500])
    def test_capacities_never_exceed_budget(self, budget: int) -> None:
        quota = ResultQuota.from_budget(budget)
        assert sum(quota.capacity(tier) for tier in PriorityTier) <= budget

    @pytest.mark.parametrize("budget", [0, -5])
    def test_non_positive_budget_rejected(self, budget: int) -> None:
        with pytest.raises(ValueError, match="budget must be positive"):
            ResultQuota.from_budget(budget)
        with pytest.raises(ValueError, match="budget must be positive"):
            ResultQuota.pooled(budget)

    def test_pooled_quota(self) -> None:
        quota = ResultQuota.pooled(5)
        assert quota.is_pooled
        assert quota.capacity(PriorityTier.LOW) == 5


class TestQuotaCollector:
    """Tests for tier-bounded accumulation."""

    def test_accepts_until_tier_full(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.from_budget(10))

        accepted = [collector.offer(_task(n), PriorityTier.LOW) for n in range(4)]

        assert accepted == [True, True, False, False]
        assert collector.count(PriorityTier.LOW) == 2
        assert collector.dropped_by_quota == 2

    def test_full_tier_does_not_block_others(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.from_budget(10))
        for n in range(3):
            collector.offer(_task(n), PriorityTier.LOW)

        assert collector.offer(_task(10), PriorityTier.HIGH)
        assert not collector.is_full

    def test_full_when_every_tier_full(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.from_budget(5))
        tiers = [PriorityTier.HIGH] * 2 + [PriorityTier.MEDIUM] * 2 + [PriorityTier.LOW]

        for n, tier in enumerate(tiers):
            assert not collector.is_full
            collector.offer(_task(n), tier)

        assert collector.is_full
        assert collector.total_accepted == 5

    def test_full_collector_rejects(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.from_budget(3))
        collector.offer(_task(1), PriorityTier.HIGH)
        collector.offer(_task(2), PriorityTier.MEDIUM)

        assert collector.is_full
        assert not collector.offer(_task(3), PriorityTier.HIGH)
        assert collector.total_accepted == 2

    def test_tiny_budget_starts_full(self) -> None:
        """With all capacities zero the collector is full before any offer."""
        collector = QuotaCollector(quota=ResultQuota.from_budget(1))
        assert collector.is_full

    def test_scan_order_preserved_within_tier(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.from_budget(10))
        for n in range(4):
            collector.offer(_task(n), PriorityTier.MEDIUM)

        assert [t.id for t in collector.buckets[PriorityTier.MEDIUM]] == ["t0", "t1", "t2", "t3"]


class TestPooledCollector:
    """Plain mode: one counter capped at the budget."""

    def test_any_tier_until_budget(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.pooled(3))

        results = [
            collector.offer(_task(1), PriorityTier.LOW),
            collector.offer(_task(2), PriorityTier.LOW),
            collector.offer(_task(3), PriorityTier.LOW),
        ]

        assert results == [True, True, True]
        assert collector.is_full
        assert not collector.offer(_task(4), PriorityTier.HIGH)
        assert collector.dropped_by_quota == 1

    def test_scan_order_recorded_across_tiers(self) -> None:
        collector = QuotaCollector(quota=ResultQuota.pooled(5))
        collector.offer(_task(1), PriorityTier.LOW)
        collector.offer(_task(2), PriorityTier.HIGH)
        collector.offer(_task(3), PriorityTier.MEDIUM)

        assert [t.id for t in collector.scan_order] == ["t1", "t2", "t3"]
