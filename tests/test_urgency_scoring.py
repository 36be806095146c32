"""
Tests for urgency scoring and priority classification.

INVARIANT: Scoring is a pure function of task fields and `now`.
"""

from datetime import datetime, timedelta

import pytest

from focuslens.filtering.scoring import classify_score, days_until, score_task
from focuslens.models.records import TaskRecord
from focuslens.models.result import PriorityTier


def _task(**fields) -> TaskRecord:
    fields.setdefault("id", "t1")
    fields.setdefault("name", "Call plumber")
    return TaskRecord(**fields)


class TestDueDateBands:
    """Only the earliest matching band applies."""

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (timedelta(hours=-1), 200),
            (timedelta(days=-10), 200),
            (timedelta(0), 150),
            (timedelta(hours=12), 150),
            (timedelta(days=1), 100),
            (timedelta(days=1, hours=12), 100),
            (timedelta(days=2), 50),
            (timedelta(days=7, hours=23), 50),
            (timedelta(days=8), 0),
            (timedelta(days=30), 0),
        ],
    )
    def test_band(self, now: datetime, offset: timedelta, expected: int) -> None:
        assert score_task(_task(due_date=now + offset), now) == expected

    def test_no_due_date(self, now: datetime) -> None:
        assert score_task(_task(), now) == 0

    def test_naive_due_date_is_utc(self, now: datetime) -> None:
        """A naive timestamp is read as UTC."""
        naive_due = (now + timedelta(hours=6)).replace(tzinfo=None)
        assert score_task(_task(due_date=naive_due), now) == 150

    def test_days_until_is_fractional(self, now: datetime) -> None:
        assert days_until(now + timedelta(hours=36), now) == pytest.approx(1.5)
        assert days_until(now - timedelta(hours=6), now) == pytest.approx(-0.25)


class TestDurationBands:
    """Shorter estimates score higher; absent estimates add nothing."""

    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [
            (0, 30),
            (15, 30),
            (16, 20),
            (30, 20),
            (31, 10),
            (60, 10),
            (61, 0),
            (240, 0),
            (None, 0),
        ],
    )
    def test_band(self, now: datetime, minutes: int | None, expected: int) -> None:
        assert score_task(_task(estimated_minutes=minutes), now) == expected


class TestScoreComposition:
    """Contributions are additive and independent."""

    def test_flagged_adds_100(self, now: datetime) -> None:
        assert score_task(_task(flagged=True), now) == 100

    def test_all_contributions_add(self, now: datetime) -> None:
        task = _task(flagged=True, due_date=now - timedelta(days=1), estimated_minutes=10)
        assert score_task(task, now) == 100 + 200 + 30

    def test_urgent_task_outscores_idle_task(self, now: datetime) -> None:
        """Flagged, overdue, 10-minute beats unflagged, undated, 90-minute."""
        urgent = _task(id="a", flagged=True, due_date=now - timedelta(hours=2), estimated_minutes=10)
        idle = _task(id="b", flagged=False, due_date=None, estimated_minutes=90)
        assert score_task(urgent, now) > score_task(idle, now)

    def test_other_fields_ignored(self, now: datetime) -> None:
        """Tags, notes, project and defer date never change the score."""
        plain = _task(estimated_minutes=20)
        decorated = _task(
            estimated_minutes=20,
            tags=("home",),
            note="remember the keys",
            project_name="House",
            defer_date=now + timedelta(days=3),
            completed=True,
        )
        assert score_task(plain, now) == score_task(decorated, now)

    def test_deterministic(self, now: datetime) -> None:
        task = _task(flagged=True, due_date=now + timedelta(days=3), estimated_minutes=45)
        assert {score_task(task, now) for _ in range(5)} == {160}

    def test_never_negative(self, now: datetime) -> None:
        assert score_task(_task(estimated_minutes=10_000), now) >= 0


class TestClassification:
    """Score thresholds: >=150 high, >=50 medium, else low."""

    @pytest.mark.parametrize(
        ("score", "tier"),
        [
            (330, PriorityTier.HIGH),
            (150, PriorityTier.HIGH),
            (149, PriorityTier.MEDIUM),
            (100, PriorityTier.MEDIUM),
            (50, PriorityTier.MEDIUM),
            (49, PriorityTier.LOW),
            (0, PriorityTier.LOW),
        ],
    )
    def test_thresholds(self, score: int, tier: PriorityTier) -> None:
        assert classify_score(score) == tier
