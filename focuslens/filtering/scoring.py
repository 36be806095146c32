"""
Urgency scoring and priority classification.

INVARIANT: The score is a pure function of the task's fields and the
supplied `now`. Re-scoring the same task with the same clock reading always
yields the same integer.

Contributions are additive and independent:
- flagged:      +100
- due date:     one band only, earliest cutoff first
- duration:     shorter tasks score higher; absent duration adds nothing
"""

from datetime import UTC, datetime

from focuslens.models.records import TaskRecord
from focuslens.models.result import PriorityTier

FLAGGED_POINTS = 100

OVERDUE_POINTS = 200

# (days-until-due upper bound, points); first matching band wins
DUE_DATE_BANDS: tuple[tuple[float, int], ...] = (
    (1.0, 150),
    (2.0, 100),
    (8.0, 50),
)

# (estimated-minutes upper bound inclusive, points); first matching band wins
DURATION_BANDS: tuple[tuple[int, int], ...] = (
    (15, 30),
    (30, 20),
    (60, 10),
)

HIGH_TIER_THRESHOLD = 150
MEDIUM_TIER_THRESHOLD = 50

_SECONDS_PER_DAY = 86_400.0


def _as_utc(moment: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def days_until(due: datetime, now: datetime) -> float:
    """Fractional days from `now` to `due`. Negative when overdue."""
    return (_as_utc(due) - _as_utc(now)).total_seconds() / _SECONDS_PER_DAY


def _score_due_date(task: TaskRecord, now: datetime) -> int:
    if task.due_date is None:
        return 0

    days = days_until(task.due_date, now)
    if days < 0:
        return OVERDUE_POINTS
    for upper_bound, points in DUE_DATE_BANDS:
        if days < upper_bound:
            return points
    return 0


def _score_duration(task: TaskRecord) -> int:
    if task.estimated_minutes is None:
        return 0
    for upper_bound, points in DURATION_BANDS:
        if task.estimated_minutes <= upper_bound:
            return points
    return 0


def score_task(task: TaskRecord, now: datetime) -> int:
    """
    Compute the urgency score for a task that passed filtering.

    Args:
        task: The accepted task
        now: Clock reading shared by every task in the query

    Returns:
        Non-negative integer score
    """
    score = FLAGGED_POINTS if task.flagged else 0
    score += _score_due_date(task, now)
    score += _score_duration(task)
    return score


def classify_score(score: int) -> PriorityTier:
    """Map an urgency score to its tier: >=150 high, >=50 medium, else low."""
    if score >= HIGH_TIER_THRESHOLD:
        return PriorityTier.HIGH
    if score >= MEDIUM_TIER_THRESHOLD:
        return PriorityTier.MEDIUM
    return PriorityTier.LOW
