"""
Tests for the Predicate Pipeline.

These tests verify:
- Short-circuit on the first failing rule
- Missing values required by a predicate count as failures
- Each predicate's accept/reject semantics
- The lighter project filter
"""

from datetime import UTC, datetime

from focuslens.filtering.pipeline import filter_projects, first_failing_rule, passes_filters
from focuslens.filtering.rules import FilterRule, enabled_rules
from focuslens.models.criteria import FilterCriteria
from focuslens.models.records import ProjectRecord, ProjectStatus, TaskRecord

DUE = datetime(2026, 3, 5, 17, 0, tzinfo=UTC)


def _task(**fields) -> TaskRecord:
    fields.setdefault("id", "t1")
    fields.setdefault("name", "Write report")
    return TaskRecord(**fields)


def _check(task: TaskRecord, criteria: FilterCriteria) -> str | None:
    return first_failing_rule(task, enabled_rules(criteria), criteria)


class TestShortCircuit:
    """Tests for first-failure rejection."""

    def test_stops_at_first_failure(self) -> None:
        """Rules after the first failing rule are never evaluated."""
        calls: list[str] = []

        def recording(name: str, result: bool):
            def predicate(task: TaskRecord, criteria: FilterCriteria) -> bool:
                calls.append(name)
                return result

            return predicate

        rules = [
            FilterRule("a", 0.9, 1, lambda c: True, recording("a", True)),
            FilterRule("b", 0.8, 2, lambda c: True, recording("b", False)),
            FilterRule("c", 0.7, 3, lambda c: True, recording("c", True)),
        ]

        assert first_failing_rule(_task(), rules, FilterCriteria()) == "b"
        assert calls == ["a", "b"]

    def test_reports_most_selective_failure(self) -> None:
        """A task failing several rules is rejected by the earliest one."""
        task = _task(project_name="Work", flagged=False, completed=True)
        criteria = FilterCriteria(project_name="Home", flagged_only=True)

        assert _check(task, criteria) == "project_name"

    def test_accepts_when_all_pass(self) -> None:
        """No failing rule means accepted."""
        task = _task(project_name="Home", flagged=True, estimated_minutes=20)
        criteria = FilterCriteria(project_name="Home", flagged_only=True, max_estimated_minutes=30)

        assert _check(task, criteria) is None
        assert passes_filters(task, enabled_rules(criteria), criteria)

    def test_no_rules_accepts_everything(self) -> None:
        """An empty rule set accepts any task."""
        assert first_failing_rule(_task(completed=True), [], FilterCriteria()) is None


class TestDurationRules:
    """Tests for estimated-duration bounds."""

    def test_missing_duration_fails_minimum(self) -> None:
        """A task with no estimate is rejected under a minimum bound."""
        criteria = FilterCriteria(min_estimated_minutes=30)
        assert _check(_task(estimated_minutes=None), criteria) == "min_duration"

    def test_missing_duration_fails_maximum(self) -> None:
        """A task with no estimate is rejected under a maximum bound."""
        criteria = FilterCriteria(max_estimated_minutes=30)
        assert _check(_task(estimated_minutes=None), criteria) == "max_duration"

    def test_bounds_are_inclusive(self) -> None:
        """Durations equal to a bound pass."""
        criteria = FilterCriteria(min_estimated_minutes=30, max_estimated_minutes=30)
        assert _check(_task(estimated_minutes=30), criteria) is None

    def test_below_minimum_rejected(self) -> None:
        criteria = FilterCriteria(min_estimated_minutes=30)
        assert _check(_task(estimated_minutes=29), criteria) == "min_duration"

    def test_above_maximum_rejected(self) -> None:
        criteria = FilterCriteria(max_estimated_minutes=30)
        assert _check(_task(estimated_minutes=31), criteria) == "max_duration"


class TestOtherRules:
    """Tests for project, flag, due date, tag and completion rules."""

    def test_project_must_match_exactly(self) -> None:
        criteria = FilterCriteria(project_name="Home")
        assert _check(_task(project_name="Home"), criteria) is None
        assert _check(_task(project_name="home"), criteria) == "project_name"

    def test_task_without_project_rejected(self) -> None:
        """Inbox tasks have no project and fail a project constraint."""
        criteria = FilterCriteria(project_name="Home")
        assert _check(_task(project_name=None), criteria) == "project_name"

    def test_flagged_only(self) -> None:
        criteria = FilterCriteria(flagged_only=True)
        assert _check(_task(flagged=True), criteria) is None
        assert _check(_task(flagged=False), criteria) == "flagged_only"

    def test_due_date_required(self) -> None:
        criteria = FilterCriteria(with_due_date=True)
        assert _check(_task(due_date=DUE), criteria) is None
        assert _check(_task(due_date=None), criteria) == "due_date_presence"

    def test_due_date_forbidden(self) -> None:
        criteria = FilterCriteria(with_due_date=False)
        assert _check(_task(due_date=None), criteria) is None
        assert _check(_task(due_date=DUE), criteria) == "due_date_presence"

    def test_tags_must_intersect(self) -> None:
        """At least one requested tag must be on the task."""
        criteria = FilterCriteria(with_tags=("errands", "phone"))
        assert _check(_task(tags=("phone", "home")), criteria) is None
        assert _check(_task(tags=("home",)), criteria) == "tag_membership"
        assert _check(_task(tags=()), criteria) == "tag_membership"

    def test_hide_completed_rejects_completed_and_dropped(self) -> None:
        criteria = FilterCriteria()
        assert _check(_task(completed=True), criteria) == "hide_completed"
        assert _check(_task(dropped=True), criteria) == "hide_completed"
        assert _check(_task(), criteria) is None

    def test_show_completed(self) -> None:
        """Turning hide_completed off lets completed tasks through."""
        criteria = FilterCriteria(hide_completed=False)
        assert _check(_task(completed=True), criteria) is None


class TestProjectFilter:
    """Tests for the project path."""

    def _projects(self) -> list[ProjectRecord]:
        return [
            ProjectRecord(id="p1", name="Garden", status=ProjectStatus.ACTIVE),
            ProjectRecord(id="p2", name="Taxes", status=ProjectStatus.DONE),
            ProjectRecord(id="p3", name="Novel", status=ProjectStatus.DROPPED),
            ProjectRecord(id="p4", name="Kitchen", status=ProjectStatus.ON_HOLD),
        ]

    def test_hides_done_and_dropped(self) -> None:
        visible = filter_projects(self._projects(), FilterCriteria())
        assert [p.name for p in visible] == ["Garden", "Kitchen"]

    def test_keeps_all_when_not_hiding(self) -> None:
        visible = filter_projects(self._projects(), FilterCriteria(hide_completed=False))
        assert [p.name for p in visible] == ["Garden", "Taxes", "Novel", "Kitchen"]

    def test_task_criteria_do_not_apply_to_projects(self) -> None:
        """Projects ignore flag and project-name constraints."""
        criteria = FilterCriteria(flagged_only=True, project_name="Other")
        visible = filter_projects(self._projects(), criteria)
        assert [p.name for p in visible] == ["Garden", "Kitchen"]
