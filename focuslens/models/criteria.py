"""
Filter Criteria — caller-supplied query configuration.

Every field is optional except the result budget, which defaults to
DEFAULT_RESULT_BUDGET and must be a positive integer.

INVARIANTS:
- Criteria are validated at construction, before any provider call
- An unset criterion disables its filter rule entirely
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from focuslens.config import DEFAULT_RESULT_BUDGET


class TierOrdering(str, Enum):
    """Order in which priority tiers are concatenated in the result."""

    URGENT_FIRST = "urgent_first"  # high, medium, low
    NATURAL = "natural"  # low, medium, high


class FilterCriteria(BaseModel):
    """Filter, quota and ordering options for a single query."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    # Toggles
    hide_completed: bool = True
    hide_recurring_duplicates: bool = True
    flagged_only: bool = False

    # Estimated duration bounds (minutes, inclusive)
    min_estimated_minutes: int | None = Field(default=None, ge=0)
    max_estimated_minutes: int | None = Field(default=None, ge=0)

    # True: must have a due date. False: must not have one. None: no filter.
    with_due_date: bool | None = None

    project_name: str | None = None
    with_tags: tuple[str, ...] | None = None

    # Result shaping
    budget: int = Field(default=DEFAULT_RESULT_BUDGET, gt=0)
    tier_ordering: TierOrdering = TierOrdering.URGENT_FIRST
    # False selects the plain mode: one pool capped at the budget, scan order
    prioritize: bool = True

    @model_validator(mode="after")
    def _check_duration_bounds(self) -> "FilterCriteria":
        if (
            self.min_estimated_minutes is not None
            and self.max_estimated_minutes is not None
            and self.min_estimated_minutes > self.max_estimated_minutes
        ):
            raise ValueError(
                f"min_estimated_minutes ({self.min_estimated_minutes}) exceeds "
                f"max_estimated_minutes ({self.max_estimated_minutes})"
            )
        return self

    def describe(self) -> list[str]:
        """Human-readable descriptions of the active filters."""
        parts: list[str] = []
        if self.min_estimated_minutes is not None:
            parts.append(f">= {self.min_estimated_minutes} min")
        if self.max_estimated_minutes is not None:
            parts.append(f"<= {self.max_estimated_minutes} min")
        if self.flagged_only:
            parts.append("flagged only")
        if self.with_due_date is not None:
            parts.append("has due date" if self.with_due_date else "no due date")
        if self.project_name:
            parts.append(f'project "{self.project_name}"')
        if self.with_tags:
            parts.append(f"tags: {', '.join(self.with_tags)}")
        return parts
