"""Query result returned by the engine to the formatting layer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from focuslens.models.records import ProjectRecord, TaskRecord


class PriorityTier(str, Enum):
    """Priority tier of an accepted task."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QueryStats(BaseModel):
    """Summary statistics for one query."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    high: int = 0
    medium: int = 0
    low: int = 0
    total_filtered: int = 0
    budget: int
    project_count: int = 0


class QueryResult(BaseModel):
    """
    Bounded, ordered result of a perspective query.

    Tasks are already tier-ordered; within a tier they keep scan order.
    Created fresh per query and never persisted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    perspective: str
    tasks: list[TaskRecord] = Field(default_factory=list)
    projects: list[ProjectRecord] = Field(default_factory=list)
    stats: QueryStats
