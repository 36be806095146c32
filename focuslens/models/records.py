"""
Task and project records as reported by the provider.

Records are owned by the external task manager. The engine only reads them;
nothing in FocusLens mutates a record after parsing.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    ACTIVE = "active"
    DONE = "done"
    DROPPED = "dropped"
    ON_HOLD = "on hold"
    UNSPECIFIED = "unspecified"

    @classmethod
    def normalize(cls, raw: Any) -> "ProjectStatus":
        """
        Map a provider status string onto a known status.

        OmniFocus reports values such as "active status" or "on hold status";
        hyphen/underscore spellings are accepted too. Anything unrecognised
        becomes UNSPECIFIED.
        """
        if isinstance(raw, ProjectStatus):
            return raw
        if not isinstance(raw, str):
            return cls.UNSPECIFIED

        text = raw.strip().lower().replace("-", " ").replace("_", " ")
        if text.endswith(" status"):
            text = text[: -len(" status")]
        for status in cls:
            if status.value == text:
                return status
        return cls.UNSPECIFIED


class _ProviderRecord(BaseModel):
    """Shared config: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TaskRecord(_ProviderRecord):
    """A single task visible in a perspective."""

    id: str
    name: str
    completed: bool = False
    dropped: bool = False
    flagged: bool = False
    estimated_minutes: int | None = None
    due_date: datetime | None = None
    defer_date: datetime | None = None
    tags: tuple[str, ...] = Field(default_factory=tuple)
    project_name: str | None = None
    note: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_or_empty(cls, value: Any) -> Any:
        return () if value is None else value


class ProjectRecord(_ProviderRecord):
    """A project summary. Projects are never scored or quota-bounded."""

    id: str
    name: str
    status: ProjectStatus = ProjectStatus.UNSPECIFIED
    flagged: bool | None = None
    estimated_minutes: int | None = None
    due_date: datetime | None = None
    task_count: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> ProjectStatus:
        return ProjectStatus.normalize(value)

    def is_closed(self) -> bool:
        """True if the project is done or dropped."""
        return self.status in (ProjectStatus.DONE, ProjectStatus.DROPPED)
