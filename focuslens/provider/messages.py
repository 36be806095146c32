"""
Provider request/response messages.

The request is a structured object serialized to JSON and handed to the
provider script as data. Caller-controlled values are never spliced into
executable script text.

Responses are parsed strictly. A payload that does not match the expected
shape is a MalformedResponseError carrying the raw text; an explicit
`success: false` is a ProviderReportedError carrying the provider's message
verbatim. Nothing here repairs provider output.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from focuslens.models.criteria import FilterCriteria
from focuslens.models.failure import MalformedResponseError, ProviderReportedError
from focuslens.models.records import ProjectRecord, TaskRecord

# Perspectives every OmniFocus document has, in display order
BUILT_IN_PERSPECTIVES: tuple[str, ...] = (
    "Inbox",
    "Projects",
    "Tags",
    "Forecast",
    "Flagged",
    "Review",
)

MISSING_ERROR_MESSAGE = "Provider reported a failure without a message"


class PerspectiveRequest(FilterCriteria):
    """A perspective query as sent to the provider."""

    perspective_name: str = Field(min_length=1)

    @classmethod
    def from_criteria(cls, perspective_name: str, criteria: FilterCriteria) -> "PerspectiveRequest":
        return cls(perspective_name=perspective_name, **criteria.model_dump())

    def to_payload(self) -> str:
        """JSON argument for the provider script (camelCase keys)."""
        return self.model_dump_json(by_alias=True)


class ProviderResponse(BaseModel):
    """Raw records for one perspective, in provider scan order."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    perspective: str | None = None
    tasks: list[TaskRecord] | None = None
    projects: list[ProjectRecord] | None = None
    stats: dict[str, Any] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _records_present_on_success(self) -> "ProviderResponse":
        if self.success and (self.tasks is None or self.projects is None):
            raise ValueError("successful response must include 'tasks' and 'projects'")
        return self


class PerspectiveKind(str, Enum):
    BUILT_IN = "built-in"
    CUSTOM = "custom"


class PerspectiveInfo(BaseModel):
    """A perspective the caller can query."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kind: PerspectiveKind = Field(alias="type")


class PerspectiveListResponse(BaseModel):
    """Custom perspective names reported by the provider."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    perspectives: list[str] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _names_present_on_success(self) -> "PerspectiveListResponse":
        if self.success and self.perspectives is None:
            raise ValueError("successful response must include 'perspectives'")
        return self


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid value')}"


def parse_provider_response(raw: str) -> ProviderResponse:
    """
    Parse a perspective query payload.

    Raises:
        MalformedResponseError: Payload is empty, not JSON, or the wrong shape
        ProviderReportedError: Payload is a well-formed `success: false`
    """
    text = raw.strip()
    if not text:
        raise MalformedResponseError("empty response", raw)

    try:
        response = ProviderResponse.model_validate_json(text)
    except ValidationError as e:
        raise MalformedResponseError(_describe_validation_error(e), raw) from e

    if not response.success:
        raise ProviderReportedError(response.error or MISSING_ERROR_MESSAGE)

    return response


def parse_perspective_list(raw: str) -> list[PerspectiveInfo]:
    """
    Parse a perspective listing payload.

    Built-in perspectives come first, followed by the provider's custom
    perspectives in provider order. A custom perspective that shadows a
    built-in name is listed once, as built-in.

    Raises:
        MalformedResponseError: Payload is empty, not JSON, or the wrong shape
        ProviderReportedError: Payload is a well-formed `success: false`
    """
    text = raw.strip()
    if not text:
        raise MalformedResponseError("empty response", raw)

    try:
        response = PerspectiveListResponse.model_validate_json(text)
    except ValidationError as e:
        raise MalformedResponseError(_describe_validation_error(e), raw) from e

    if not response.success:
        raise ProviderReportedError(response.error or MISSING_ERROR_MESSAGE)

    perspectives = [
        PerspectiveInfo(name=name, kind=PerspectiveKind.BUILT_IN) for name in BUILT_IN_PERSPECTIVES
    ]
    for name in response.perspectives or []:
        if name not in BUILT_IN_PERSPECTIVES:
            perspectives.append(PerspectiveInfo(name=name, kind=PerspectiveKind.CUSTOM))
    return perspectives
