"""
Failure Envelope — Unified Result Classification.

Every query, listing and tool call returns its outcome through this
envelope. Failures are values, never exceptions crossing the service
boundary.

INVARIANT: No failure is silently swallowed. Every failure path yields an
envelope tagged as failed with a human-readable message.

Response types:
- Success: Operation completed successfully
- KnownFailure: System knows why it failed (provider, payload, validation)
- UnknownFailure: System does not know why it failed

AUTHORITY BOUNDARY:
All caller-visible responses MUST pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, PrivateAttr, computed_field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Caller input
    VALIDATION_FAILED = "validation_failed"

    # Provider failures
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_REPORTED_ERROR = "provider_reported_error"
    MALFORMED_RESPONSE = "malformed_response"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Human-readable explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail, e.g. the raw provider payload",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the caller",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope.

    `success` mirrors the provider's own success flag so the envelope can be
    handed to callers that only look at that field.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    # Set only by finalize_response(); never serialized
    _finalized: bool = PrivateAttr(default=False)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        return self.outcome == OutcomeType.SUCCESS

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        The message is passed through unchanged.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


# =============================================================================
# ERROR TAXONOMY
# =============================================================================


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Raised inside the service and converted to an envelope at its boundary.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to a finalized ApiResponse."""
        return finalize_response(
            ApiResponse.known_failure(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
            )
        )


class CriteriaValidationError(KnownError):
    """Caller-supplied criteria are inconsistent. Raised before any provider call."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.VALIDATION_FAILED,
            message=message,
            detail=detail,
            suggestion="Check the filter options and try again.",
            status_code=422,
        )


class ProviderUnavailableError(KnownError):
    """
    The provider call could not be completed (missing binary, crash, timeout).

    Not retried.
    """

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.PROVIDER_UNAVAILABLE,
            message=message,
            detail=detail,
            suggestion="Make sure OmniFocus is running and scripting is allowed.",
            status_code=503,
        )


class ProviderReportedError(KnownError):
    """The provider answered with an explicit failure. Message is verbatim."""

    def __init__(self, message: str):
        super().__init__(
            kind=FailureKind.PROVIDER_REPORTED_ERROR,
            message=message,
            status_code=502,
        )


class MalformedResponseError(KnownError):
    """Provider output could not be parsed. Detail carries the raw payload."""

    def __init__(self, reason: str, raw_payload: str):
        self.raw_payload = raw_payload
        super().__init__(
            kind=FailureKind.MALFORMED_RESPONSE,
            message=f"Failed to parse provider response: {reason}",
            detail=raw_payload,
            status_code=502,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

UNKNOWN_FAILURE_MESSAGE = "The query failed for an unexpected reason."
UNKNOWN_FAILURE_SUGGESTION = "If this persists, please report the issue."

def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")
        if response.data is not None:
            raise ValueError(f"{response.outcome.value} response must not carry data")

    response._finalized = True

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary (used by tests)."""
    return response._finalized


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """
    Create a finalized unknown failure response from an exception.

    The message is fixed; the exception type and text go into `detail`.
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=UNKNOWN_FAILURE_MESSAGE,
            detail=f"{type(exception).__name__}: {exception}",
            suggestion=UNKNOWN_FAILURE_SUGGESTION,
        ),
    )

    return finalize_response(response)


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
