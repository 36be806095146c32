from focuslens.models.criteria import FilterCriteria, TierOrdering
from focuslens.models.failure import (
    ApiResponse,
    CriteriaValidationError,
    FailureDetail,
    FailureKind,
    KnownError,
    MalformedResponseError,
    OutcomeType,
    ProviderReportedError,
    ProviderUnavailableError,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from focuslens.models.records import ProjectRecord, ProjectStatus, TaskRecord
from focuslens.models.result import PriorityTier, QueryResult, QueryStats

__all__ = [
    # Criteria
    "FilterCriteria",
    "TierOrdering",
    # Failure envelope
    "ApiResponse",
    "CriteriaValidationError",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "MalformedResponseError",
    "OutcomeType",
    "ProviderReportedError",
    "ProviderUnavailableError",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
    # Records
    "ProjectRecord",
    "ProjectStatus",
    "TaskRecord",
    # Result
    "PriorityTier",
    "QueryResult",
    "QueryStats",
]
