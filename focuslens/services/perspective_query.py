"""
Perspective query service.

Validates criteria, calls the provider once, parses its payload and runs
the engine. Every outcome comes back as a finalized ApiResponse:

- CriteriaValidationError   -> known failure, provider never called
- ProviderUnavailableError  -> known failure, underlying message
- ProviderReportedError     -> known failure, provider message verbatim
- MalformedResponseError    -> known failure, raw payload in detail
- anything else             -> unknown failure

Nothing raises past this module.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from focuslens.filtering.engine import run_query
from focuslens.models.criteria import FilterCriteria
from focuslens.models.failure import (
    ApiResponse,
    CriteriaValidationError,
    KnownError,
    create_success,
    create_unknown_failure,
)
from focuslens.models.result import QueryResult
from focuslens.provider.messages import (
    PerspectiveInfo,
    PerspectiveRequest,
    parse_perspective_list,
    parse_provider_response,
)
from focuslens.provider.osascript import PerspectiveProvider

logger = logging.getLogger(__name__)

CriteriaInput = FilterCriteria | Mapping[str, Any] | None


def build_request(perspective_name: str, criteria: CriteriaInput = None) -> PerspectiveRequest:
    """
    Combine a perspective name and criteria into a validated request.

    Raises:
        CriteriaValidationError: If any field is invalid or inconsistent
    """
    if isinstance(criteria, FilterCriteria):
        fields: dict[str, Any] = criteria.model_dump()
    else:
        fields = dict(criteria or {})
    fields.pop("perspective_name", None)
    fields.pop("perspectiveName", None)

    try:
        return PerspectiveRequest(perspective_name=perspective_name, **fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'criteria'}: {err['msg']}"
            for err in e.errors()
        )
        raise CriteriaValidationError(f"Invalid query options: {problems}", detail=str(e)) from e


def query_perspective(
    provider: PerspectiveProvider,
    perspective_name: str,
    criteria: CriteriaInput = None,
    now: datetime | None = None,
) -> ApiResponse[QueryResult]:
    """
    Fetch a perspective and return its bounded, prioritized view.

    Args:
        provider: Source of raw perspective payloads
        perspective_name: Built-in or custom perspective name
        criteria: FilterCriteria or a mapping of its fields
        now: Clock reading for due-date scoring (defaults to current UTC time)

    Returns:
        Finalized ApiResponse carrying a QueryResult on success
    """
    try:
        request = build_request(perspective_name, criteria)
        raw = provider.fetch_perspective(request)
        response = parse_provider_response(raw)

        result = run_query(
            perspective=response.perspective or request.perspective_name,
            tasks=response.tasks or [],
            projects=response.projects or [],
            criteria=request,
            now=now or datetime.now(UTC),
        )
        return create_success(result)
    except KnownError as e:
        logger.warning(
            "PERSPECTIVE_QUERY_FAILED",
            extra={"perspective": perspective_name, "kind": e.kind.value, "reason": e.message},
        )
        return e.to_response()
    except Exception as e:
        logger.exception("Unexpected failure querying perspective %s", perspective_name)
        return create_unknown_failure(e)


def list_perspectives(provider: PerspectiveProvider) -> ApiResponse[list[PerspectiveInfo]]:
    """Return built-in and custom perspectives inside the failure envelope."""
    try:
        raw = provider.fetch_perspectives()
        return create_success(parse_perspective_list(raw))
    except KnownError as e:
        logger.warning(
            "PERSPECTIVE_LIST_FAILED",
            extra={"kind": e.kind.value, "reason": e.message},
        )
        return e.to_response()
    except Exception as e:
        logger.exception("Unexpected failure listing perspectives")
        return create_unknown_failure(e)
