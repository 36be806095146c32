"""
Perspective API endpoints.

Provides perspective listing and prioritized perspective queries. Every
endpoint answers with the ApiResponse envelope; the HTTP status follows the
failure kind.

Handlers are plain functions: the provider call blocks, so FastAPI runs
them in its worker thread pool.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response

from focuslens.models.failure import ApiResponse, FailureKind
from focuslens.models.result import QueryResult
from focuslens.provider.messages import PerspectiveInfo
from focuslens.provider.osascript import PerspectiveProvider, get_default_provider
from focuslens.services.perspective_query import list_perspectives, query_perspective

router = APIRouter(prefix="/perspectives", tags=["perspectives"])

FAILURE_STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.VALIDATION_FAILED: 422,
    FailureKind.PROVIDER_UNAVAILABLE: 503,
    FailureKind.PROVIDER_REPORTED_ERROR: 502,
    FailureKind.MALFORMED_RESPONSE: 502,
    FailureKind.UNKNOWN: 500,
}


def get_provider() -> PerspectiveProvider:
    """Provider dependency (overridden in tests)."""
    return get_default_provider()


def _apply_status(envelope: ApiResponse[Any], response: Response) -> None:
    if envelope.failure is not None:
        response.status_code = FAILURE_STATUS_CODES[envelope.failure.kind]


@router.get("", response_model=ApiResponse[list[PerspectiveInfo]])
def get_perspectives(
    response: Response,
    provider: Annotated[PerspectiveProvider, Depends(get_provider)],
) -> ApiResponse[list[PerspectiveInfo]]:
    """List built-in and custom perspectives."""
    envelope = list_perspectives(provider)
    _apply_status(envelope, response)
    return envelope


@router.post("/{perspective_name}/query", response_model=ApiResponse[QueryResult])
def query(
    perspective_name: str,
    response: Response,
    provider: Annotated[PerspectiveProvider, Depends(get_provider)],
    criteria: Annotated[dict[str, Any] | None, Body()] = None,
) -> ApiResponse[QueryResult]:
    """
    Query a perspective.

    The body holds FilterCriteria fields (camelCase or snake_case). It is
    validated by the query service so that invalid options come back in the
    same envelope as every other failure.
    """
    envelope = query_perspective(provider, perspective_name, criteria)
    _apply_status(envelope, response)
    return envelope
