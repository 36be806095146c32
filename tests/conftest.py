import json
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import pytest

from focuslens.filtering.engine import reset_query_metrics
from focuslens.provider.messages import PerspectiveRequest

# Frozen clock shared by scoring tests
FROZEN_NOW = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


class FakeProvider:
    """In-memory stand-in for the osascript provider."""

    def __init__(
        self,
        payload: str | Exception = "",
        perspectives_payload: str | Exception = '{"success": true, "perspectives": []}',
    ) -> None:
        self.payload = payload
        self.perspectives_payload = perspectives_payload
        self.requests: list[PerspectiveRequest] = []
        self.list_calls = 0

    def fetch_perspective(self, request: PerspectiveRequest) -> str:
        self.requests.append(request)
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def fetch_perspectives(self) -> str:
        self.list_calls += 1
        if isinstance(self.perspectives_payload, Exception):
            raise self.perspectives_payload
        return self.perspectives_payload


def perspective_payload(
    tasks: Iterable[dict[str, Any]],
    projects: Iterable[dict[str, Any]] = (),
    perspective: str = "Today",
) -> str:
    """Build a successful provider payload from camelCase record dicts."""
    return json.dumps(
        {
            "success": True,
            "perspective": perspective,
            "tasks": list(tasks),
            "projects": list(projects),
        }
    )


@pytest.fixture(autouse=True)
def clear_query_metrics() -> None:
    """Reset engine metrics before each test."""
    reset_query_metrics()


@pytest.fixture
def now() -> datetime:
    """Frozen clock reading."""
    return FROZEN_NOW


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider returning an empty, successful perspective."""
    return FakeProvider(payload=perspective_payload([]))


@pytest.fixture
def build_payload():
    """Factory for successful provider payloads."""
    return perspective_payload


@pytest.fixture
def make_provider():
    """Factory for providers with a canned payload or exception."""
    return FakeProvider
