"""Adapter between FocusLens and the OmniFocus scripting interface."""

from focuslens.provider.messages import (
    BUILT_IN_PERSPECTIVES,
    PerspectiveInfo,
    PerspectiveKind,
    PerspectiveRequest,
    ProviderResponse,
    parse_perspective_list,
    parse_provider_response,
)
from focuslens.provider.osascript import (
    OsascriptProvider,
    PerspectiveProvider,
    get_default_provider,
)

__all__ = [
    "BUILT_IN_PERSPECTIVES",
    "OsascriptProvider",
    "PerspectiveInfo",
    "PerspectiveKind",
    "PerspectiveProvider",
    "PerspectiveRequest",
    "ProviderResponse",
    "get_default_provider",
    "parse_perspective_list",
    "parse_provider_response",
]
