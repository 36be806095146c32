"""
OmniFocus provider adapter using osascript subprocess calls.

OmniFocus exposes a single active perspective per window. Switching the
perspective and reading records is therefore a single-writer operation:
every call made through this module holds a process-wide lock from the
perspective switch until the records are read back.

INVARIANTS:
- One provider call in flight per process
- Scripts are static; request data travels as a JSON argument
- Failures are raised as ProviderUnavailableError, never retried here
"""

import logging
import subprocess
import time
from threading import Lock
from typing import Protocol

from focuslens.config import settings
from focuslens.models.failure import ProviderUnavailableError
from focuslens.provider.messages import PerspectiveRequest
from focuslens.provider.scripts import PERSPECTIVE_DATA_SCRIPT, PERSPECTIVE_LIST_SCRIPT

logger = logging.getLogger(__name__)

# Shared by every provider instance: the OmniFocus front window is global.
_provider_lock = Lock()


class PerspectiveProvider(Protocol):
    """Anything that can answer perspective queries with raw JSON text."""

    def fetch_perspective(self, request: PerspectiveRequest) -> str: ...

    def fetch_perspectives(self) -> str: ...


class OsascriptProvider:
    """Runs the JXA provider scripts through `osascript`."""

    def __init__(
        self,
        osascript_path: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.osascript_path = osascript_path or settings.osascript_path
        if timeout_seconds is None:
            timeout_seconds = settings.provider_timeout_seconds
        self.timeout_seconds = timeout_seconds

    def fetch_perspective(self, request: PerspectiveRequest) -> str:
        """Switch to the requested perspective and return its raw records."""
        logger.info(
            "PROVIDER_FETCH_PERSPECTIVE",
            extra={"perspective": request.perspective_name},
        )
        return self._run(PERSPECTIVE_DATA_SCRIPT, request.to_payload())

    def fetch_perspectives(self) -> str:
        """Return the raw custom perspective listing."""
        logger.info("PROVIDER_FETCH_PERSPECTIVES")
        return self._run(PERSPECTIVE_LIST_SCRIPT, "{}")

    def _run(self, script: str, payload: str) -> str:
        cmd = [self.osascript_path, "-l", "JavaScript", "-e", script, payload]

        with _provider_lock:
            started = time.monotonic()
            try:
                proc = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    check=False,
                    timeout=self.timeout_seconds,
                )
            except FileNotFoundError as e:
                logger.warning("PROVIDER_CALL_FAILED", extra={"reason": "binary_not_found"})
                raise ProviderUnavailableError(
                    f"osascript binary not found: {self.osascript_path}"
                ) from e
            except subprocess.TimeoutExpired as e:
                logger.warning(
                    "PROVIDER_CALL_FAILED",
                    extra={"reason": "timeout", "timeout_s": self.timeout_seconds},
                )
                raise ProviderUnavailableError(
                    f"osascript timed out after {self.timeout_seconds:.1f}s"
                ) from e
            elapsed_ms = int((time.monotonic() - started) * 1000)

        if proc.stderr:
            logger.warning("PROVIDER_STDERR", extra={"stderr": proc.stderr.strip()})

        if proc.returncode != 0:
            logger.warning(
                "PROVIDER_CALL_FAILED",
                extra={"reason": "exit_status", "returncode": proc.returncode},
            )
            message = proc.stderr.strip() or f"osascript exited with status {proc.returncode}"
            raise ProviderUnavailableError(message, detail=f"exit {proc.returncode}, {elapsed_ms}ms")

        logger.debug("PROVIDER_CALL_OK", extra={"elapsed_ms": elapsed_ms})
        return proc.stdout


_default_provider: PerspectiveProvider | None = None


def get_default_provider() -> PerspectiveProvider:
    """Get the shared osascript provider (created on first use)."""
    global _default_provider
    if _default_provider is None:
        _default_provider = OsascriptProvider()
    return _default_provider
