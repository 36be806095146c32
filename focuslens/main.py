import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from focuslens.api import health_router, perspectives_router
from focuslens.config import settings
from focuslens.models.failure import create_unknown_failure

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("focuslens"),
    debug=settings.debug,
)

app.include_router(health_router)
app.include_router(perspectives_router)


@app.exception_handler(Exception)
async def unknown_failure_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Last-resort boundary: unexpected faults still leave as an envelope."""
    logger.exception("Unhandled error", exc_info=exc)
    envelope = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=envelope.model_dump(mode="json"))
