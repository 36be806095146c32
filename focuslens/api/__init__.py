from focuslens.api.health import router as health_router
from focuslens.api.perspectives import router as perspectives_router

__all__ = [
    "health_router",
    "perspectives_router",
]
