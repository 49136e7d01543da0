from hearthdecks.api.events import router as events_router
from hearthdecks.api.health import router as health_router
from hearthdecks.api.tools import router as tools_router

__all__ = [
    "events_router",
    "health_router",
    "tools_router",
]
