from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hearthdecks.api import events_router, health_router, tools_router
from hearthdecks.config import settings

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("hearthdecks"),
    debug=settings.debug,
)

app.include_router(events_router)
app.include_router(health_router)
app.include_router(tools_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Cache-Control"],
)
