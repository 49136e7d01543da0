"""
Health check endpoint.

Liveness probe reporting server identity and connected event-stream clients.
"""

from importlib.metadata import version as pkg_version
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from hearthdecks.config import settings
from hearthdecks.services.event_broadcaster import (
    EventBroadcaster,
    get_event_broadcaster,
    utc_timestamp,
)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    server: str
    version: str
    timestamp: str
    sse_clients: int = Field(serialization_alias="sseClients")


@router.get("/health", response_model=HealthResponse)
async def health(
    broadcaster: Annotated[EventBroadcaster, Depends(get_event_broadcaster)],
) -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not fetch the card list.
    """
    return HealthResponse(
        status="healthy",
        server=settings.app_name,
        version=pkg_version("hearthdecks"),
        timestamp=utc_timestamp(),
        sse_clients=broadcaster.client_count,
    )
