"""
Server-sent events endpoint.

Streams tool call activity (start, result, error) to connected clients.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from hearthdecks.config import settings
from hearthdecks.services.event_broadcaster import (
    EventBroadcaster,
    get_event_broadcaster,
    utc_timestamp,
)

router = APIRouter(tags=["events"])


@router.get("/sse")
async def sse(
    broadcaster: Annotated[EventBroadcaster, Depends(get_event_broadcaster)],
) -> StreamingResponse:
    """Open an event stream. The first event confirms the connection."""
    greeting = {
        "type": "connection",
        "message": f"Connected to {settings.app_name}",
        "timestamp": utc_timestamp(),
    }
    return StreamingResponse(
        broadcaster.subscribe(greeting),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
