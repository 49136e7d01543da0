"""
Tool API endpoints.

HTTP access to the MCP tools. Every call is broadcast to event-stream
clients as it starts and when it finishes.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from hearthdecks.mcp.tools import TOOL_DEFINITIONS, execute_tool, to_text_content
from hearthdecks.models.failure import FailureKind, ToolResponse
from hearthdecks.services.card_catalog import CardCatalog, get_card_catalog
from hearthdecks.services.event_broadcaster import (
    EventBroadcaster,
    get_event_broadcaster,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolSchema(BaseModel):
    """A tool as listed to clients."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(serialization_alias="inputSchema")


class ToolListResponse(BaseModel):
    """Response model for the tool listing."""

    tools: list[ToolSchema]


@router.get("", response_model=ToolListResponse)
async def list_tools() -> ToolListResponse:
    """List available tools with their argument schemas."""
    return ToolListResponse(
        tools=[
            ToolSchema(name=t.name, description=t.description, input_schema=t.parameters)
            for t in TOOL_DEFINITIONS
        ]
    )


@router.post("/{tool_name}")
async def call_tool(
    tool_name: str,
    catalog: Annotated[CardCatalog, Depends(get_card_catalog)],
    broadcaster: Annotated[EventBroadcaster, Depends(get_event_broadcaster)],
    arguments: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """
    Call a tool with a JSON object of arguments.

    Returns the textual envelope. Unknown tools return 404.
    """
    arguments = arguments or {}
    logger.info("Tool called: %s", tool_name)

    broadcaster.broadcast(
        {
            "type": "tool_call_start",
            "tool": tool_name,
            "arguments": arguments,
            "timestamp": utc_timestamp(),
        }
    )

    try:
        response = await execute_tool(catalog, tool_name, arguments)
    except ValueError as e:
        broadcaster.broadcast(
            {
                "type": "tool_call_error",
                "tool": tool_name,
                "error": str(e),
                "timestamp": utc_timestamp(),
            }
        )
        failure = ToolResponse(success=False, error=str(e), kind=FailureKind.NOT_FOUND)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=to_text_content(failure),
        )

    result = to_text_content(response)
    broadcaster.broadcast(
        {
            "type": "tool_call_result",
            "tool": tool_name,
            "result": result,
            "timestamp": utc_timestamp(),
        }
    )
    return JSONResponse(content=result)
