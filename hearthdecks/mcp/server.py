"""
MCP stdio server.

Registers the deck and card tools on a FastMCP server. Each tool returns
the JSON text of its response envelope. Failed envelopes are raised as
ToolError so the client receives them with `isError` set.

Tool arguments keep the camelCase names clients send on the wire.
"""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from hearthdecks.config import DEFAULT_SEARCH_LIMIT, settings
from hearthdecks.mcp.tools import TOOL_DEFINITIONS, execute_tool
from hearthdecks.models.failure import ToolResponse
from hearthdecks.services.card_catalog import CardCatalog, get_card_catalog

logger = logging.getLogger(__name__)

_DESCRIPTIONS = {tool.name: tool.description for tool in TOOL_DEFINITIONS}


def _render(response: ToolResponse) -> str:
    """
    Render an envelope as tool output.

    Raises:
        ToolError: Carrying the rendered envelope if the call failed
    """
    text = json.dumps(response.to_payload(), indent=2, ensure_ascii=False)
    if not response.success:
        raise ToolError(text)
    return text


def create_mcp_server(catalog: CardCatalog | None = None) -> FastMCP:
    """
    Build the MCP server.

    Args:
        catalog: Card catalog to serve from. Defaults to the settings-backed one.
    """
    card_catalog = catalog or get_card_catalog()
    server = FastMCP(name=settings.app_name)

    @server.tool(name="parse_deck_code", description=_DESCRIPTIONS["parse_deck_code"])
    async def parse_deck_code(deckCode: str, includeStats: bool = True) -> str:  # noqa: N803
        response = await execute_tool(
            card_catalog,
            "parse_deck_code",
            {"deckCode": deckCode, "includeStats": includeStats},
        )
        return _render(response)

    @server.tool(name="search_cards", description=_DESCRIPTIONS["search_cards"])
    async def search_cards(cardName: str, limit: int = DEFAULT_SEARCH_LIMIT) -> str:  # noqa: N803
        response = await execute_tool(
            card_catalog,
            "search_cards",
            {"cardName": cardName, "limit": limit},
        )
        return _render(response)

    @server.tool(name="get_card_info", description=_DESCRIPTIONS["get_card_info"])
    async def get_card_info(cardId: str) -> str:  # noqa: N803
        response = await execute_tool(card_catalog, "get_card_info", {"cardId": cardId})
        return _render(response)

    return server


def run_stdio(catalog: CardCatalog | None = None) -> None:
    """Serve the tools over stdin/stdout until the client disconnects."""
    server = create_mcp_server(catalog)
    logger.info("%s running on stdio", settings.app_name)
    logger.info("Available tools: %s", ", ".join(_DESCRIPTIONS))
    server.run(transport="stdio")
