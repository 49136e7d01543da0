"""Tests for the MCP stdio server wiring."""

import json

import pytest
from mcp.server.fastmcp.exceptions import ToolError
from mcp.shared.memory import create_connected_server_and_client_session

from hearthdecks.mcp.server import create_mcp_server


class TestCreateMcpServer:
    async def test_registers_all_tools(self, catalog) -> None:
        server = create_mcp_server(catalog)

        tools = await server.list_tools()

        assert {t.name for t in tools} == {"parse_deck_code", "search_cards", "get_card_info"}

    async def test_tool_arguments(self, catalog) -> None:
        """Registered tools expose the same argument names as the HTTP schema."""
        server = create_mcp_server(catalog)

        tools = {t.name: t for t in await server.list_tools()}

        assert set(tools["parse_deck_code"].inputSchema["properties"]) == {
            "deckCode",
            "includeStats",
        }
        assert tools["parse_deck_code"].inputSchema["required"] == ["deckCode"]
        assert set(tools["search_cards"].inputSchema["properties"]) == {"cardName", "limit"}
        assert tools["get_card_info"].inputSchema["required"] == ["cardId"]


class TestCallTool:
    async def test_failure_raises_tool_error(self, catalog) -> None:
        server = create_mcp_server(catalog)

        with pytest.raises(ToolError, match="malformed_encoding"):
            await server.call_tool("parse_deck_code", {"deckCode": "%%%"})

    async def test_failure_sets_is_error(self, catalog) -> None:
        """Failed envelopes reach the client flagged as errors."""
        server = create_mcp_server(catalog)

        async with create_connected_server_and_client_session(server._mcp_server) as client:
            result = await client.call_tool("parse_deck_code", {"deckCode": "%%%"})

        assert result.isError is True
        assert "DECK_PARSE_ERROR" in result.content[0].text
        assert "malformed_encoding" in result.content[0].text

    async def test_success_returns_envelope(self, catalog, card_api) -> None:
        server = create_mcp_server(catalog)

        async with create_connected_server_and_client_session(server._mcp_server) as client:
            result = await client.call_tool("get_card_info", {"cardId": "CS2_029"})

        assert result.isError is False
        payload = json.loads(result.content[0].text)
        assert payload["success"] is True
        assert payload["data"]["name"] == "Fireball"
