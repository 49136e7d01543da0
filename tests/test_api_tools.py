"""Tests for tool API endpoints."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from hearthdecks.main import app
from hearthdecks.services.card_catalog import get_card_catalog
from hearthdecks.services.event_broadcaster import EventBroadcaster, get_event_broadcaster


@pytest.fixture
def broadcaster() -> EventBroadcaster:
    return EventBroadcaster()


@pytest.fixture
async def client(catalog, broadcaster):
    """Provide an async test client with the test catalog and broadcaster."""
    app.dependency_overrides[get_card_catalog] = lambda: catalog
    app.dependency_overrides[get_event_broadcaster] = lambda: broadcaster

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def _payload(body: dict) -> dict:
    return json.loads(body["content"][0]["text"])


class TestListTools:
    async def test_lists_tools(self, client: AsyncClient) -> None:
        response = await client.get("/tools")

        assert response.status_code == 200
        tools = response.json()["tools"]
        assert [t["name"] for t in tools] == ["parse_deck_code", "search_cards", "get_card_info"]
        assert tools[0]["inputSchema"]["required"] == ["deckCode"]


class TestCallTool:
    async def test_parse_deck_code(self, client: AsyncClient, card_api, deck_code) -> None:
        code = deck_code(singles=[42], multiples=[(7, 4)])

        response = await client.post("/tools/parse_deck_code", json={"deckCode": code})

        assert response.status_code == 200
        body = response.json()
        assert body["isError"] is False
        payload = _payload(body)
        assert payload["success"] is True
        assert payload["data"]["meta"]["format"] == "Standard"
        assert payload["data"]["meta"]["totalCards"] == 5
        assert [c["id"] for c in payload["data"]["cards"]] == ["UNKNOWN_42", "UNKNOWN_7"]

    async def test_tool_failure_is_enveloped(self, client: AsyncClient) -> None:
        """Core failures come back as 200 with an error envelope."""
        response = await client.post("/tools/parse_deck_code", json={"deckCode": "!!!"})

        assert response.status_code == 200
        body = response.json()
        assert body["isError"] is True
        payload = _payload(body)
        assert payload["success"] is False
        assert payload["code"] == "DECK_PARSE_ERROR"
        assert payload["kind"] == "malformed_encoding"

    async def test_missing_body(self, client: AsyncClient) -> None:
        response = await client.post("/tools/search_cards")

        assert response.status_code == 200
        assert _payload(response.json())["kind"] == "missing_required"

    async def test_unknown_tool(self, client: AsyncClient) -> None:
        response = await client.post("/tools/encode_deck", json={})

        assert response.status_code == 404
        body = response.json()
        assert body["isError"] is True
        assert "Unknown tool" in _payload(body)["error"]

    async def test_broadcasts_start_and_result(
        self,
        client: AsyncClient,
        broadcaster: EventBroadcaster,
        card_api,
    ) -> None:
        queue = broadcaster.connect()

        await client.post("/tools/get_card_info", json={"cardId": "CS2_029"})

        start = queue.get_nowait()
        result = queue.get_nowait()
        assert start["type"] == "tool_call_start"
        assert start["tool"] == "get_card_info"
        assert start["arguments"] == {"cardId": "CS2_029"}
        assert result["type"] == "tool_call_result"
        assert result["result"]["isError"] is False
        assert queue.empty()

    async def test_broadcasts_error_for_unknown_tool(
        self,
        client: AsyncClient,
        broadcaster: EventBroadcaster,
    ) -> None:
        queue = broadcaster.connect()

        await client.post("/tools/encode_deck", json={})

        assert queue.get_nowait()["type"] == "tool_call_start"
        error = queue.get_nowait()
        assert error["type"] == "tool_call_error"
        assert "Unknown tool" in error["error"]
