"""MCP tool definitions and stdio server."""

from hearthdecks.mcp.tools import (
    TOOL_DEFINITIONS,
    execute_tool,
    get_card_info_tool,
    parse_deck_code_tool,
    search_cards_tool,
    to_text_content,
)

__all__ = [
    "TOOL_DEFINITIONS",
    "execute_tool",
    "get_card_info_tool",
    "parse_deck_code_tool",
    "search_cards_tool",
    "to_text_content",
]
