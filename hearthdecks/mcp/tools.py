"""
MCP tool definitions.

Defines the tools clients can call to decode deck codes and look up cards,
and renders their results as textual envelopes.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from hearthdecks.config import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from hearthdecks.models.deck import DeckDetails, DeckStatistics
from hearthdecks.models.failure import (
    FailureKind,
    KnownError,
    ToolErrorCode,
    ToolResponse,
    create_known_failure,
    create_success,
    create_unknown_failure,
)
from hearthdecks.parsers.deck_code import strip_deck_code_prefix
from hearthdecks.services.card_catalog import CardCatalog
from hearthdecks.services.deck_enrichment import decode_and_enrich

logger = logging.getLogger(__name__)


@dataclass
class ToolDefinition:
    """Definition of an MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]

    def to_schema(self) -> dict[str, Any]:
        """Tool listing entry as MCP clients expect it."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters,
        }


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="parse_deck_code",
        description=(
            "Decode a Hearthstone deck code into its format, heroes and cards, "
            "with card details, image URLs and deck statistics."
        ),
        parameters={
            "type": "object",
            "properties": {
                "deckCode": {
                    "type": "string",
                    "description": "Deck code, e.g. AAECAZ8FBugE7QXUBfcF4gXtBQwBAfcC5wP5A/4D5wWJBpkH4wfXCOsE7QX3BQAA",
                },
                "includeStats": {
                    "type": "boolean",
                    "description": "Include mana curve and rarity/type/class statistics",
                    "default": True,
                },
            },
            "required": ["deckCode"],
        },
    ),
    ToolDefinition(
        name="search_cards",
        description="Search Hearthstone cards by name (case-insensitive substring match).",
        parameters={
            "type": "object",
            "properties": {
                "cardName": {
                    "type": "string",
                    "description": "Text contained in the card name",
                },
                "limit": {
                    "type": "integer",
                    "description": "Max cards returned",
                    "default": DEFAULT_SEARCH_LIMIT,
                    "minimum": 1,
                    "maximum": MAX_SEARCH_LIMIT,
                },
            },
            "required": ["cardName"],
        },
    ),
    ToolDefinition(
        name="get_card_info",
        description="Get full details and image URL of a Hearthstone card by its card id.",
        parameters={
            "type": "object",
            "properties": {
                "cardId": {
                    "type": "string",
                    "description": "Card id, e.g. CS2_029",
                },
            },
            "required": ["cardId"],
        },
    ),
]

TOOL_ERROR_CODES: dict[str, ToolErrorCode] = {
    "parse_deck_code": ToolErrorCode.DECK_PARSE_ERROR,
    "search_cards": ToolErrorCode.CARD_SEARCH_ERROR,
    "get_card_info": ToolErrorCode.CARD_INFO_ERROR,
}


# =============================================================================
# PAYLOADS
# =============================================================================


def statistics_to_payload(statistics: DeckStatistics) -> dict[str, Any]:
    """Serialize deck statistics."""
    return {
        "totalCards": statistics.total_cards,
        "totalUnique": statistics.total_unique,
        "manaCurve": list(statistics.mana_curve),
        "rarities": dict(statistics.rarities),
        "cardTypes": dict(statistics.card_types),
        "classes": dict(statistics.classes),
    }


def deck_details_to_payload(details: DeckDetails, include_stats: bool = True) -> dict[str, Any]:
    """Serialize a decoded and enriched deck."""
    payload: dict[str, Any] = {
        "meta": {
            "version": details.deck.version,
            "format": details.deck.format,
            "totalCards": details.deck.total_cards,
            "deckCode": details.deck_code,
        },
        "heroes": [hero.to_payload() for hero in details.heroes],
        "cards": [card.to_payload() for card in details.cards],
    }
    if include_stats:
        payload["statistics"] = statistics_to_payload(details.statistics)
    return payload


def to_text_content(response: ToolResponse) -> dict[str, Any]:
    """Render a tool response as an MCP text content envelope."""
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(response.to_payload(), indent=2, ensure_ascii=False),
            }
        ],
        "isError": not response.success,
    }


# =============================================================================
# TOOLS
# =============================================================================


async def parse_deck_code_tool(
    catalog: CardCatalog,
    deck_code: str,
    include_stats: bool = True,
) -> ToolResponse:
    """
    Decode a deck code with card details.

    Args:
        catalog: Card catalog for dbf id lookups
        deck_code: Base64 deck code
        include_stats: Whether to include deck statistics

    Returns:
        ToolResponse with meta, heroes, cards and optional statistics
    """
    code = ToolErrorCode.DECK_PARSE_ERROR
    logger.info("Parsing deck code: %s...", strip_deck_code_prefix(deck_code)[:20])

    try:
        details = await decode_and_enrich(deck_code, catalog)
    except KnownError as e:
        logger.warning("Error parsing deck code: %s", e)
        return e.to_response(code)
    except Exception as e:
        logger.exception("Unexpected error parsing deck code")
        return create_unknown_failure(code, e)

    return create_success(deck_details_to_payload(details, include_stats=include_stats))


async def search_cards_tool(
    catalog: CardCatalog,
    card_name: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> ToolResponse:
    """
    Search cards by name.

    Args:
        catalog: Card catalog
        card_name: Text contained in the card name
        limit: Max cards returned (1-50)

    Returns:
        ToolResponse with the first `limit` matches and the total match count
    """
    code = ToolErrorCode.CARD_SEARCH_ERROR
    logger.info("Searching cards with name: %s", card_name)

    if not 1 <= limit <= MAX_SEARCH_LIMIT:
        return create_known_failure(
            code,
            FailureKind.INVALID_INPUT,
            f"limit must be between 1 and {MAX_SEARCH_LIMIT}",
        )

    try:
        matches = await catalog.search_cards_by_name(card_name)
    except KnownError as e:
        logger.warning("Error searching cards: %s", e)
        return e.to_response(code)
    except Exception as e:
        logger.exception("Unexpected error searching cards")
        return create_unknown_failure(code, e)

    cards = [catalog.with_image_url(card).to_payload() for card in matches[:limit]]
    return create_success(
        {
            "cards": cards,
            "total": len(matches),
            "returned": len(cards),
            "searchTerm": card_name,
        }
    )


async def get_card_info_tool(catalog: CardCatalog, card_id: str) -> ToolResponse:
    """
    Get a card by stable id.

    Returns:
        ToolResponse with the card and its image URL, or a not_found failure
    """
    code = ToolErrorCode.CARD_INFO_ERROR
    logger.info("Getting card info for ID: %s", card_id)

    try:
        card = await catalog.get_card_by_id(card_id)
    except KnownError as e:
        logger.warning("Error getting card info: %s", e)
        return e.to_response(code)
    except Exception as e:
        logger.exception("Unexpected error getting card info")
        return create_unknown_failure(code, e)

    if card is None:
        return create_known_failure(
            code,
            FailureKind.NOT_FOUND,
            f"Card with ID {card_id} not found",
        )

    return create_success(catalog.with_image_url(card).to_payload())


# =============================================================================
# ARGUMENT HANDLING
# =============================================================================


def _require_string(arguments: dict[str, Any], name: str) -> str:
    value = arguments.get(name)
    if value is None:
        raise KnownError(FailureKind.MISSING_REQUIRED, f"{name} is required")
    if not isinstance(value, str) or not value:
        raise KnownError(FailureKind.INVALID_INPUT, f"{name} must be a non-empty string")
    return value


def _optional_bool(arguments: dict[str, Any], name: str, default: bool) -> bool:
    value = arguments.get(name, default)
    if not isinstance(value, bool):
        raise KnownError(FailureKind.INVALID_INPUT, f"{name} must be a boolean")
    return value


def _optional_int(arguments: dict[str, Any], name: str, default: int) -> int:
    value = arguments.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise KnownError(FailureKind.INVALID_INPUT, f"{name} must be an integer")
    return value


async def execute_tool(
    catalog: CardCatalog,
    tool_name: str,
    arguments: dict[str, Any],
) -> ToolResponse:
    """
    Execute an MCP tool by name.

    Args:
        catalog: Card catalog
        tool_name: Name of the tool to execute
        arguments: Tool arguments

    Returns:
        ToolResponse envelope; argument errors are failures, not exceptions

    Raises:
        ValueError: If tool name is unknown
    """
    if tool_name not in TOOL_ERROR_CODES:
        raise ValueError(f"Unknown tool: {tool_name}")

    try:
        if tool_name == "parse_deck_code":
            return await parse_deck_code_tool(
                catalog,
                deck_code=_require_string(arguments, "deckCode"),
                include_stats=_optional_bool(arguments, "includeStats", True),
            )
        elif tool_name == "search_cards":
            return await search_cards_tool(
                catalog,
                card_name=_require_string(arguments, "cardName"),
                limit=_optional_int(arguments, "limit", DEFAULT_SEARCH_LIMIT),
            )
        else:
            return await get_card_info_tool(
                catalog,
                card_id=_require_string(arguments, "cardId"),
            )
    except KnownError as e:
        logger.warning("Invalid arguments for %s: %s", tool_name, e)
        return e.to_response(TOOL_ERROR_CODES[tool_name])
