"""
Deck enrichment pipeline.

Joins decoded dbf ids with catalog records and computes deck statistics.

A dbf id missing from the catalog (for example a card from a release the
catalog has not synced yet) is never an error: it is replaced by a
placeholder record so the rest of the deck still decodes.
"""

import logging
from collections.abc import Iterable
from typing import Protocol

from hearthdecks.analysis.statistics import calculate_deck_statistics
from hearthdecks.models.card import CardRecord, EnrichedCard, placeholder_record
from hearthdecks.models.deck import CardCount, DecodedDeck, DeckDetails
from hearthdecks.parsers.deck_code import parse_deck_code

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """The two catalog capabilities enrichment depends on."""

    async def get_card_by_dbf_id(self, dbf_id: int) -> CardRecord | None: ...

    def card_image_url(self, card_id: str) -> str: ...


async def enrich_card(
    catalog: CardLookup,
    dbf_id: int,
    count: int | None = None,
) -> EnrichedCard:
    """
    Resolve one dbf id.

    Args:
        catalog: Card lookup capability
        dbf_id: Database id from the deck code
        count: Copies in the deck, None for heroes

    Returns:
        The catalog record with image URL and count, or a placeholder
    """
    record = await catalog.get_card_by_dbf_id(dbf_id)
    if record is None:
        logger.debug("dbf id %d not in catalog, using placeholder", dbf_id)
        record = placeholder_record(dbf_id)

    return EnrichedCard.from_record(
        record,
        image_url=catalog.card_image_url(record.id),
        count=count,
    )


async def enrich_heroes(catalog: CardLookup, hero_ids: Iterable[int]) -> list[EnrichedCard]:
    """Resolve hero dbf ids in order. Heroes carry no count."""
    return [await enrich_card(catalog, hero_id) for hero_id in hero_ids]


async def enrich_cards(catalog: CardLookup, cards: Iterable[CardCount]) -> list[EnrichedCard]:
    """Resolve card entries in order, one lookup per entry."""
    return [await enrich_card(catalog, card.dbf_id, card.count) for card in cards]


async def enrich_deck(
    deck: DecodedDeck,
    catalog: CardLookup,
) -> tuple[list[EnrichedCard], list[EnrichedCard]]:
    """
    Enrich a decoded deck.

    Returns:
        (heroes, cards), each in the same order as in the deck
    """
    heroes = await enrich_heroes(catalog, deck.heroes)
    cards = await enrich_cards(catalog, deck.cards)
    return heroes, cards


async def decode_and_enrich(deck_code: str, catalog: CardLookup) -> DeckDetails:
    """
    Decode a deck code and attach catalog data and statistics.

    Args:
        deck_code: Base64 deck code
        catalog: Card lookup capability

    Returns:
        DeckDetails with the decoded deck, enriched heroes and cards,
        and statistics over the cards

    Raises:
        DeckCodeError: If the deck code is malformed or truncated
    """
    deck = parse_deck_code(deck_code)
    heroes, cards = await enrich_deck(deck, catalog)
    statistics = calculate_deck_statistics(cards)

    return DeckDetails(
        deck_code=deck_code,
        deck=deck,
        heroes=heroes,
        cards=cards,
        statistics=statistics,
    )
