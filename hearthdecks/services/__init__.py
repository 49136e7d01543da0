"""
Hearthdecks services.

Card catalog access, deck enrichment and event broadcasting.
"""

from hearthdecks.services.card_catalog import (
    CardCatalog,
    CardCatalogError,
    CardIndex,
    build_card_index,
    fetch_cards,
    get_card_catalog,
)
from hearthdecks.services.deck_enrichment import (
    CardLookup,
    decode_and_enrich,
    enrich_card,
    enrich_cards,
    enrich_deck,
    enrich_heroes,
)
from hearthdecks.services.event_broadcaster import (
    EventBroadcaster,
    format_sse,
    get_event_broadcaster,
)

__all__ = [
    "CardCatalog",
    "CardCatalogError",
    "CardIndex",
    "CardLookup",
    "EventBroadcaster",
    "build_card_index",
    "decode_and_enrich",
    "enrich_card",
    "enrich_cards",
    "enrich_deck",
    "enrich_heroes",
    "fetch_cards",
    "format_sse",
    "get_card_catalog",
    "get_event_broadcaster",
]
