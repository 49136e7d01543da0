"""
Deck statistics.

Folds an enriched card list into a mana curve and rarity / type / class
tallies. Heroes are not part of the input.
"""

from collections.abc import Iterable

from hearthdecks.models.card import EnrichedCard
from hearthdecks.models.deck import MANA_CURVE_SIZE, DeckStatistics


def _tally(counts: dict[str, int], label: str | None, count: int) -> None:
    if label:
        counts[label] = counts.get(label, 0) + count


def calculate_deck_statistics(cards: Iterable[EnrichedCard]) -> DeckStatistics:
    """
    Calculate deck statistics in a single pass.

    Cards without a cost count as cost 0. Cards costing more than 10 add
    to the total but to no mana curve bucket. Cards without a rarity,
    type or class are left out of that tally only.

    Args:
        cards: Enriched cards, one entry per decoded bucket item

    Returns:
        DeckStatistics for the cards
    """
    total_cards = 0
    total_unique = 0
    mana_curve = [0] * MANA_CURVE_SIZE
    rarities: dict[str, int] = {}
    card_types: dict[str, int] = {}
    classes: dict[str, int] = {}

    for card in cards:
        count = card.count or 0
        total_cards += count
        total_unique += 1

        cost = card.cost or 0
        if cost < MANA_CURVE_SIZE:
            mana_curve[cost] += count

        _tally(rarities, card.rarity, count)
        _tally(card_types, card.type, count)
        _tally(classes, card.card_class, count)

    return DeckStatistics(
        total_cards=total_cards,
        total_unique=total_unique,
        mana_curve=tuple(mana_curve),
        rarities=rarities,
        card_types=card_types,
        classes=classes,
    )
