from dataclasses import dataclass, field
from enum import Enum

from hearthdecks.models.card import EnrichedCard

# Format byte of the deck code header -> format label
DECK_FORMATS: dict[int, str] = {
    1: "Wild",
    2: "Standard",
}

UNKNOWN_FORMAT = "Unknown"

# Mana curve buckets cover costs 0..10 inclusive
MANA_CURVE_SIZE = 11


def format_label(format_code: int) -> str:
    """Map a header format byte to its label. Unmapped codes are 'Unknown'."""
    return DECK_FORMATS.get(format_code, UNKNOWN_FORMAT)


class BucketKind(str, Enum):
    """
    Card buckets of the deck code layout.

    Singles and doubles have an implicit count; multiples store the
    count explicitly after each card id.
    """

    SINGLE = "single"
    DOUBLE = "double"
    MULTIPLE = "multiple"

    @property
    def fixed_count(self) -> int | None:
        """Copies implied by the bucket, or None if read from the data."""
        if self is BucketKind.SINGLE:
            return 1
        if self is BucketKind.DOUBLE:
            return 2
        return None


@dataclass(frozen=True, slots=True)
class DeckHeader:
    """
    Header bytes of a deck code.

    Attributes:
        reserved: Leading reserved byte (always 0 in client-produced codes)
        version: Encoding version
        format_code: Raw format byte
    """

    reserved: int
    version: int
    format_code: int

    @property
    def format(self) -> str:
        """Format label ("Wild", "Standard" or "Unknown")."""
        return format_label(self.format_code)


@dataclass(frozen=True, slots=True)
class CardCount:
    """A card database id with the number of copies in the deck."""

    dbf_id: int
    count: int


@dataclass(frozen=True, slots=True)
class DecodedDeck:
    """
    Structural result of decoding a deck code.

    Cards are ordered singles, then doubles, then multiples,
    each in the order they appear in the code.
    """

    header: DeckHeader
    heroes: tuple[int, ...] = ()
    cards: tuple[CardCount, ...] = ()

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def format(self) -> str:
        return self.header.format

    @property
    def total_cards(self) -> int:
        """Total copies across all buckets."""
        return sum(card.count for card in self.cards)


@dataclass(frozen=True, slots=True)
class DeckStatistics:
    """
    Aggregate view of an enriched deck.

    Attributes:
        total_cards: Sum of all card counts
        total_unique: Number of card entries (one per decoded bucket item)
        mana_curve: Copies per cost 0..10; costs above 10 are not bucketed
        rarities: Copies per rarity label
        card_types: Copies per card type
        classes: Copies per originating class
    """

    total_cards: int = 0
    total_unique: int = 0
    mana_curve: tuple[int, ...] = (0,) * MANA_CURVE_SIZE
    rarities: dict[str, int] = field(default_factory=dict)
    card_types: dict[str, int] = field(default_factory=dict)
    classes: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DeckDetails:
    """A decoded deck with catalog data and statistics attached."""

    deck_code: str
    deck: DecodedDeck
    heroes: list[EnrichedCard]
    cards: list[EnrichedCard]
    statistics: DeckStatistics
