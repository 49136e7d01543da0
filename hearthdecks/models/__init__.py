from hearthdecks.models.card import (
    UNKNOWN_CARD_PREFIX,
    CardRecord,
    EnrichedCard,
    placeholder_record,
)
from hearthdecks.models.deck import (
    DECK_FORMATS,
    MANA_CURVE_SIZE,
    BucketKind,
    CardCount,
    DeckDetails,
    DecodedDeck,
    DeckHeader,
    DeckStatistics,
    format_label,
)
from hearthdecks.models.failure import (
    FailureKind,
    KnownError,
    ToolErrorCode,
    ToolResponse,
    create_known_failure,
    create_success,
    create_unknown_failure,
)

__all__ = [
    "BucketKind",
    "CardCount",
    "CardRecord",
    "DECK_FORMATS",
    "DeckDetails",
    "DeckHeader",
    "DeckStatistics",
    "DecodedDeck",
    "EnrichedCard",
    "FailureKind",
    "KnownError",
    "MANA_CURVE_SIZE",
    "ToolErrorCode",
    "ToolResponse",
    "UNKNOWN_CARD_PREFIX",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "format_label",
    "placeholder_record",
]
