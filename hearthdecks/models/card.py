from typing import Any

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_CARD_PREFIX = "UNKNOWN_"


class CardRecord(BaseModel):
    """
    A card entry from the HearthstoneJSON card list.

    Only the fields the decoder and statistics rely on are declared.
    Every other field of the feed (text, attack, health, set, ...) is
    kept as an extra and carried through serialization unchanged.

    Attributes:
        id: Stable card id (e.g., "CS2_029")
        dbf_id: Numeric database id used inside deck codes
        name: Localized card name
        cost: Mana cost, absent for some heroes and enchantments
        rarity: Rarity label (e.g., "COMMON", "LEGENDARY")
        type: Card type (e.g., "MINION", "SPELL")
        card_class: Originating class (e.g., "MAGE", "NEUTRAL")
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    dbf_id: int | None = Field(default=None, alias="dbfId")
    name: str = ""
    cost: int | None = Field(default=None, ge=0)
    rarity: str | None = None
    type: str | None = None
    card_class: str | None = Field(default=None, alias="cardClass")

    def to_payload(self) -> dict[str, Any]:
        """Serialize with feed field names, omitting absent values."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EnrichedCard(CardRecord):
    """
    A catalog record (or placeholder) joined with deck data.

    Attributes:
        image_url: Rendered card image for `id`
        count: Copies in the deck; None for heroes
    """

    image_url: str = Field(alias="imageUrl")
    count: int | None = None

    @classmethod
    def from_record(
        cls,
        record: CardRecord,
        image_url: str,
        count: int | None = None,
    ) -> "EnrichedCard":
        """Copy every field of a catalog record and attach deck data."""
        data = record.model_dump(by_alias=True)
        data["imageUrl"] = image_url
        data["count"] = count
        return cls.model_validate(data)

    @property
    def is_placeholder(self) -> bool:
        """True if the card was not found in the catalog."""
        return self.id.startswith(UNKNOWN_CARD_PREFIX)


def placeholder_record(dbf_id: int) -> CardRecord:
    """Build the stand-in record used when a dbf id is not in the catalog."""
    return CardRecord(
        id=f"{UNKNOWN_CARD_PREFIX}{dbf_id}",
        dbf_id=dbf_id,
        name=f"Unknown Card (DBF ID: {dbf_id})",
    )
