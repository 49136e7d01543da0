import base64
from collections.abc import Callable, Iterator, Sequence
from typing import Any

import httpx
import pytest
import respx

from hearthdecks.models.card import CardRecord
from hearthdecks.services.card_catalog import CardCatalog, build_card_index
from hearthdecks.services.event_broadcaster import get_event_broadcaster

CARD_API_URL = "https://cards.test/v1/latest/enUS/cards.json"
IMAGE_URL_TEMPLATE = "https://art.test/render/{CARD_ID}.png"

DeckEncoder = Callable[..., bytes]


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


@pytest.fixture(autouse=True)
def reset_event_broadcaster() -> Iterator[None]:
    """Give every test a fresh process-wide broadcaster."""
    get_event_broadcaster.cache_clear()
    yield
    get_event_broadcaster.cache_clear()


@pytest.fixture
def deck_bytes() -> DeckEncoder:
    """Build a raw deck buffer from header fields and card buckets."""

    def build(
        heroes: Sequence[int] = (),
        singles: Sequence[int] = (),
        doubles: Sequence[int] = (),
        multiples: Sequence[tuple[int, int]] = (),
        reserved: int = 0,
        version: int = 1,
        format_code: int = 2,
    ) -> bytes:
        data = bytearray([reserved, version, format_code])
        for ids in (heroes, singles, doubles):
            data += _varint(len(ids))
            for dbf_id in ids:
                data += _varint(dbf_id)
        data += _varint(len(multiples))
        for dbf_id, count in multiples:
            data += _varint(dbf_id) + _varint(count)
        return bytes(data)

    return build


@pytest.fixture
def deck_code(deck_bytes: DeckEncoder) -> Callable[..., str]:
    """Build a base64 deck code from header fields and card buckets."""

    def build(**fields: Any) -> str:
        return base64.b64encode(deck_bytes(**fields)).decode("ascii")

    return build


@pytest.fixture
def sample_cards() -> list[dict[str, Any]]:
    """Sample HearthstoneJSON card data."""
    return [
        {
            "id": "HERO_08",
            "dbfId": 637,
            "name": "Jaina Proudmoore",
            "type": "HERO",
            "cardClass": "MAGE",
            "rarity": "FREE",
            "set": "CORE",
        },
        {
            "id": "CS2_029",
            "dbfId": 315,
            "name": "Fireball",
            "cost": 4,
            "rarity": "FREE",
            "type": "SPELL",
            "cardClass": "MAGE",
            "text": "Deal $6 damage.",
        },
        {
            "id": "CS2_023",
            "dbfId": 555,
            "name": "Arcane Intellect",
            "cost": 3,
            "rarity": "FREE",
            "type": "SPELL",
            "cardClass": "MAGE",
        },
        {
            "id": "EX1_298",
            "dbfId": 374,
            "name": "Ragnaros the Firelord",
            "cost": 8,
            "rarity": "LEGENDARY",
            "type": "MINION",
            "cardClass": "NEUTRAL",
            "attack": 8,
            "health": 8,
        },
        {
            "id": "EX1_620",
            "dbfId": 783,
            "name": "Molten Giant",
            "cost": 25,
            "rarity": "EPIC",
            "type": "MINION",
            "cardClass": "NEUTRAL",
        },
        {
            "id": "CS2_231",
            "dbfId": 273,
            "name": "Wisp",
            "cost": 0,
            "rarity": "COMMON",
            "type": "MINION",
            "cardClass": "NEUTRAL",
        },
        {
            "id": "GAME_005",
            "name": "The Coin",
            "cost": 0,
            "type": "SPELL",
            "cardClass": "NEUTRAL",
        },
        {
            "name": "Entry Without Id",
            "dbfId": 999,
        },
    ]


class FakeCardLookup:
    """In-memory lookup recording every dbf id it is asked for."""

    def __init__(self, cards: Sequence[dict[str, Any]] = ()) -> None:
        self.index = build_card_index(cards)
        self.lookups: list[int] = []

    async def get_card_by_dbf_id(self, dbf_id: int) -> CardRecord | None:
        self.lookups.append(dbf_id)
        return self.index.by_dbf_id.get(dbf_id)

    def card_image_url(self, card_id: str) -> str:
        return IMAGE_URL_TEMPLATE.replace("{CARD_ID}", card_id)


@pytest.fixture
def card_lookup(sample_cards: list[dict[str, Any]]) -> FakeCardLookup:
    """Lookup backed by the sample cards."""
    return FakeCardLookup(sample_cards)


@pytest.fixture
def empty_lookup() -> FakeCardLookup:
    """Lookup that never finds a card."""
    return FakeCardLookup()


@pytest.fixture
def card_api(sample_cards: list[dict[str, Any]]) -> Iterator[respx.Route]:
    """Mock the card list endpoint with the sample cards."""
    with respx.mock(assert_all_called=False) as mock:
        route = mock.get(CARD_API_URL).mock(
            return_value=httpx.Response(200, json=sample_cards)
        )
        yield route


@pytest.fixture
def catalog() -> CardCatalog:
    """Card catalog pointed at the mocked card API."""
    return CardCatalog(
        api_url=CARD_API_URL,
        image_url_template=IMAGE_URL_TEMPLATE,
        ttl_seconds=3600,
    )
