"""
Card catalog service.

Fetches the HearthstoneJSON card list, indexes it by stable id and by
dbf id, and refreshes it once the cached copy is older than the TTL.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import httpx
from pydantic import ValidationError

from hearthdecks.config import settings
from hearthdecks.models.card import CardRecord, EnrichedCard
from hearthdecks.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

_CARD_ID_PLACEHOLDER = "{CARD_ID}"


class CardCatalogError(KnownError):
    """Raised when the card list cannot be fetched."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=message,
            detail=detail,
        )


@dataclass(frozen=True, slots=True)
class CardIndex:
    """Card records keyed by both identifier schemes."""

    by_id: dict[str, CardRecord] = field(default_factory=dict)
    by_dbf_id: dict[int, CardRecord] = field(default_factory=dict)


def build_card_index(cards: Iterable[dict[str, Any]]) -> CardIndex:
    """
    Index raw card entries.

    Entries that fail validation are skipped. An entry without a dbf id
    is only reachable by stable id.
    """
    index = CardIndex()
    skipped = 0

    for raw in cards:
        try:
            card = CardRecord.model_validate(raw)
        except ValidationError:
            skipped += 1
            continue

        index.by_id[card.id] = card
        if card.dbf_id is not None:
            index.by_dbf_id[card.dbf_id] = card

    if skipped:
        logger.warning("Skipped %d malformed card entries", skipped)

    return index


async def fetch_cards(url: str, timeout: float = 30.0) -> list[dict[str, Any]]:
    """
    Download the full card list.

    Raises:
        CardCatalogError: If the request fails or the body is not a JSON list
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            cards = response.json()
    except httpx.HTTPStatusError as e:
        raise CardCatalogError(
            f"Failed to fetch card data: HTTP {e.response.status_code}",
            detail=e.response.reason_phrase,
        ) from e
    except httpx.RequestError as e:
        raise CardCatalogError(f"Failed to fetch card data: {e}") from e
    except ValueError as e:
        raise CardCatalogError("Failed to fetch card data: response is not JSON") from e

    if not isinstance(cards, list):
        raise CardCatalogError("Failed to fetch card data: expected a list of cards")

    return cards


class CardCatalog:
    """
    Cached card catalog.

    The card list is fetched on first use and again whenever the last
    successful fetch is older than `ttl_seconds`. Concurrent callers share
    a single fetch.
    """

    def __init__(
        self,
        api_url: str,
        image_url_template: str,
        ttl_seconds: float,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.api_url = api_url
        self.image_url_template = image_url_template
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self._clock = clock
        self._index: CardIndex | None = None
        self._fetched_at: float | None = None
        self._lock = asyncio.Lock()

    def _fresh_index(self) -> CardIndex | None:
        """The cached index, or None if missing or older than the TTL."""
        if self._index is None or self._fetched_at is None:
            return None
        if self._clock() - self._fetched_at >= self.ttl_seconds:
            return None
        return self._index

    async def get_all_cards(self) -> CardIndex:
        """
        Get the card index, fetching it if missing or expired.

        Raises:
            CardCatalogError: If a fetch is needed and fails
        """
        cached = self._fresh_index()
        if cached is not None:
            return cached

        async with self._lock:
            cached = self._fresh_index()
            if cached is not None:
                return cached

            logger.info("Fetching card data from %s", self.api_url)
            try:
                raw_cards = await fetch_cards(self.api_url, timeout=self.timeout)
            except CardCatalogError as e:
                logger.error("Error fetching card data: %s", e)
                raise

            index = build_card_index(raw_cards)
            self._index = index
            self._fetched_at = self._clock()
            logger.info("Loaded %d cards from card API", len(index.by_id))

        return index

    def invalidate(self) -> None:
        """Drop the cached card list so the next lookup fetches again."""
        self._index = None
        self._fetched_at = None

    async def get_card_by_id(self, card_id: str) -> CardRecord | None:
        """Look up a card by stable id."""
        index = await self.get_all_cards()
        return index.by_id.get(card_id)

    async def get_card_by_dbf_id(self, dbf_id: int) -> CardRecord | None:
        """Look up a card by numeric database id."""
        index = await self.get_all_cards()
        return index.by_dbf_id.get(dbf_id)

    async def get_cards_by_ids(self, card_ids: Iterable[str]) -> list[CardRecord]:
        """Look up several cards by stable id. Unknown ids are skipped."""
        index = await self.get_all_cards()
        return [index.by_id[card_id] for card_id in card_ids if card_id in index.by_id]

    async def get_cards_by_dbf_ids(self, dbf_ids: Iterable[int]) -> list[CardRecord]:
        """Look up several cards by database id. Unknown ids are skipped."""
        index = await self.get_all_cards()
        return [index.by_dbf_id[dbf_id] for dbf_id in dbf_ids if dbf_id in index.by_dbf_id]

    async def search_cards_by_name(self, name: str) -> list[CardRecord]:
        """
        Find cards whose name contains `name`, ignoring case.

        Results keep the order of the card list.
        """
        index = await self.get_all_cards()
        needle = name.lower()
        return [card for card in index.by_id.values() if card.name and needle in card.name.lower()]

    def card_image_url(self, card_id: str) -> str:
        """Render URL of a card's image."""
        return self.image_url_template.replace(_CARD_ID_PLACEHOLDER, card_id)

    def with_image_url(self, card: CardRecord) -> EnrichedCard:
        """Attach the image URL to a card record."""
        return EnrichedCard.from_record(card, image_url=self.card_image_url(card.id))


@lru_cache(maxsize=1)
def get_card_catalog() -> CardCatalog:
    """
    Get the process-wide card catalog built from settings.

    Only the transports use this; core functions take a catalog argument.
    """
    return CardCatalog(
        api_url=settings.card_api_url,
        image_url_template=settings.card_image_url_template,
        ttl_seconds=settings.card_data_ttl_hours * 60 * 60,
        timeout=settings.card_fetch_timeout,
    )
